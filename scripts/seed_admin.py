"""
Create (or reset) an administrator account.

Usage:
    python -m scripts.seed_admin [email] [password]

Defaults come from DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD.
"""
import sys

from app.core.config import settings
from app.database import SessionLocal, init_db
from app.models.user import User, UserRole
from app.services import auth as auth_service


def seed(email: str, password: str, name: str = "Admin"):
    init_db()
    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.email == email).first()

        if not admin:
            admin = User(
                name=name,
                email=email,
                hashed_password=auth_service.get_password_hash(password),
                role=UserRole.ADMIN,
                is_active=True
            )
            db.add(admin)
            db.commit()
            print(f"Admin user {email} created")
        else:
            # Existing account: promote and reset the password
            admin.role = UserRole.ADMIN
            admin.hashed_password = auth_service.get_password_hash(password)
            db.commit()
            print(f"Admin user {email} already exists. Password reset")
    finally:
        db.close()


if __name__ == "__main__":
    email = sys.argv[1] if len(sys.argv) > 1 else settings.default_admin_email
    password = sys.argv[2] if len(sys.argv) > 2 else settings.default_admin_password
    if not email or not password:
        print("Usage: python -m scripts.seed_admin <email> <password>")
        sys.exit(1)
    seed(email, password, settings.default_admin_name)
