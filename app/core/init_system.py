import logging
from app.core.config import settings
from app.database import SessionLocal
from app.models.user import User, UserRole
from app.services import auth as auth_service

logger = logging.getLogger(__name__)


def init_system_data():
    """
    Creates the default administrator when DEFAULT_ADMIN_EMAIL and
    DEFAULT_ADMIN_PASSWORD are configured and no such user exists yet.
    """
    if not (settings.default_admin_email and settings.default_admin_password):
        logger.info("System initialization check: no default admin configured, skipping.")
        return

    db = SessionLocal()
    try:
        existing_admin = db.query(User).filter(User.email == settings.default_admin_email).first()
        if existing_admin:
            logger.info(f"System initialization check: admin {existing_admin.email} already present.")
            return

        admin_user = User(
            name=settings.default_admin_name,
            email=settings.default_admin_email,
            hashed_password=auth_service.get_password_hash(settings.default_admin_password),
            role=UserRole.ADMIN,
            is_active=True
        )
        db.add(admin_user)
        db.commit()
        logger.info(f"Created default admin: {admin_user.email}")
    except Exception as e:
        db.rollback()
        logger.error(f"Error during system initialization check: {str(e)}", exc_info=True)
    finally:
        db.close()
