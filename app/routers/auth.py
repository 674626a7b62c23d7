from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import logging
from app.core.config import settings
from app.core.exceptions import AuthenticationError, NotFoundError, ValidationFailed
from app.core.limiter import limiter
from app.database import get_db
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.services import auth as auth_service
from app.schemas.auth import LoginRequest, LoginResponse, VerifyResponse, UserResponse, PasswordChange

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    # JSON body rather than form-data, matching the dashboard client
    user = db.query(User).filter(User.email == login_data.email).first()
    if not user:
        logger.info("Login failed: unknown email")
        raise NotFoundError("User not found")
    if not auth_service.verify_password(login_data.password, user.hashed_password):
        logger.info(f"Login failed: wrong password for user {user.id}")
        raise AuthenticationError("Wrong password")
    if not user.is_active:
        raise AuthenticationError("User is inactive")

    token = auth_service.token_for_user(user)
    logger.info(f"User {user.id} logged in")
    return {
        "success": True,
        "token": token,
        "token_type": "bearer",
        "user": {"id": user.id, "name": user.name, "role": user.role},
    }


@router.get("/verify", response_model=VerifyResponse)
def verify(current_user: User = Depends(get_current_user)):
    return {"success": True, "user": UserResponse.model_validate(current_user)}


@router.post("/change-password")
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Securely update current user's password."""
    if not auth_service.verify_password(data.current_password, current_user.hashed_password):
        raise ValidationFailed("Incorrect current password")

    current_user.hashed_password = auth_service.get_password_hash(data.new_password)
    db.commit()
    logger.info(f"User {current_user.id} changed password")

    return {"success": True, "message": "Password updated successfully"}
