import os
import base64
import hashlib
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

_DEV_SECRET = "dev-only-insecure-key-DO-NOT-USE-IN-PROD"


def _derive_encryption_key(secret: str) -> str:
    """Fernet needs a 32-byte urlsafe base64 key; derive one from the JWT secret."""
    return base64.urlsafe_b64encode(hashlib.sha256(secret.encode()).digest()).decode()


class Config(BaseModel):
    app_name: str = "Employee Management API"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")
    sql_echo: bool = os.getenv("SQL_ECHO", "false").lower() == "true"

    # Auth
    secret_key: str = os.getenv("SECRET_KEY", _DEV_SECRET)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 10)))  # 10 days
    encryption_key: str = Field(
        default_factory=lambda: os.getenv("ENCRYPTION_KEY")
        or _derive_encryption_key(os.getenv("SECRET_KEY", _DEV_SECRET))
    )

    # Default admin, created at startup when configured
    default_admin_email: Optional[str] = os.getenv("DEFAULT_ADMIN_EMAIL")
    default_admin_password: Optional[str] = os.getenv("DEFAULT_ADMIN_PASSWORD")
    default_admin_name: str = os.getenv("DEFAULT_ADMIN_NAME", "Administrator")

    # Profile images
    upload_dir: str = os.getenv("UPLOAD_DIR", "public/uploads")
    max_image_size: int = 5 * 1024 * 1024  # 5MB

    # Rate limiting
    rate_limit_enabled: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    login_rate_limit: str = os.getenv("LOGIN_RATE_LIMIT", "10/minute")

    # CORS: comma-separated origins
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:5173,http://localhost:3000,"
                "http://127.0.0.1:5173,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )


settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    _critical_missing = []
    if "dev-only" in settings.secret_key:
        _critical_missing.append("SECRET_KEY")
    if not os.getenv("ENCRYPTION_KEY"):
        _critical_missing.append("ENCRYPTION_KEY")
    if _critical_missing:
        raise RuntimeError(
            f"FATAL: The following secrets must be set for non-development environments: "
            f"{', '.join(_critical_missing)}. Set them as environment variables."
        )
elif "dev-only" in settings.secret_key:
    _logger.warning("Using insecure default SECRET_KEY, only acceptable in development.")
