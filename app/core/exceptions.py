from typing import Any, Dict, Optional


class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ValidationFailed(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_FAILED",
            details=details
        )


class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )


class ConflictError(AppException):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT"
        )


class InsufficientLeaveBalance(AppException):
    """Raised when a leave request asks for more days than remain for its type."""
    def __init__(self, leave_type: str, remaining: float, available: float, requested: float):
        super().__init__(
            message=(
                f"Insufficient {leave_type} leave balance. You have {remaining:g} days remaining "
                f"out of {available:g} available, but requested {requested:g} days."
            ),
            status_code=400,
            error_code="INSUFFICIENT_LEAVE_BALANCE",
            details={
                "leave_type": leave_type,
                "remaining": remaining,
                "available": available,
                "requested": requested,
            }
        )


class InvalidStatusTransition(AppException):
    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot change a {current} leave request to {requested}",
            status_code=400,
            error_code="INVALID_STATUS_TRANSITION",
            details={"current": current, "requested": requested}
        )


class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )


class AccessDeniedError(AppException):
    """Custom permission error. Named AccessDeniedError to avoid shadowing Python's built-in PermissionError."""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED"
        )
