from typing import Any, Optional


class AppError(Exception):
    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    code = "invalid_data"
    default_message = "Invalid data"


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class Unauthorized(AppError):
    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    default_message = "Forbidden"


class InvalidState(AppError):
    status_code = 400
    code = "invalid_state"
    default_message = "Invalid state"


class ServiceUnavailable(AppError):
    status_code = 503
    code = "service_unavailable"
    default_message = "Service unavailable"


class PaymentVerificationFailed(AppError):
    status_code = 400
    code = "payment_verification_failed"
    default_message = "Payment verification failed"


class InternalError(AppError):
    pass
