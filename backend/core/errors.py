"""Error taxonomy shared by the auth service and the HTTP layer."""


class AuthError(Exception):
    """Base class for failures that are safe to report to the caller."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(AuthError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(AuthError):
    status_code = 403
    default_message = "You do not have permission to perform this action"


class NotFoundError(AuthError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AuthError):
    status_code = 409
    default_message = "User already exists with this email"


class InternalError(AuthError):
    status_code = 500
    default_message = "Internal server error"
