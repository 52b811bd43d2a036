"""
Error taxonomy and message constants.

Every failure a handler reports to its caller is one of five kinds. Each kind
carries the wire code the admin frontend switches on and the HTTP status the
API layer answers with.
"""

# Authorization
ERROR_LOGIN_REQUIRED = "Login is required to use this function"
ERROR_ADMIN_REQUIRED = "Only the administrator can {action}"
ERROR_ADMIN_DELETE = "The administrator account cannot be deleted"
ERROR_ADMIN_DISABLE = "The administrator account cannot be disabled"

# Validation
ERROR_CREATE_FIELDS = "Email, password and name are required"
ERROR_UPDATE_FIELDS = "User ID and name are required"
ERROR_USER_ID_REQUIRED = "User ID is required"
ERROR_PASSWORD_FIELDS = "User ID and new password are required"
ERROR_STATUS_FIELDS = "User ID and new status are required"
ERROR_STATUS_VALUE = "Status must be 'enabled' or 'disabled'"
ERROR_EMAIL_REQUIRED = "Email is required"

# Lookup
ERROR_USER_NOT_FOUND = "User not found"
ERROR_EMAIL_NOT_FOUND = "No user is registered with this email"

# Cart
ERROR_INVALID_PRICE = "Price must be an integer"
ERROR_INVALID_PRODUCT = "Product id must be a non-empty string"


class StorefrontError(Exception):
    """Base class for classified errors surfaced to API callers."""

    code = "internal"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class Unauthenticated(StorefrontError):
    code = "unauthenticated"
    status_code = 401


class PermissionDenied(StorefrontError):
    code = "permission-denied"
    status_code = 403


class InvalidArgument(StorefrontError):
    code = "invalid-argument"
    status_code = 400


class NotFound(StorefrontError):
    code = "not-found"
    status_code = 404


class Internal(StorefrontError):
    code = "internal"
    status_code = 500


class DirectoryProviderError(Exception):
    """Raised by directory providers; ``code`` follows the provider's vocabulary."""

    USER_NOT_FOUND = "user-not-found"

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def is_not_found(self) -> bool:
        return self.code == self.USER_NOT_FOUND
