"""Administrator guard shared by every directory handler."""
from functools import wraps
from typing import Optional

from storefront.config import get_admin_email, normalize_email
from storefront.errors import (
    ERROR_ADMIN_REQUIRED,
    ERROR_LOGIN_REQUIRED,
    PermissionDenied,
    Unauthenticated,
)
from storefront.logging import get_logger, mask_email_for_logging

from .models import CallerIdentity

logger = get_logger(__name__)


def is_admin_email(email: Optional[str], admin_email: Optional[str] = None) -> bool:
    """True when ``email`` is the configured administrator's. An unset admin matches nobody."""
    expected = normalize_email(admin_email) if admin_email is not None else get_admin_email()
    return bool(expected) and normalize_email(email) == expected


def require_admin(
    caller: Optional[CallerIdentity],
    admin_email: Optional[str] = None,
    action: str = "perform this action",
) -> CallerIdentity:
    """
    Raise unless ``caller`` is the administrator.

    Evaluated on every call: the admin email is read from configuration each
    time and nothing about the caller is remembered between requests.

    Raises:
        Unauthenticated: no caller
        PermissionDenied: caller is not the administrator
    """
    if caller is None:
        logger.warning(f"Unauthenticated attempt to {action}")
        raise Unauthenticated(ERROR_LOGIN_REQUIRED)

    if not is_admin_email(caller.email, admin_email):
        logger.warning(f"Non-admin {mask_email_for_logging(caller.email)} denied: {action}")
        raise PermissionDenied(ERROR_ADMIN_REQUIRED.format(action=action))

    return caller


def admin_only(action: str):
    """Decorate a ``(self, data, caller)`` handler so it runs only for the administrator."""

    def decorator(func):
        @wraps(func)
        async def wrapper(self, data, caller):
            require_admin(caller, action=action)
            return await func(self, dict(data or {}), caller)

        return wrapper

    return decorator
