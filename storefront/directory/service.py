"""
User Directory Service

Admin-only account lifecycle handlers. Each handler:
1. checks the caller is the administrator (``admin_only``)
2. validates its payload (``InvalidArgument``)
3. delegates to the directory provider; any provider failure becomes
   ``Internal`` with the provider message appended, except not-found and
   administrator self-protection which keep their own kind

Nothing here is transactional. Two admins editing the same user race and the
last write wins at the provider.
"""
from contextlib import contextmanager
from typing import Any, Mapping, Optional

from storefront.config import get_password_reset_redirect_url
from storefront.errors import (
    ERROR_ADMIN_DELETE,
    ERROR_ADMIN_DISABLE,
    ERROR_CREATE_FIELDS,
    ERROR_EMAIL_NOT_FOUND,
    ERROR_EMAIL_REQUIRED,
    ERROR_PASSWORD_FIELDS,
    ERROR_STATUS_FIELDS,
    ERROR_STATUS_VALUE,
    ERROR_UPDATE_FIELDS,
    ERROR_USER_ID_REQUIRED,
    ERROR_USER_NOT_FOUND,
    DirectoryProviderError,
    Internal,
    InvalidArgument,
    NotFound,
    PermissionDenied,
    StorefrontError,
)
from storefront.logging import get_logger, mask_email_for_logging, sanitize_id_for_logging

from .guard import admin_only, is_admin_email
from .models import CallerIdentity, IdentityRecord, UserRecord
from .provider import DirectoryProvider, now_iso

logger = get_logger(__name__)

STATUS_ENABLED = "enabled"
STATUS_DISABLED = "disabled"
VALID_STATUSES = (STATUS_ENABLED, STATUS_DISABLED)


@contextmanager
def _internal_on_failure(action: str):
    try:
        yield
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise Internal(f"Failed to {action}: {e}") from e


class UserDirectoryService:
    """Account lifecycle operations for the administrator."""

    def __init__(self, provider: DirectoryProvider) -> None:
        self.provider = provider

    @admin_only("create users")
    async def create_user(self, data: Mapping[str, Any], caller: CallerIdentity) -> dict:
        email = _get_string(data, "email")
        password = _get_string(data, "password", strip=False)
        name = _get_string(data, "name")
        if not email or not password or not name:
            raise InvalidArgument(ERROR_CREATE_FIELDS)

        logger.info(f"Creating user {mask_email_for_logging(email)}")
        with _internal_on_failure("create user"):
            record = await self.provider.create_user(email, password, name)
            logger.info(f"Identity created: {sanitize_id_for_logging(record.id)}")

            await self.provider.create_profile(record.id, {
                "name": name,
                "email": email,
                "created_at": now_iso(),
                "disabled": False,
            })

        return {"success": True, "userId": record.id}

    @admin_only("update users")
    async def update_user(self, data: Mapping[str, Any], caller: CallerIdentity) -> dict:
        user_id = _get_string(data, "user_id")
        name = _get_string(data, "name")
        if not user_id or not name:
            raise InvalidArgument(ERROR_UPDATE_FIELDS)
        password = _get_string(data, "password", strip=False)
        disabled = _get_optional_bool(data, "disabled")

        logger.info(f"Updating user {sanitize_id_for_logging(user_id)}")
        with _internal_on_failure("update user"):
            target = await self._get_target(user_id)
            if disabled and is_admin_email(target.email):
                logger.warning(f"Blocked disabling the administrator: {sanitize_id_for_logging(user_id)}")
                raise PermissionDenied(ERROR_ADMIN_DISABLE)

            await self.provider.update_user(user_id, name=name, password=password, disabled=disabled)

            profile: dict[str, Any] = {"name": name, "updated_at": now_iso()}
            if disabled is not None:
                profile["disabled"] = disabled
                profile["status"] = STATUS_DISABLED if disabled else STATUS_ENABLED
            await self.provider.update_profile(user_id, profile)

        return {"success": True}

    @admin_only("delete users")
    async def delete_user(self, data: Mapping[str, Any], caller: CallerIdentity) -> dict:
        user_id = _get_string(data, "user_id")
        if not user_id:
            raise InvalidArgument(ERROR_USER_ID_REQUIRED)

        logger.info(f"Deleting user {sanitize_id_for_logging(user_id)}")
        with _internal_on_failure("delete user"):
            target = await self._get_target(user_id)
            if is_admin_email(target.email):
                logger.warning(f"Blocked deleting the administrator: {sanitize_id_for_logging(user_id)}")
                raise PermissionDenied(ERROR_ADMIN_DELETE)

            # Profile first; a failure here must not keep the identity alive
            try:
                await self.provider.delete_profile(user_id)
            except Exception as e:
                logger.error(f"Failed to delete profile {sanitize_id_for_logging(user_id)}: {e}")

            await self.provider.delete_user(user_id)
            logger.info(f"Identity deleted: {sanitize_id_for_logging(user_id)}")

        return {"success": True}

    @admin_only("update user passwords")
    async def update_user_password(self, data: Mapping[str, Any], caller: CallerIdentity) -> dict:
        user_id = _get_string(data, "user_id")
        password = _get_string(data, "password", strip=False)
        if not user_id or not password:
            raise InvalidArgument(ERROR_PASSWORD_FIELDS)

        with _internal_on_failure("update user password"):
            await self._get_target(user_id)
            await self.provider.update_user(user_id, password=password)

        logger.info(f"Password updated: {sanitize_id_for_logging(user_id)}")
        return {"success": True}

    @admin_only("list all users")
    async def get_all_users(self, data: Mapping[str, Any], caller: CallerIdentity) -> dict:
        with _internal_on_failure("list users"):
            profiles = await self.provider.list_profiles()
            users = [UserRecord(**profile) for profile in profiles]

        logger.info(f"Listed {len(users)} users")
        return {"success": True, "users": users}

    @admin_only("change user status")
    async def toggle_user_status(self, data: Mapping[str, Any], caller: CallerIdentity) -> dict:
        user_id = _get_string(data, "user_id")
        new_status = _get_string(data, "new_status")
        if not user_id or not new_status:
            raise InvalidArgument(ERROR_STATUS_FIELDS)
        if new_status not in VALID_STATUSES:
            raise InvalidArgument(ERROR_STATUS_VALUE)

        disabled = new_status == STATUS_DISABLED
        logger.info(f"Setting user {sanitize_id_for_logging(user_id)} to {new_status}")
        with _internal_on_failure("change user status"):
            target = await self._get_target(user_id)
            if disabled and is_admin_email(target.email):
                logger.warning(f"Blocked disabling the administrator: {sanitize_id_for_logging(user_id)}")
                raise PermissionDenied(ERROR_ADMIN_DISABLE)

            await self.provider.update_user(user_id, disabled=disabled)
            await self.provider.update_profile(user_id, {
                "status": new_status,
                "disabled": disabled,
                "updated_at": now_iso(),
            })

        return {"success": True, "message": "User disabled" if disabled else "User enabled"}

    @admin_only("send password reset emails")
    async def send_password_reset_email(self, data: Mapping[str, Any], caller: CallerIdentity) -> dict:
        email = _get_string(data, "email")
        if not email:
            raise InvalidArgument(ERROR_EMAIL_REQUIRED)
        redirect_url = _get_string(data, "redirect_url") or get_password_reset_redirect_url()

        with _internal_on_failure("send password reset email"):
            try:
                await self.provider.get_user_by_email(email)
            except DirectoryProviderError as e:
                if e.is_not_found:
                    raise NotFound(ERROR_EMAIL_NOT_FOUND) from e
                raise
            await self.provider.send_password_reset(email, redirect_url)

        logger.info(f"Password reset sent to {mask_email_for_logging(email)}")
        return {"success": True, "message": "Password reset email sent"}

    async def _get_target(self, user_id: str) -> IdentityRecord:
        """Re-fetch the target account; self-protection checks run against this, never the request."""
        try:
            return await self.provider.get_user(user_id)
        except DirectoryProviderError as e:
            if e.is_not_found:
                logger.warning(f"User not found: {sanitize_id_for_logging(user_id)}")
                raise NotFound(f"{ERROR_USER_NOT_FOUND}: {e.message}") from e
            raise


def _get_string(data: Mapping[str, Any], key: str, strip: bool = True) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgument(f"{key} must be a string")
    candidate = value.strip() if strip else value
    return candidate if candidate.strip() else None


def _get_optional_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise InvalidArgument(f"{key} must be a boolean")
