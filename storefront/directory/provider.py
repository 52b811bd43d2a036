"""
Directory provider - identity accounts and profile documents.

Identities live in Supabase Auth (admin API, service role key). Profiles live
in the ``profiles`` table keyed by the identity id. Supabase has no "disabled"
flag, so disabling an account bans it for a century and enabling lifts the ban.
"""
from datetime import UTC, datetime
from typing import Any, List, Optional, Protocol

from supabase import AuthApiError
from supabase._async.client import AsyncClient

from storefront.config import normalize_email
from storefront.db import get_supabase
from storefront.errors import DirectoryProviderError
from storefront.logging import get_logger

from .models import CallerIdentity, IdentityRecord

logger = get_logger(__name__)

PROFILES_TABLE = "profiles"
BAN_FOREVER = "876000h"
BAN_NONE = "none"
_LIST_PAGE_SIZE = 1000


class DirectoryProvider(Protocol):
    """What the user directory service needs from an identity + document store."""

    async def get_caller(self, access_token: str) -> Optional[CallerIdentity]: ...

    async def get_user(self, uid: str) -> IdentityRecord: ...

    async def get_user_by_email(self, email: str) -> IdentityRecord: ...

    async def create_user(self, email: str, password: str, name: str) -> IdentityRecord: ...

    async def update_user(
        self,
        uid: str,
        *,
        name: Optional[str] = None,
        password: Optional[str] = None,
        disabled: Optional[bool] = None,
    ) -> None: ...

    async def delete_user(self, uid: str) -> None: ...

    async def send_password_reset(self, email: str, redirect_url: str) -> None: ...

    async def create_profile(self, uid: str, data: dict) -> None: ...

    async def update_profile(self, uid: str, data: dict) -> None: ...

    async def delete_profile(self, uid: str) -> None: ...

    async def list_profiles(self) -> List[dict]: ...


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


class SupabaseDirectoryProvider:
    """DirectoryProvider over supabase-py v2 (async)."""

    def __init__(self, client: Optional[AsyncClient] = None) -> None:
        self._client = client

    async def client(self) -> AsyncClient:
        if self._client is None:
            self._client = await get_supabase()
        return self._client

    # ==================== IDENTITY ====================

    async def get_caller(self, access_token: str) -> Optional[CallerIdentity]:
        client = await self.client()
        try:
            response = await client.auth.get_user(access_token)
        except AuthApiError as e:
            logger.warning(f"Rejected access token: {e.message}")
            return None
        if not response or not response.user:
            return None
        return CallerIdentity(uid=response.user.id, email=response.user.email)

    async def get_user(self, uid: str) -> IdentityRecord:
        client = await self.client()
        try:
            response = await client.auth.admin.get_user_by_id(uid)
        except AuthApiError as e:
            raise _translate(e) from e
        if not response or not response.user:
            raise DirectoryProviderError(DirectoryProviderError.USER_NOT_FOUND, f"User {uid} not found")
        return _to_identity(response.user)

    async def get_user_by_email(self, email: str) -> IdentityRecord:
        client = await self.client()
        wanted = normalize_email(email)
        page = 1
        while True:
            try:
                users = await client.auth.admin.list_users(page=page, per_page=_LIST_PAGE_SIZE)
            except AuthApiError as e:
                raise _translate(e) from e
            for user in users:
                if normalize_email(user.email) == wanted:
                    return _to_identity(user)
            if len(users) < _LIST_PAGE_SIZE:
                break
            page += 1
        raise DirectoryProviderError(
            DirectoryProviderError.USER_NOT_FOUND, f"User with email {email} not found"
        )

    async def create_user(self, email: str, password: str, name: str) -> IdentityRecord:
        client = await self.client()
        try:
            response = await client.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": {"name": name},
            })
        except AuthApiError as e:
            raise _translate(e) from e
        return _to_identity(response.user)

    async def update_user(
        self,
        uid: str,
        *,
        name: Optional[str] = None,
        password: Optional[str] = None,
        disabled: Optional[bool] = None,
    ) -> None:
        attributes: dict[str, Any] = {}
        if name:
            attributes["user_metadata"] = {"name": name}
        if password:
            attributes["password"] = password
        if disabled is not None:
            attributes["ban_duration"] = BAN_FOREVER if disabled else BAN_NONE

        if not attributes:
            return

        client = await self.client()
        try:
            await client.auth.admin.update_user_by_id(uid, attributes)
        except AuthApiError as e:
            raise _translate(e) from e

    async def delete_user(self, uid: str) -> None:
        client = await self.client()
        try:
            await client.auth.admin.delete_user(uid)
        except AuthApiError as e:
            raise _translate(e) from e

    async def send_password_reset(self, email: str, redirect_url: str) -> None:
        client = await self.client()
        try:
            await client.auth.reset_password_for_email(email, {"redirect_to": redirect_url})
        except AuthApiError as e:
            raise _translate(e) from e

    # ==================== PROFILES ====================

    async def create_profile(self, uid: str, data: dict) -> None:
        client = await self.client()
        await client.table(PROFILES_TABLE).insert({"id": uid, **data}).execute()

    async def update_profile(self, uid: str, data: dict) -> None:
        client = await self.client()
        result = await client.table(PROFILES_TABLE).update(data).eq("id", uid).execute()
        if not result.data:
            raise DirectoryProviderError("profile-not-found", f"No profile document for {uid}")

    async def delete_profile(self, uid: str) -> None:
        client = await self.client()
        await client.table(PROFILES_TABLE).delete().eq("id", uid).execute()

    async def list_profiles(self) -> List[dict]:
        client = await self.client()
        result = await client.table(PROFILES_TABLE).select("*").execute()
        return result.data or []


def _to_identity(user) -> IdentityRecord:
    banned_until = getattr(user, "banned_until", None)
    return IdentityRecord(id=user.id, email=user.email, disabled=_is_banned(banned_until))


def _is_banned(banned_until) -> bool:
    if not banned_until:
        return False
    if isinstance(banned_until, str):
        try:
            banned_until = datetime.fromisoformat(banned_until.replace("Z", "+00:00"))
        except ValueError:
            return True
    return banned_until > datetime.now(UTC)


def _translate(error: AuthApiError) -> DirectoryProviderError:
    status = getattr(error, "status", None)
    code = getattr(error, "code", None)
    if status == 404 or code == "user_not_found":
        return DirectoryProviderError(DirectoryProviderError.USER_NOT_FOUND, error.message)
    return DirectoryProviderError(code or f"auth-{status}", error.message)
