"""Pytest configuration and fixtures"""
import os
from datetime import UTC, datetime
from typing import Optional

import pytest

# Set test environment variables
os.environ.setdefault("ADMIN_EMAIL", "admin@storefront.example")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.directory import CallerIdentity, IdentityRecord, UserDirectoryService  # noqa: E402
from storefront.errors import DirectoryProviderError  # noqa: E402

ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_UID = "admin-uid-0001"
MEMBER_UID = "member-uid-0002"
MEMBER_EMAIL = "member@example.com"


class FakeDirectoryProvider:
    """In-memory identity store + profiles table."""

    def __init__(self) -> None:
        self.identities: dict[str, dict] = {}
        self.passwords: dict[str, str] = {}
        self.profiles: dict[str, dict] = {}
        self.tokens: dict[str, CallerIdentity] = {}
        self.reset_requests: list[tuple[str, str]] = []
        self._counter = 0

    def seed(
        self,
        uid: str,
        email: str,
        name: str,
        created_at: Optional[str] = None,
        disabled: bool = False,
        token: Optional[str] = None,
    ) -> None:
        self.identities[uid] = {"id": uid, "email": email, "disabled": disabled}
        self.profiles[uid] = {
            "id": uid,
            "name": name,
            "email": email,
            "created_at": created_at or datetime.now(UTC).isoformat(),
            "disabled": disabled,
        }
        if token:
            self.tokens[token] = CallerIdentity(uid=uid, email=email)

    def _require(self, uid: str) -> dict:
        identity = self.identities.get(uid)
        if identity is None:
            raise DirectoryProviderError(DirectoryProviderError.USER_NOT_FOUND, f"User {uid} not found")
        return identity

    async def get_caller(self, access_token: str) -> Optional[CallerIdentity]:
        return self.tokens.get(access_token)

    async def get_user(self, uid: str) -> IdentityRecord:
        return IdentityRecord(**self._require(uid))

    async def get_user_by_email(self, email: str) -> IdentityRecord:
        for identity in self.identities.values():
            if identity["email"].lower() == email.strip().lower():
                return IdentityRecord(**identity)
        raise DirectoryProviderError(DirectoryProviderError.USER_NOT_FOUND, f"User with email {email} not found")

    async def create_user(self, email: str, password: str, name: str) -> IdentityRecord:
        if any(i["email"].lower() == email.lower() for i in self.identities.values()):
            raise DirectoryProviderError("email_exists", "A user with this email address has already been registered")
        self._counter += 1
        uid = f"new-uid-{self._counter:04d}"
        self.identities[uid] = {"id": uid, "email": email, "disabled": False}
        self.passwords[uid] = password
        return IdentityRecord(**self.identities[uid])

    async def update_user(self, uid, *, name=None, password=None, disabled=None) -> None:
        identity = self._require(uid)
        if password:
            self.passwords[uid] = password
        if disabled is not None:
            identity["disabled"] = disabled

    async def delete_user(self, uid: str) -> None:
        self._require(uid)
        del self.identities[uid]

    async def send_password_reset(self, email: str, redirect_url: str) -> None:
        self.reset_requests.append((email, redirect_url))

    async def create_profile(self, uid: str, data: dict) -> None:
        self.profiles[uid] = {"id": uid, **data}

    async def update_profile(self, uid: str, data: dict) -> None:
        if uid not in self.profiles:
            raise DirectoryProviderError("profile-not-found", f"No profile document for {uid}")
        self.profiles[uid].update(data)

    async def delete_profile(self, uid: str) -> None:
        self.profiles.pop(uid, None)

    async def list_profiles(self) -> list[dict]:
        return [dict(profile) for profile in self.profiles.values()]


@pytest.fixture
def provider() -> FakeDirectoryProvider:
    """Directory with the administrator and one member"""
    fake = FakeDirectoryProvider()
    fake.seed(ADMIN_UID, ADMIN_EMAIL, "Shop Admin", "2024-01-01T00:00:00+00:00", token="admin-token")
    fake.seed(MEMBER_UID, MEMBER_EMAIL, "Mei Lin", "2024-02-01T00:00:00+00:00", token="member-token")
    return fake


@pytest.fixture
def service(provider) -> UserDirectoryService:
    return UserDirectoryService(provider)


@pytest.fixture
def admin_caller() -> CallerIdentity:
    return CallerIdentity(uid=ADMIN_UID, email=ADMIN_EMAIL)


@pytest.fixture
def member_caller() -> CallerIdentity:
    return CallerIdentity(uid=MEMBER_UID, email=MEMBER_EMAIL)


@pytest.fixture
def sample_product():
    """Sample product card attributes"""
    return {"id": "p1", "name": "Widget", "price": 100, "image": "x.png"}
