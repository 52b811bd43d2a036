"""Tests for the Supabase directory provider"""
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from supabase import AuthApiError

from storefront.directory import SupabaseDirectoryProvider
from storefront.directory.provider import BAN_FOREVER, BAN_NONE, PROFILES_TABLE, _LIST_PAGE_SIZE
from storefront.errors import DirectoryProviderError


def make_auth_user(uid: str, email: str, banned_until=None):
    return SimpleNamespace(id=uid, email=email, banned_until=banned_until)


@pytest.fixture
def mock_client():
    """Mock async Supabase client with admin auth and a chainable table query"""
    client = Mock()
    client.auth.get_user = AsyncMock()
    client.auth.reset_password_for_email = AsyncMock()
    client.auth.admin.get_user_by_id = AsyncMock()
    client.auth.admin.list_users = AsyncMock(return_value=[])
    client.auth.admin.create_user = AsyncMock()
    client.auth.admin.update_user_by_id = AsyncMock()
    client.auth.admin.delete_user = AsyncMock()

    query = Mock()
    query.insert.return_value = query
    query.update.return_value = query
    query.delete.return_value = query
    query.select.return_value = query
    query.eq.return_value = query
    query.execute = AsyncMock(return_value=SimpleNamespace(data=[{"id": "u1"}]))
    client.table.return_value = query
    return client


@pytest.fixture
def provider(mock_client):
    return SupabaseDirectoryProvider(client=mock_client)


# ==================== IDENTITY ====================

@pytest.mark.asyncio
async def test_disable_bans_account(provider, mock_client):
    await provider.update_user("u1", disabled=True)

    mock_client.auth.admin.update_user_by_id.assert_awaited_once_with("u1", {"ban_duration": BAN_FOREVER})
    assert BAN_FOREVER == "876000h"


@pytest.mark.asyncio
async def test_enable_lifts_ban(provider, mock_client):
    await provider.update_user("u1", disabled=False)

    mock_client.auth.admin.update_user_by_id.assert_awaited_once_with("u1", {"ban_duration": BAN_NONE})
    assert BAN_NONE == "none"


@pytest.mark.asyncio
async def test_update_user_sends_name_and_password(provider, mock_client):
    await provider.update_user("u1", name="Mei", password="pw-123456")

    mock_client.auth.admin.update_user_by_id.assert_awaited_once_with(
        "u1", {"user_metadata": {"name": "Mei"}, "password": "pw-123456"}
    )


@pytest.mark.asyncio
async def test_update_user_without_changes_skips_call(provider, mock_client):
    await provider.update_user("u1")

    mock_client.auth.admin.update_user_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_user_is_not_found(provider, mock_client):
    mock_client.auth.admin.get_user_by_id.side_effect = AuthApiError("User not found", 404, "user_not_found")

    with pytest.raises(DirectoryProviderError) as exc_info:
        await provider.get_user("ghost")

    assert exc_info.value.is_not_found


@pytest.mark.asyncio
async def test_404_without_code_is_not_found(provider, mock_client):
    mock_client.auth.admin.delete_user.side_effect = AuthApiError("Not found", 404, None)

    with pytest.raises(DirectoryProviderError) as exc_info:
        await provider.delete_user("ghost")

    assert exc_info.value.is_not_found


@pytest.mark.asyncio
async def test_other_auth_errors_keep_provider_code(provider, mock_client):
    mock_client.auth.admin.create_user.side_effect = AuthApiError(
        "A user with this email address has already been registered", 422, "email_exists"
    )

    with pytest.raises(DirectoryProviderError) as exc_info:
        await provider.create_user("taken@example.com", "pw-123456", "Taken")

    assert exc_info.value.code == "email_exists"
    assert not exc_info.value.is_not_found


@pytest.mark.asyncio
async def test_past_ban_is_not_disabled(provider, mock_client):
    expired = (datetime.now(UTC) - timedelta(days=1)).isoformat()
    mock_client.auth.admin.get_user_by_id.return_value = SimpleNamespace(
        user=make_auth_user("u1", "a@example.com", banned_until=expired)
    )

    record = await provider.get_user("u1")

    assert record.disabled is False


@pytest.mark.asyncio
async def test_future_ban_is_disabled(provider, mock_client):
    mock_client.auth.admin.get_user_by_id.return_value = SimpleNamespace(
        user=make_auth_user("u1", "a@example.com", banned_until="2999-01-01T00:00:00Z")
    )

    record = await provider.get_user("u1")

    assert record.disabled is True
    assert record.email == "a@example.com"


@pytest.mark.asyncio
async def test_email_lookup_walks_pages(provider, mock_client):
    first_page = [make_auth_user(f"u{i}", f"user{i}@example.com") for i in range(_LIST_PAGE_SIZE)]
    second_page = [make_auth_user("target", "Mei@Example.com")]
    mock_client.auth.admin.list_users.side_effect = [first_page, second_page]

    record = await provider.get_user_by_email(" mei@example.com ")

    assert record.id == "target"
    assert [call.kwargs["page"] for call in mock_client.auth.admin.list_users.await_args_list] == [1, 2]


@pytest.mark.asyncio
async def test_email_lookup_not_found(provider, mock_client):
    mock_client.auth.admin.list_users.return_value = [make_auth_user("u1", "other@example.com")]

    with pytest.raises(DirectoryProviderError) as exc_info:
        await provider.get_user_by_email("nobody@example.com")

    assert exc_info.value.is_not_found
    mock_client.auth.admin.list_users.assert_awaited_once()


@pytest.mark.asyncio
async def test_rejected_token_has_no_caller(provider, mock_client):
    mock_client.auth.get_user.side_effect = AuthApiError("invalid JWT", 401, "bad_jwt")

    assert await provider.get_caller("forged") is None


@pytest.mark.asyncio
async def test_password_reset_passes_redirect(provider, mock_client):
    await provider.send_password_reset("mei@example.com", "https://shop.example/login")

    mock_client.auth.reset_password_for_email.assert_awaited_once_with(
        "mei@example.com", {"redirect_to": "https://shop.example/login"}
    )


# ==================== PROFILES ====================

@pytest.mark.asyncio
async def test_update_missing_profile_raises(provider, mock_client):
    mock_client.table.return_value.execute.return_value = SimpleNamespace(data=[])

    with pytest.raises(DirectoryProviderError) as exc_info:
        await provider.update_profile("ghost", {"name": "x"})

    assert exc_info.value.code == "profile-not-found"
    mock_client.table.assert_called_with(PROFILES_TABLE)


@pytest.mark.asyncio
async def test_create_profile_inserts_keyed_row(provider, mock_client):
    await provider.create_profile("u1", {"name": "Mei"})

    mock_client.table.return_value.insert.assert_called_once_with({"id": "u1", "name": "Mei"})


@pytest.mark.asyncio
async def test_list_profiles_handles_empty_table(provider, mock_client):
    mock_client.table.return_value.execute.return_value = SimpleNamespace(data=None)

    assert await provider.list_profiles() == []
