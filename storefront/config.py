"""
Runtime configuration read from environment variables.

Values that guard access (the administrator email) are read on every call so a
redeploy with a new value never leaves a stale identity cached in a warm
serverless instance.
"""
import os

DEFAULT_PASSWORD_RESET_REDIRECT_URL = "https://storefront.example"
DEFAULT_CART_TTL_SECONDS = 30 * 24 * 60 * 60
DEFAULT_MEMBERS_PER_PAGE = 10


def get_admin_email() -> str:
    """Email of the single administrator account, normalised for comparison."""
    return normalize_email(os.environ.get("ADMIN_EMAIL", ""))


def get_password_reset_redirect_url() -> str:
    return os.environ.get("PASSWORD_RESET_REDIRECT_URL") or DEFAULT_PASSWORD_RESET_REDIRECT_URL


def get_cart_ttl_seconds() -> int:
    return _get_int("CART_TTL_SECONDS", DEFAULT_CART_TTL_SECONDS)


def get_members_per_page() -> int:
    return _get_int("MEMBERS_PER_PAGE", DEFAULT_MEMBERS_PER_PAGE)


def normalize_email(value: str | None) -> str:
    if not value:
        return ""
    return value.strip().lower()


def _get_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
