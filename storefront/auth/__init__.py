"""Authentication package."""
from .admin import get_caller, verify_admin

__all__ = [
    "get_caller",
    "verify_admin",
]
