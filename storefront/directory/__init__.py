"""User directory: admin guard, provider, account lifecycle service and members page."""
from .guard import admin_only, is_admin_email, require_admin
from .members import MemberBrowser, MemberPage
from .models import CallerIdentity, IdentityRecord, UserRecord
from .provider import DirectoryProvider, SupabaseDirectoryProvider
from .service import UserDirectoryService

__all__ = [
    "CallerIdentity",
    "DirectoryProvider",
    "IdentityRecord",
    "MemberBrowser",
    "MemberPage",
    "SupabaseDirectoryProvider",
    "UserDirectoryService",
    "UserRecord",
    "admin_only",
    "is_admin_email",
    "require_admin",
]
