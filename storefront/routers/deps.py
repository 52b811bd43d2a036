"""
Shared Dependencies for Routers

Lazy-loaded singletons to optimize cold start.
Import heavy modules only when needed.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.directory import DirectoryProvider, UserDirectoryService


# ==================== LAZY SINGLETONS ====================

_directory_provider: Optional["DirectoryProvider"] = None
_directory_service: Optional["UserDirectoryService"] = None


def get_directory_provider() -> "DirectoryProvider":
    """Get or create the Supabase-backed directory provider (lazy loaded)"""
    global _directory_provider
    if _directory_provider is None:
        from storefront.directory import SupabaseDirectoryProvider
        _directory_provider = SupabaseDirectoryProvider()
    return _directory_provider


def get_directory_service() -> "UserDirectoryService":
    """Get or create UserDirectoryService singleton (lazy loaded)"""
    global _directory_service
    if _directory_service is None:
        from storefront.directory import UserDirectoryService
        _directory_service = UserDirectoryService(get_directory_provider())
    return _directory_service
