"""Bearer-token caller resolution and the admin check for HTTP routes."""
from typing import Optional

from fastapi import Depends, Header

from storefront.directory import CallerIdentity, DirectoryProvider, require_admin
from storefront.routers.deps import get_directory_provider


async def get_caller(
    authorization: str = Header(None, alias="Authorization"),
    provider: DirectoryProvider = Depends(get_directory_provider),
) -> Optional[CallerIdentity]:
    """
    Resolve the caller from ``Authorization: Bearer <access token>``.

    Returns None when there is no usable token; deciding what that means is
    the guard's job.
    """
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        return None
    return await provider.get_caller(parts[1])


async def verify_admin(caller: Optional[CallerIdentity] = Depends(get_caller)) -> CallerIdentity:
    """Require the administrator on every request; nothing is cached between requests."""
    return require_admin(caller, action="use the admin API")
