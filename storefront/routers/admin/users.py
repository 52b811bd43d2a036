"""
Admin Users Router

Account lifecycle endpoints. ``verify_admin`` rejects non-admins before the
body is used; the service checks again on its own so it is safe to call from
anywhere else.
"""
from fastapi import APIRouter, Depends

from storefront.auth import verify_admin
from storefront.directory import CallerIdentity, UserDirectoryService
from storefront.routers.deps import get_directory_service
from .models import (
    CreateUserRequest,
    PasswordResetRequest,
    ToggleStatusRequest,
    UpdatePasswordRequest,
    UpdateUserRequest,
)

router = APIRouter(tags=["admin-users"])


@router.post("/users")
async def admin_create_user(
    request: CreateUserRequest,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Create an account and its profile"""
    return await service.create_user(request.model_dump(), admin)


@router.get("/users")
async def admin_get_users(
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """List every member profile"""
    result = await service.get_all_users({}, admin)
    return {"success": True, "users": [user.to_dict() for user in result["users"]]}


@router.post("/users/password-reset")
async def admin_send_password_reset(
    request: PasswordResetRequest,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Send a password reset email"""
    return await service.send_password_reset_email(request.model_dump(), admin)


@router.patch("/users/{user_id}")
async def admin_update_user(
    user_id: str,
    request: UpdateUserRequest,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Update name, and optionally password and disabled flag"""
    return await service.update_user({"user_id": user_id, **request.model_dump()}, admin)


@router.delete("/users/{user_id}")
async def admin_delete_user(
    user_id: str,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Delete profile and account"""
    return await service.delete_user({"user_id": user_id}, admin)


@router.put("/users/{user_id}/password")
async def admin_update_user_password(
    user_id: str,
    request: UpdatePasswordRequest,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Set a new password"""
    return await service.update_user_password({"user_id": user_id, **request.model_dump()}, admin)


@router.post("/users/{user_id}/status")
async def admin_toggle_user_status(
    user_id: str,
    request: ToggleStatusRequest,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Enable or disable an account"""
    return await service.toggle_user_status({"user_id": user_id, **request.model_dump()}, admin)
