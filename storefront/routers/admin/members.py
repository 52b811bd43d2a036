"""
Admin Members Router

Backs the members dashboard page: one searchable, filterable, paginated table
plus the "add member" form.
"""
from fastapi import APIRouter, Depends

from storefront.auth import verify_admin
from storefront.directory import CallerIdentity, MemberBrowser, UserDirectoryService
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.routers.deps import get_directory_service
from .models import CreateUserRequest

logger = get_logger(__name__)

router = APIRouter(tags=["admin-members"])


@router.get("/members")
async def admin_list_members(
    search: str = "",
    status: str = "all",
    page: int = 1,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """One page of the members table"""
    result = await service.get_all_users({}, admin)
    browser = MemberBrowser(result["users"])
    member_page = browser.browse(search=search, status=status, page=page)

    logger.info(
        f"Members page {member_page.page}/{member_page.total_pages} "
        f"(search={sanitize_string_for_logging(search, 20)}, status={status})"
    )
    return member_page.to_dict()


@router.post("/members")
async def admin_add_member(
    request: CreateUserRequest,
    admin: CallerIdentity = Depends(verify_admin),
    service: UserDirectoryService = Depends(get_directory_service),
):
    """Add a member from the dashboard form"""
    return await service.create_user(request.model_dump(), admin)
