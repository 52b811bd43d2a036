"""
Members page model.

Search, status filter and pagination over the full member list returned by
``get_all_users``. The list is small enough (one shop's customers) to filter
in memory on every request.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from storefront.config import get_members_per_page
from storefront.errors import InvalidArgument

from .models import UserRecord

STATUS_FILTERS = ("all", "active", "disabled")
PAGE_WINDOW = 5
SHORT_ID_LENGTH = 8

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class MemberPage:
    rows: List[dict] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total_items: int = 0
    page_numbers: List[int] = field(default_factory=list)
    has_previous: bool = False
    has_next: bool = False

    def to_dict(self) -> dict:
        return {
            "users": self.rows,
            "pagination": {
                "page": self.page,
                "total_pages": self.total_pages,
                "total_items": self.total_items,
                "page_numbers": self.page_numbers,
                "has_previous": self.has_previous,
                "has_next": self.has_next,
            },
        }


class MemberBrowser:
    """Newest-first member list with search and paging."""

    def __init__(self, users: Iterable[UserRecord], per_page: Optional[int] = None) -> None:
        self.users = sorted(users, key=_created_sort_key, reverse=True)
        self.per_page = per_page or get_members_per_page()

    def filter(self, search: str = "", status: str = "all") -> List[UserRecord]:
        """Case-insensitive substring match on name or email, then status."""
        status = (status or "all").strip().lower()
        if status not in STATUS_FILTERS:
            raise InvalidArgument(f"Status filter must be one of: {', '.join(STATUS_FILTERS)}")

        result = self.users
        term = (search or "").strip().lower()
        if term:
            result = [u for u in result if term in u.name.lower() or term in u.email.lower()]
        if status != "all":
            want_disabled = status == "disabled"
            result = [u for u in result if u.disabled == want_disabled]
        return result

    def paginate(self, users: List[UserRecord], page: int = 1) -> MemberPage:
        total_items = len(users)
        if total_items == 0:
            return MemberPage()

        total_pages = -(-total_items // self.per_page)
        page = min(max(page, 1), total_pages)
        start = (page - 1) * self.per_page
        rows = [format_row(user) for user in users[start:start + self.per_page]]

        # No pager at all for a single page
        page_numbers: List[int] = []
        if total_pages > 1:
            first = max(1, page - 2)
            last = min(total_pages, first + PAGE_WINDOW - 1)
            page_numbers = list(range(first, last + 1))

        return MemberPage(
            rows=rows,
            page=page,
            total_pages=total_pages,
            total_items=total_items,
            page_numbers=page_numbers,
            has_previous=page > 1,
            has_next=page < total_pages,
        )

    def browse(self, search: str = "", status: str = "all", page: int = 1) -> MemberPage:
        return self.paginate(self.filter(search, status), page)


def format_row(user: UserRecord) -> dict:
    return {
        "id": user.id,
        "short_id": f"{user.id[:SHORT_ID_LENGTH]}...",
        "name": user.name,
        "email": user.email,
        "created": user.created_at.strftime("%Y-%m-%d") if user.created_at else "",
        "status": user.status,
    }


def _created_sort_key(user: UserRecord) -> datetime:
    created = user.created_at
    if created is None:
        return _OLDEST
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created
