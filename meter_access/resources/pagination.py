"""
Cursor-based pagination shared by every list endpoint.

A page request carries the fixed page size and, after the first page, the
id of the item to continue after. A page response only says whether more
items exist on either side; totals are never exposed.
"""

from typing import Any, Optional

from meter_access.models import PaginatedResponse

PAGE_SIZE = 25


def page_params(cursor: Optional[str] = None) -> dict[str, Any]:
    """Query for one page. The first page has no page_cursor key at all."""
    params: dict[str, Any] = {"page_size": PAGE_SIZE}
    if cursor:
        params["page_cursor"] = cursor
    return params


def next_cursor(page: PaginatedResponse) -> Optional[str]:
    """Cursor for the page after `page`, or None when it is the last one."""
    if not page.pagination.has_more or not page.items:
        return None
    return page.items[-1].id
