"""
Pagination

page / limit -> offset, envelope assembly, and the concurrent
count + page fetch used by every list endpoint.
"""
import asyncio
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @classmethod
    def build(
        cls,
        page: int,
        limit: Optional[int],
        default_limit: int = 10,
        max_limit: int = 100
    ) -> "PageRequest":
        """limit falls back to the default and is capped at max_limit"""
        effective = default_limit if limit is None else limit
        return cls(page=page, limit=min(effective, max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def calculate_total_pages(total_items: int, limit: int) -> int:
    if total_items <= 0:
        return 0
    return math.ceil(total_items / limit)


def build_page_envelope(items: Sequence[Any], request: PageRequest, total_items: int) -> Dict[str, Any]:
    return {
        "items": list(items),
        "page": request.page,
        "limit": request.limit,
        "total_items": total_items,
        "total_pages": calculate_total_pages(total_items, request.limit),
    }


def paginate_in_memory(items: Sequence[Any], request: PageRequest) -> Dict[str, Any]:
    """Slice a fully filtered list. Pages past the end are empty."""
    page_items = items[request.offset:request.offset + request.limit]
    return build_page_envelope(page_items, request, len(items))


async def fetch_page(
    count: Callable[[], Awaitable[int]],
    fetch: Callable[[], Awaitable[List[Dict[str, Any]]]]
) -> Tuple[int, List[Dict[str, Any]]]:
    """Run the count and page queries together; either failing fails both"""
    total_items, rows = await asyncio.gather(count(), fetch())
    return total_items, rows
