import math
from typing import Any, Dict, Sequence

from app.schemas.common import Pagination


def offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def paginate(page: int, limit: int, total: int) -> Pagination:
    """Navigation metadata for ``total`` records split into pages of ``limit``.

    ``total == 0`` yields zero pages and no next/previous page beyond page 1.
    """
    total_pages = math.ceil(total / limit)
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def paginated(items: Sequence[Any], page: int, limit: int, total: int) -> Dict[str, Any]:
    return {"data": list(items), "pagination": paginate(page, limit, total)}
