# inzozi/shared/utils/pagination.py

import math
from typing import Any, Dict

from fastapi import Query
from fastapi_pagination import Params

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def pagination_params(
        page: int = Query(1, ge=1, description="Page number"),
        limit: int = Query(
            DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"
        ),
) -> Params:
    return Params(page=page, size=limit)


def offset_of(params: Params) -> int:
    return (params.page - 1) * params.size


def pagination_meta(params: Params, total: int) -> Dict[str, Any]:
    """Pagination block returned next to a page of results."""
    total_pages = math.ceil(total / params.size) if params.size else 0
    return {
        "current_page": params.page,
        "total_pages": total_pages,
        "total_users": total,
        "users_per_page": params.size,
        "has_next_page": params.page < total_pages,
        "has_prev_page": params.page > 1,
    }
