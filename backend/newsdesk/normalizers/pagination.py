# newsdesk/normalizers/pagination.py
from typing import Callable, Any, List, Optional, Dict


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    page: int,
    per_page: int,
    total: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Normalize offset-paginated API responses.
    """

    # Normalize ORM objects → dicts
    normalized_items = [normalize_fn(item) for item in items]

    response: Dict[str, Any] = {
        "items": normalized_items,
        "pagination": {
            "page": page,
            "per_page": per_page,
        },
    }

    if total is not None:
        response["pagination"]["total"] = total
        response["pagination"]["total_pages"] = (
            (total + per_page - 1) // per_page
        )

    return response
