import re
from typing import Any, Dict

from dateutil.parser import isoparse

from newsdesk.domain.exceptions import InvariantViolation
from newsdesk.domain.lifecycle.post import POST_STATUSES
from newsdesk.utils.time import normalize_ts

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

TITLE_MAX_LENGTH = 200
EXCERPT_MAX_LENGTH = 500


def is_valid_slug(value: Any) -> bool:
    return isinstance(value, str) and bool(SLUG_PATTERN.match(value))


def _string_list(value: Any, label: str) -> list[str]:
    if not isinstance(value, list):
        raise InvariantViolation(f"{label} must be an array")
    if not all(isinstance(item, str) for item in value):
        raise InvariantViolation(f"{label} must be an array of strings")
    return value


def clean_post_payload(data: Dict[str, Any], *, creating: bool) -> Dict[str, Any]:
    """
    Validates a post create/update body and maps it onto model fields.

    Only the keys present in ``data`` are returned, so an update touches
    nothing it was not asked to. On create the title is mandatory and the
    status may only be ``draft``.
    """
    cleaned: Dict[str, Any] = {}

    if creating or "title" in data:
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise InvariantViolation("Title is required")
        title = title.strip()
        if len(title) > TITLE_MAX_LENGTH:
            raise InvariantViolation("Title cannot exceed 200 characters")
        cleaned["title"] = title

    if data.get("slug") is not None:
        if not is_valid_slug(data["slug"]):
            raise InvariantViolation("Slug must be URL-safe")
        cleaned["slug"] = data["slug"]

    if "body" in data:
        body = data["body"]
        if body is not None and not isinstance(body, str):
            raise InvariantViolation("Body must be a string")
        cleaned["body"] = body or ""

    if "excerpt" in data:
        excerpt = data["excerpt"]
        if excerpt is not None and not isinstance(excerpt, str):
            raise InvariantViolation("Excerpt must be a string")
        if excerpt and len(excerpt) > EXCERPT_MAX_LENGTH:
            raise InvariantViolation("Excerpt cannot exceed 500 characters")
        cleaned["excerpt"] = excerpt

    if "tags" in data:
        tags = _string_list(data["tags"] or [], "Tags")
        cleaned["tags"] = [tag.strip().lower() for tag in tags if tag.strip()]

    if "categories" in data:
        cleaned["categories"] = _string_list(data["categories"] or [], "Categories")

    if "status" in data:
        status = data["status"]
        if status not in POST_STATUSES or (creating and status != "draft"):
            raise InvariantViolation("Invalid status")
        cleaned["status"] = status

    if "scheduledAt" in data:
        raw = data["scheduledAt"]
        if raw is None:
            cleaned["scheduled_at"] = None
        else:
            if not isinstance(raw, str):
                raise InvariantViolation("Invalid scheduled date")
            try:
                cleaned["scheduled_at"] = normalize_ts(isoparse(raw))
            except (ValueError, OverflowError) as exc:
                raise InvariantViolation("Invalid scheduled date") from exc

    if "seo" in data:
        seo = data["seo"]
        if seo is not None and not isinstance(seo, dict):
            raise InvariantViolation("SEO must be an object")
        cleaned["seo"] = seo or {}

    return cleaned
