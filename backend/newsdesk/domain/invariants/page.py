from typing import Any, Dict

from newsdesk.domain.exceptions import InvariantViolation
from .section import assert_sections


def assert_seo(seo: Any) -> None:
    if seo is None:
        return

    if not isinstance(seo, dict):
        raise InvariantViolation("SEO must be an object")

    for field in ("title", "description"):
        value = seo.get(field)
        if value is not None and not isinstance(value, str):
            raise InvariantViolation(f"SEO {field} must be a string")


def assert_content_page_payload(data: Dict[str, Any]) -> None:
    """
    Guards a full content-page save.

    Runs before anything is written, so a failure leaves the stored
    draft exactly as it was.
    """
    sections = data.get("sections")
    if not isinstance(sections, list):
        raise InvariantViolation("Sections must be an array")

    assert_seo(data.get("seo"))
    assert_sections(sections)
