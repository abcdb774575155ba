from typing import Any, Callable, Dict, Iterable, Mapping
from urllib.parse import urlparse

from newsdesk.domain.exceptions import InvariantViolation

GALLERY_LAYOUTS = ("grid", "masonry")
POPULAR_POSTS_LAYOUTS = ("grid", "list")


def is_absolute_url(value: Any) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _optional_string(props: Mapping[str, Any], key: str, message: str) -> None:
    if key in props and props[key] is not None and not isinstance(props[key], str):
        raise InvariantViolation(message)


def _assert_layout(props: Mapping[str, Any], allowed: Iterable[str], label: str) -> None:
    layout = props.get("layout")
    if layout is not None and layout not in allowed:
        raise InvariantViolation(
            f"{label} layout must be one of: {', '.join(allowed)}"
        )


# -------------------------------------------------
# Per-variant rules
# -------------------------------------------------

def assert_hero(props: Mapping[str, Any]) -> None:
    if not is_absolute_url(props.get("imageUrl")):
        raise InvariantViolation("Hero image URL must be an absolute URL")

    if not _non_empty_string(props.get("title")):
        raise InvariantViolation("Hero title is required")

    _optional_string(props, "subtitle", "Hero subtitle must be a string")

    overlay = props.get("overlay")
    if overlay is not None and not isinstance(overlay, bool):
        raise InvariantViolation("Hero overlay must be a boolean")

    cta = props.get("cta")
    if cta is None:
        return
    if not isinstance(cta, dict):
        raise InvariantViolation("Hero call-to-action must be an object")
    if not _non_empty_string(cta.get("label")):
        raise InvariantViolation("Hero call-to-action requires a label")
    if not is_absolute_url(cta.get("href")):
        raise InvariantViolation("Hero call-to-action link must be an absolute URL")


def assert_breadcrumb(props: Mapping[str, Any]) -> None:
    items = props.get("items")
    if not isinstance(items, list) or not items:
        raise InvariantViolation("Breadcrumb must have at least one item")

    for item in items:
        if not isinstance(item, dict) or not _non_empty_string(item.get("label")):
            raise InvariantViolation("Breadcrumb item label is required")
        if not isinstance(item.get("href"), str):
            raise InvariantViolation("Breadcrumb item href is required")


def assert_text(props: Mapping[str, Any]) -> None:
    _optional_string(props, "html", "Text html must be a string")
    _optional_string(props, "markdown", "Text markdown must be a string")

    if not (_non_empty_string(props.get("html")) or _non_empty_string(props.get("markdown"))):
        raise InvariantViolation("Provide html or markdown")


def assert_single_image(props: Mapping[str, Any]) -> None:
    if not is_absolute_url(props.get("url")):
        raise InvariantViolation("Image URL must be an absolute URL")

    _optional_string(props, "caption", "Image caption must be a string")
    _optional_string(props, "alt", "Image alt text must be a string")


def assert_image_gallery(props: Mapping[str, Any]) -> None:
    images = props.get("images")
    if not isinstance(images, list) or not images:
        raise InvariantViolation("Gallery must have at least one image")

    for image in images:
        if not isinstance(image, dict) or not is_absolute_url(image.get("url")):
            raise InvariantViolation("Gallery image URL must be an absolute URL")
        _optional_string(image, "alt", "Gallery image alt text must be a string")
        _optional_string(image, "caption", "Gallery image caption must be a string")

    _assert_layout(props, GALLERY_LAYOUTS, "Gallery")


def assert_popular_posts(props: Mapping[str, Any]) -> None:
    post_ids = props.get("postIds")
    if not isinstance(post_ids, list) or not post_ids:
        raise InvariantViolation("Popular posts must reference at least one post")

    if not all(_non_empty_string(post_id) for post_id in post_ids):
        raise InvariantViolation("Popular post IDs must be strings")

    _assert_layout(props, POPULAR_POSTS_LAYOUTS, "Popular posts")


# Closed registry: a type missing here is rejected, never passed through.
SECTION_VALIDATORS: Dict[str, Callable[[Mapping[str, Any]], None]] = {
    "hero": assert_hero,
    "breadcrumb": assert_breadcrumb,
    "text": assert_text,
    "singleImage": assert_single_image,
    "imageGallery": assert_image_gallery,
    "popularPosts": assert_popular_posts,
}

SECTION_TYPES = frozenset(SECTION_VALIDATORS)


def assert_section(section: Any) -> None:
    if not isinstance(section, dict):
        raise InvariantViolation("Section must be an object")

    section_type = section.get("type")
    validator = SECTION_VALIDATORS.get(section_type) if isinstance(section_type, str) else None
    if validator is None:
        raise InvariantViolation(f"Unknown section type: {section_type}")

    props = section.get("props")
    if not isinstance(props, dict):
        raise InvariantViolation("Section props must be an object")

    validator(props)


def assert_sections(sections: Iterable[Any]) -> None:
    """
    Validates sections in submission order.
    Stops at the first violation; nothing is collected or rewritten.
    """
    for section in sections:
        assert_section(section)
