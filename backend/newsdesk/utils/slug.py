import re
from typing import Optional

from newsdesk.models.post import Post


def slugify(title: str) -> str:
    """
    Title -> URL-safe slug: lower-case ascii letters, digits and dashes.
    """
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9 -]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def slug_taken(slug: str, exclude_id: Optional[str] = None) -> bool:
    query = Post.query.filter(Post.slug == slug)
    if exclude_id is not None:
        query = query.filter(Post.id != exclude_id)
    return query.first() is not None


def unique_slug(base: str, exclude_id: Optional[str] = None) -> str:
    """
    Returns ``base`` if free, else the first free ``base-N`` (N >= 2).
    """
    if not slug_taken(base, exclude_id):
        return base

    counter = 2
    while slug_taken(f"{base}-{counter}", exclude_id):
        counter += 1
    return f"{base}-{counter}"
