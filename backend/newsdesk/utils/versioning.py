import copy

from newsdesk.utils.time import isoformat


def snapshot_content_page(page, *, version, published_at):
    """
    Frozen copy of the draft as public readers will see it.
    Deep-copied so later draft edits cannot alias into the snapshot.
    """
    return {
        "slug": page.slug,
        "status": "published",
        "version": version,
        "publishedAt": isoformat(published_at),
        "sections": copy.deepcopy(page.sections or []),
        "seo": copy.deepcopy(page.seo) if page.seo is not None else None,
    }


def next_version(page):
    return (page.version or 0) + 1
