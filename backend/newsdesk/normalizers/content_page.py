from newsdesk.utils.time import isoformat


def normalize_content_page(page):
    """Admin view of the live draft."""
    return {
        "id": page.id,
        "slug": page.slug,
        "status": page.status,
        "sections": page.sections or [],
        "seo": page.seo,
        "version": page.version,
        "publishedAt": isoformat(page.published_at),
        "updatedAt": isoformat(page.updated_at),
    }


def normalize_content_page_version(version):
    return {
        "id": version.id,
        "version": version.version,
        "publishedAt": isoformat(version.published_at),
        "createdBy": version.created_by,
    }
