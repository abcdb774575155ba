from newsdesk.utils.time import isoformat


def normalize_author(user):
    if user is None:
        return None
    return {
        "id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
    }


def normalize_post(post, admin=False):
    data = {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "body": post.body,
        "excerpt": post.generate_excerpt(),
        "tags": post.tags or [],
        "categories": post.categories or [],
        "status": post.status,
        "author": normalize_author(post.author),
        "publishedAt": isoformat(post.published_at),
        "seo": post.seo or {},
        "readingTime": post.reading_time,
        "views": post.views,
    }

    if admin:
        data["scheduledAt"] = isoformat(post.scheduled_at)
        data["createdAt"] = isoformat(post.created_at)
        data["updatedAt"] = isoformat(post.updated_at)

    return data
