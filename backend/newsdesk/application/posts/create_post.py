from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from newsdesk.extensions import db
from newsdesk.models.post import Post
from newsdesk.domain.exceptions import ConflictError
from newsdesk.domain.invariants.post import clean_post_payload
from newsdesk.utils.audit import log_action
from newsdesk.utils.slug import slugify, slug_taken
from newsdesk.utils.transaction import transactional


def create_post(
    *,
    actor_id: str,
    data: Dict[str, Any],
) -> Post:
    """
    Create a new post in DRAFT state.

    Edge cases handled:
    - Missing title
    - Slug derived from the title when not supplied
    - Duplicate slug (checked up front and by the unique constraint)
    """
    fields = clean_post_payload(data, creating=True)

    slug = fields.pop("slug", None) or slugify(fields["title"]) or "post"
    if slug_taken(slug):
        raise ConflictError("Slug already exists")

    post = Post()
    post.author_id = actor_id
    post.slug = slug
    post.status = "draft"
    post.body = ""
    post.tags = []
    post.categories = []

    for field, value in fields.items():
        setattr(post, field, value)

    post.refresh_reading_time()

    try:
        with transactional():
            db.session.add(post)
            db.session.flush()  # ensures post.id is available

            log_action(
                action="post.create",
                entity_type="post",
                entity_id=post.id,
                actor_id=actor_id,
                payload={
                    "title": post.title,
                    "slug": post.slug,
                    "status": post.status,
                },
            )

        return post

    except IntegrityError as exc:
        # Lost a race on the unique slug constraint
        raise ConflictError("Slug already exists") from exc
