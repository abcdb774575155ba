from typing import Any, Dict, Tuple
from flask import current_app
from sqlalchemy.exc import IntegrityError
from newsdesk.extensions import db
from newsdesk.models.post import Post
from newsdesk.domain.exceptions import ConflictError, NotFoundError, PermissionDenied
from newsdesk.domain.invariants.post import clean_post_payload
from newsdesk.domain.lifecycle.post import (
    assert_post_transition,
    resolve_published_at,
    transition_message,
)
from newsdesk.domain.permissions import can
from newsdesk.utils.audit import log_action
from newsdesk.utils.revalidation import dispatch_revalidation
from newsdesk.utils.slug import slugify, slug_taken, unique_slug
from newsdesk.utils.time import normalize_ts, utc_now
from newsdesk.utils.transaction import transactional


def load_post(post_id: str) -> Post:
    post = db.session.get(Post, post_id)
    if not post:
        raise NotFoundError("Post not found")
    return post


def update_post(
    *,
    post_id: str,
    actor,
    data: Dict[str, Any],
) -> Tuple[Post, str]:
    """
    Apply an update and, when ``status`` is present, a lifecycle transition.

    Elevated publish/schedule permissions are enforced by the route before
    this runs; here we own the ownership rule and the field preconditions.
    Preconditions are evaluated on the post as it would look after the
    update (payload values over stored ones).
    """
    fields = clean_post_payload(data, creating=False)

    post = load_post(post_id)

    # 1️⃣ Ownership: authors edit their own posts, post:edit:any edits all
    if post.author_id != actor.id and not can(actor.role, "post:edit:any"):
        raise PermissionDenied("Not authorized to edit this post")

    to_status = fields.get("status")
    now = utc_now()

    # 2️⃣ Lifecycle preconditions on the effective state
    if to_status is not None:
        assert_post_transition(
            to_status=to_status,
            body=fields.get("body", post.body),
            tags=fields.get("tags", post.tags or []),
            scheduled_at=fields.get("scheduled_at", normalize_ts(post.scheduled_at)),
            now=now,
        )

    # 3️⃣ Slug: explicit wins, otherwise follow a title change
    if "slug" in fields:
        if fields["slug"] != post.slug and slug_taken(fields["slug"], exclude_id=post.id):
            raise ConflictError("Slug already exists")
    elif "title" in fields and fields["title"] != post.title:
        fields["slug"] = unique_slug(slugify(fields["title"]) or "post", exclude_id=post.id)

    changed_fields: list[str] = []
    was_published = post.status == "published"

    try:
        with transactional():
            for field, value in fields.items():
                if getattr(post, field) != value:
                    setattr(post, field, value)
                    changed_fields.append(field)

            if to_status is not None:
                post.published_at = resolve_published_at(
                    to_status=to_status,
                    current=post.published_at,
                    now=now,
                )

            if "body" in changed_fields:
                post.refresh_reading_time()

            log_action(
                action="post.update",
                entity_type="post",
                entity_id=post.id,
                actor_id=actor.id,
                payload={"fields": changed_fields, "status": post.status},
            )

    except IntegrityError as exc:
        # Lost a race on the unique slug constraint
        raise ConflictError("Slug already exists") from exc

    if to_status == "published" and not was_published:
        current_app.logger.info("Post %s published", post.id)
        dispatch_revalidation(f"/posts/{post.slug}")

    return post, transition_message(to_status)
