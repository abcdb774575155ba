from newsdesk.extensions import db
from newsdesk.utils.audit import log_action
from newsdesk.utils.transaction import transactional
from newsdesk.application.posts.update_post import load_post


def delete_post(*, post_id: str, actor_id: str) -> None:
    """Hard-delete a post. Irreversible."""
    post = load_post(post_id)

    with transactional():
        db.session.delete(post)

        log_action(
            action="post.delete",
            entity_type="post",
            entity_id=post_id,
            actor_id=actor_id,
            payload={"slug": post.slug},
        )
