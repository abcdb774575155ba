# newsdesk/application/cms/publish_content_page.py
from typing import Any, Dict
from flask import current_app
from sqlalchemy import select
from newsdesk.extensions import db
from newsdesk.models.content_page import ContentPage
from newsdesk.models.content_page_version import ContentPageVersion
from newsdesk.domain.exceptions import NotFoundError
from newsdesk.utils.transaction import transactional
from newsdesk.utils.versioning import snapshot_content_page, next_version
from newsdesk.utils.audit import log_action
from newsdesk.utils.revalidation import dispatch_revalidation
from newsdesk.utils.time import utc_now

REVALIDATE_PATH = "/content-page"


def publish_content_page(*, actor_id: str) -> Dict[str, Any]:
    """
    Promotes the current draft to a new immutable published snapshot.

    Responsibilities:
    - transactional boundary
    - version bump (+1, never reused)
    - snapshot creation
    - audit logging
    - revalidation notice after commit (outcome ignored)
    """
    slug = current_app.config["CONTENT_PAGE_SLUG"]

    # 1️⃣ Fetch page with row-level lock
    page = (
        db.session.execute(
            select(ContentPage)
            .where(ContentPage.slug == slug)
            .with_for_update()
        )
        .scalar_one_or_none()
    )

    if not page:
        raise NotFoundError("Content page not found")

    with transactional():
        now = utc_now()
        version_number = next_version(page)

        # 2️⃣ Freeze whatever the draft holds right now
        snapshot = snapshot_content_page(page, version=version_number, published_at=now)

        # 3️⃣ Apply state change
        page.status = "published"
        page.version = version_number
        page.published_at = now

        # 4️⃣ Append immutable snapshot
        version = ContentPageVersion()
        version.page_id = page.id
        version.version = version_number
        version.snapshot = snapshot
        version.published_at = now
        version.created_by = actor_id

        db.session.add(version)
        db.session.flush()

        # 5️⃣ Audit logging
        log_action(
            action="content_page.publish",
            entity_type="content_page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"version": version_number},
        )

    current_app.logger.info("Content page published as version %s", version_number)

    # 6️⃣ Fire-and-forget; publish already succeeded
    dispatch_revalidation(REVALIDATE_PATH)

    return snapshot
