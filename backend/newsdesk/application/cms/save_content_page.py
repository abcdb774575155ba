from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from newsdesk.extensions import db
from newsdesk.models.content_page import ContentPage
from newsdesk.domain.invariants.page import assert_content_page_payload
from newsdesk.utils.transaction import transactional
from newsdesk.utils.audit import log_action


def _load_page(slug: str) -> Optional[ContentPage]:
    return ContentPage.query.filter_by(slug=slug).first()


def _write_page(
    page: Optional[ContentPage],
    *,
    slug: str,
    actor_id: str,
    data: Dict[str, Any],
) -> ContentPage:
    with transactional():
        if not page:
            page = ContentPage()
            page.slug = slug
            page.version = 1
            db.session.add(page)

        # Full-document replace, last write wins
        page.sections = list(data["sections"])
        page.seo = data.get("seo")
        page.status = "draft"
        page.updated_by = actor_id

        db.session.flush()  # ensures page.id is available

        log_action(
            action="content_page.save",
            entity_type="content_page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"sections": len(page.sections), "version": page.version},
        )

    return page


def save_content_page(
    *,
    actor_id: str,
    data: Dict[str, Any],
) -> ContentPage:
    """
    Replace the content-page draft (upsert).

    Responsibilities:
    - validate every section before touching storage
    - keep section order exactly as submitted
    - status back to draft, version untouched
    - audit logging
    """
    # 1️⃣ Validate first: a failure must leave the stored draft untouched
    assert_content_page_payload(data)

    slug = current_app.config["CONTENT_PAGE_SLUG"]
    page = _load_page(slug)

    try:
        return _write_page(page, slug=slug, actor_id=actor_id, data=data)

    except IntegrityError:
        if page is not None:
            raise

        # 2️⃣ Lost the race to create the singleton; replace the winner's draft
        page = _load_page(slug)
        if page is None:
            raise

        current_app.logger.info("Content page created concurrently; replacing its draft")
        return _write_page(page, slug=slug, actor_id=actor_id, data=data)
