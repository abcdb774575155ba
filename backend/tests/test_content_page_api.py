from datetime import datetime
from unittest.mock import patch

import requests

import newsdesk.application.cms.save_content_page as save_module
from newsdesk.extensions import db
from newsdesk.models.audit_log import AuditLog
from newsdesk.models.content_page import ContentPage
from newsdesk.models.content_page_version import ContentPageVersion
from newsdesk.utils.time import utc_now

SECTIONS = [
    {
        "type": "hero",
        "props": {
            "imageUrl": "https://example.com/hero.jpg",
            "title": "Welcome to Our Site",
            "subtitle": "Discover amazing content",
            "overlay": True,
            "cta": {"label": "Get Started", "href": "https://example.com/start"},
        },
    },
    {"type": "text", "props": {"html": "<p>This is some content</p>", "markdown": "# Heading"}},
    {"type": "singleImage", "props": {"url": "https://example.com/image.jpg", "caption": "A beautiful image"}},
]


def _save(client, headers, sections, seo=None):
    body = {"sections": sections}
    if seo is not None:
        body["seo"] = seo
    return client.post("/api/v1/admin/content-page", json=body, headers=headers)


def test_save_content_page(client, auth_headers):
    _, headers = auth_headers("editor")

    response = _save(client, headers, SECTIONS, seo={"title": "Home Page", "description": "Welcome"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["message"] == "Content page saved"
    assert [s["type"] for s in body["data"]["sections"]] == ["hero", "text", "singleImage"]
    assert body["data"]["status"] == "draft"
    assert body["data"]["version"] == 1
    assert body["data"]["publishedAt"] is None


def test_save_then_get_preserves_order_and_count(client, auth_headers):
    _, headers = auth_headers("editor")
    sections = [
        {"type": "text", "props": {"html": "First section"}},
        {"type": "singleImage", "props": {"url": "https://example.com/1.jpg"}},
        {"type": "text", "props": {"html": "Second section"}},
        {"type": "singleImage", "props": {"url": "https://example.com/2.jpg"}},
    ]

    assert _save(client, headers, sections).status_code == 200
    response = client.get("/api/v1/admin/content-page", headers=headers)

    assert response.status_code == 200
    assert response.get_json()["data"]["sections"] == sections


def test_empty_gallery_fails_without_partial_write(client, auth_headers):
    _, headers = auth_headers("editor")
    assert _save(client, headers, SECTIONS).status_code == 200

    response = _save(client, headers, [
        {"type": "text", "props": {"html": "would be fine alone"}},
        {"type": "imageGallery", "props": {"images": [], "layout": "grid"}},
    ])

    assert response.status_code == 400
    assert response.get_json() == {
        "success": False,
        "message": "Gallery must have at least one image",
    }

    stored = client.get("/api/v1/admin/content-page", headers=headers).get_json()["data"]
    assert stored["sections"] == SECTIONS


def test_first_save_failure_creates_nothing(client, auth_headers):
    _, headers = auth_headers("editor")

    response = _save(client, headers, [{"type": "imageGallery", "props": {"images": []}}])

    assert response.status_code == 400
    assert client.get("/api/v1/admin/content-page", headers=headers).status_code == 404


def test_unknown_section_type_rejected(client, auth_headers):
    _, headers = auth_headers("editor")

    response = _save(client, headers, [{"type": "carousel", "props": {}}])

    assert response.status_code == 400
    assert response.get_json()["message"] == "Unknown section type: carousel"


def test_sections_must_be_array(client, auth_headers):
    _, headers = auth_headers("editor")

    response = client.post("/api/v1/admin/content-page", json={"seo": {}}, headers=headers)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Sections must be an array"


def test_get_content_page_not_found(client, auth_headers):
    _, headers = auth_headers("admin")

    response = client.get("/api/v1/admin/content-page", headers=headers)

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Content page not found"}


def test_publish_missing_page_is_404(client, auth_headers):
    _, headers = auth_headers("editor")

    response = client.patch("/api/v1/admin/content-page/publish", headers=headers)

    assert response.status_code == 404
    assert response.get_json()["message"] == "Content page not found"


def test_publish_increments_version_and_stamps_time(client, auth_headers, seed_content_page):
    seed_content_page(version=3)
    _, headers = auth_headers("editor")

    before = utc_now()
    response = client.patch("/api/v1/admin/content-page/publish", headers=headers)
    after = utc_now()

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Content page published"
    assert body["data"]["status"] == "published"
    assert body["data"]["version"] == 4
    published_at = datetime.fromisoformat(body["data"]["publishedAt"])
    assert before <= published_at <= after


def test_publish_twice_without_save_still_increments(client, auth_headers, seed_content_page):
    seed_content_page()
    _, headers = auth_headers("editor")

    first = client.patch("/api/v1/admin/content-page/publish", headers=headers).get_json()["data"]
    second = client.patch("/api/v1/admin/content-page/publish", headers=headers).get_json()["data"]

    assert (first["version"], second["version"]) == (2, 3)
    assert first["sections"] == second["sections"]
    assert ContentPageVersion.query.count() == 2


def test_published_snapshot_is_isolated_from_later_saves(client, auth_headers):
    _, headers = auth_headers("editor")
    _save(client, headers, SECTIONS, seo={"title": "v1"})
    client.patch("/api/v1/admin/content-page/publish", headers=headers)

    published = client.get("/api/v1/content-page?version=published")
    assert published.status_code == 200
    snapshot_bytes = published.data

    edited = [{"type": "text", "props": {"markdown": "Totally new draft"}}]
    save = _save(client, headers, edited, seo={"title": "v2 draft"})
    assert save.get_json()["data"]["status"] == "draft"
    assert save.get_json()["data"]["version"] == 2

    assert client.get("/api/v1/content-page?version=published").data == snapshot_bytes

    client.patch("/api/v1/admin/content-page/publish", headers=headers)
    republished = client.get("/api/v1/content-page?version=published").get_json()["data"]
    assert republished["sections"] == edited
    assert republished["version"] == 3


def test_public_content_page_404_when_only_draft(client, seed_content_page):
    seed_content_page(status="draft")

    response = client.get("/api/v1/content-page", query_string={"version": "published"})

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Content page not found"}


def test_public_content_page_rejects_other_versions(client):
    response = client.get("/api/v1/content-page", query_string={"version": "draft"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid request"


def test_version_history_is_listed_newest_first(client, auth_headers, seed_content_page):
    seed_content_page()
    _, headers = auth_headers("editor")
    client.patch("/api/v1/admin/content-page/publish", headers=headers)
    client.patch("/api/v1/admin/content-page/publish", headers=headers)

    response = client.get("/api/v1/admin/content-page/versions", headers=headers)

    assert response.status_code == 200
    assert [v["version"] for v in response.get_json()["data"]] == [3, 2]


def test_publish_and_save_are_audited(client, auth_headers):
    _, headers = auth_headers("editor")
    _save(client, headers, SECTIONS)
    client.patch("/api/v1/admin/content-page/publish", headers=headers)

    actions = sorted(log.action for log in AuditLog.query.all())
    assert actions == ["content_page.publish", "content_page.save"]


def test_publish_notifies_revalidation_webhook(app, client, auth_headers, seed_content_page):
    app.config["REVALIDATE_WEBHOOK_URL"] = "https://frontend.example.com/api/revalidate"
    seed_content_page()
    _, headers = auth_headers("editor")

    with patch("newsdesk.utils.revalidation.requests.post") as mock_post:
        mock_post.return_value.ok = True
        response = client.patch("/api/v1/admin/content-page/publish", headers=headers)

    assert response.status_code == 200
    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "https://frontend.example.com/api/revalidate"
    assert kwargs["json"] == {"path": "/content-page"}
    assert kwargs["headers"]["X-Revalidate-Secret"] == app.config["REVALIDATE_SECRET"]


def test_publish_succeeds_when_webhook_fails(app, client, auth_headers, seed_content_page):
    app.config["REVALIDATE_WEBHOOK_URL"] = "https://frontend.example.com/api/revalidate"
    seed_content_page()
    _, headers = auth_headers("editor")

    with patch(
        "newsdesk.utils.revalidation.requests.post",
        side_effect=requests.ConnectionError("boom"),
    ) as mock_post:
        response = client.patch("/api/v1/admin/content-page/publish", headers=headers)

    assert response.status_code == 200
    assert response.get_json()["data"]["version"] == 2
    assert mock_post.call_count == 1  # single attempt, no retry
    db.session.expire_all()
    assert ContentPageVersion.query.count() == 1


def test_save_racing_first_insert_replaces_existing_draft(client, auth_headers, seed_content_page):
    seed_content_page()
    _, headers = auth_headers("editor")
    sections = [{"type": "text", "props": {"html": "<p>Second writer</p>"}}]

    real_load = save_module._load_page
    lookups = []

    def stale_then_real(slug):
        # First lookup misses the row another request just committed
        lookups.append(slug)
        return None if len(lookups) == 1 else real_load(slug)

    with patch.object(save_module, "_load_page", side_effect=stale_then_real):
        response = _save(client, headers, sections)

    assert response.status_code == 200
    assert response.get_json()["data"]["sections"] == sections
    assert len(lookups) == 2
    db.session.expire_all()
    assert ContentPage.query.count() == 1
    assert ContentPage.query.first().sections == sections
