# newsdesk/api/v1/admin_content_page.py
from flask import current_app, g, jsonify
from flask_jwt_extended import jwt_required
from newsdesk.application.cms.save_content_page import save_content_page
from newsdesk.application.cms.publish_content_page import publish_content_page
from newsdesk.domain.exceptions import NotFoundError
from newsdesk.models.content_page import ContentPage
from newsdesk.models.content_page_version import ContentPageVersion
from newsdesk.normalizers.content_page import (
    normalize_content_page,
    normalize_content_page_version,
)
from newsdesk.utils.decorators import permission_required
from newsdesk.utils.request import json_object
from . import v1_bp


def _get_draft():
    page = ContentPage.query.filter_by(
        slug=current_app.config["CONTENT_PAGE_SLUG"]
    ).first()
    if not page:
        raise NotFoundError("Content page not found")
    return page


@v1_bp.route("/admin/content-page", methods=["GET"])
@jwt_required()
@permission_required("post:view")
def get_content_page():
    page = _get_draft()

    return jsonify({
        "success": True,
        "data": normalize_content_page(page)
    }), 200


@v1_bp.route("/admin/content-page", methods=["POST"])
@jwt_required()
@permission_required("post:edit")
def save_content_page_route():
    data = json_object()

    page = save_content_page(actor_id=g.current_user.id, data=data)

    return jsonify({
        "success": True,
        "message": "Content page saved",
        "data": normalize_content_page(page)
    }), 200


@v1_bp.route("/admin/content-page/publish", methods=["PATCH"])
@jwt_required()
@permission_required("post:publish")
def publish_content_page_route():
    snapshot = publish_content_page(actor_id=g.current_user.id)

    return jsonify({
        "success": True,
        "message": "Content page published",
        "data": snapshot
    }), 200


@v1_bp.route("/admin/content-page/versions", methods=["GET"])
@jwt_required()
@permission_required("post:view")
def list_content_page_versions():
    page = _get_draft()

    versions = (
        ContentPageVersion.query
        .filter_by(page_id=page.id)
        .order_by(ContentPageVersion.version.desc())
        .all()
    )

    return jsonify({
        "success": True,
        "data": [normalize_content_page_version(v) for v in versions]
    }), 200
