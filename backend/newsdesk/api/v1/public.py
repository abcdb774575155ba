# newsdesk/api/v1/public.py
from flask import current_app, request, jsonify
from newsdesk.extensions import db
from newsdesk.domain.exceptions import NotFoundError
from newsdesk.domain.invariants.post import is_valid_slug
from newsdesk.models.content_page import ContentPage
from newsdesk.models.content_page_version import ContentPageVersion
from newsdesk.models.post import Post
from newsdesk.normalizers.post import normalize_post
from newsdesk.application.posts.update_post import load_post
from newsdesk.utils.preview import verify_preview_signature
from . import v1_bp


@v1_bp.route("/content-page", methods=["GET"])
def get_published_content_page():
    version = request.args.get("version")
    if version is not None and version != "published":
        return jsonify({"success": False, "message": "Invalid request"}), 400

    # Only ever the latest snapshot, never the live draft
    latest = (
        ContentPageVersion.query
        .join(ContentPage)
        .filter(ContentPage.slug == current_app.config["CONTENT_PAGE_SLUG"])
        .order_by(ContentPageVersion.version.desc())
        .first()
    )

    if not latest:
        raise NotFoundError("Content page not found")

    return jsonify({
        "success": True,
        "data": latest.snapshot
    }), 200


@v1_bp.route("/posts/<slug>", methods=["GET"])
def get_published_post(slug):
    if not is_valid_slug(slug):
        return jsonify({"success": False, "message": "Invalid slug format"}), 400

    # Unpublished posts are indistinguishable from missing ones
    post = Post.query.filter_by(slug=slug, status="published").first()
    if not post:
        raise NotFoundError("Post not found")

    Post.query.filter_by(id=post.id).update(
        {Post.views: Post.views + 1}, synchronize_session=False
    )
    db.session.commit()
    db.session.refresh(post)

    return jsonify({
        "success": True,
        "data": normalize_post(post)
    }), 200


@v1_bp.route("/preview/<post_id>", methods=["GET"])
def preview_post_by_signature(post_id):
    # An expired link raises PreviewLinkExpired (401)
    valid = verify_preview_signature(
        post_id,
        request.args.get("t"),
        request.args.get("h"),
        secret=current_app.config["PREVIEW_SECRET"],
        max_age=current_app.config.get("PREVIEW_MAX_AGE"),
    )

    if not valid:
        return jsonify({"success": False, "message": "Invalid preview link"}), 401

    post = load_post(post_id)

    return jsonify({
        "success": True,
        "data": normalize_post(post, admin=True)
    }), 200
