# newsdesk/api/v1/admin_posts.py
from flask import current_app, g, request, jsonify
from flask_jwt_extended import jwt_required
from newsdesk.application.posts.create_post import create_post
from newsdesk.application.posts.update_post import update_post, load_post
from newsdesk.application.posts.delete_post import delete_post
from newsdesk.domain.lifecycle.post import POST_STATUSES, required_permission
from newsdesk.models.post import Post
from newsdesk.normalizers.pagination import normalize_pagination
from newsdesk.normalizers.post import normalize_post
from newsdesk.utils.decorators import permission_required, require_permission
from newsdesk.utils.preview import issue_preview_url
from newsdesk.utils.request import json_object
from . import v1_bp

MAX_PER_PAGE = 100


@v1_bp.route("/admin/posts", methods=["GET"])
@jwt_required()
@permission_required("post:view")
def list_posts():
    status = request.args.get("status")  # draft | review | ... | None
    page_num = max(request.args.get("page", 1, type=int), 1)
    per_page = min(max(request.args.get("per_page", 10, type=int), 1), MAX_PER_PAGE)

    query = Post.query
    if status in POST_STATUSES:
        query = query.filter_by(status=status)

    pagination = query.order_by(Post.updated_at.desc()).paginate(
        page=page_num, per_page=per_page, error_out=False
    )

    return jsonify({
        "success": True,
        "data": normalize_pagination(
            pagination.items,
            lambda p: normalize_post(p, admin=True),
            page=page_num,
            per_page=per_page,
            total=pagination.total,
        )
    }), 200


@v1_bp.route("/admin/posts/<post_id>", methods=["GET"])
@jwt_required()
@permission_required("post:view")
def get_post(post_id):
    post = load_post(post_id)

    return jsonify({
        "success": True,
        "data": normalize_post(post, admin=True)
    }), 200


@v1_bp.route("/admin/posts", methods=["POST"])
@jwt_required()
@permission_required("post:create")
def create_post_route():
    data = json_object()

    post = create_post(actor_id=g.current_user.id, data=data)

    return jsonify({
        "success": True,
        "message": "Draft saved",
        "data": normalize_post(post, admin=True)
    }), 201


@v1_bp.route("/admin/posts/<post_id>", methods=["PATCH"])
@jwt_required()
@permission_required("post:edit")
def update_post_route(post_id):
    data = json_object()

    # Elevated gate for publish/schedule, independent of the business rules
    action = required_permission(data.get("status"))
    if action:
        require_permission(g.current_user, action)

    post, message = update_post(post_id=post_id, actor=g.current_user, data=data)

    return jsonify({
        "success": True,
        "message": message,
        "data": normalize_post(post, admin=True)
    }), 200


@v1_bp.route("/admin/posts/<post_id>", methods=["DELETE"])
@jwt_required()
@permission_required("post:delete")
def delete_post_route(post_id):
    delete_post(post_id=post_id, actor_id=g.current_user.id)

    return jsonify({
        "success": True,
        "message": "Post deleted successfully"
    }), 200


@v1_bp.route("/admin/posts/<post_id>/preview", methods=["GET"])
@jwt_required()
@permission_required("post:view")
def preview_post(post_id):
    post = load_post(post_id)

    preview_url = issue_preview_url(post.id, secret=current_app.config["PREVIEW_SECRET"])

    return jsonify({
        "success": True,
        "previewUrl": preview_url
    }), 200
