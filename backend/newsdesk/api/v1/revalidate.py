import hmac
from flask import current_app, request, jsonify
from newsdesk.utils.request import json_object
from . import v1_bp


@v1_bp.route("/revalidate", methods=["POST"])
def revalidate_path():
    data = json_object()

    path = data.get("path", "/")
    if not isinstance(path, str):
        return jsonify({"success": False, "message": "Invalid request"}), 400

    secret = request.headers.get("X-Revalidate-Secret")
    if not secret or not hmac.compare_digest(
        secret.encode("utf-8"), current_app.config["REVALIDATE_SECRET"].encode("utf-8")
    ):
        return jsonify({"success": False, "message": "Invalid secret"}), 401

    # Cache invalidation itself lives outside this service.
    current_app.logger.info("Revalidating path: %s", path)

    return jsonify({
        "success": True,
        "message": "Path revalidated successfully",
        "path": path
    }), 200
