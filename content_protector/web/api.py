"""JSON API routes. These are never gated by the protection hook."""

from flask import Blueprint, current_app, jsonify

api_bp = Blueprint("api", __name__)


def _serialize(item):
    return {
        "id": item.id,
        "slug": item.slug,
        "title": item.title,
        "created_at": item.created_at.isoformat(),
    }


@api_bp.route("/health")
def api_health():
    return jsonify({"status": "ok"})


@api_bp.route("/content")
def api_content_list():
    db = current_app.config["DB"]
    return jsonify({
        "total": db.get_content_count(),
        "items": [_serialize(item) for item in db.get_all_content()],
    })


@api_bp.route("/content/<int:content_id>")
def api_content_detail(content_id):
    db = current_app.config["DB"]
    item = db.get_content(content_id)
    if not item:
        return jsonify({"error": f"Content {content_id} not found"}), 404
    return jsonify(_serialize(item))
