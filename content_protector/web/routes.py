"""Flask routes for the public content pages."""

import logging

from flask import Blueprint, current_app, render_template

logger = logging.getLogger(__name__)

bp = Blueprint("main", __name__)


def _get_db():
    return current_app.config["DB"]


@bp.route("/", methods=["GET", "POST"])
def index():
    """Home page listing all content items."""
    db = _get_db()
    items = db.get_all_content(limit=50)
    return render_template("index.html", items=items)


@bp.route("/content/<int:content_id>", methods=["GET", "POST"])
def content_by_id(content_id):
    db = _get_db()
    item = db.get_content(content_id)
    if not item:
        return render_template("404.html", message=f"Content {content_id} not found"), 404
    return render_template("content.html", item=item)


@bp.route("/<slug>", methods=["GET", "POST"])
def content_by_slug(slug):
    db = _get_db()
    item = db.get_content_by_slug(slug)
    if not item:
        return render_template("404.html", message=f"Page '{slug}' not found"), 404
    return render_template("content.html", item=item)
