"""Settings pages for the content protector, behind a shared admin password."""

import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for

from ..settings import OPTION_NAME

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__)


def _get_settings():
    return current_app.config["SETTINGS"]


def _admin_password() -> str:
    return current_app.config["CP_CONFIG"].web.admin_password


@admin_bp.before_request
def require_login():
    """Require the admin password when ADMIN_PASSWORD is set.

    If ADMIN_PASSWORD is not set, the settings pages are open.
    """
    if not _admin_password():
        return None
    if request.endpoint in ("admin.login", "admin.logout"):
        return None
    if not session.get("admin_authenticated"):
        return redirect(url_for("admin.login"))
    return None


@admin_bp.route("/login", methods=["GET", "POST"])
def login():
    error = None
    if request.method == "POST":
        if request.form.get("password") == _admin_password():
            session["admin_authenticated"] = True
            return redirect(url_for("admin.settings_page"))
        logger.warning("Failed admin login attempt")
        error = "Incorrect password"
    return render_template("admin/login.html", error=error)


@admin_bp.route("/logout")
def logout():
    session.pop("admin_authenticated", None)
    return redirect(url_for("admin.login"))


@admin_bp.route("/", methods=["GET", "POST"])
def settings_page():
    """Protection settings form."""
    store = _get_settings()

    if request.method == "POST":
        store.save_config({
            "protection_mode": request.form.get("protection_mode"),
            "protected_items": request.form.get("protected_items", ""),
            "global_username": request.form.get("global_username", ""),
            "global_password": request.form.get("global_password", ""),
        })
        flash("Settings saved.")
        return redirect(url_for("admin.settings_page"))

    return render_template(
        "admin/settings.html",
        options=store.get_options(),
        option_name=OPTION_NAME,
    )


@admin_bp.route("/content")
def content_overview():
    """List content items and whether they are currently protected."""
    db = current_app.config["DB"]
    protection = _get_settings().load_config()

    rows = []
    for item in db.get_all_content(limit=500):
        rows.append((item, protection.protects(item.id, item.slug)))

    return render_template(
        "admin/content.html",
        rows=rows,
        mode=protection.mode.value,
    )
