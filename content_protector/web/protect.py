"""Request hook that runs the access gate in front of content pages."""

import logging

from flask import Flask, current_app, make_response, redirect, render_template, request

from ..gate import PASSWORD_FIELD

logger = logging.getLogger(__name__)


def _under(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    if not prefix:
        return False
    return path == prefix or path.startswith(prefix + "/")


def is_bypassed() -> bool:
    """True for requests that are never gated: admin, API, static and XHR."""
    settings = current_app.config["CP_CONFIG"].protection

    if request.endpoint == "static":
        return True
    if _under(request.path, settings.admin_prefix):
        return True
    if _under(request.path, settings.api_prefix):
        return True
    if request.headers.get("X-Requested-With", "").lower() == "xmlhttprequest":
        return True
    return False


def current_content():
    """Look up the content item addressed by the matched route, if any."""
    db = current_app.config["DB"]
    view_args = request.view_args or {}

    if "content_id" in view_args:
        return db.get_content(view_args["content_id"])
    if "slug" in view_args:
        return db.get_content_by_slug(view_args["slug"])
    return None


def request_uri() -> str:
    """Path the client requested, including the mount point and query string."""
    path = request.script_root + request.path
    query = request.query_string.decode("latin-1")
    return f"{path}?{query}" if query else path


def init_protection(app: Flask):
    """Register the protection hook on the Flask app."""

    @app.before_request
    def protect_content():
        if is_bypassed():
            return None

        gate = current_app.config["GATE"]
        protection = current_app.config["SETTINGS"].load_config()

        item = current_content()
        submitted = request.form.get(PASSWORD_FIELD) if request.method == "POST" else None

        decision = gate.evaluate(
            protection,
            content_id=item.id if item else None,
            content_slug=item.slug if item else None,
            submitted_password=submitted,
            cookies=request.cookies,
            request_uri=request_uri(),
        )

        if decision.action == "grant":
            response = redirect(decision.redirect_to)
            response.set_cookie(
                decision.cookie_name,
                "1",
                max_age=decision.max_age,
                path="/",
            )
            return response

        if decision.action == "prompt":
            logger.debug(f"Login prompt for {request.path}")
            return make_response(
                render_template("login_prompt.html", message=decision.message, field=PASSWORD_FIELD),
                403,
            )

        return None
