"""Request-time access decisions for protected content."""

import logging
from collections.abc import Mapping

from .models import Decision, ProtectionConfig, ProtectionMode

logger = logging.getLogger(__name__)

GLOBAL_COOKIE = "pd_protector_global"
ITEM_COOKIE_PREFIX = "pd_protector_access_"
PASSWORD_FIELD = "pd_password"
SESSION_MAX_AGE = 3600

FULL_PROMPT = "Please enter the password to access the entire site:"
ITEM_PROMPT = "Please enter the password to access this content:"


def item_cookie_name(content_id: int | None) -> str:
    """Cookie granting access to one content item, keyed by numeric ID."""
    return f"{ITEM_COOKIE_PREFIX}{content_id or 0}"


class AccessGate:
    """Decides whether a request may proceed, must log in, or just did.

    The gate keeps no per-request state. The whole "session" lives in the
    client's cookies, so evaluating the same inputs twice gives the same
    decision.
    """

    def __init__(self, session_max_age: int = SESSION_MAX_AGE):
        self.session_max_age = session_max_age

    def evaluate(
        self,
        config: ProtectionConfig,
        content_id: int | None = None,
        content_slug: str | None = None,
        submitted_password: str | None = None,
        cookies: Mapping[str, str] | None = None,
        request_uri: str = "/",
    ) -> Decision:
        """Evaluate one request against the protection settings.

        Args:
            config: Current protection settings snapshot.
            content_id: Numeric ID of the requested content, if any.
            content_slug: Slug of the requested content, if any.
            submitted_password: Value of the password form field on POST.
            cookies: The request's cookies.
            request_uri: Where to send the client after a successful login.

        Returns:
            A Decision whose action is ``allow``, ``prompt`` or ``grant``.
        """
        cookies = cookies or {}

        if config.mode == ProtectionMode.FULL:
            return self._check(
                expected=config.global_password,
                cookie_name=GLOBAL_COOKIE,
                message=FULL_PROMPT,
                submitted_password=submitted_password,
                cookies=cookies,
                request_uri=request_uri,
            )

        rule = config.find_rule(content_id, content_slug)
        if rule is None:
            return Decision(action="allow")

        return self._check(
            expected=rule.password,
            cookie_name=item_cookie_name(content_id),
            message=ITEM_PROMPT,
            submitted_password=submitted_password,
            cookies=cookies,
            request_uri=request_uri,
        )

    def _check(
        self,
        expected: str,
        cookie_name: str,
        message: str,
        submitted_password: str | None,
        cookies: Mapping[str, str],
        request_uri: str,
    ) -> Decision:
        # Exact, case-sensitive comparison against the configured value
        if submitted_password is not None and submitted_password == expected:
            logger.info(f"Access granted, issuing cookie {cookie_name}")
            return Decision(
                action="grant",
                cookie_name=cookie_name,
                redirect_to=request_uri,
                max_age=self.session_max_age,
            )

        # An existing grant wins even if a wrong password was just submitted
        if cookie_name in cookies:
            return Decision(action="allow", cookie_name=cookie_name)

        if submitted_password is not None:
            logger.info(f"Rejected password for {cookie_name}")
        return Decision(action="prompt", cookie_name=cookie_name, message=message)
