"""Persisted protection settings: sanitization, storage and loading."""

import logging
import re
import threading

from .db import Database
from .models import ProtectionConfig
from .rules import resolve

logger = logging.getLogger(__name__)

OPTION_NAME = "pd_content_protector_options"

DEFAULT_OPTIONS = {
    "protection_mode": "full",
    "protected_items": "",
    "global_username": "",
    "global_password": "",
}

_TAG_RE = re.compile(r"<[^>]*>")
_SCRIPT_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")


def sanitize_text_field(value) -> str:
    """Clean a single-line text value from a settings form.

    Strips HTML tags (and the bodies of script/style elements), turns line
    breaks and tabs into spaces, collapses whitespace runs and trims.
    """
    if value is None:
        return ""
    text = str(value)
    text = _SCRIPT_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


class SettingsStore:
    """Reads and writes the protection settings record.

    The record is read on every ``load_config`` call so that a save made by
    one worker process is seen by all of them on the next request.
    """

    def __init__(self, db: Database, option_name: str = OPTION_NAME):
        self.db = db
        self.option_name = option_name
        self._lock = threading.Lock()

    def get_options(self) -> dict[str, str]:
        """Return the stored settings with defaults for missing fields."""
        stored = self.db.get_option(self.option_name) or {}
        options = {}
        for key, default in DEFAULT_OPTIONS.items():
            value = stored.get(key)
            options[key] = value if isinstance(value, str) else default
        return options

    def load_config(self) -> ProtectionConfig:
        """Build a ProtectionConfig snapshot from the stored settings."""
        options = self.get_options()
        return resolve(
            options["protection_mode"],
            options["protected_items"],
            options["global_username"],
            options["global_password"],
        )

    def sanitize(self, raw: dict) -> dict[str, str]:
        """Sanitize submitted settings fields.

        An empty password keeps whatever password is currently stored.
        """
        password = raw.get("global_password")
        if password:
            password = sanitize_text_field(password)
        else:
            password = self.get_options()["global_password"]

        return {
            "protection_mode": sanitize_text_field(raw.get("protection_mode") or "full"),
            "protected_items": sanitize_text_field(raw.get("protected_items", "")),
            "global_username": sanitize_text_field(raw.get("global_username", "")),
            "global_password": password,
        }

    def save_config(self, raw: dict) -> ProtectionConfig:
        """Sanitize and persist submitted settings, returning the new snapshot."""
        with self._lock:
            options = self.sanitize(raw)
            self.db.set_option(self.option_name, options)

        config = resolve(
            options["protection_mode"],
            options["protected_items"],
            options["global_username"],
            options["global_password"],
        )
        logger.info(
            f"Protection settings saved: mode={config.mode.value}, "
            f"{len(config.item_rules)} item rules"
        )
        return config
