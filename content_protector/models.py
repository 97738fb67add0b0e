"""Data models for content protection."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ProtectionMode(str, Enum):
    FULL = "full"          # every request is gated
    SELECTED = "selected"  # only content matching an item rule is gated


@dataclass(frozen=True)
class ItemRule:
    """A single `identifier:password` entry.

    The identifier is either a numeric content ID or a slug; it carries no
    type tag and is compared as a string against both.
    """
    identifier: str
    password: str

    def matches(self, content_id: int | None, content_slug: str | None) -> bool:
        if content_id is not None and self.identifier == str(content_id):
            return True
        return bool(content_slug) and self.identifier == content_slug


@dataclass(frozen=True)
class ProtectionConfig:
    """Immutable snapshot of the protection settings."""
    mode: ProtectionMode = ProtectionMode.FULL
    global_username: str = ""
    global_password: str = ""
    item_rules: tuple[ItemRule, ...] = ()

    def find_rule(self, content_id: int | None, content_slug: str | None) -> ItemRule | None:
        """Return the first rule matching the content, or None if unprotected."""
        for rule in self.item_rules:
            if rule.matches(content_id, content_slug):
                return rule
        return None

    def protects(self, content_id: int | None, content_slug: str | None) -> bool:
        """True if requests for this content are gated at all."""
        if self.mode == ProtectionMode.FULL:
            return True
        return self.find_rule(content_id, content_slug) is not None


@dataclass(frozen=True)
class Decision:
    """Outcome of evaluating one request."""
    action: str  # allow | prompt | grant
    cookie_name: str | None = None
    redirect_to: str | None = None
    message: str = ""
    max_age: int = 0

    @property
    def allowed(self) -> bool:
        return self.action == "allow"


@dataclass
class ContentItem:
    id: int | None
    slug: str
    title: str
    body: str = ""
    created_at: datetime = field(default_factory=datetime.now)
