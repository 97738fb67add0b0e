"""Parsing of the protection rule language into a ProtectionConfig."""

import logging

from .models import ItemRule, ProtectionConfig, ProtectionMode

logger = logging.getLogger(__name__)


def parse_item_rules(raw: str | None) -> list[ItemRule]:
    """Parse a comma-separated list of `identifier:password` entries.

    Only the first colon splits an entry, so a password may itself contain
    colons. Entries with an empty identifier or password are skipped rather
    than failing the whole parse.

    Args:
        raw: Rule text, e.g. ``"12:pass123, about-us:secret"``.

    Returns:
        Rules in input order. Duplicates are kept; the first match wins.
    """
    rules = []
    if not raw:
        return rules

    for entry in raw.split(","):
        parts = entry.strip().split(":", 1)
        identifier = parts[0].strip()
        password = parts[1].strip() if len(parts) > 1 else ""

        if not identifier or not password:
            if entry.strip():
                logger.debug(f"Skipping malformed rule entry '{identifier}'")
            continue

        rules.append(ItemRule(identifier=identifier, password=password))

    return rules


def parse_mode(mode: str | None) -> ProtectionMode:
    """Map a stored mode string to a ProtectionMode.

    Missing values fall back to full-site protection. Any other value than
    exactly ``full`` (case and spacing included) is handled as
    selected-items mode.
    """
    if not mode:
        return ProtectionMode.FULL
    if mode == ProtectionMode.FULL.value:
        return ProtectionMode.FULL
    return ProtectionMode.SELECTED


def resolve(
    mode: str | None,
    raw_items: str | None,
    global_user: str | None,
    global_pass: str | None,
) -> ProtectionConfig:
    """Assemble a ProtectionConfig from raw persisted fields."""
    return ProtectionConfig(
        mode=parse_mode(mode),
        global_username=global_user or "",
        global_password=global_pass or "",
        item_rules=tuple(parse_item_rules(raw_items)),
    )
