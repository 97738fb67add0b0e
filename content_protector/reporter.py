"""Console output for settings, rules and content."""

from .models import ContentItem, Decision, ProtectionConfig


def _truncate(text: str, width: int) -> str:
    return text[:width - 3] + "..." if len(text) > width else text


def format_protection(config: ProtectionConfig, show_passwords: bool = False) -> str:
    """Format the protection settings and parsed item rules.

    Args:
        config: Settings snapshot to display.
        show_passwords: Print passwords instead of masking them.
    """
    def mask(value: str) -> str:
        if show_passwords:
            return value
        return "*" * len(value) if value else "(empty)"

    lines = [
        f"Protection mode: {config.mode.value}",
        f"Global username: {config.global_username or '(empty)'}",
        f"Global password: {mask(config.global_password)}",
        "",
    ]

    if not config.item_rules:
        lines.append("No item rules configured.")
        return "\n".join(lines)

    id_w = 30
    header = f"{'#':<4} {'Identifier':<{id_w}} Password"
    lines.extend([header, "-" * len(header)])
    for i, rule in enumerate(config.item_rules, start=1):
        lines.append(f"{i:<4} {_truncate(rule.identifier, id_w):<{id_w}} {mask(rule.password)}")

    return "\n".join(lines)


def format_content_table(items: list[ContentItem], config: ProtectionConfig | None = None) -> str:
    """Format content items as a console-friendly table."""
    if not items:
        return "No content found."

    id_w = 6
    slug_w = 30
    title_w = 40

    header = (
        f"{'ID':<{id_w}} "
        f"{'Slug':<{slug_w}} "
        f"{'Title':<{title_w}} "
        f"{'Protected'}"
    )
    separator = "-" * len(header)

    rows = [header, separator]
    for item in items:
        protected = ""
        if config is not None:
            protected = "yes" if config.protects(item.id, item.slug) else "no"
        rows.append(
            f"{item.id:<{id_w}} "
            f"{_truncate(item.slug, slug_w):<{slug_w}} "
            f"{_truncate(item.title, title_w):<{title_w}} "
            f"{protected}"
        )

    return "\n".join(rows)


def format_decision(decision: Decision) -> str:
    """One-line description of a gate decision."""
    if decision.action == "grant":
        return (
            f"grant: set cookie {decision.cookie_name}=1 "
            f"(max-age {decision.max_age}s) and redirect to {decision.redirect_to}"
        )
    if decision.action == "prompt":
        return f"prompt: {decision.message}"
    if decision.cookie_name:
        return f"allow (cookie {decision.cookie_name} present)"
    return "allow (not protected)"
