"""CLI entry point for the content protector."""

import argparse
import logging
import sys
from pathlib import Path

from .config import load_config, validate_config
from .db import Database
from .gate import AccessGate
from .models import ContentItem
from .reporter import format_content_table, format_decision, format_protection
from .settings import SettingsStore


def setup_logging(level: str = "INFO", log_file: str | None = None):
    """Configure logging."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def cmd_init_db(args):
    """Initialize the database."""
    config = load_config(args.config)
    setup_logging(config.logging.level)

    db = Database(config.database_path)
    db.init_db()
    db.close()
    print(f"Database initialized at {config.database_path}")


def cmd_validate(args):
    """Check the configuration for problems."""
    config = load_config(args.config)
    errors = validate_config(config)
    if errors:
        for err in errors:
            print(f"Error: {err}")
        sys.exit(1)
    print("Configuration OK.")


def cmd_show(args):
    """Show the current protection settings."""
    config = load_config(args.config)
    setup_logging(config.logging.level)

    with Database(config.database_path) as db:
        protection = SettingsStore(db).load_config()
        print(format_protection(protection, show_passwords=args.show_passwords))


def cmd_configure(args):
    """Update protection settings. Omitted options keep their current value."""
    config = load_config(args.config)
    setup_logging(config.logging.level, config.logging.file)

    with Database(config.database_path) as db:
        store = SettingsStore(db)
        current = store.get_options()

        raw = {
            "protection_mode": args.mode if args.mode is not None else current["protection_mode"],
            "protected_items": args.items if args.items is not None else current["protected_items"],
            "global_username": args.username if args.username is not None else current["global_username"],
            "global_password": args.password or "",
        }
        protection = store.save_config(raw)
        print(format_protection(protection))


def cmd_add_content(args):
    """Add a content item."""
    config = load_config(args.config)
    setup_logging(config.logging.level)

    with Database(config.database_path) as db:
        item = ContentItem(id=None, slug=args.slug, title=args.title, body=args.body)
        content_id = db.insert_content(item)
        if content_id is None:
            print(f"Error: slug '{args.slug}' is already in use")
            sys.exit(1)
        print(f"Added content {content_id} ({args.slug})")


def cmd_delete_content(args):
    """Delete a content item."""
    config = load_config(args.config)
    setup_logging(config.logging.level)

    with Database(config.database_path) as db:
        if not db.delete_content(args.id):
            print(f"Error: content {args.id} not found")
            sys.exit(1)
        print(f"Deleted content {args.id}")


def cmd_list_content(args):
    """List content items and whether they are protected."""
    config = load_config(args.config)
    setup_logging(config.logging.level)

    with Database(config.database_path) as db:
        protection = SettingsStore(db).load_config()
        items = db.get_all_content(limit=args.limit)
        print(format_content_table(items, protection))


def cmd_check(args):
    """Evaluate the access gate for a content item without a browser."""
    config = load_config(args.config)
    setup_logging(config.logging.level)

    with Database(config.database_path) as db:
        protection = SettingsStore(db).load_config()

        content_id = args.id
        content_slug = args.slug
        item = None
        if content_id is not None:
            item = db.get_content(content_id)
        elif content_slug:
            item = db.get_content_by_slug(content_slug)
        if item:
            content_id, content_slug = item.id, item.slug

        cookies = {name: "1" for name in args.cookie}
        gate = AccessGate(session_max_age=config.protection.session_max_age)
        decision = gate.evaluate(
            protection,
            content_id=content_id,
            content_slug=content_slug,
            submitted_password=args.password,
            cookies=cookies,
            request_uri=args.uri,
        )
        print(format_decision(decision))


def main():
    parser = argparse.ArgumentParser(
        prog="content-protector",
        description="Password-protect a whole site or selected content items.",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init-db
    init_parser = subparsers.add_parser("init-db", help="Initialize the database")
    init_parser.set_defaults(func=cmd_init_db)

    # validate
    validate_parser = subparsers.add_parser("validate", help="Check the configuration")
    validate_parser.set_defaults(func=cmd_validate)

    # show
    show_parser = subparsers.add_parser("show", help="Show protection settings")
    show_parser.add_argument(
        "--show-passwords", action="store_true",
        help="Print passwords in clear text",
    )
    show_parser.set_defaults(func=cmd_show)

    # configure
    configure_parser = subparsers.add_parser("configure", help="Update protection settings")
    configure_parser.add_argument("--mode", choices=["full", "selected"], help="Protection mode")
    configure_parser.add_argument(
        "--items", help="Item rules, e.g. '12:pass123, about-us:secret'",
    )
    configure_parser.add_argument("--username", help="Global username")
    configure_parser.add_argument(
        "--password", help="New global password (omit to keep the current one)",
    )
    configure_parser.set_defaults(func=cmd_configure)

    # add-content
    add_parser = subparsers.add_parser("add-content", help="Add a content item")
    add_parser.add_argument("--slug", required=True)
    add_parser.add_argument("--title", required=True)
    add_parser.add_argument("--body", default="")
    add_parser.set_defaults(func=cmd_add_content)

    # delete-content
    delete_parser = subparsers.add_parser("delete-content", help="Delete a content item")
    delete_parser.add_argument("--id", type=int, required=True)
    delete_parser.set_defaults(func=cmd_delete_content)

    # list-content
    list_parser = subparsers.add_parser("list-content", help="List content items")
    list_parser.add_argument(
        "--limit", type=int, default=50,
        help="Maximum number of items to show (default: 50)",
    )
    list_parser.set_defaults(func=cmd_list_content)

    # check
    check_parser = subparsers.add_parser("check", help="Evaluate access for a content item")
    target = check_parser.add_mutually_exclusive_group()
    target.add_argument("--id", type=int, help="Content ID")
    target.add_argument("--slug", help="Content slug")
    check_parser.add_argument("--password", help="Simulate a submitted password")
    check_parser.add_argument(
        "--cookie", action="append", default=[],
        help="Simulate a cookie being present (repeatable)",
    )
    check_parser.add_argument("--uri", default="/", help="Request URI (default: /)")
    check_parser.set_defaults(func=cmd_check)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
