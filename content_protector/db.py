"""SQLite database operations for content items and plugin options."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path

from .models import ContentItem

SCHEMA = """
CREATE TABLE IF NOT EXISTS content (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    slug TEXT UNIQUE NOT NULL,
    title TEXT NOT NULL,
    body TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS options (
    name TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_content_slug ON content(slug);
"""


class Database:
    def __init__(self, db_path: str = "data/content.db"):
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row

    def init_db(self):
        """Create tables and indexes."""
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self):
        self.conn.close()

    def __enter__(self):
        self.init_db()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # --- Content operations ---

    def insert_content(self, item: ContentItem) -> int | None:
        """Insert a content item. Returns the new ID, or None if the slug is taken."""
        try:
            cur = self.conn.execute(
                "INSERT INTO content (slug, title, body, created_at) VALUES (?, ?, ?, ?)",
                (item.slug, item.title, item.body, item.created_at.isoformat()),
            )
            self.conn.commit()
        except sqlite3.IntegrityError:
            return None
        item.id = cur.lastrowid
        return item.id

    def get_content(self, content_id: int) -> ContentItem | None:
        """Get a single content item by ID."""
        cur = self.conn.execute("SELECT * FROM content WHERE id = ?", (content_id,))
        row = cur.fetchone()
        return self._row_to_content(row) if row else None

    def get_content_by_slug(self, slug: str) -> ContentItem | None:
        """Get a single content item by slug."""
        cur = self.conn.execute("SELECT * FROM content WHERE slug = ?", (slug,))
        row = cur.fetchone()
        return self._row_to_content(row) if row else None

    def get_all_content(self, limit: int = 100, offset: int = 0) -> list[ContentItem]:
        """Get all content items with pagination."""
        cur = self.conn.execute(
            "SELECT * FROM content ORDER BY id ASC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return [self._row_to_content(row) for row in cur.fetchall()]

    def get_content_count(self) -> int:
        cur = self.conn.execute("SELECT COUNT(*) FROM content")
        return cur.fetchone()[0]

    def delete_content(self, content_id: int) -> bool:
        """Delete a content item. Returns True if a row was removed."""
        cur = self.conn.execute("DELETE FROM content WHERE id = ?", (content_id,))
        self.conn.commit()
        return cur.rowcount > 0

    # --- Option operations ---

    def get_option(self, name: str) -> dict | None:
        """Get a stored option record, or None if it was never saved."""
        cur = self.conn.execute("SELECT value FROM options WHERE name = ?", (name,))
        row = cur.fetchone()
        if not row:
            return None
        try:
            value = json.loads(row["value"])
        except json.JSONDecodeError:
            return None
        return value if isinstance(value, dict) else None

    def set_option(self, name: str, value: dict):
        """Insert or replace an option record in a single transaction."""
        with self.conn:
            self.conn.execute(
                """INSERT INTO options (name, value, updated_at) VALUES (?, ?, ?)
                   ON CONFLICT(name) DO UPDATE SET
                       value = excluded.value,
                       updated_at = excluded.updated_at""",
                (name, json.dumps(value), datetime.now().isoformat()),
            )

    # --- Helpers ---

    def _row_to_content(self, row: sqlite3.Row) -> ContentItem:
        """Convert a database row to a ContentItem."""
        return ContentItem(
            id=row["id"],
            slug=row["slug"],
            title=row["title"],
            body=row["body"] or "",
            created_at=datetime.fromisoformat(row["created_at"]),
        )
