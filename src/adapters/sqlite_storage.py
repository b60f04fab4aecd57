"""SQLite storage adapter.

Implements the core PostRepositoryPort and MetadataStorePort using a simple
SQLite database.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from core.models import PostRecord


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the post and metadata contracts."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and is always closed."""

        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - posts: the local stand-in for host posts
        - post_meta: per-post key/value pairs (short link association)
        """

        with self._connect() as conn:
            # posts mirrors the host fields the sync engine reads.
            # Fields:
            # - post_id: host post identifier (PRIMARY KEY)
            # - post_type: e.g. post, page
            # - title: may be empty
            # - status: draft, pending, future, publish, auto-draft, ...
            # - slug: may be empty until the post is published
            # - date: ISO timestamp used by date-based permalinks
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS posts (
                    post_id INTEGER PRIMARY KEY,
                    post_type TEXT NOT NULL,
                    title TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL,
                    slug TEXT NOT NULL DEFAULT '',
                    date TIMESTAMP
                )
                """
            )
            # post_meta holds one value per (post_id, meta_key); writes overwrite.
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS post_meta (
                    post_id INTEGER NOT NULL,
                    meta_key TEXT NOT NULL,
                    meta_value TEXT,
                    PRIMARY KEY (post_id, meta_key)
                )
                """
            )

    def get_post(self, post_id: int) -> Optional[PostRecord]:
        """Return the stored post, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT post_id, post_type, title, status, slug, date FROM posts WHERE post_id = ?",
                (post_id,),
            ).fetchone()
        return self._row_to_post(row) if row else None

    def upsert_post(self, post: PostRecord) -> None:
        """Insert or replace a post row."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO posts (post_id, post_type, title, status, slug, date)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(post_id) DO UPDATE SET
                    post_type = excluded.post_type,
                    title = excluded.title,
                    status = excluded.status,
                    slug = excluded.slug,
                    date = excluded.date
                """,
                (
                    post.post_id,
                    post.post_type,
                    post.title,
                    post.status,
                    post.slug,
                    post.date.isoformat() if post.date else None,
                ),
            )

    def list_posts(self) -> List[PostRecord]:
        """Return every stored post ordered by id."""

        with self._connect() as conn:
            rows = conn.execute(
                "SELECT post_id, post_type, title, status, slug, date FROM posts ORDER BY post_id"
            ).fetchall()
        return [self._row_to_post(row) for row in rows]

    def get_meta(self, post_id: int, key: str) -> Optional[str]:
        """Return a single meta value, or None when unset."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT meta_value FROM post_meta WHERE post_id = ? AND meta_key = ?",
                (post_id, key),
            ).fetchone()
        return row["meta_value"] if row else None

    def set_meta(self, post_id: int, key: str, value: str) -> None:
        """Upsert a single meta value."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO post_meta (post_id, meta_key, meta_value)
                VALUES (?, ?, ?)
                ON CONFLICT(post_id, meta_key) DO UPDATE SET meta_value = excluded.meta_value
                """,
                (post_id, key, value),
            )

    @staticmethod
    def _row_to_post(row: sqlite3.Row) -> PostRecord:
        raw_date = row["date"]
        return PostRecord(
            post_id=int(row["post_id"]),
            post_type=row["post_type"],
            title=row["title"] or "",
            status=row["status"],
            slug=row["slug"] or "",
            date=datetime.fromisoformat(raw_date) if raw_date else None,
        )
