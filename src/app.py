"""Application entry point for shlinkify."""

from __future__ import annotations

import argparse
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

import settings
from adapters.error_reporting import LoggingErrorReporter, SentryErrorReporter
from adapters.site import LocalSite
from adapters.sqlite_storage import SQLiteStorage
from client import build_client
from core.associations import get_association
from core.config import ShlinkConfig
from core.errors import ShlinkifyError
from core.models import STATUS_DRAFT, PostRecord
from core.ports import ErrorReporterPort, ShortenerPort
from core.slugs import sanitize_title
from core.sync import SaveSyncEngine
from core.tags import TagAggregator

NAME = "SHLINKIFY"
FONT = "small"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/shlinkify.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _build_error_reporter() -> ErrorReporterPort:
    if settings.SENTRY_DSN:
        return SentryErrorReporter(settings.SENTRY_DSN, environment=settings.SENTRY_ENVIRONMENT)
    return LoggingErrorReporter()


def compose(
    site: LocalSite,
    storage: SQLiteStorage,
    shortener: ShortenerPort,
    config: ShlinkConfig,
    error_reporter: ErrorReporterPort,
) -> SaveSyncEngine:
    """Wire the engine and register its callbacks against the site."""

    engine = SaveSyncEngine(
        config=config,
        posts=site,
        store=storage,
        shortener=shortener,
        get_permalink=site.get_permalink,
        sanitize_title=sanitize_title,
        error_reporter=error_reporter,
    )
    # Standard site/user tags are just the first tags filter; more can follow.
    engine.tags_filter.add(TagAggregator(site).augment_tags)
    site.on_post_saved(engine.on_content_saved)
    return engine


def _build() -> tuple[LocalSite, SQLiteStorage, SaveSyncEngine]:
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    site = LocalSite(
        storage,
        site_url=settings.SITE_URL,
        permalink_structure=settings.PERMALINK_STRUCTURE,
        user_login=settings.USER_LOGIN,
    )
    config = ShlinkConfig(
        base_url=settings.SHLINK_BASE_URL,
        api_key=settings.SHLINK_API_KEY,
        generate_on_save=settings.GENERATE_ON_SAVE,
        post_type=settings.POST_TYPE,
        real_permalink_statuses=settings.REAL_PERMALINK_STATUSES,
    )
    engine = compose(site, storage, build_client(), config, _build_error_reporter())
    return site, storage, engine


def _save(args: argparse.Namespace) -> None:
    site, storage, _ = _build()
    existing = storage.get_post(args.id)
    post = PostRecord(
        post_id=args.id,
        post_type=args.type,
        title=args.title,
        status=args.status,
        slug=args.slug or "",
        date=existing.date if existing and existing.date else datetime.now(timezone.utc),
    )
    site.save_post(post)
    _print_association(storage, args.id)


def _resync(args: argparse.Namespace) -> None:
    _, storage, engine = _build()
    if storage.get_post(args.id) is None:
        raise SystemExit(f"Post {args.id} not found")
    try:
        association = engine.sync_post(args.id, force=True)
    except ShlinkifyError as err:
        raise SystemExit(f"Sync failed for post {args.id}: {err}") from err
    if association is None:
        print(f"Post {args.id} was skipped (check credentials, post type and status).")
        return
    _print_association(storage, args.id)


def _show(args: argparse.Namespace) -> None:
    _, storage, _ = _build()
    _print_association(storage, args.id)


def _list(_: argparse.Namespace) -> None:
    _, storage, _ = _build()
    posts = storage.list_posts()
    if not posts:
        print("No posts stored.")
        return
    for post in posts:
        association = get_association(storage, post.post_id)
        short_url = association.short_url if association else "-"
        print(f"{post.post_id} | {post.post_type} | {post.status} | {post.title} | {short_url}")


def _print_association(storage: SQLiteStorage, post_id: int) -> None:
    association = get_association(storage, post_id)
    if association is None:
        print(f"Post {post_id} has no short URL.")
        return
    print(f"Post {post_id}")
    print(f"  short URL:  {association.short_url}")
    print(f"  short code: {association.short_code}")
    print(f"  long URL:   {association.long_url}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="shlinkify")
    subparsers = parser.add_subparsers(dest="command", required=True)

    save_parser = subparsers.add_parser("save", help="Save a post and fire the save event")
    save_parser.add_argument("--id", type=int, required=True)
    save_parser.add_argument("--title", default="")
    save_parser.add_argument("--status", default=STATUS_DRAFT)
    save_parser.add_argument("--slug", default="")
    save_parser.add_argument("--type", default="post")
    save_parser.set_defaults(handler=_save)

    resync_parser = subparsers.add_parser("resync", help="Sync a stored post now, ignoring generate_on_save")
    resync_parser.add_argument("id", type=int)
    resync_parser.set_defaults(handler=_resync)

    show_parser = subparsers.add_parser("show", help="Show the short URL stored for a post")
    show_parser.add_argument("id", type=int)
    show_parser.set_defaults(handler=_show)

    list_parser = subparsers.add_parser("list", help="List stored posts with their short URLs")
    list_parser.set_defaults(handler=_list)

    args = parser.parse_args(argv)
    _print_banner()
    _configure_logging()
    args.handler(args)


if __name__ == "__main__":
    main()
