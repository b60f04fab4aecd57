"""Static configuration for shlinkify.

All user-editable settings (Shlink behavior, site, database, logging) live in
a single JSON file for quick edits without touching Python. Secrets such as
the API key come from the environment instead.
"""

import json
import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# config.json sits at the project root unless SHLINKIFY_CONFIG points elsewhere.
CONFIG_PATH = os.getenv("SHLINKIFY_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def read_bool(section: dict, key: str, default: bool) -> bool:
    """Return a JSON boolean setting; strings such as "false" are rejected."""

    value = section.get(key, default)
    if not isinstance(value, bool):
        raise RuntimeError(f"{key} must be true or false in {CONFIG_PATH}, got {value!r}")
    return value


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Shlink connection. An empty base URL or API key disables syncing silently.
# - SHLINK_BASE_URL env overrides shlink.base_url
# - SHLINK_API_KEY is env-only to keep it out of config.json
_shlink = _CONFIG.get("shlink", {})
SHLINK_BASE_URL = os.getenv("SHLINK_BASE_URL") or _shlink.get("base_url", "")
SHLINK_API_KEY = os.getenv("SHLINK_API_KEY", "")
SHLINK_TIMEOUT = float(_shlink.get("timeout", 10))
GENERATE_ON_SAVE = read_bool(_shlink, "generate_on_save", False)
# Only posts of this type are synced (pages and custom types are ignored).
POST_TYPE = _shlink.get("post_type", "post")
# Statuses that use the real permalink instead of a predicted one.
REAL_PERMALINK_STATUSES = frozenset(_shlink.get("real_permalink_statuses", []))

# Site identity used for permalinks and tags.
_site = _CONFIG.get("site", {})
SITE_URL = _site.get("url", "")
PERMALINK_STRUCTURE = _site.get("permalink_structure", "/%year%/%monthnum%/%postname%/")
# Acting user; unset means tags are omitted from sync requests.
USER_LOGIN = os.getenv("SHLINKIFY_USER") or _site.get("user_login", "")

# Where to store the SQLite database, relative paths resolve from the root.
_database = _CONFIG.get("database", {})
DB_PATH = _database.get("path", "shlinkify.db")
if not os.path.isabs(DB_PATH):
    DB_PATH = os.path.join(PROJECT_ROOT, DB_PATH)

# Errors go to Sentry when a DSN is present, otherwise to the log.
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT = os.getenv("SENTRY_ENVIRONMENT", "production")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
