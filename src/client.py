"""Shlink client factory for shlinkify."""

from __future__ import annotations

import logging

import settings
from adapters.shlink_client import ShlinkClient


def build_client() -> ShlinkClient:
    """Create a Shlink client from settings.

    Missing credentials are not fatal: the engine checks them before every
    sync and skips silently, so the client is simply never called.
    """

    logger = logging.getLogger(__name__)
    if not settings.SHLINK_BASE_URL or not settings.SHLINK_API_KEY:
        logger.warning("Shlink base URL or API key missing; syncing is disabled")
    else:
        logger.info("Initializing Shlink client for %s", settings.SHLINK_BASE_URL)

    return ShlinkClient(settings.SHLINK_BASE_URL, settings.SHLINK_API_KEY, timeout=settings.SHLINK_TIMEOUT)
