"""Error reporting adapters.

Sync errors are forwarded to Sentry when a DSN is configured, otherwise they
are written to the log.
"""

from __future__ import annotations

import logging

import sentry_sdk

LOGGER = logging.getLogger(__name__)


class LoggingErrorReporter:
    """Writes sync errors to the application log."""

    def __init__(self, logger: logging.Logger = LOGGER) -> None:
        self._logger = logger

    def capture(self, error: Exception) -> None:
        self._logger.error("Short link sync failed: %s", error, exc_info=error)


class SentryErrorReporter:
    """Forwards sync errors to Sentry."""

    def __init__(self, dsn: str, environment: str = "production") -> None:
        sentry_sdk.init(dsn=dsn, environment=environment)

    def capture(self, error: Exception) -> None:
        sentry_sdk.capture_exception(error)
