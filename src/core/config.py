"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ShlinkConfig:
    """Connection and behavior settings for the sync engine."""

    base_url: str
    api_key: str
    generate_on_save: bool = False
    post_type: str = "post"
    # Statuses for which the host's real permalink is used instead of a
    # predicted one. Empty keeps the historical behavior (always predict).
    real_permalink_statuses: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_complete(self) -> bool:
        return bool(self.base_url) and bool(self.api_key)
