"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchingConfig:
    """Decision flow settings for a matching session."""

    # Seconds between a decision and the queue advance.
    transition_delay: float = 0.3


@dataclass(frozen=True)
class PollerConfig:
    """Refresh cadence for inbox consumers."""

    interval: float = 30.0


@dataclass(frozen=True)
class OutboxConfig:
    """Retry settings for interactions that failed to submit."""

    enabled: bool = False
    max_attempts: int = 5
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0
