"""
Custom exception hierarchy for the SAL progress engine.

The engine is total over data shapes: missing snapshots, malformed records
and empty denominators never raise. What remains are contract violations:
- Configuration (bad environment values, invalid rule or level tables)
- Validation of caller-supplied arguments
- Snapshot provider failures (logged and degraded, never propagated)

All exceptions inherit from ProgressEngineError, enabling a catch-all for
engine errors while keeping the ability to catch specific error types.
"""

from __future__ import annotations


class ProgressEngineError(Exception):
    """Base exception for all progress engine errors."""


class ConfigurationError(ProgressEngineError):
    """Invalid environment settings or static configuration tables."""


class LevelLadderError(ConfigurationError):
    """Existential level ladder is empty, has gaps, or repeats a level."""


class ValidationError(ProgressEngineError):
    """Caller-supplied argument outside its documented range."""


class SnapshotError(ProgressEngineError):
    """A domain snapshot provider failed or timed out."""

    def __init__(self, domain: str, reason: str) -> None:
        self.domain = domain
        self.reason = reason
        super().__init__(f"Snapshot for '{domain}' unavailable: {reason}")
