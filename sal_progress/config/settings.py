"""
Runtime settings for the SAL progress engine.

Settings come from environment variables with safe defaults. Invalid values
fail fast with ConfigurationError instead of silently falling back.

Environment:
    SAL_PROGRESS_SNAPSHOT_TIMEOUT      Seconds per snapshot provider (5.0)
    SAL_PROGRESS_REVIEW_INTERVAL_DAYS  Fixed review interval in days (7)
    SAL_PROGRESS_STUDY_BATCH           Words per study session (10)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from sal_progress.config.constants import REVIEW_INTERVAL_DAYS, STUDY_BATCH_SIZE
from sal_progress.lib.exceptions import ConfigurationError

DEFAULT_SNAPSHOT_TIMEOUT = 5.0


@dataclass(frozen=True)
class EngineSettings:
    """Runtime knobs for snapshot collection and vocabulary review."""

    snapshot_timeout: float = DEFAULT_SNAPSHOT_TIMEOUT
    review_interval_days: int = REVIEW_INTERVAL_DAYS
    study_batch_size: int = STUDY_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.snapshot_timeout <= 0:
            raise ConfigurationError(
                f"snapshot_timeout must be positive, got {self.snapshot_timeout}"
            )
        if self.review_interval_days < 1:
            raise ConfigurationError(
                f"review_interval_days must be >= 1, got {self.review_interval_days}"
            )
        if self.study_batch_size < 1:
            raise ConfigurationError(
                f"study_batch_size must be >= 1, got {self.study_batch_size}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            EngineSettings instance

        Raises:
            ConfigurationError: If a variable is set but not a valid number
        """
        env = os.environ if environ is None else environ
        return cls(
            snapshot_timeout=_read(
                env, "SAL_PROGRESS_SNAPSHOT_TIMEOUT", float, DEFAULT_SNAPSHOT_TIMEOUT
            ),
            review_interval_days=_read(
                env, "SAL_PROGRESS_REVIEW_INTERVAL_DAYS", int, REVIEW_INTERVAL_DAYS
            ),
            study_batch_size=_read(
                env, "SAL_PROGRESS_STUDY_BATCH", int, STUDY_BATCH_SIZE
            ),
        )


def _read(env: Mapping[str, str], name: str, cast: type, default: float | int):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name}={raw!r} is not a valid {cast.__name__}") from e
