"""
Lib package for the SAL progress engine.

Contains shared utilities:
- exceptions.py: Exception hierarchy
- logging.py: structlog setup for embedding applications
- numeric.py: Half-up rounding, clamping and guarded ratios
- timeutil.py: Timestamp normalisation
"""

from sal_progress.lib.exceptions import (
    ConfigurationError,
    LevelLadderError,
    ProgressEngineError,
    SnapshotError,
    ValidationError,
)
from sal_progress.lib.numeric import average, clamp, round_half_up, safe_ratio
from sal_progress.lib.timeutil import naive_utc

__all__ = [
    # Exceptions
    "ProgressEngineError",
    "ConfigurationError",
    "LevelLadderError",
    "ValidationError",
    "SnapshotError",
    # Numeric
    "average",
    "clamp",
    "round_half_up",
    "safe_ratio",
    # Time
    "naive_utc",
]
