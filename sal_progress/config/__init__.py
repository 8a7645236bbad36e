"""
Config package for the SAL progress engine.

- constants.py: Static weight, target and catalog tables
- settings.py: Environment-driven runtime settings
"""

from sal_progress.config.settings import EngineSettings

__all__ = ["EngineSettings"]
