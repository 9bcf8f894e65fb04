# 🧰 storefront/shared/utils/__init__.py
"""
🧰 Спільні утиліти: логування та заморожування структур.
"""

from __future__ import annotations

from .immutables import FrozenMapping, freeze, is_frozen_mapping
from .logger import LOG_NAME, get_logger, init_logging, init_logging_from_config

__all__ = [
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    "FrozenMapping",
    "freeze",
    "is_frozen_mapping",
]
