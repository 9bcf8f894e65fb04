# ⚙️ storefront/config/__init__.py
"""
⚙️ Пакет Config — завантаження налаштувань (.env + config.yaml).
"""

from .config_service import ConfigService

__all__ = ["ConfigService"]
