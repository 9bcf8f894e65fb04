# ⚙️ storefront/config/config_service.py
"""
⚙️ config_service.py — Сервіс доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує `config.yaml` (або файл із `STOREFRONT_PRICING_CONFIG`) та змінні з .env.
- Надає єдиний метод `.get()` з крапковими ключами (`pricing.tax_base`).
- Працює як Singleton; `reload()` перечитує джерела.

Пріоритет: config.yaml → змінні середовища (перезаписують YAML).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

CONFIG_PATH_ENV = "STOREFRONT_PRICING_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# 🔐 Змінна середовища → крапковий ключ конфігурації
ENV_KEYS: Dict[str, str] = {
    "STOREFRONT_PRICING_TAX_BASE": "pricing.tax_base",
    "STOREFRONT_PRICING_DEFAULT_COUNTRY": "pricing.default_country",
    "STOREFRONT_PRICING_FREE_SHIPPING_COUPON_WAIVES_SHIPPING": "pricing.free_shipping_coupon_waives_shipping",
    "STOREFRONT_PRICING_LOG_LEVEL": "logging.level",
    "STOREFRONT_PRICING_LOG_FILE": "logging.file",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _coerce_env(value: str) -> Any:
    """Рядки 'true'/'false' з .env перетворюємо на bool."""
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return value.strip()


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до налаштувань рушія.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None
    _config: Dict[str, Any]

    def __new__(cls) -> "ConfigService":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs()
            cls._instance = instance
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reload(cls) -> "ConfigService":
        """Скидає Singleton і перечитує всі джерела."""
        cls._instance = None
        return cls()

    def _load_all_configs(self) -> None:
        """📥 Завантажує YAML, потім накладає змінні середовища."""
        yaml_path = Path(os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
            logger.debug("📘 config.yaml завантажено | path=%s", yaml_path)
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити %s: %s", yaml_path, e)

        load_dotenv()
        env_vars = {
            key: _coerce_env(os.environ[env_name])
            for env_name, key in ENV_KEYS.items()
            if os.environ.get(env_name)
        }
        self._deep_update(self._config, self._unflatten_dict(env_vars))
        logger.info("✅ Конфігурацію успішно завантажено.")

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення за крапковим ключем (наприклад: 'pricing.tax_base').

        Args:
            key: Ключ у форматі з крапкою.
            default: Значення, якщо ключ не знайдено.
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                logger.debug("❓ Ключ '%s' не знайдено, повертаємо значення за замовчуванням", key)
                return default
        return value

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """'pricing.tax_base' → {'pricing': {'tax_base': ...}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """🔁 Рекурсивно зливає `overrides` у `source`."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value


__all__ = ["ConfigService", "CONFIG_PATH_ENV", "ENV_KEYS"]
