# 🚨 storefront/shared/errors.py
"""
🚨 Базова ієрархія винятків застосунку.

🔹 `AppError` — корінь усіх наших винятків, несе `details` для логів.
🔹 `UserVisibleError` — помилки, текст яких можна показати покупцю.
"""

from __future__ import annotations

from typing import Dict, Optional


class AppError(Exception):
    """🧠 Базовий виняток застосунку."""

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Словник для `logger.extra`."""
        extra: Dict[str, object] = {"error_type": type(self).__name__}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, повідомлення якої безпечно показати користувачу."""


__all__ = ["AppError", "UserVisibleError"]
