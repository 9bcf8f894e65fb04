# 🚨 storefront/errors/custom_errors.py
"""
🚨 Винятки межі кошика (cart-store boundary).

🔹 `CartPayloadError` — структурно некоректний payload (не словник, items не список, невідомий тип знижки).
🔹 Некоректні числа сюди НЕ потрапляють: їх рушій тихо зводить до 0 або 1.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування створення помилок
from typing import Dict, Optional                                   # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.errors import AppError, UserVisibleError
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.errors.custom_errors")


class ErrorCode:
    """⚠️ Коди помилок для логів."""

    CART_PAYLOAD = "cart_payload_error"
    UNKNOWN = "unknown_error"


class CartPayloadError(UserVisibleError):
    """🧾 Payload кошика має невідому або зламану структуру."""

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.field = field                                          # 🏷️ Поле, яке не пройшло перевірку
        logger.debug("🧾 CartPayloadError created", extra={"field": field, "details": details})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["error_code"] = ErrorCode.CART_PAYLOAD
        if self.field:
            extra["field"] = self.field
        return extra


__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "CartPayloadError",
]
