# 🔢 storefront/shared/utils/numbers.py
"""
🔢 Толерантний парсинг чисел із сирих даних кошика.

Все, що не є скінченним числом (None, "", "abc", NaN, Infinity, bool), стає `default`.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Перетворює значення у скінченний Decimal; все, що не парситься, стає `default`."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError):
            return default
    if not result.is_finite():                                   # 🚫 NaN / Infinity
        return default
    return result


__all__ = ["ZERO", "to_decimal"]
