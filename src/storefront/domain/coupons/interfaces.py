# 🎟️ storefront/domain/coupons/interfaces.py
"""
🎟️ DTO купонів та коди причин відмови.

🔹 `Coupon` — незмінний запис купона з правилами застосовності.
🔹 `CouponRejection` — очікувані бізнес-відмови (не винятки!).
🔹 `CouponCheck` — результат перевірки: `valid` + перша причина відмови.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum, unique
from typing import Optional, Union


@unique
class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"
    FREE_SHIPPING = "free_shipping"


@unique
class CouponRejection(str, Enum):
    """Причини, з яких купон не може бути застосований (у порядку перевірки)."""
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    NOT_STARTED = "not_started"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    BELOW_MINIMUM = "below_minimum"
    NO_PRODUCT_MATCH = "no_product_match"
    NO_CATEGORY_MATCH = "no_category_match"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Coupon:
    """Купон магазину."""
    discount_type: DiscountType = DiscountType.FIXED
    discount_value: Union[Decimal, int, float, str, None] = Decimal("0")
    max_discount_amount: Union[Decimal, int, float, str, None] = None
    min_purchase_amount: Union[Decimal, int, float, str, None] = None
    applicable_product_ids: frozenset = frozenset()
    applicable_category_ids: frozenset = frozenset()
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    usage_limit: Optional[int] = None               # 🔢 None або 0 → без обмежень
    usage_count: int = 0
    code: str = ""
    name: str = ""
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class CouponCheck:
    valid: bool
    reason: Optional[CouponRejection] = None

    @classmethod
    def ok(cls) -> "CouponCheck":
        return cls(valid=True)

    @classmethod
    def rejected(cls, reason: CouponRejection) -> "CouponCheck":
        return cls(valid=False, reason=reason)


__all__ = ["DiscountType", "CouponRejection", "Coupon", "CouponCheck"]
