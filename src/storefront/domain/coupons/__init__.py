# 🎟️ storefront/domain/coupons/__init__.py
"""
🎟️ Пакет `domain.coupons`: DTO купонів, перевірка застосовності та життєвий цикл.

🔹 `interfaces.py` — Coupon, DiscountType, CouponRejection, CouponCheck.
🔹 `validation.py` — `validate_coupon_applicability`.
🔹 `tracker.py` — `AppliedCouponTracker`.
"""

from .interfaces import Coupon, CouponCheck, CouponRejection, DiscountType
from .tracker import AppliedCouponTracker, CouponListener
from .validation import CategoryLookup, validate_coupon_applicability

__all__ = [
    "Coupon",
    "CouponCheck",
    "CouponRejection",
    "DiscountType",
    "AppliedCouponTracker",
    "CouponListener",
    "CategoryLookup",
    "validate_coupon_applicability",
]
