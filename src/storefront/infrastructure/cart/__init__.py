# 🧾 storefront/infrastructure/cart/__init__.py
"""
🧾 Адаптер сховища кошика: нормалізація сирих payload-ів у DTO рушія.
"""

from .payload_mapper import (
    coupon_from_payload,
    fallback_from_payload,
    line_item_from_payload,
    payment_method_from_payload,
    shipping_method_from_payload,
    snapshot_from_payload,
    tax_rule_from_payload,
)

__all__ = [
    "coupon_from_payload",
    "fallback_from_payload",
    "line_item_from_payload",
    "payment_method_from_payload",
    "shipping_method_from_payload",
    "snapshot_from_payload",
    "tax_rule_from_payload",
]
