# 🧭 storefront/errors/reason_mapper.py
"""
🧭 Мапить `CouponRejection` → текст повідомлення для покупця.

🔹 Рушій повертає лише коди причин; форматування тексту живе тут.
🔹 `ctx` підставляється у шаблон (наприклад, `{min_purchase}`).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Any, Dict, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.domain.coupons.interfaces import Coupon, CouponRejection
from storefront.domain.pricing.rounding import q2
from storefront.shared.utils.logger import LOG_NAME
from . import messages as msg

logger = logging.getLogger(f"{LOG_NAME}.errors.reason_mapper")

_TEMPLATES: Dict[CouponRejection, str] = {
    CouponRejection.NOT_FOUND: msg.COUPON_NOT_FOUND,
    CouponRejection.INACTIVE: msg.COUPON_INACTIVE,
    CouponRejection.EXPIRED: msg.COUPON_EXPIRED,
    CouponRejection.NOT_STARTED: msg.COUPON_NOT_STARTED,
    CouponRejection.USAGE_LIMIT_REACHED: msg.COUPON_USAGE_LIMIT,
    CouponRejection.BELOW_MINIMUM: msg.COUPON_BELOW_MINIMUM,
    CouponRejection.NO_PRODUCT_MATCH: msg.COUPON_NO_MATCH,
    CouponRejection.NO_CATEGORY_MATCH: msg.COUPON_NO_MATCH,
}


def rejection_context(coupon: Optional[Coupon]) -> Dict[str, Any]:
    """Параметри для підстановки у шаблони."""
    if coupon is None:
        return {}
    return {
        "name": coupon.name or coupon.code,
        "code": coupon.code,
        "min_purchase": q2(coupon.min_purchase_amount),
    }


def map_rejection_to_message(
    reason: CouponRejection,
    coupon: Optional[Coupon] = None,
    *,
    removed: bool = False,
) -> str:
    """
    Повертає текст для покупця.

    Args:
        reason: Код причини відмови.
        coupon: Купон для підстановки назви та мінімальної суми.
        removed: True, якщо купон знято після зміни кошика (інший шаблон).
    """
    ctx = rejection_context(coupon)
    template = _TEMPLATES.get(reason, msg.COUPON_NOT_FOUND)
    try:
        text = template.format(**ctx)
    except KeyError:                                       # 🧩 Немає купона для підстановки
        logger.debug("⚠️ Missing context for reason=%s", reason.value)
        text = template.replace("{min_purchase}", "the required amount")
    if removed and coupon is not None:
        return msg.COUPON_REMOVED.format(name=ctx["name"], reason=text)
    return text


__all__ = ["map_rejection_to_message", "rejection_context"]
