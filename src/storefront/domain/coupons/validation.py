# 🎟️ storefront/domain/coupons/validation.py
"""
🎟️ Перевірка застосовності купона до кошика.

🔹 Перевірки йдуть у фіксованому порядку і зупиняються на першій відмові.
🔹 Відмови повертаються як `CouponRejection`, а не як винятки: це очікувані,
   видимі покупцю ситуації.
🔹 Викликається не лише при застосуванні, а й після кожної зміни кошика.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.logger import LOG_NAME
from storefront.shared.utils.numbers import ZERO, to_decimal
from .interfaces import Coupon, CouponCheck, CouponRejection

if TYPE_CHECKING:
    from storefront.domain.pricing.interfaces import LineItem

logger = logging.getLogger(f"{LOG_NAME}.domain.coupons")

CategoryLookup = Mapping[str, Iterable[str]]


def _as_utc(moment: datetime) -> datetime:
    """Наївні дати вважаємо UTC, щоб порівнювати їх з aware-датами."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _matches_products(coupon: Coupon, items: Iterable["LineItem"]) -> bool:
    return any(item.product_id in coupon.applicable_product_ids for item in items)


def _matches_categories(
    coupon: Coupon,
    items: Iterable["LineItem"],
    category_lookup: Optional[CategoryLookup],
) -> bool:
    lookup = category_lookup or {}
    for item in items:
        categories = lookup.get(item.product_id) or ()
        if any(category in coupon.applicable_category_ids for category in categories):
            return True
    return False


def validate_coupon_applicability(
    coupon: Optional[Coupon],
    items: Iterable["LineItem"],
    category_lookup: Optional[CategoryLookup],
    subtotal: Decimal,
    now: Optional[datetime] = None,
) -> CouponCheck:
    """
    Повертає `CouponCheck` з першою причиною відмови або `valid=True`.

    Args:
        coupon: Купон або None (код не знайдено).
        items: Позиції кошика.
        category_lookup: product_id → ідентифікатори категорій товару.
        subtotal: Сума кошика до знижки.
        now: Момент перевірки; за замовчуванням поточний час UTC.
    """
    if coupon is None:
        return CouponCheck.rejected(CouponRejection.NOT_FOUND)

    items = tuple(items or ())
    moment = _as_utc(now or datetime.now(timezone.utc))
    label = coupon.code or coupon.name or "<unnamed>"

    reason: Optional[CouponRejection] = None
    usage_limit = int(to_decimal(coupon.usage_limit))
    min_purchase = to_decimal(coupon.min_purchase_amount)

    if not coupon.is_active:
        reason = CouponRejection.INACTIVE
    elif coupon.end_date is not None and _as_utc(coupon.end_date) < moment:
        reason = CouponRejection.EXPIRED
    elif coupon.start_date is not None and _as_utc(coupon.start_date) > moment:
        reason = CouponRejection.NOT_STARTED
    elif usage_limit > 0 and int(to_decimal(coupon.usage_count)) >= usage_limit:
        reason = CouponRejection.USAGE_LIMIT_REACHED
    elif min_purchase > ZERO and to_decimal(subtotal) < min_purchase:
        reason = CouponRejection.BELOW_MINIMUM
    elif coupon.applicable_product_ids and not _matches_products(coupon, items):
        reason = CouponRejection.NO_PRODUCT_MATCH
    elif coupon.applicable_category_ids and not _matches_categories(coupon, items, category_lookup):
        reason = CouponRejection.NO_CATEGORY_MATCH

    if reason is not None:
        logger.info("🎟️ Coupon rejected | coupon=%s reason=%s subtotal=%s", label, reason.value, subtotal)
        return CouponCheck.rejected(reason)

    logger.debug("🎟️ Coupon applicable | coupon=%s subtotal=%s", label, subtotal)
    return CouponCheck.ok()


__all__ = ["CategoryLookup", "validate_coupon_applicability"]
