# 🎟️ storefront/domain/coupons/tracker.py
"""
🎟️ Життєвий цикл застосованого купона для однієї сесії кошика.

Стани: Unapplied → Applied (успішна перевірка) → Unapplied (ручне видалення,
купон став незастосовним після зміни кошика, кошик спорожнів).

Слухачі отримують поточний купон (або None) після кожного переходу.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.logger import LOG_NAME
from .interfaces import Coupon, CouponCheck
from .validation import CategoryLookup, validate_coupon_applicability

if TYPE_CHECKING:
    from storefront.domain.pricing.interfaces import LineItem

logger = logging.getLogger(f"{LOG_NAME}.domain.coupons.tracker")

CouponListener = Callable[[Optional[Coupon]], None]


class AppliedCouponTracker:
    """🎟️ Тримає купон, застосований до кошика, і сповіщає про зміни."""

    def __init__(self) -> None:
        self._applied: Optional[Coupon] = None
        self._listeners: List[CouponListener] = []

    @property
    def applied(self) -> Optional[Coupon]:
        return self._applied

    # ================================
    # 🔔 СЛУХАЧІ
    # ================================
    def add_listener(self, listener: CouponListener) -> Callable[[], None]:
        """Реєструє слухача; повертає функцію відписки."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._applied)
            except Exception:  # noqa: BLE001
                logger.exception("⚠️ Coupon listener failed | listener=%r", listener)

    # ================================
    # 🔁 ПЕРЕХОДИ
    # ================================
    def apply(
        self,
        coupon: Optional[Coupon],
        items: Iterable["LineItem"],
        category_lookup: Optional[CategoryLookup],
        subtotal: Decimal,
        now: Optional[datetime] = None,
    ) -> CouponCheck:
        """Перевіряє купон і, якщо він дійсний, робить його застосованим."""
        check = validate_coupon_applicability(coupon, items, category_lookup, subtotal, now)
        if not check.valid:
            return check
        self._applied = coupon
        logger.info("✅ Coupon applied | code=%s", coupon.code if coupon else "-")
        self._notify()
        return check

    def remove(self) -> bool:
        """Знімає купон. Повертає False, якщо знімати нічого."""
        if self._applied is None:
            return False
        logger.info("🗑️ Coupon removed | code=%s", self._applied.code)
        self._applied = None
        self._notify()
        return True

    def sync_with_cart(
        self,
        items: Iterable["LineItem"],
        category_lookup: Optional[CategoryLookup],
        subtotal: Decimal,
        now: Optional[datetime] = None,
    ) -> Optional[CouponCheck]:
        """
        Повторно перевіряє застосований купон після зміни кошика.

        Returns:
            CouponCheck з причиною, якщо купон став незастосовним; інакше None.
            Порожній кошик теж знімає купон, але без причини.
        """
        if self._applied is None:
            return None
        items = tuple(items or ())
        if not items:
            logger.info("🧺 Cart is empty, dropping coupon | code=%s", self._applied.code)
            self.remove()
            return None
        check = validate_coupon_applicability(self._applied, items, category_lookup, subtotal, now)
        if check.valid:
            return None
        logger.warning(
            "⚠️ Coupon no longer applies | code=%s reason=%s",
            self._applied.code,
            check.reason.value if check.reason else "-",
        )
        self.remove()
        return check


__all__ = ["AppliedCouponTracker", "CouponListener"]
