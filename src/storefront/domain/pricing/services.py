# 📦 storefront/domain/pricing/services.py
"""
📦 Доменний сервіс розрахунку підсумків замовлення.

🔹 Делегує всю арифметику чистим функціям з `calculator.py`.
🔹 Тримає незмінний `PricingConfig` (податкова база, free-shipping купон, країна за замовчуванням).
🔹 Логує кроки розрахунку та оновлює Prometheus-метрики.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                # 🪵 Логування кроків розрахунку
from dataclasses import dataclass                             # 🧱 Immutable-конфіг сервісу
from datetime import datetime
from typing import TYPE_CHECKING, Optional

# 🧩 Внутрішні модулі проєкту
from storefront.domain.coupons.interfaces import Coupon, CouponCheck
from storefront.domain.coupons.validation import validate_coupon_applicability
from storefront.shared.metrics.pricing import COUPON_CHECKS, PRICING_QUOTE_LATENCY, PRICING_QUOTES
from storefront.shared.utils.logger import LOG_NAME           # 🏷️ Базове імʼя логера
from . import calculator
from .interfaces import CartSnapshot, IPricingService, OrderTotals, TaxBase

if TYPE_CHECKING:
    from storefront.config.config_service import ConfigService

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")      # 🧾 Іменований логер сервісу


# ================================
# ⚙️ НАЛАШТУВАННЯ
# ================================
@dataclass(frozen=True, slots=True)
class PricingConfig:
    """Параметри, що керують політиками розрахунку."""
    tax_base: TaxBase = TaxBase.PRE_DISCOUNT                  # 🧾 Податок до знижки
    free_shipping_coupon_waives_shipping: bool = True         # 🚚 Купон free_shipping обнуляє доставку
    default_country: Optional[str] = None                     # 🌍 Якщо у знімку немає країни призначення

    @classmethod
    def from_mapping(cls, node: Optional[dict]) -> "PricingConfig":
        """Будує конфіг із розділу `pricing` (невідомі значення → дефолти)."""
        node = node or {}
        raw_base = str(node.get("tax_base") or TaxBase.PRE_DISCOUNT.value).strip().lower()
        try:
            tax_base = TaxBase(raw_base)
        except ValueError:
            logger.warning("⚠️ Unknown tax_base '%s', falling back to pre_discount", raw_base)
            tax_base = TaxBase.PRE_DISCOUNT
        waives = node.get("free_shipping_coupon_waives_shipping")
        country = node.get("default_country")
        return cls(
            tax_base=tax_base,
            free_shipping_coupon_waives_shipping=True if waives is None else bool(waives),
            default_country=str(country).upper() if country else None,
        )

    @classmethod
    def from_config_service(cls, config: "ConfigService") -> "PricingConfig":
        return cls.from_mapping(config.get("pricing", {}))


# ================================
# 🏛️ ДОМЕННИЙ СЕРВІС
# ================================
class PricingService(IPricingService):
    """💸 Обчислює підсумки кошика та перевіряє купони за налаштованими політиками."""

    def __init__(self, cfg: PricingConfig | None = None) -> None:
        self._cfg = cfg or PricingConfig()

    @property
    def config(self) -> PricingConfig:
        return self._cfg

    def _country(self, snapshot: CartSnapshot) -> Optional[str]:
        return snapshot.destination_country or self._cfg.default_country

    def quote(self, snapshot: CartSnapshot) -> OrderTotals:
        """
        🚀 Розраховує підсумки для знімка кошика.

        Args:
            snapshot: Позиції, резервні ціни, купон, податки, доставка та оплата.

        Returns:
            OrderTotals: Незмінні, не округлені підсумки.
        """
        with PRICING_QUOTE_LATENCY.time():
            totals = calculator.compute_totals(
                snapshot.items,
                snapshot.fallbacks,
                snapshot.coupon,
                snapshot.tax_rules,
                self._country(snapshot),
                snapshot.shipping_method,
                snapshot.payment_method,
                tax_base=self._cfg.tax_base,
                free_shipping_coupon_waives_shipping=self._cfg.free_shipping_coupon_waives_shipping,
            )
        PRICING_QUOTES.labels(cart="filled" if snapshot.items else "empty").inc()
        logger.info(
            "✅ Pricing completed | items=%s subtotal=%s discount=%s tax=%s shipping=%s fee=%s total=%s",
            len(snapshot.items),
            totals.subtotal,
            totals.discount,
            totals.tax,
            totals.shipping_cost,
            totals.payment_fee,
            totals.total,
        )
        return totals

    def check_coupon(
        self,
        coupon: Optional[Coupon],
        snapshot: CartSnapshot,
        now: Optional[datetime] = None,
    ) -> CouponCheck:
        """🎟️ Перевіряє купон проти поточного вмісту кошика."""
        subtotal = calculator.compute_subtotal(snapshot.items, snapshot.fallbacks)
        check = validate_coupon_applicability(
            coupon,
            snapshot.items,
            snapshot.category_lookup(),
            subtotal,
            now,
        )
        COUPON_CHECKS.labels(result="valid" if check.valid else _reason_label(check)).inc()
        return check


def _reason_label(check: CouponCheck) -> str:
    return check.reason.value if check.reason else "unknown"


__all__ = ["PricingConfig", "PricingService"]
