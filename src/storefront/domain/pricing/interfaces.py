# 🧩 storefront/domain/pricing/interfaces.py
"""
🧩 interfaces.py — DTO та контракти доменного ціноутворення.

🔹 Позиції кошика, резервні ціни товарів, податкові правила, методи доставки й оплати.
🔹 `OrderTotals` — незмінний результат розрахунку.
🔹 `IPricingService` — контракт сервісу, з яким працюють зовнішні шари.

Усі DTO заморожені: рушій лише читає їх і ніколи не змінює.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from enum import Enum, unique
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Tuple, Union

# 🧩 Внутрішні модулі проєкту
from storefront.domain.coupons.interfaces import Coupon
from storefront.shared.utils.immutables import freeze
from .rounding import ZERO, q2, to_decimal

if TYPE_CHECKING:
    from storefront.domain.coupons.interfaces import CouponCheck

# Сире число від сховища кошика: рушій сам зводить його до Decimal
Numeric = Union[Decimal, int, float, str, None]


# ================================
# 🏷️ ПЕРЕРАХУВАННЯ
# ================================
@unique
class ShippingType(str, Enum):
    FLAT_RATE = "flat_rate"
    FREE_SHIPPING = "free_shipping"


@unique
class FeeType(str, Enum):
    NONE = "none"
    FIXED = "fixed"
    PERCENTAGE = "percentage"


@unique
class TaxBase(str, Enum):
    """Від якої суми рахується податок."""
    PRE_DISCOUNT = "pre_discount"      # 🧾 Від сум позицій до знижки
    POST_DISCOUNT = "post_discount"    # 📉 Знижка пропорційно розподіляється між позиціями


# ================================
# 🛒 КОШИК
# ================================
@dataclass(frozen=True, slots=True)
class SelectedOption:
    """Доплата за опцію товару (на одиницю)."""
    name: str
    price: Numeric = ZERO


@dataclass(frozen=True, slots=True)
class LineItem:
    """Одна позиція кошика."""
    product_id: str
    quantity: Numeric = 1
    unit_price: Numeric = ZERO                      # 💵 Ціна на момент додавання до кошика
    selected_options: Tuple[SelectedOption, ...] = ()


@dataclass(frozen=True, slots=True)
class ProductPriceFallback:
    """Поточна каталожна ціна товару, якщо ціна в кошику відсутня або ≤ 0."""
    price: Numeric = ZERO
    compare_price: Numeric = None
    tax_id: Optional[str] = None                    # 🧾 Податкове правило товару
    category_ids: frozenset = frozenset()           # 🗂️ Категорії для обмежень купонів

    @property
    def effective_price(self) -> Decimal:
        """`min(price, compare_price)`, якщо compare_price > 0 і відрізняється від price."""
        price = to_decimal(self.price)
        compare = to_decimal(self.compare_price)
        if compare > ZERO and compare != price:
            return min(price, compare)
        return price


# ================================
# 🧾 ПОДАТКИ
# ================================
@dataclass(frozen=True, slots=True)
class CountryRate:
    country: str
    rate: Numeric = ZERO                            # 📊 Ставка у відсотках


@dataclass(frozen=True, slots=True)
class TaxRule:
    country_rates: Tuple[CountryRate, ...] = ()
    id: Optional[str] = None
    name: str = ""
    is_default: bool = False

    def rate_for(self, country: Optional[str]) -> Decimal:
        """Ставка (у відсотках) для країни призначення; немає збігу → 0."""
        wanted = (country or "").strip().upper()
        if not wanted:
            return ZERO
        for entry in self.country_rates:
            if (entry.country or "").strip().upper() == wanted:
                return to_decimal(entry.rate)
        return ZERO


# ================================
# 🚚 ДОСТАВКА ТА 💳 ОПЛАТА
# ================================
@dataclass(frozen=True, slots=True)
class ShippingMethod:
    type: ShippingType = ShippingType.FLAT_RATE
    flat_rate_cost: Numeric = ZERO
    free_shipping_min_order: Numeric = ZERO
    name: str = ""


@dataclass(frozen=True, slots=True)
class PaymentMethod:
    fee_type: FeeType = FeeType.NONE
    fee_amount: Numeric = ZERO
    code: str = ""
    name: str = ""


# ================================
# 📦 РЕЗУЛЬТАТ
# ================================
@dataclass(frozen=True, slots=True)
class OrderTotals:
    """Підсумки замовлення. Значення не округлені: форматування — справа клієнта."""
    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    tax: Decimal = ZERO
    shipping_cost: Decimal = ZERO
    payment_fee: Decimal = ZERO
    total: Decimal = ZERO

    def rounded(self) -> "OrderTotals":
        """Копія з усіма сумами, округленими до центів."""
        return replace(self, **{f.name: q2(getattr(self, f.name)) for f in fields(self)})

    def as_mapping(self) -> MappingProxyType:
        """Read-only знімок для серіалізації."""
        return freeze({f.name: getattr(self, f.name) for f in fields(self)})


@dataclass(frozen=True, slots=True)
class CartSnapshot:
    """Усе, що потрібно для одного розрахунку підсумків."""
    items: Tuple[LineItem, ...] = ()
    fallbacks: Mapping[str, ProductPriceFallback] = field(default_factory=dict)
    coupon: Optional[Coupon] = None
    tax_rules: Tuple[TaxRule, ...] = ()
    destination_country: Optional[str] = None
    shipping_method: Optional[ShippingMethod] = None
    payment_method: Optional[PaymentMethod] = None

    def category_lookup(self) -> Mapping[str, frozenset]:
        """product_id → категорії, зібрані з резервних цін."""
        return {pid: fb.category_ids for pid, fb in self.fallbacks.items()}


# ================================
# 💰 КОНТРАКТ СЕРВІСУ
# ================================
class IPricingService(ABC):
    """💰 Контракт сервісу розрахунку підсумків замовлення."""

    @abstractmethod
    def quote(self, snapshot: CartSnapshot) -> OrderTotals:
        """Розраховує підсумки для знімка кошика."""

    @abstractmethod
    def check_coupon(self, coupon: Optional[Coupon], snapshot: CartSnapshot, now=None) -> "CouponCheck":
        """Перевіряє, чи можна застосувати купон до кошика."""


__all__ = [
    "Numeric",
    "ShippingType",
    "FeeType",
    "TaxBase",
    "SelectedOption",
    "LineItem",
    "ProductPriceFallback",
    "CountryRate",
    "TaxRule",
    "ShippingMethod",
    "PaymentMethod",
    "OrderTotals",
    "CartSnapshot",
    "IPricingService",
]
