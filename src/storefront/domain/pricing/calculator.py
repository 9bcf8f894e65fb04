# 🧮 storefront/domain/pricing/calculator.py
"""
🧮 Чисті функції розрахунку підсумків замовлення.

🔹 Жодного I/O, стану чи винятків: некоректні числа та переповнення зводяться до 0
   (кількість до 1).
🔹 Кожна функція залежить лише від аргументів, тож її безпечно викликати
   повторно та з кількох потоків.
🔹 Порядок: subtotal → discount → tax → shipping → payment fee → total.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from storefront.domain.coupons.interfaces import Coupon, DiscountType
from .interfaces import (
    FeeType,
    LineItem,
    OrderTotals,
    PaymentMethod,
    ProductPriceFallback,
    ShippingMethod,
    ShippingType,
    TaxBase,
    TaxRule,
)
from .rounding import ZERO, clamp, finite_or_zero, lenient_decimal, percent, to_decimal, to_quantity

Fallbacks = Optional[Mapping[str, ProductPriceFallback]]


# ================================
# 🛒 ПОЗИЦІЇ ТА SUBTOTAL
# ================================
@lenient_decimal
def compute_line_total(item: LineItem, fallback: Optional[ProductPriceFallback] = None) -> Decimal:
    """(ціна за одиницю + доплати за опції) × кількість."""
    unit_price = to_decimal(getattr(item, "unit_price", None))
    if unit_price <= ZERO:                                          # 🔁 Ціни в кошику немає → каталог
        unit_price = fallback.effective_price if fallback is not None else ZERO
    unit_price = max(unit_price, ZERO)

    options = getattr(item, "selected_options", None) or ()
    options_price = sum((to_decimal(getattr(option, "price", None)) for option in options), ZERO)

    quantity = to_quantity(getattr(item, "quantity", None))
    return finite_or_zero(max((unit_price + options_price) * quantity, ZERO))


@lenient_decimal
def compute_subtotal(items: Iterable[LineItem], fallbacks: Fallbacks = None) -> Decimal:
    lookup = fallbacks or {}
    return finite_or_zero(
        sum((compute_line_total(item, lookup.get(item.product_id)) for item in items or ()), ZERO)
    )


# ================================
# 🎟️ ЗНИЖКА
# ================================
@lenient_decimal
def compute_discount(subtotal: Decimal, coupon: Optional[Coupon]) -> Decimal:
    """Сума знижки купона; завжди в межах [0, subtotal]."""
    base = max(to_decimal(subtotal), ZERO)
    if coupon is None:
        return ZERO

    value = to_decimal(coupon.discount_value)
    if coupon.discount_type == DiscountType.FIXED:
        discount = value
    elif coupon.discount_type == DiscountType.PERCENTAGE:
        discount = percent(base, value)
        cap = to_decimal(coupon.max_discount_amount)
        if cap > ZERO and discount > cap:
            discount = cap
    else:
        # free_shipping впливає на доставку, а не на суму знижки
        discount = ZERO

    return finite_or_zero(clamp(discount, ZERO, base))


# ================================
# 🧾 ПОДАТОК
# ================================
def _resolve_rule(
    fallback: Optional[ProductPriceFallback],
    rules_by_id: Mapping[str, TaxRule],
    default_rule: TaxRule,
) -> Optional[TaxRule]:
    if fallback is None:                                            # 🛒 Немає запису товару → правило за замовчуванням
        return default_rule
    if not fallback.tax_id:                                         # 🚫 Товар без податкового правила
        return None
    return rules_by_id.get(str(fallback.tax_id))                    # 🚫 Невідоме правило → без податку


def _taxable_amounts(
    items: Sequence[LineItem],
    fallbacks: Mapping[str, ProductPriceFallback],
    discount: Decimal,
    tax_base: TaxBase,
) -> Tuple[Decimal, ...]:
    amounts = tuple(compute_line_total(item, fallbacks.get(item.product_id)) for item in items)
    if tax_base != TaxBase.POST_DISCOUNT:
        return amounts
    subtotal = sum(amounts, ZERO)
    if subtotal <= ZERO:
        return amounts
    applied = clamp(to_decimal(discount), ZERO, subtotal)
    share = (subtotal - applied) / subtotal                         # 📉 Знижка пропорційно частці позиції
    return tuple(amount * share for amount in amounts)


@lenient_decimal
def compute_tax(
    items: Iterable[LineItem],
    fallbacks: Fallbacks,
    tax_rules: Iterable[TaxRule],
    destination_country: Optional[str],
    discount: Decimal = ZERO,
    tax_base: TaxBase = TaxBase.PRE_DISCOUNT,
) -> Decimal:
    """
    Податок за ставкою країни призначення (доставки), по кожній позиції.

    Правило для позиції: `tax_id` товару → відповідне правило; товар без
    `tax_id` або з невідомим `tax_id` → 0. Позиція без запису товару →
    правило з `is_default`, інакше перше.
    """
    rules = tuple(tax_rules or ())
    line_items = tuple(items or ())
    if not rules or not line_items:
        return ZERO

    lookup = fallbacks or {}
    rules_by_id = {str(rule.id): rule for rule in rules if rule.id}
    default_rule = next((rule for rule in rules if rule.is_default), rules[0])

    tax = ZERO
    amounts = _taxable_amounts(line_items, lookup, discount, tax_base)
    for item, amount in zip(line_items, amounts):
        rule = _resolve_rule(lookup.get(item.product_id), rules_by_id, default_rule)
        if rule is None:
            continue
        tax += percent(amount, max(rule.rate_for(destination_country), ZERO))
    return finite_or_zero(tax)


# ================================
# 🚚 ДОСТАВКА ТА 💳 КОМІСІЯ ОПЛАТИ
# ================================
@lenient_decimal
def compute_shipping_cost(method: Optional[ShippingMethod], subtotal: Decimal) -> Decimal:
    if method is None:
        return ZERO
    if method.type == ShippingType.FREE_SHIPPING:
        threshold = to_decimal(method.free_shipping_min_order)
        if to_decimal(subtotal) >= threshold:
            return ZERO
    return finite_or_zero(max(to_decimal(method.flat_rate_cost), ZERO))


@lenient_decimal
def compute_payment_fee(method: Optional[PaymentMethod], subtotal: Decimal) -> Decimal:
    """Комісія методу оплати; завжди від subtotal до знижки та податку."""
    if method is None or method.fee_type == FeeType.NONE:
        return ZERO
    amount = to_decimal(method.fee_amount)
    if amount == ZERO:
        return ZERO
    if method.fee_type == FeeType.FIXED:
        fee = amount
    elif method.fee_type == FeeType.PERCENTAGE:
        fee = percent(to_decimal(subtotal), amount)
    else:
        fee = ZERO
    return finite_or_zero(max(fee, ZERO))


# ================================
# 📦 ПІДСУМКИ
# ================================
@lenient_decimal
def compute_totals(
    items: Iterable[LineItem],
    fallbacks: Fallbacks = None,
    coupon: Optional[Coupon] = None,
    tax_rules: Iterable[TaxRule] = (),
    destination_country: Optional[str] = None,
    shipping_method: Optional[ShippingMethod] = None,
    payment_method: Optional[PaymentMethod] = None,
    *,
    tax_base: TaxBase = TaxBase.PRE_DISCOUNT,
    free_shipping_coupon_waives_shipping: bool = True,
) -> OrderTotals:
    """
    Повні підсумки замовлення.

    Порожній кошик дає нульові підсумки незалежно від купона, доставки та оплати.
    """
    line_items = tuple(items or ())
    if not line_items:
        return OrderTotals()

    subtotal = compute_subtotal(line_items, fallbacks)
    discount = compute_discount(subtotal, coupon)
    tax = compute_tax(line_items, fallbacks, tax_rules, destination_country, discount, tax_base)

    shipping_cost = compute_shipping_cost(shipping_method, subtotal)
    if (
        free_shipping_coupon_waives_shipping
        and coupon is not None
        and coupon.discount_type == DiscountType.FREE_SHIPPING
    ):
        shipping_cost = ZERO

    payment_fee = compute_payment_fee(payment_method, subtotal)
    total = subtotal - discount + shipping_cost + payment_fee + tax

    return OrderTotals(
        subtotal=finite_or_zero(subtotal),
        discount=finite_or_zero(discount),
        tax=finite_or_zero(tax),
        shipping_cost=finite_or_zero(shipping_cost),
        payment_fee=finite_or_zero(payment_fee),
        total=finite_or_zero(total),
    )


__all__ = [
    "compute_line_total",
    "compute_subtotal",
    "compute_discount",
    "compute_tax",
    "compute_shipping_cost",
    "compute_payment_fee",
    "compute_totals",
]
