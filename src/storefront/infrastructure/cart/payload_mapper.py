# 🧾 storefront/infrastructure/cart/payload_mapper.py
"""
🧾 Межа сховища кошика: сирі JSON-подібні payload-и → незмінні DTO.

🔹 Приймає ключі у snake_case та camelCase (`unit_price` / `unitPrice` / `price`).
🔹 Числа нормалізуються тими ж правилами, що й у рушії (некоректні → 0, кількість → 1).
🔹 Структурні помилки (не словник, items не список, невідомий тип знижки) → `CartPayloadError`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

# 🧩 Внутрішні модулі проєкту
from storefront.domain.coupons.interfaces import Coupon, DiscountType
from storefront.domain.pricing.interfaces import (
    CartSnapshot,
    CountryRate,
    FeeType,
    LineItem,
    PaymentMethod,
    ProductPriceFallback,
    SelectedOption,
    ShippingMethod,
    ShippingType,
    TaxRule,
)
from storefront.domain.pricing.rounding import ZERO, to_decimal, to_quantity
from storefront.errors.custom_errors import CartPayloadError
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.cart")

E = TypeVar("E")


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _camel(key: str) -> str:
    head, *tail = key.split("_")
    return head + "".join(part.title() for part in tail)


def _get(payload: Mapping, *keys: str, default: Any = None) -> Any:
    """Перше непорожнє значення серед ключів (snake_case та camelCase варіанти)."""
    for key in keys:
        for variant in (key, _camel(key)):
            if variant in payload and payload[variant] is not None:
                return payload[variant]
    return default


def _require_mapping(payload: Any, what: str) -> Mapping:
    if not isinstance(payload, Mapping):
        raise CartPayloadError(
            f"Expected an object for {what}",
            details=f"got {type(payload).__name__}",
            field=what,
        )
    return payload


def _as_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    raise CartPayloadError(
        f"Expected a list for {what}",
        details=f"got {type(value).__name__}",
        field=what,
    )


def _id_set(value: Any) -> frozenset:
    """Список ідентифікаторів → frozenset рядків; інші форми ігноруються."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return frozenset(str(v) for v in value if v is not None and str(v))
    return frozenset()


def _enum(enum_cls: Type[E], raw: Any, field: str, default: Optional[E] = None) -> E:
    if raw is None or raw == "":
        if default is not None:
            return default
        raise CartPayloadError(f"Missing {field}", field=field)
    try:
        return enum_cls(str(raw).strip().lower())               # type: ignore[call-arg]
    except ValueError:
        raise CartPayloadError(f"Unknown {field}: {raw!r}", field=field) from None


def _parse_datetime(raw: Any, field: str) -> Optional[datetime]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise CartPayloadError(f"Invalid date for {field}: {raw!r}", field=field) from None


def _optional_int(raw: Any) -> Optional[int]:
    value = to_decimal(raw)
    return int(value) if value > ZERO else None


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _flag(raw: Any, default: bool) -> bool:
    """Прапорець із payload-у: bool, 0/1 або рядки true/false/yes/no; решта → `default`."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0 if raw in (0, 1) else default
    lowered = str(raw).strip().lower() if raw is not None else ""
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


# ================================
# 🛒 КОШИК
# ================================
def line_item_from_payload(payload: Any) -> LineItem:
    """Позиція кошика. `product_id` обовʼязковий; решта нормалізується."""
    data = _require_mapping(payload, "item")
    product_id = _get(data, "product_id")
    if product_id is None or str(product_id).strip() == "":
        raise CartPayloadError("Cart item has no product_id", field="product_id")

    raw_options = _get(data, "selected_options", default=())
    options: Tuple[SelectedOption, ...] = ()
    if isinstance(raw_options, (list, tuple)):
        options = tuple(
            SelectedOption(name=str(_get(opt, "name", default="")), price=to_decimal(_get(opt, "price")))
            for opt in raw_options
            if isinstance(opt, Mapping)
        )
    else:
        logger.debug("🧹 selected_options is not a list, ignoring | product_id=%s", product_id)

    return LineItem(
        product_id=str(product_id),
        quantity=to_quantity(_get(data, "quantity")),
        unit_price=to_decimal(_get(data, "unit_price", "price")),
        selected_options=options,
    )


def fallback_from_payload(payload: Any) -> ProductPriceFallback:
    """Каталожна ціна товару: `sale_price`, якщо він додатний, інакше `price`."""
    data = _require_mapping(payload, "product")
    sale_price = to_decimal(_get(data, "sale_price"))
    price = sale_price if sale_price > ZERO else to_decimal(_get(data, "price"))
    compare_raw = _get(data, "compare_price")
    tax_id = _get(data, "tax_id")
    return ProductPriceFallback(
        price=price,
        compare_price=to_decimal(compare_raw) if compare_raw is not None else None,
        tax_id=str(tax_id) if tax_id not in (None, "") else None,
        category_ids=_id_set(_get(data, "category_ids")),
    )


# ================================
# 🎟️ КУПОН
# ================================
def coupon_from_payload(payload: Any) -> Coupon:
    data = _require_mapping(payload, "coupon")
    max_discount = _get(data, "max_discount_amount")
    min_purchase = _get(data, "min_purchase_amount")
    return Coupon(
        discount_type=_enum(DiscountType, _get(data, "discount_type"), "discount_type", DiscountType.FIXED),
        discount_value=to_decimal(_get(data, "discount_value")),
        max_discount_amount=to_decimal(max_discount) if max_discount is not None else None,
        min_purchase_amount=to_decimal(min_purchase) if min_purchase is not None else None,
        applicable_product_ids=_id_set(_get(data, "applicable_products", "applicable_product_ids")),
        applicable_category_ids=_id_set(_get(data, "applicable_categories", "applicable_category_ids")),
        start_date=_parse_datetime(_get(data, "start_date"), "start_date"),
        end_date=_parse_datetime(_get(data, "end_date"), "end_date"),
        usage_limit=_optional_int(_get(data, "usage_limit")),
        usage_count=int(max(to_decimal(_get(data, "usage_count")), ZERO)),
        code=str(_get(data, "code", default="")),
        name=str(_get(data, "name", default="")),
        is_active=_flag(_get(data, "is_active"), True),
    )


# ================================
# 🧾 ПОДАТКИ, 🚚 ДОСТАВКА, 💳 ОПЛАТА
# ================================
def tax_rule_from_payload(payload: Any) -> TaxRule:
    data = _require_mapping(payload, "tax_rule")
    rates = tuple(
        CountryRate(country=str(_get(entry, "country", default="")), rate=to_decimal(_get(entry, "rate")))
        for entry in _as_list(_get(data, "country_rates"), "country_rates")
        if isinstance(entry, Mapping)
    )
    rule_id = _get(data, "id")
    return TaxRule(
        country_rates=rates,
        id=str(rule_id) if rule_id not in (None, "") else None,
        name=str(_get(data, "name", default="")),
        is_default=_flag(_get(data, "is_default"), False),
    )


def shipping_method_from_payload(payload: Any) -> ShippingMethod:
    data = _require_mapping(payload, "shipping_method")
    return ShippingMethod(
        type=_enum(ShippingType, _get(data, "type"), "shipping type"),
        flat_rate_cost=to_decimal(_get(data, "flat_rate_cost")),
        free_shipping_min_order=to_decimal(_get(data, "free_shipping_min_order")),
        name=str(_get(data, "name", default="")),
    )


def payment_method_from_payload(payload: Any) -> PaymentMethod:
    data = _require_mapping(payload, "payment_method")
    return PaymentMethod(
        fee_type=_enum(FeeType, _get(data, "fee_type"), "fee_type", FeeType.NONE),
        fee_amount=to_decimal(_get(data, "fee_amount")),
        code=str(_get(data, "code", default="")),
        name=str(_get(data, "name", default="")),
    )


# ================================
# 📦 ЗНІМОК КОШИКА
# ================================
def _collect_fallbacks(raw_items: Iterable[Any], products: Any) -> Dict[str, ProductPriceFallback]:
    """Резервні ціни з мапи `products` та з вкладених `item.product`."""
    fallbacks: Dict[str, ProductPriceFallback] = {}
    if products is not None:
        for product_id, product in _require_mapping(products, "products").items():
            fallbacks[str(product_id)] = fallback_from_payload(product)
    for raw in raw_items:
        embedded = _get(raw, "product") if isinstance(raw, Mapping) else None
        product_id = _get(raw, "product_id") if isinstance(raw, Mapping) else None
        if embedded is not None and product_id is not None:
            fallbacks.setdefault(str(product_id), fallback_from_payload(embedded))
    return fallbacks


def _destination_country(data: Mapping) -> Optional[str]:
    country = _get(data, "destination_country", "country")
    if country is None:
        address = _get(data, "shipping_address")
        if isinstance(address, Mapping):
            country = _get(address, "country")
    return str(country).strip().upper() if country else None


def snapshot_from_payload(payload: Any) -> CartSnapshot:
    """
    Повний знімок кошика для `PricingService.quote()`.

    Args:
        payload: Словник з `items`, опційно `products`, `coupon`, `tax_rules`
            (або `taxes`), `destination_country` / `shipping_address.country`,
            `shipping_method`, `payment_method`.

    Raises:
        CartPayloadError: Якщо структура payload-у некоректна.
    """
    data = _require_mapping(payload, "cart")
    raw_items = _as_list(_get(data, "items"), "items")
    items = tuple(line_item_from_payload(raw) for raw in raw_items)

    coupon_raw = _get(data, "coupon")
    shipping_raw = _get(data, "shipping_method")
    payment_raw = _get(data, "payment_method")

    snapshot = CartSnapshot(
        items=items,
        fallbacks=_collect_fallbacks(raw_items, _get(data, "products")),
        coupon=coupon_from_payload(coupon_raw) if coupon_raw is not None else None,
        tax_rules=tuple(
            tax_rule_from_payload(rule) for rule in _as_list(_get(data, "tax_rules", "taxes"), "tax_rules")
        ),
        destination_country=_destination_country(data),
        shipping_method=shipping_method_from_payload(shipping_raw) if shipping_raw is not None else None,
        payment_method=payment_method_from_payload(payment_raw) if payment_raw is not None else None,
    )
    logger.debug(
        "🧾 Cart payload mapped | items=%s products=%s coupon=%s country=%s",
        len(snapshot.items),
        len(snapshot.fallbacks),
        snapshot.coupon.code if snapshot.coupon else "-",
        snapshot.destination_country or "-",
    )
    return snapshot


__all__ = [
    "line_item_from_payload",
    "fallback_from_payload",
    "coupon_from_payload",
    "tax_rule_from_payload",
    "shipping_method_from_payload",
    "payment_method_from_payload",
    "snapshot_from_payload",
]
