# 💸 storefront/domain/pricing/__init__.py
"""
💸 Пакет `domain.pricing` публікує DTO, чисті функції розрахунку та сервіс.

🔹 `interfaces.py` — LineItem, ProductPriceFallback, TaxRule, ShippingMethod, PaymentMethod, OrderTotals, CartSnapshot.
🔹 `rounding.py` — безпечний парсинг Decimal, `q2` і `percent`.
🔹 `calculator.py` — `compute_*` функції (без стану та I/O).
🔹 `services.py` — `PricingService` + `PricingConfig`.
"""

# 🧩 Внутрішні модулі проєкту
from .interfaces import (
    CartSnapshot,
    CountryRate,
    FeeType,
    IPricingService,
    LineItem,
    OrderTotals,
    PaymentMethod,
    ProductPriceFallback,
    SelectedOption,
    ShippingMethod,
    ShippingType,
    TaxBase,
    TaxRule,
)
from .rounding import percent, q2, to_decimal, to_quantity
from .calculator import (
    compute_discount,
    compute_line_total,
    compute_payment_fee,
    compute_shipping_cost,
    compute_subtotal,
    compute_tax,
    compute_totals,
)
from .services import PricingConfig, PricingService


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    # DTO / типи
    "CartSnapshot",
    "CountryRate",
    "FeeType",
    "LineItem",
    "OrderTotals",
    "PaymentMethod",
    "ProductPriceFallback",
    "SelectedOption",
    "ShippingMethod",
    "ShippingType",
    "TaxBase",
    "TaxRule",
    # Контракти
    "IPricingService",
    # Чисті функції
    "compute_line_total",
    "compute_subtotal",
    "compute_discount",
    "compute_tax",
    "compute_shipping_cost",
    "compute_payment_fee",
    "compute_totals",
    # Сервіс
    "PricingConfig",
    "PricingService",
    # Утиліти
    "percent",
    "q2",
    "to_decimal",
    "to_quantity",
]
