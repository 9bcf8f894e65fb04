# 📈 storefront/shared/metrics/pricing.py
"""
📈 Prometheus-метрики для розрахунку замовлень.

🔹 `PRICING_QUOTES` — кількість розрахунків підсумків (з міткою `cart`: empty / filled).
🔹 `PRICING_QUOTE_LATENCY` — час одного розрахунку `PricingService.quote()`.
🔹 `COUPON_CHECKS` — перевірки купонів з міткою `result` (valid або код причини відмови).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram                      # 📊 Prometheus-метрики

# ================================
# 📊 ЛІЧИЛЬНИКИ
# ================================
PRICING_QUOTES = Counter(
    "pricing_quotes_total",
    "Order totals computed by the pricing service",
    ["cart"],
)

COUPON_CHECKS = Counter(
    "coupon_checks_total",
    "Coupon applicability checks grouped by outcome",
    ["result"],
)

# ================================
# ⏱️ ГІСТОГРАМА ЛАТЕНТНОСТІ
# ================================
PRICING_QUOTE_LATENCY = Histogram(
    "pricing_quote_seconds",
    "Time to compute order totals",
)


__all__ = [
    "PRICING_QUOTES",
    "COUPON_CHECKS",
    "PRICING_QUOTE_LATENCY",
]
