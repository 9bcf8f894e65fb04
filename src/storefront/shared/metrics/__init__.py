# 📊 storefront/shared/metrics/__init__.py
"""
📊 Prometheus-метрики рушія ціноутворення.

🔹 `pricing.py` — лічильники розрахунків, перевірок купонів і гістограма латентності.
"""

from __future__ import annotations

from .pricing import COUPON_CHECKS, PRICING_QUOTE_LATENCY, PRICING_QUOTES

__all__ = [
    "PRICING_QUOTES",
    "PRICING_QUOTE_LATENCY",
    "COUPON_CHECKS",
]
