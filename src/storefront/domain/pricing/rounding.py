# ➗ storefront/domain/pricing/rounding.py
"""
➗ Decimal-утиліти рушія: безпечний парсинг, відсотки та округлення.

🔹 `to_decimal`: будь-що → скінченний `Decimal` (NaN, Infinity, None, "abc" → 0).
🔹 `to_quantity`: кількість у кошику, ціле число ≥ 1 (дробова частина відкидається).
🔹 `percent`: частка від суми; `q2`: округлення до центів (ROUND_HALF_UP).
🔹 `lenient_decimal`: переповнення та некоректні операції дають Infinity/NaN замість винятку.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from contextlib import contextmanager
from decimal import (                                       # 💵 Точні гроші (без float)
    ROUND_DOWN,
    ROUND_HALF_UP,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from functools import wraps
from typing import Any, Callable, Iterator, TypeVar

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.numbers import ZERO, to_decimal

ONE = Decimal("1")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

F = TypeVar("F", bound=Callable[..., Any])


# ================================
# 🛡️ КОНТЕКСТ БЕЗ ВИНЯТКІВ
# ================================
@contextmanager
def lenient_context() -> Iterator[Any]:
    """Локальний decimal-контекст, у якому Overflow / InvalidOperation не кидають винятків."""
    with localcontext() as ctx:
        ctx.traps[Overflow] = False
        ctx.traps[InvalidOperation] = False
        ctx.traps[DivisionByZero] = False
        yield ctx


def lenient_decimal(func: F) -> F:
    """Декоратор: виконує функцію в `lenient_context()`."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with lenient_context():
            return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# ================================
# 🔢 ПЕРЕТВОРЕННЯ
# ================================
def finite_or_zero(value: Any) -> Decimal:
    """Гарантує скінченне значення на виході рушія."""
    return value if isinstance(value, Decimal) and value.is_finite() else ZERO


def to_quantity(value: Any) -> Decimal:
    """Кількість позиції: ціла частина; відсутня, нечислова або < 1 → 1."""
    quantity = to_decimal(value).to_integral_value(rounding=ROUND_DOWN)
    return quantity if quantity >= ONE else ONE


def percent(amount: Decimal, rate: Decimal) -> Decimal:
    """`amount × rate / 100`; переповнення → 0."""
    with lenient_context():
        return finite_or_zero(amount * rate / HUNDRED)


def q2(value: Any) -> Decimal:
    """
    Округлює до 2 знаків (центи) за правилом ROUND_HALF_UP.

    Значення, для яких центів не вистачає точності контексту, повертаються як є.
    """
    amount = to_decimal(value)
    with lenient_context():
        rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    return rounded if rounded.is_finite() else amount


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(value, high))


__all__ = [
    "ZERO",
    "ONE",
    "HUNDRED",
    "to_decimal",
    "finite_or_zero",
    "to_quantity",
    "percent",
    "q2",
    "clamp",
    "lenient_context",
    "lenient_decimal",
]
