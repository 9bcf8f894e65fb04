# 🧊 storefront/shared/utils/immutables.py
"""
🧊 Заморожування структур даних для знімків розрахунку.

🔹 Словники → `MappingProxyType`, списки/кортежі → `tuple`, множини → `frozenset`.
🔹 Використовується для read-only представлення `OrderTotals` та сирих payload-ів кошика.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping                      # 🧰 Перевірка словникових типів
from decimal import Decimal                              # 💵 Грошові значення лишаються як є
from enum import Enum                                    # 🏷️ Перерахування
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any

FrozenMapping = MappingProxyType


def freeze(obj: Any) -> Any:
    """Рекурсивно перетворює колекції на незмінні аналоги."""
    if obj is None or isinstance(obj, (str, bytes, int, float, bool, Decimal, Enum)):
        return obj
    if isinstance(obj, Mapping):
        return MappingProxyType({key: freeze(value) for key, value in obj.items()})
    if isinstance(obj, (set, frozenset)):
        return frozenset(freeze(value) for value in obj)
    if isinstance(obj, (list, tuple)):
        return tuple(freeze(value) for value in obj)
    return obj


def is_frozen_mapping(obj: Any) -> bool:
    """Перевіряє, чи є обʼєкт замороженою мапою (`freeze(dict)`)."""
    return isinstance(obj, MappingProxyType)


__all__ = ["FrozenMapping", "freeze", "is_frozen_mapping"]
