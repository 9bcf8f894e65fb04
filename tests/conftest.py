# tests/conftest.py
import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

# 1) Гасимо автопідхоплення сторонніх плагінів
os.environ.setdefault("PYTEST_DISABLE_PLUGIN_AUTOLOAD", "1")

# 2) Додаємо src у sys.path, щоб працював імпорт "storefront.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from storefront.domain.pricing import LineItem  # noqa: E402


@pytest.fixture
def two_tens():
    """Кошик зі сценаріїв: одна позиція 10 × 2."""
    return (LineItem(product_id="p1", unit_price=Decimal("10"), quantity=2),)
