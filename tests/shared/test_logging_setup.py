"""
🧪 test_logging_setup.py — unit-тести для init_logging

Перевіряє:
- Створення консольного та файлового хендлерів
- Уникнення дублювання хендлерів при повторній ініціалізації
- JSON-формат файлового логу з extra-полями
"""

import json
import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from storefront.shared.utils.logger import (
    LOG_NAME,
    JsonFormatter,
    get_logger,
    init_logging,
    init_logging_from_config,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    init_logging(console=False, file=None)


def test_handlers_created(tmp_path):
    logger = init_logging(level="DEBUG", file=str(tmp_path / "logs" / "pricing.log"))

    assert logger.name == LOG_NAME
    assert logger.level == logging.DEBUG
    handler_types = {type(h) for h in logger.handlers}
    assert logging.StreamHandler in handler_types
    assert TimedRotatingFileHandler in handler_types
    assert (tmp_path / "logs").is_dir()


def test_handlers_not_duplicated(tmp_path):
    init_logging(file=str(tmp_path / "a.log"))
    count_before = len(logging.getLogger(LOG_NAME).handlers)

    init_logging(file=str(tmp_path / "a.log"))
    assert len(logging.getLogger(LOG_NAME).handlers) == count_before


def test_file_can_be_disabled():
    logger = init_logging(console=False, file=None)
    assert logger.handlers == []


def test_json_file_output(tmp_path):
    log_file = tmp_path / "pricing.log"
    init_logging(console=False, json_mode=True, file=str(log_file), level="INFO")

    get_logger("domain.pricing").info("quote done", extra={"total": "52.50", "cart": "filled"})
    for handler in logging.getLogger(LOG_NAME).handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    record = lines[-1]
    assert record["message"] == "quote done"
    assert record["name"] == f"{LOG_NAME}.domain.pricing"
    assert record["total"] == "52.50"
    assert record["cart"] == "filled"


def test_json_formatter_stringifies_unknown_types():
    from decimal import Decimal

    record = logging.LogRecord(LOG_NAME, logging.INFO, __file__, 1, "x", None, None)
    record.amount = Decimal("1.50")
    assert json.loads(JsonFormatter().format(record))["amount"] == "1.50"


def test_init_from_config(tmp_path):
    logger = init_logging_from_config(
        {"level": "WARNING", "console": False, "file": str(tmp_path / "c.log"), "suppress": {"urllib3": "ERROR"}}
    )
    assert logger.level == logging.WARNING
    assert logging.getLogger("urllib3").level == logging.ERROR


def test_get_logger_prefix():
    assert get_logger().name == LOG_NAME
    assert get_logger("config").name == f"{LOG_NAME}.config"
