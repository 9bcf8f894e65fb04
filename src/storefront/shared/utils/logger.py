# 📜 storefront/shared/utils/logger.py
"""
📜 Єдина схема логування для рушія ціноутворення.

🔹 Ініціалізує кореневий логер `storefront_pricing` із консоллю та файловим виводом.
🔹 Підтримує JSON-формат для файлу та приглушення сторонніх бібліотек.
🔹 Надає `get_logger()` для дочірніх логерів через загальний префікс.
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json                                                   # 📦 Серіалізація payload логів
import logging                                                # 🪵 Робота з логерами Python
import sys                                                    # 🧵 Потік stdout
import threading                                              # 🧵 Захист ініціалізації
from dataclasses import dataclass, field                      # 🧱 DTO-конфіг логування
from logging.handlers import TimedRotatingFileHandler         # 📁 Хендлер з ротацією файлів
from pathlib import Path                                      # 📂 Шляхи до лог-файлів
from typing import Any, Dict, Optional, Union                 # 🧰 Типи для конфігів

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "storefront_pricing"                          # 🏷️ Базовий префікс логерів
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"
CONSOLE_FORMAT: str = "[%(levelname).1s] %(message)s"
DEFAULT_LOG_FILE: str = "logs/pricing.log"

# Стандартні атрибути LogRecord, які не потрапляють у JSON як extra
_RESERVED_ATTRS = frozenset(
    {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "levelno", "lineno", "module", "msecs", "message", "msg", "name",
        "pathname", "process", "processName", "relativeCreated", "stack_info",
        "thread", "threadName", "levelname", "funcName", "taskName",
    }
)

_lock = threading.Lock()                                      # 🔒 Блокуємо одночасну ініціалізацію


# ================================
# 🧾 DTO КОНФІГУРАЦІЇ
# ================================
@dataclass
class LoggingConfig:
    """Контейнер налаштувань логування з дефолтними значеннями."""
    level: str = "INFO"
    console: bool = True
    json: bool = False
    file: Optional[str] = DEFAULT_LOG_FILE                    # 📁 None → без файлового виводу
    when: str = "midnight"
    interval: int = 1
    backup_count: int = 7
    encoding: str = "utf-8"
    suppress: Dict[str, str] = field(default_factory=dict)    # 🙊 Сторонні логери та їх рівні
    console_level: str = "INFO"
    file_level: str = "DEBUG"
    console_format: str = CONSOLE_FORMAT
    file_format: str = PLAIN_FORMAT


# ================================
# 🧰 ФОРМАТТЕРИ
# ================================
class JsonFormatter(logging.Formatter):
    """Форматує записи логів у плоский JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "func": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():            # 🔎 Додаємо custom extra-поля
            if key.startswith("_") or key in _RESERVED_ATTRS or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):                   # ⚠️ Decimal, dataclass тощо
                payload[key] = str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_level(value: Union[str, int, None], default: int) -> int:
    """Перетворює рядок/інт у числовий рівень логування."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


def _make_console_handler(fmt: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(fmt)
    return handler


def _make_file_handler(cfg: LoggingConfig, fmt: logging.Formatter) -> logging.Handler:
    """Готує файловий хендлер із ротацією за часом."""
    log_path = Path(str(cfg.file))
    log_path.parent.mkdir(parents=True, exist_ok=True)        # 🧱 Гарантуємо існування директорії
    handler = TimedRotatingFileHandler(
        filename=str(log_path),
        when=cfg.when,
        interval=cfg.interval,
        backupCount=cfg.backup_count,
        encoding=cfg.encoding,
    )
    handler.setFormatter(fmt)
    return handler


def _suppress_third_party(suppress: Dict[str, str]) -> None:
    """Знижує рівні логування для сторонніх бібліотек."""
    for name, level in (suppress or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def init_logging(
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    json_mode: Optional[bool] = None,
    file: Optional[str] = DEFAULT_LOG_FILE,
    suppress: Optional[Dict[str, str]] = None,
    console_level: Optional[Union[str, int]] = None,
    file_level: Optional[Union[str, int]] = None,
) -> logging.Logger:
    """Ініціалізує кореневий логер застосунку. Повторний виклик замінює наші хендлери."""
    with _lock:
        cfg = LoggingConfig(
            level=level or "INFO",
            console=True if console is None else bool(console),
            json=False if json_mode is None else bool(json_mode),
            file=file,
            suppress=suppress or {},
            console_level=str(console_level or level or "INFO"),
            file_level=str(file_level or level or "INFO"),
        )

        root_logger = logging.getLogger(LOG_NAME)
        root_logger.setLevel(
            min(
                _to_level(cfg.level, logging.INFO),
                _to_level(cfg.console_level, logging.INFO),
                _to_level(cfg.file_level, logging.INFO),
            )
        )

        for handler in list(root_logger.handlers):            # 🧹 Прибираємо попередні хендлери
            if isinstance(handler, (logging.StreamHandler, TimedRotatingFileHandler)):
                root_logger.removeHandler(handler)
                handler.close()

        if cfg.console:
            console_handler = _make_console_handler(logging.Formatter(cfg.console_format))
            console_handler.setLevel(_to_level(cfg.console_level, logging.INFO))
            root_logger.addHandler(console_handler)

        if cfg.file:
            fmt_file = JsonFormatter() if cfg.json else logging.Formatter(cfg.file_format)
            file_handler = _make_file_handler(cfg, fmt_file)
            file_handler.setLevel(_to_level(cfg.file_level, logging.DEBUG))
            root_logger.addHandler(file_handler)

        _suppress_third_party(cfg.suppress)

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            cfg.level.upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file or "-",
        )
        return root_logger


def init_logging_from_config(config: Optional[Dict[str, Any]]) -> logging.Logger:
    """
    Ініціалізує логування на базі розділу `logging` з ConfigService.

    Args:
        config: Словник налаштувань (може бути None).

    Returns:
        logging.Logger: Кореневий логер `storefront_pricing`.
    """
    node = config or {}
    return init_logging(
        level=node.get("level"),
        console=node.get("console"),
        json_mode=node.get("json"),
        file=node.get("file", DEFAULT_LOG_FILE),
        suppress=node.get("suppress"),
        console_level=node.get("console_level"),
        file_level=node.get("file_level"),
    )


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Повертає дочірній логер із префіксом `LOG_NAME`."""
    logger_name = LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}"
    return logging.getLogger(logger_name)
