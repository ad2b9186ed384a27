"""
Structured Logging Configuration

JSON (или текстовый) вывод логов для ядра и интерактивного калькулятора.
Модули пишут в logging.getLogger(__name__); корневой логгер проекта — "src".
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

DEFAULT_LOGGER_NAME = "src"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON formatter для структурированных логов"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "token": getattr(record, "token", None),
            "line": getattr(record, "line", None),
        }

        # Убираем пустые поля
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str = "WARNING",
    logger_name: str = DEFAULT_LOGGER_NAME,
    log_format: str = "json",
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Настройка логгера проекта.

    Args:
        level: Уровень (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Имя логгера (дочерние модульные логгеры наследуют обработчик)
        log_format: "json" или "text"
        stream: Поток вывода (default: sys.stderr)

    Returns:
        Настроенный логгер
    """
    logger = logging.getLogger(logger_name)

    # Повторный вызов не должен дублировать обработчики
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Получить логгер"""
    return logging.getLogger(name)
