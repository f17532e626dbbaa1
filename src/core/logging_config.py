"""
Настройка логирования для калькуляторов.

Используется structlog (структурированные события поверх stdlib logging):
- JSON-формат для production
- Человекочитаемый формат для разработки

Логирование только диагностическое: результаты вычислений от него не зависят.
Калькуляторы пишут события уровня DEBUG, поэтому при уровне INFO по умолчанию
вычисления ничего не выводят.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import EventDict


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Уровень события в поле level (warn → WARNING).
    """
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    stream: TextIO | None = None,
) -> None:
    """
    Настройка структурированного логирования движка.

    Args:
        log_level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON renderer (True) или ConsoleRenderer (False)
        stream: Поток вывода (по умолчанию sys.stdout)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)

    logging.basicConfig(
        format="%(message)s",
        handlers=[handler],
        level=numeric_level,
        force=True,
    )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Структурированный логгер.

    Args:
        name: Имя логгера (обычно __name__)

    Returns:
        structlog.stdlib.BoundLogger: Настроенный логгер

    Пример:
        logger = get_logger(__name__)
        logger.debug("calculation_completed", calculator="roi")
    """
    return structlog.get_logger(name)
