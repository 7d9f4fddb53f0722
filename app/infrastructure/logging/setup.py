"""Structlog setup for the translation engine.

Every engine component logs through ``get_module_logger()``. Events are
snake_case names carrying key/value context such as ``locale``, ``key`` and
``fallback_locale``.

Output is rendered for the console in development and as JSON lines in
production. Under pytest the same chain runs but nothing is emitted.
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.configuration import settings

SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _build_processors(json_output: bool) -> List[Processor]:
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog on top of the standard library root logger.

    Args:
        log_level: Level name overriding ``settings.LOG_LEVEL``.
        is_production: Overrides ``settings.is_production``; selects JSON
            output when true.

    Returns:
        The root bound logger.
    """
    if _is_test_environment():
        level = SILENT_LEVEL
        json_output = True
    else:
        level_name = (log_level or settings.LOG_LEVEL).upper()
        level = getattr(logging, level_name, logging.INFO)
        json_output = settings.is_production if is_production is None else is_production

    structlog.configure(
        processors=_build_processors(json_output),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=True)

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger(name: Optional[str] = None) -> BoundLogger:
    """Return a logger bound to a module's ``component`` and ``module_path``.

    Args:
        name: Dotted module name. Defaults to the calling module.

    Example:
        # In infrastructure/i18n/loader.py
        logger = get_module_logger()
        # context: {"component": "loader", "module_path": "infrastructure.i18n.loader"}
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        module = inspect.getmodule(caller) if caller is not None else None
        name = module.__name__ if module is not None else "unknown"

    return logger.bind(component=name.rsplit(".", 1)[-1], module_path=name)
