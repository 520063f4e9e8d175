"""Opt-in structlog output for the ``csp_builder`` logger tree.

The package only ever calls ``structlog.get_logger()``. Applications that
already configure structlog get its events through their own setup and can
ignore this module. ``setup_logging`` is for everyone else: it attaches one
handler to the ``csp_builder`` stdlib logger and never touches the root
logger or handlers that belong to the host application.
"""

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "csp_builder"

# Marks the handler installed here, so repeated setup replaces only it
_HANDLER_ATTR = "_csp_builder_handler"


def _rename_logger_to_module(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    """Rename 'logger' key to 'module' for structured log field consistency."""
    if "logger" in event_dict:
        event_dict["module"] = event_dict.pop("logger")
    return event_dict


def _renderer(json_format: bool) -> structlog.types.Processor:
    if json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route csp_builder events to ``stream`` (stdout by default).

    ``log_level`` and ``json_format`` default to CspSettings.log_level and
    CspSettings.log_json. Returns the configured ``csp_builder`` logger.
    """
    if log_level is None or json_format is None:
        from csp_builder.config.loader import get_settings

        settings = get_settings()
        log_level = settings.log_level if log_level is None else log_level
        json_format = settings.log_json if json_format is None else json_format

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _rename_logger_to_module,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Module-level proxies must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_format),
            ],
        )
    )
    setattr(handler, _HANDLER_ATTR, True)

    package_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if getattr(existing, _HANDLER_ATTR, False):
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    package_logger.propagate = False
    return package_logger
