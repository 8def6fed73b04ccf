"""
Structured logging configuration.

Use `get_logger` from this module, not print() or logging.getLogger().
"""
from typing import Any, Optional
import structlog
from abstract_repository.config.settings import Settings, get_settings


def app_name_processor(app_name: str):
    """
    Create a structlog processor that stamps the application name on events.

    Args:
        app_name: Value for the ``app`` key (settings.app_name)

    Returns:
        Processor adding ``app`` unless the event already carries one
    """
    def processor(logger_obj: Any, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return processor


def console_renderer_with_colors():
    """
    Create a console renderer with colors for development.

    Returns:
        Configured ConsoleRenderer instance
    """
    return structlog.dev.ConsoleRenderer(
        colors=True,
        pad_event=25,
        exception_formatter=structlog.dev.plain_traceback,
    )


def json_renderer():
    """
    Create a JSON renderer for production.

    Returns:
        Configured JSONRenderer instance
    """
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structured logging.

    This sets up the logging system with:
    - Context variable merging (bind_contextvars works across calls)
    - Application name (settings.app_name) as ``app``
    - Log level and ISO timestamp on every event
    - Exception formatting
    - JSON formatting for production or colored console for development
    - Level filtering from settings.log_level

    Args:
        settings: Settings to use (defaults to get_settings())
    """
    settings = settings or get_settings()

    if settings.log_format == "json":
        renderer = json_renderer()
    else:
        renderer = console_renderer_with_colors()

    processors = [
        structlog.contextvars.merge_contextvars,
        app_name_processor(settings.app_name),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger instance with structured logging support.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        BoundLogger instance with all configured processors

    Usage:
        >>> from abstract_repository.infrastructure.observability.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("record created", model="Product", id=42)
    """
    return structlog.get_logger(name)
