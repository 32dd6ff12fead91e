"""Logging and observability configuration using Pydantic Logfire.

Stores log through logging.getLogger(__name__). configure_logfire() attaches a
Logfire handler to the root logger so those records become Logfire logs.

Standard usage:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Message", extra={"key": "value"})

Structured logging utilities:
    log_with_context(logger, "info", "Task completed", task_id="abc", points=10)
"""

import logging

import logfire

from palplanner.core.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Pydantic Logfire and route standard logging records through it.

    Nothing is sent to Logfire unless a token is configured.
    """
    logfire.configure(
        token=settings.logfire_token,
        service_name="palplanner",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire="if-token-present",
        console=False,
    )
    logging.basicConfig(handlers=[logfire.LogfireLoggingHandler()], level=logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("Logfire configured successfully")


def span(name: str) -> logfire.LogfireSpan:
    """Create a custom span for store operations.

    Usage:
        with span("task_store.complete_task"):
            # store logic here
            pass
    """
    return logfire.span(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: object,
) -> None:
    """Log `message` at `level` with `context` attached as record extras.

    Store code passes ids and amounts here (task_id, item_id, balance) instead of
    formatting them into the message.
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra=context)
