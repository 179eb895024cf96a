"""
Structured Logger Module

Configures structlog for JSON-formatted structured logging with correlation IDs.
All discovery operations use this logger so a single request can be traced
across the filter, scoring and ranking stages.

Example Usage:
    from advisor_discovery.utils.logger import get_logger

    logger = get_logger(
        correlation_id="a1b2c3d4-e5f6-7890-abcd-ef1234567890",
        phase="search",
        component="text_relevance",
    )

    logger.info("Search completed", candidates=120, matches=14)
    logger.debug("Scored candidate", advisor_id="adv-1", score=60)

Log Levels:
    - DEBUG: Per-stage candidate counts
    - INFO: Request summaries, catalog loads
    - WARNING: Skipped or unresolvable catalog records
    - ERROR: Catalog or configuration failures
"""

import hashlib
import logging
import sys
import uuid
from pathlib import Path
from typing import Optional

import structlog
from structlog.types import BindableLogger, EventDict, WrappedLogger

MASKED_FIELDS = {"user_id", "userid", "user"}


def mask_user_identifiers(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Processor to pseudonymize user identifiers in log output.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with user identifiers replaced by a short digest

    Masks:
        - user_id, userId and user fields (case-insensitive)
        - Replaces values with "user:<first 12 hex chars of sha256>"
        - None values are left as-is (anonymous callers)
    """
    for key in list(event_dict.keys()):
        if key.lower() not in MASKED_FIELDS:
            continue
        value = event_dict[key]
        if value is None:
            continue
        digest = hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:12]
        event_dict[key] = f"user:{digest}"

    return event_dict


def configure_logging(
    log_file: Optional[str] = None, log_level: str = "INFO"
) -> None:
    """
    Configure structlog with JSON output and optional file logging.

    Args:
        log_file: Path to log file (default: None, stdout only)
        log_level: Logging level (default: "INFO")

    Log Format (JSON):
        {
            "timestamp": "2024-10-06T10:30:45Z",
            "level": "info",
            "correlation_id": "a1b2c3d4-...",
            "phase": "search",
            "component": "discovery_service",
            "event": "Search completed",
            "matches": 14
        }
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            mask_user_identifiers,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    correlation_id: Optional[str] = None,
    phase: Optional[str] = None,
    component: Optional[str] = None,
) -> BindableLogger:
    """
    Get structured logger with bound context.

    Args:
        correlation_id: Correlation ID for request tracing (generates UUID if not provided)
        phase: Discovery operation (e.g., "search", "suggest", "popular")
        component: Component name (e.g., "filter_pipeline", "discovery_service")

    Returns:
        BoundLogger with correlation_id, phase, and component bound to context
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    logger = structlog.get_logger()

    if correlation_id:
        logger = logger.bind(correlation_id=correlation_id)
    if phase:
        logger = logger.bind(phase=phase)
    if component:
        logger = logger.bind(component=component)

    return logger


# Initialize logging on module import with default settings
configure_logging()
