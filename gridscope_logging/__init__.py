"""
Structured Logging for gridscope
================================

Bounded Context: Observability

JSON-structured logging shared by the overlay renderer and surface backends.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from gridscope_logging import create_logger, LogEvent
    >>> logger = create_logger("renderer")
    >>> logger.info(
    ...     event=LogEvent.FRAME_SAVED,
    ...     message="Saved frame",
    ...     metadata={'region': 'W1N1'}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
