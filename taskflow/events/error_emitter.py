"""Publish/subscribe channel for out-of-band errors"""
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

STORE_WRITE_ERROR = "store-write-error"

Handler = Callable[[Any], None]


class ErrorEmitter:
    """
    Minimal event bus. Publishers call emit() and move on; a failing handler is
    logged and never reaches the publisher.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> None:
        if handler not in self._handlers[event]:
            self._handlers[event].append(handler)

    def off(self, event: str, handler: Handler) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(payload)
            except Exception as e:
                logger.error(f"Error handler for '{event}' failed: {e}", exc_info=True)

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))


error_emitter = ErrorEmitter()
