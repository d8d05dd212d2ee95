"""Event dispatcher with an explicit, ordered subscription list.

Each dispatcher instance owns its own handlers, so independent owners (for
example two localization contexts in one test) never see each other's
events. Handlers are called synchronously in subscription order.
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger

logger = get_module_logger()

EventHandler = Callable[[Event], Any]


class EventDispatcher:
    """Ordered list of event handlers with optional event-type filters."""

    def __init__(self) -> None:
        self._subscriptions: List[Tuple[EventHandler, Optional[frozenset]]] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_types: Optional[Iterable[str]] = None,
    ) -> EventHandler:
        """Register a handler, optionally only for some event types.

        Subscribing the same handler twice is a no-op.

        Args:
            handler: Callable receiving the dispatched Event.
            event_types: Event types to receive. None means every event.

        Returns:
            The handler, so this can be used as a decorator.
        """
        if any(existing is handler for existing, _ in self._subscriptions):
            return handler

        types = frozenset(event_types) if event_types is not None else None
        self._subscriptions.append((handler, types))
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler, "__name__", "unknown"),
            event_types=sorted(types) if types else "*",
            total_handlers=len(self._subscriptions),
        )
        return handler

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        self._subscriptions = [
            (existing, types)
            for existing, types in self._subscriptions
            if existing is not handler
        ]

    def dispatch(self, event: Event) -> List[Any]:
        """Dispatch event synchronously to every matching handler.

        If a handler raises, the error is logged and the remaining handlers
        still run.

        Args:
            event: The event to dispatch.

        Returns:
            List of return values from the handlers that completed.
        """
        results = []
        # Snapshot so handlers may (un)subscribe while being notified
        subscriptions = list(self._subscriptions)

        for handler, types in subscriptions:
            if types is not None and event.event_type not in types:
                continue
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )

        return results

    @property
    def handlers(self) -> List[EventHandler]:
        """Handlers in the order they will be called."""
        return [handler for handler, _ in self._subscriptions]

    def clear(self) -> None:
        """Remove every handler."""
        self._subscriptions.clear()
