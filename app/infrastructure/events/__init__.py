"""Infrastructure event system - per-owner event dispatchers.

Usage:

    from infrastructure.events import Event, EventDispatcher

    dispatcher = EventDispatcher()

    @dispatcher.subscribe
    def on_change(event: Event) -> None:
        ...

    dispatcher.dispatch(Event(event_type="languages.loaded"))
"""

from infrastructure.events.dispatcher import EventDispatcher, EventHandler
from infrastructure.events.models import Event

__all__ = ["Event", "EventDispatcher", "EventHandler"]
