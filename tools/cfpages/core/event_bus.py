# cfpages/core/event_bus.py

import logging
from typing import Callable, Dict, Any, List
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..events import EventType

logger = logging.getLogger(__name__)

class EventBus(EventBusInterface):
    """
    In-process event bus used by the paginator and client to report
    page-level progress without depending on whoever displays it.
    """
    
    def __init__(self, debug_logging: bool = False):
        """
        Args:
            debug_logging: Whether to log every published event
        """
        self.listeners: Dict[EventType, List[Callable[..., Any]]] = {}
        self.debug_logging = debug_logging
        
    def subscribe(self, event_type: EventType, callback: Callable[..., Any]) -> None:
        callbacks = self.listeners.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)
            logger.debug(f"Subscribed to event '{event_type.name}'")
        
    def unsubscribe(self, event_type: EventType, callback: Callable[..., Any]) -> bool:
        if callback in self.listeners.get(event_type, []):
            self.listeners[event_type].remove(callback)
            logger.debug(f"Unsubscribed from event '{event_type.name}'")
            return True
        return False
        
    def publish(self, event_type: EventType, **data: Any) -> None:
        """
        Publish an event.

        Subscribers receive ``event_type`` (the enum's string value) plus the
        published data. A failing subscriber is logged and skipped.
        """
        if self.debug_logging:
            logger.debug(f"Event published: {event_type.name} - {data}")
            
        for callback in list(self.listeners.get(event_type, [])):
            try:
                callback(event_type=event_type.value, **data)
            except Exception as e:
                logger.error(f"Error in event handler for '{event_type.name}': {e}")
    
    def has_subscribers(self, event_type: EventType) -> bool:
        return bool(self.listeners.get(event_type))
        
    def clear_all_subscriptions(self) -> None:
        self.listeners.clear()
        logger.debug("All event subscriptions cleared")
