# cfpages/interfaces/event_bus.py

from typing import Callable, Any
from ..events import EventType

class EventBus:
    """Interface for publishing enumeration events to interested listeners."""
    
    def subscribe(self, event_type: EventType, callback: Callable[..., Any]) -> None:
        """
        Register a callback for an event type.
        
        Args:
            event_type: Event to listen for
            callback: Called with the event's keyword data
        """
        raise NotImplementedError("Subclasses must implement this method")
        
    def unsubscribe(self, event_type: EventType, callback: Callable[..., Any]) -> bool:
        """
        Remove a previously registered callback.
        
        Returns:
            True if the callback was registered, False otherwise
        """
        raise NotImplementedError("Subclasses must implement this method")
        
    def publish(self, event_type: EventType, **data: Any) -> None:
        """Deliver an event and its data to every subscriber."""
        raise NotImplementedError("Subclasses must implement this method")
        
    def has_subscribers(self, event_type: EventType) -> bool:
        raise NotImplementedError("Subclasses must implement this method")
        
    def clear_all_subscriptions(self) -> None:
        raise NotImplementedError("Subclasses must implement this method")
