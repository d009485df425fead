# cfpages/interfaces/progress.py

from typing import Any

class ProgressDisplay:
    """Interface for displaying enumeration progress."""
    
    def initialize(self) -> None:
        """Subscribe to events and start rendering."""
        raise NotImplementedError("Subclasses must implement this method")
        
    def update(self, **stats: Any) -> None:
        """
        Update the display with new statistics.
        
        Args:
            **stats: Key-value pairs of statistics to update
        """
        raise NotImplementedError("Subclasses must implement this method")
        
    def add_event(self, event_type: str, message: str) -> None:
        raise NotImplementedError("Subclasses must implement this method")
        
    def finalize(self) -> None:
        """Stop rendering and unsubscribe."""
        raise NotImplementedError("Subclasses must implement this method")
