# cfpages/interfaces/paginator.py

from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Optional

from .page import Page, Resource

# Maps a 1-based page number to the page the server returns for it.
# Filters are closed over by the caller and never change mid-enumeration.
FetchPage = Callable[[int], Awaitable[Page]]

@dataclass
class PaginatorOptions:
    """Configuration options for collection enumeration."""
    # Defensive cap on pages requested while the server still reports more.
    # None disables the cap.
    max_pages: Optional[int] = 10000

class PaginatorInterface:
    """Interface for turning a page fetcher into one flat sequence of entries."""
    
    def enumerate(self, fetch_page: FetchPage, label: Optional[str] = None) -> AsyncIterator[Resource]:
        """
        Enumerate every entry of a paginated collection.
        
        Args:
            fetch_page: Async callable returning the Page for a page number
            label: Optional name of the collection, used in events and logs
            
        Returns:
            A lazy, single-pass async iterator over the entries of all pages,
            in page order then server order within each page
            
        Raises:
            ProtocolError: If pagination metadata is unusable or the page cap is hit
            Any error raised by fetch_page, unchanged
        """
        raise NotImplementedError("Subclasses must implement this method")
