# File: cfpages/events.py

from enum import Enum

class EventType(Enum):
    # Enumeration events
    ENUMERATION_STARTED = "enumeration_started"
    ENUMERATION_COMPLETED = "enumeration_completed"

    # Page events
    PAGE_REQUESTED = "page_requested"
    PAGE_FETCHED = "page_fetched"
    FETCH_RETRY = "fetch_retry"

    # Error events
    ENUMERATION_ERROR = "enumeration_error"
