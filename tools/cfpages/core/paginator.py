# cfpages/core/paginator.py

import logging
from typing import AsyncIterator, Optional

from ..interfaces.paginator import PaginatorInterface, PaginatorOptions, FetchPage
from ..interfaces.page import Page, Resource
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..events import EventType
from ..errors import ProtocolError

logger = logging.getLogger(__name__)

class Paginator(PaginatorInterface):
    """
    Sequential paginator over Cloud Foundry v2 collections.

    Pages are requested one at a time starting at page 1. The entries of a
    page are yielded before the next page is requested, so a consumer that
    stops early (break, ``aclose()``, a cancelled task) prevents any further
    fetch. Errors from the fetch function propagate unchanged; entries already
    yielded stay yielded.
    """
    
    def __init__(self, event_bus: Optional[EventBusInterface] = None, options: Optional[PaginatorOptions] = None):
        self.event_bus = event_bus
        self.options = options or PaginatorOptions()

    def _publish(self, event_type: EventType, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, **data)

    async def enumerate(self, fetch_page: FetchPage, label: Optional[str] = None) -> AsyncIterator[Resource]:
        label = label or getattr(fetch_page, "__name__", "collection")
        cursor = 1
        emitted = 0

        self._publish(EventType.ENUMERATION_STARTED, label=label)
        logger.debug(f"Enumerating {label}")

        try:
            while True:
                self._publish(EventType.PAGE_REQUESTED, label=label, page=cursor)
                page = await fetch_page(cursor)
                if not isinstance(page, Page):
                    raise ProtocolError(f"Fetch for page {cursor} of {label} returned {type(page).__name__}, not a Page")
                if page.page != cursor:
                    raise ProtocolError(f"Fetch for page {cursor} of {label} returned page {page.page}")

                logger.debug(
                    f"{label}: page {cursor}/{page.total_pages} "
                    f"with {len(page)} entries ({page.total_results} total)"
                )
                self._publish(
                    EventType.PAGE_FETCHED,
                    label=label,
                    page=cursor,
                    total_pages=page.total_pages,
                    total_results=page.total_results,
                    entries=len(page),
                )

                for resource in page.resources:
                    emitted += 1
                    yield resource

                if not page.has_next_page:
                    break

                max_pages = self.options.max_pages
                if max_pages is not None and cursor >= max_pages:
                    raise ProtocolError(
                        f"{label}: server still reports {page.total_pages} pages after "
                        f"{cursor} requests (cap is {max_pages})"
                    )
                cursor += 1
        except Exception as e:
            logger.error(f"Enumeration of {label} failed at page {cursor}: {e}")
            self._publish(EventType.ENUMERATION_ERROR, label=label, page=cursor, error=str(e))
            raise

        logger.info(f"Enumerated {emitted} entries of {label} across {cursor} page(s)")
        self._publish(EventType.ENUMERATION_COMPLETED, label=label, pages=cursor, entries=emitted)
