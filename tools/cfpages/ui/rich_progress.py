# File: cfpages/ui/rich_progress.py

"""
Rich-based live progress display for collection enumeration.
"""

import time
import logging
from datetime import datetime
from typing import Any, List, Optional, Tuple
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskID

from ..interfaces.progress import ProgressDisplay
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..events import EventType
from .components import create_stats_table, create_events_panel

logger = logging.getLogger(__name__)

class RichProgressDisplay(ProgressDisplay):
    """
    Live page-by-page progress driven by paginator events.

    The page bar's total is only known once page 1 reports ``total_pages``.
    """

    def __init__(self, event_bus: EventBusInterface, console: Optional[Console] = None,
                 refresh_per_second: int = 10, max_recent_events: int = 20):
        self.event_bus = event_bus
        self.console = console or Console(stderr=True)
        self.refresh_per_second = refresh_per_second
        self.max_recent_events = max_recent_events

        self.stats = {
            'label': '',
            'pages_fetched': 0,
            'total_pages': 0,
            'entries': 0,
            'total_results': 0,
            'retries': 0,
            'errors': 0,
            'status_message': 'Initializing...'
        }
        self.start_time = time.time()
        self.recent_events: List[Tuple[str, str, str]] = []

        self.page_progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]Pages[/bold blue]"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            TextColumn("{task.description}"),
            console=self.console,
            expand=True
        )
        self.page_task_id: TaskID = self.page_progress.add_task(description="Waiting for page 1...", total=None)
        self.live: Optional[Live] = None
        self._subscriptions = [
            (EventType.ENUMERATION_STARTED, self.handle_enumeration_started),
            (EventType.PAGE_REQUESTED, self.handle_page_requested),
            (EventType.PAGE_FETCHED, self.handle_page_fetched),
            (EventType.FETCH_RETRY, self.handle_retry),
            (EventType.ENUMERATION_COMPLETED, self.handle_enumeration_completed),
            (EventType.ENUMERATION_ERROR, self.handle_error),
        ]

    def initialize(self) -> None:
        for event_type, handler in self._subscriptions:
            self.event_bus.subscribe(event_type, handler)
        self.live = Live(
            self._render(),
            console=self.console,
            refresh_per_second=self.refresh_per_second,
            transient=True
        )
        self.live.start()

    # --- Event handlers ---

    def handle_enumeration_started(self, event_type: str, **data: Any) -> None:
        self.update(label=data.get('label', ''), status_message="Enumerating")
        self.add_event("Enumeration", f"Started {data.get('label', '')}")

    def handle_page_requested(self, event_type: str, **data: Any) -> None:
        self.update(status_message=f"Requesting page {data.get('page')}")

    def handle_page_fetched(self, event_type: str, **data: Any) -> None:
        total_pages = data.get('total_pages', 0)
        self.stats['pages_fetched'] += 1
        self.stats['entries'] += data.get('entries', 0)
        self.page_progress.update(
            self.page_task_id,
            completed=self.stats['pages_fetched'],
            total=max(total_pages, self.stats['pages_fetched']),
            description=f"{self.stats['entries']} entries"
        )
        self.update(total_pages=total_pages, total_results=data.get('total_results', 0))
        self.add_event("Page", f"Page {data.get('page')}/{total_pages}: {data.get('entries', 0)} entries")

    def handle_retry(self, event_type: str, **data: Any) -> None:
        self.stats['retries'] += 1
        self.add_event("Retry", f"Page {data.get('page')} attempt {data.get('attempt')}: {data.get('error')}")

    def handle_enumeration_completed(self, event_type: str, **data: Any) -> None:
        self.update(status_message="Completed")
        self.add_event("Enumeration", f"Completed {data.get('entries', 0)} entries in {data.get('pages', 0)} page(s)")

    def handle_error(self, event_type: str, **data: Any) -> None:
        self.stats['errors'] += 1
        self.update(status_message="Failed")
        self.add_event("Error", f"Page {data.get('page')}: {data.get('error')}")

    # --- ProgressDisplay ---

    def update(self, **new_stats: Any) -> None:
        for key, value in new_stats.items():
            if key in self.stats:
                self.stats[key] = value
            else:
                logger.warning(f"Attempted to update non-existent stat key: {key}")
        self._refresh()

    def add_event(self, event_type: str, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.recent_events.append((timestamp, event_type, message))
        if len(self.recent_events) > self.max_recent_events:
            self.recent_events.pop(0)
        self._refresh()

    def _render(self) -> Group:
        stats_table = create_stats_table(self.stats, time.time() - self.start_time)
        return Group(
            self.page_progress,
            Panel(stats_table, border_style="blue", title="Statistics"),
            create_events_panel(self.recent_events)
        )

    def _refresh(self) -> None:
        if self.live is not None and self.live.is_started:
            self.live.update(self._render())

    def finalize(self) -> None:
        for event_type, handler in self._subscriptions:
            self.event_bus.unsubscribe(event_type, handler)
        if self.live is None:
            return
        self.live.stop()
        self.live = None
        logger.info(
            f"Progress finished: {self.stats['pages_fetched']} page(s), "
            f"{self.stats['entries']} entries, {self.stats['errors']} error(s)"
        )
