import io
import unittest

from rich.console import Console

from ..core.event_bus import EventBus
from ..events import EventType
from ..ui.rich_progress import RichProgressDisplay
from ..ui.components import create_resources_table, format_time
from .helpers import make_resource


class TestRichProgressDisplay(unittest.TestCase):
    def setUp(self):
        self.event_bus = EventBus()
        self.display = RichProgressDisplay(self.event_bus, console=Console(file=io.StringIO()))
        # subscribe without starting the live display
        for event_type, handler in self.display._subscriptions:
            self.event_bus.subscribe(event_type, handler)

    def test_tracks_pages_and_entries(self):
        self.event_bus.publish(EventType.ENUMERATION_STARTED, label="applications")
        self.event_bus.publish(EventType.PAGE_FETCHED, label="applications", page=1,
                               total_pages=3, total_results=5, entries=2)
        self.event_bus.publish(EventType.PAGE_FETCHED, label="applications", page=2,
                               total_pages=3, total_results=5, entries=2)

        self.assertEqual(self.display.stats['label'], "applications")
        self.assertEqual(self.display.stats['pages_fetched'], 2)
        self.assertEqual(self.display.stats['entries'], 4)
        self.assertEqual(self.display.stats['total_pages'], 3)

    def test_counts_retries_and_errors(self):
        self.event_bus.publish(EventType.FETCH_RETRY, page=1, attempt=1, error="reset")
        self.event_bus.publish(EventType.ENUMERATION_ERROR, label="spaces", page=1, error="boom")

        self.assertEqual(self.display.stats['retries'], 1)
        self.assertEqual(self.display.stats['errors'], 1)
        self.assertEqual(self.display.stats['status_message'], "Failed")

    def test_recent_events_are_bounded(self):
        for page in range(self.display.max_recent_events + 5):
            self.event_bus.publish(EventType.PAGE_REQUESTED, page=page)
            self.display.add_event("Page", f"page {page}")

        self.assertEqual(len(self.display.recent_events), self.display.max_recent_events)

    def test_finalize_unsubscribes(self):
        self.display.finalize()
        self.assertFalse(self.event_bus.has_subscribers(EventType.PAGE_FETCHED))


class TestComponents(unittest.TestCase):
    def test_format_time(self):
        self.assertEqual(format_time(5), "5.0s")
        self.assertEqual(format_time(125), "2m 5.0s")
        self.assertEqual(format_time(3725), "1h 2m 5.0s")

    def test_resources_table_rows_follow_order(self):
        table = create_resources_table([make_resource("g1", "one"), make_resource("g2", "two")], "apps")
        self.assertEqual(table.row_count, 2)
        self.assertEqual(list(table.columns[1].cells), ["g1", "g2"])


if __name__ == "__main__":
    unittest.main()
