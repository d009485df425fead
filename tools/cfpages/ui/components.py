# File: cfpages/ui/components.py

"""
Rich renderables for enumeration results and progress.
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..interfaces.page import Resource

logger = logging.getLogger(__name__)

def format_time(seconds: float) -> str:
    """
    Format seconds into a readable time string.
    
    Args:
        seconds: Number of seconds to format
        
    Returns:
        Formatted time string
    """
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds / 60)
        return f"{minutes}m {seconds % 60:.1f}s"
    else:
        hours = int(seconds / 3600)
        minutes = int((seconds % 3600) / 60)
        return f"{hours}h {minutes}m {seconds % 60:.1f}s"

def create_resources_table(resources: Iterable[Resource], title: str) -> Table:
    """
    Create a table listing resources in the order they were enumerated.
    Long names are truncated with ellipsis.
    """
    table = Table(title=f"[bold]{title}[/bold]", expand=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", overflow="ellipsis")
    table.add_column("Created", style="dim")
    
    for index, resource in enumerate(resources, start=1):
        table.add_row(
            str(index),
            resource.id,
            Text(resource.name or "-", no_wrap=True, overflow="ellipsis"),
            resource.metadata.created_at or "-",
        )
    return table

def create_stats_table(stats: Dict[str, Any], elapsed_seconds: float) -> Table:
    stats_table = Table(show_header=False, box=None, padding=(0, 1))
    stats_table.add_column("Key", style="dim", width=16)
    stats_table.add_column("Value", ratio=1)
    
    stats_table.add_row("Collection:", Text(str(stats['label']), no_wrap=True, overflow="ellipsis"))
    stats_table.add_row("Status:", Text(str(stats['status_message']), no_wrap=True, overflow="ellipsis"))
    stats_table.add_row("Pages:", f"{stats['pages_fetched']}/{stats['total_pages'] or '?'}")
    stats_table.add_row("Entries:", f"{stats['entries']}/{stats['total_results'] or '?'}")
    if stats['retries'] > 0:
        stats_table.add_row("Retries:", Text(str(stats['retries']), style="yellow"))
    if stats['errors'] > 0:
        stats_table.add_row("Errors:", Text(str(stats['errors']), style="bold red"))
    stats_table.add_row("Elapsed Time:", format_time(elapsed_seconds))
    return stats_table

def create_events_panel(events: List[Tuple[str, str, str]]) -> Panel:
    """
    Create a panel showing recent events, newest first.
    
    Args:
        events: (timestamp, event_type, message) tuples, oldest first
    """
    if not events:
        panel_content: Any = Text("No events yet...", style="dim")
    else:
        panel_content = Group(*[
            Text.assemble(
                Text(f"{timestamp} ", style="dim"),
                Text(f"[{event_type}] ", style=get_event_style(event_type)),
                Text(message, overflow="ellipsis", no_wrap=True),
            )
            for timestamp, event_type, message in reversed(events)
        ])
    return Panel(panel_content, border_style="green", title="[bold]Recent Events (Newest First)[/bold]")

def get_event_style(event_type: str) -> str:
    event_styles = {
        "Page": "blue",
        "Retry": "yellow",
        "Error": "bold red",
        "Enumeration": "cyan bold",
    }
    return event_styles.get(event_type, "dim cyan")
