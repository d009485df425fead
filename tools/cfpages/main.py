#!/usr/bin/env python3
# File: cfpages/main.py

import asyncio
import json
import logging
import argparse
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .config import load_client_config, DEFAULT_CONFIG_FILE, DEFAULT_LOGS_DIR
from .core.client import CloudFoundryClient
from .core.event_bus import EventBus
from .core.resources import RESOURCE_TYPES
from .core.sequence import collect, single, single_or_none, take, with_timeout
from .interfaces.request import ListRequest, build_filters
from .ui.components import create_resources_table
from .ui.rich_progress import RichProgressDisplay
from .errors import CFPagesError, ConfigError

logger = logging.getLogger("cfpages.main")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_API_ERROR = 2


def setup_logging_config(log_level_str: str, log_file_path: Path):
    numeric_log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(
        level=numeric_log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(log_file_path, mode='a')]
    )
    logger.info(f"Logging configured. Level: {log_level_str}. File: {log_file_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cfpages", description="Enumerate Cloud Foundry v2 collections")
    parser.add_argument("resource", choices=sorted(RESOURCE_TYPES) + ["jobs"], help="Collection to enumerate.")
    parser.add_argument("--filter", dest="filters", action="append", default=[], metavar="KEY=VALUE",
                        help="Filter criterion, repeatable. Comma separated values match any (IN). "
                             "A trailing _id maps to _guid, e.g. space_id=<guid>.")
    parser.add_argument("--get", metavar="ID", help="Fetch a single resource (or job) by id instead of listing.")
    parser.add_argument("--related", nargs=2, metavar=("ID", "ASSOCIATION"),
                        help="List an association of one resource, e.g. --related <org-guid> spaces.")
    cardinality = parser.add_mutually_exclusive_group()
    cardinality.add_argument("--single", action="store_true", help="Fail unless exactly one entry matches.")
    cardinality.add_argument("--single_or_none", action="store_true", help="Fail if more than one entry matches.")
    cardinality.add_argument("--limit", type=int, help="Stop after this many entries.")
    parser.add_argument("--order_direction", choices=["asc", "desc"], help="Server-side sort direction.")
    parser.add_argument("--timeout", type=float, help="Overall deadline in seconds for the enumeration.")
    parser.add_argument("--json", action="store_true", help="Print entries as JSON lines.")
    parser.add_argument("--progress", action="store_true", help="Show live page progress.")
    parser.add_argument("--config_file", type=Path, default=DEFAULT_CONFIG_FILE, help=f"JSON config file. Default: {DEFAULT_CONFIG_FILE}")
    parser.add_argument("--api_host", help="Override the Cloud Controller URL.")
    parser.add_argument("--results_per_page", type=int, help="Override results per page (1-100).")
    parser.add_argument("--max_pages", type=int, help="Override the page cap.")
    parser.add_argument("--log_file", type=Path, default=DEFAULT_LOGS_DIR / "cfpages.log", help=f"Log file path. Default: {DEFAULT_LOGS_DIR / 'cfpages.log'}")
    parser.add_argument("--log_level", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], default='INFO', help="Logging level. Default: INFO")
    return parser


def print_resources(console: Console, resources, title: str, as_json: bool) -> None:
    if as_json:
        for resource in resources:
            console.print_json(json.dumps(asdict(resource)))
        return
    console.print(create_resources_table(resources, title))


async def run(args: argparse.Namespace, client: CloudFoundryClient, console: Console) -> int:
    if args.resource == "jobs":
        if not args.get:
            raise ConfigError("jobs can only be fetched by id; pass --get <job-id>")
        job = await with_timeout(client.jobs.get(args.get), args.timeout)
        console.print_json(json.dumps(asdict(job)))
        return EXIT_OK

    collection = client.collection(args.resource)
    if args.get:
        resource = await with_timeout(collection.get(args.get), args.timeout)
        print_resources(console, [resource], args.resource, args.json)
        return EXIT_OK

    criteria = build_filters(args.filters)
    if args.related:
        resource_id, association = args.related
        entries = collection.list_related(
            resource_id, association, order_direction=args.order_direction, **criteria
        )
        title = f"{args.resource}/{association}"
    else:
        request = ListRequest.from_kwargs(order_direction=args.order_direction, **criteria)
        entries = collection.list_request(request)
        title = args.resource

    if args.single:
        results = [await with_timeout(single(entries), args.timeout)]
    elif args.single_or_none:
        found = await with_timeout(single_or_none(entries), args.timeout)
        results = [found] if found is not None else []
    elif args.limit is not None:
        results = await with_timeout(collect(take(entries, args.limit)), args.timeout)
    else:
        results = await with_timeout(collect(entries), args.timeout)

    print_resources(console, results, title, args.json)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging_config(args.log_level, args.log_file)
    logger.info(f"Application starting with arguments: {args}")
    console = Console()
    error_console = Console(stderr=True)

    overrides = {
        "api_host": args.api_host,
        "results_per_page": args.results_per_page,
        "max_pages": args.max_pages,
    }
    try:
        config = load_client_config(config_file=args.config_file, overrides=overrides)
    except ConfigError as e:
        logger.critical(f"Failed to load client configuration: {e}")
        error_console.print(f"[bold red]ERROR:[/bold red] Configuration problem - {e}")
        return EXIT_CONFIG_ERROR

    event_bus = EventBus(debug_logging=(args.log_level == 'DEBUG'))
    progress_display = RichProgressDisplay(event_bus) if args.progress else None

    async def _run() -> int:
        async with CloudFoundryClient(config, event_bus=event_bus) as client:
            return await run(args, client, console)

    if progress_display:
        progress_display.initialize()
    try:
        return asyncio.run(_run())
    except (ConfigError, ValueError) as e:
        logger.error(f"Invalid request: {e}")
        error_console.print(f"[bold red]ERROR:[/bold red] {e}")
        return EXIT_CONFIG_ERROR
    except CFPagesError as e:
        logger.error(f"Enumeration failed: {e}", exc_info=True)
        error_console.print(f"[bold red]ERROR:[/bold red] {type(e).__name__}: {e}")
        return EXIT_API_ERROR
    finally:
        if progress_display:
            progress_display.finalize()


if __name__ == "__main__":
    sys.exit(main())
