"""CLI entry point for the job search widget."""

import argparse
import asyncio
import json
import logging
import sys

from job_search_widget.browser.navigator import DetailNavigator
from job_search_widget.core.config import Settings
from job_search_widget.core.schemas import SearchRequest, SortOption
from job_search_widget.gateway import get_gateway
from job_search_widget.pipeline.orchestrator import SearchWidget, export_results_json
from job_search_widget.pipeline.state import FilterState
from job_search_widget.pipeline.url_codec import build_search_url, decode_url, should_auto_search


_COMMANDS = {"search", "share", "open", "-h", "--help"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job search widget - decode a search URL, search, sort and page results",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- search subcommand (default) ---
    search_parser = subparsers.add_parser("search", help="Run a search from a page URL")
    _add_common(search_parser)
    search_parser.add_argument(
        "--url",
        default="/",
        help="Page URL carrying the filters (query string or /<root>/<keyword> path)",
    )
    search_parser.add_argument(
        "--sort",
        choices=[o.value for o in SortOption],
        help="Sort option applied after the search (default: wageDesc)",
    )
    search_parser.add_argument(
        "--pages",
        type=int,
        default=1,
        help="Number of result pages to show (default: 1)",
    )
    search_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Decode the URL and show the request without calling the gateway",
    )
    search_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export visible results to format (json)",
    )

    # --- share subcommand ---
    share_parser = subparsers.add_parser("share", help="Print the canonical shareable URL")
    _add_common(share_parser)
    share_parser.add_argument("--url", required=True, help="Page URL carrying the filters")

    # --- open subcommand ---
    open_parser = subparsers.add_parser("open", help="Open a listing's detail page in a browser")
    _add_common(open_parser)
    open_parser.add_argument("--id", required=True, dest="record_id", help="Listing record id")

    # Default to search when no subcommand given
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in _COMMANDS:
        argv = ["search", *argv]

    return parser.parse_args(argv)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def dry_run(settings: Settings, url: str) -> None:
    """Print what a mount would do without calling the gateway."""
    widget_config = settings.widget
    criteria, from_path = decode_url(
        url,
        widget_config.caps,
        search_root=widget_config.search_root,
        page_size=widget_config.page_size,
    )
    state = FilterState(widget_config.caps, page_size=widget_config.page_size)
    state.load(criteria)
    would_search = should_auto_search(
        criteria, from_path=from_path, min_wage_threshold=widget_config.auto_search_min_wage,
    )

    print(f"[DRY RUN] Variant: {widget_config.variant}")
    print(f"[DRY RUN] Criteria: {criteria.model_dump(mode='json')}")
    print(f"[DRY RUN] Summary: {state.summary_text}")
    print(f"[DRY RUN] Auto-search on load: {'yes' if would_search else 'no'}")
    if would_search:
        payload = SearchRequest.from_criteria(criteria).to_payload()
        print(f"[DRY RUN] Gateway '{settings.gateway.kind}' request: "
              f"{json.dumps(payload, ensure_ascii=False)}")


async def run(settings: Settings, args: argparse.Namespace) -> None:
    """Mount a widget on the given URL and print the visible results."""
    gateway = get_gateway(settings.gateway.kind, settings.gateway)

    async with SearchWidget(
        gateway, settings.widget, timeout_s=settings.gateway.timeout_s,
    ) as widget:
        await widget.mount(args.url)
        if not widget.results.has_searched:
            await widget.search()
        if args.sort:
            widget.change_sort(args.sort)
        for _ in range(max(args.pages, 1) - 1):
            widget.load_more()

    if args.export == "json":
        print(export_results_json(widget))
        return

    print(f"\nConditions: {widget.summary_text}")
    total = len(widget.results.results)
    if widget.results.is_no_results:
        print("No matching listings.")
        return

    visible = widget.visible_results
    print(f"Showing {len(visible)} of {total} listings "
          f"(sort: {widget.criteria.sort_option.value}):")
    for item in visible:
        name = item.listing.name or item.listing.id or "?"
        marker = " [派遣]" if item.is_dispatch_worker else ""
        print(f"  {name}{marker}")
        if item.formatted_salary_display:
            print(f"    {item.formatted_salary_display}")
        if item.formatted_time_display:
            print(f"    {item.formatted_time_display}")
    if widget.has_more:
        print(f"  ... {total - len(visible)} more (use --pages)")


def cmd_share(settings: Settings, url: str) -> None:
    """Handle share subcommand."""
    criteria, _ = decode_url(
        url, settings.widget.caps, search_root=settings.widget.search_root,
    )
    print(build_search_url(settings.site.base_url, criteria))


async def cmd_open(settings: Settings, record_id: str) -> None:
    """Handle open subcommand."""
    navigator = DetailNavigator(
        settings.site.base_url,
        settings.widget.detail_section,
        browser_config=settings.browser,
    )
    async with navigator:
        await navigator.open(record_id)
        await asyncio.to_thread(input, ">>> Press Enter to close the browser...")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "share":
        cmd_share(settings, args.url)
    elif args.command == "open":
        asyncio.run(cmd_open(settings, args.record_id))
    elif args.dry_run:
        dry_run(settings, args.url)
    else:
        asyncio.run(run(settings, args))


if __name__ == "__main__":
    main()
