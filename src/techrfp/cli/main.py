"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional


def main(argv: Optional[list[str]] = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="techrfp", description="Technology RFP finder")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML (default: $TECHRFP_CONFIG)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Path to SQLite database (default: settings db_path)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # seed
    subparsers.add_parser("seed", help="Load the demo opportunities into the store")

    # ingest
    ingest_parser = subparsers.add_parser("ingest", help="Ingest opportunities from a source")
    ingest_parser.add_argument(
        "--source",
        default="samgov",
        choices=["samgov"],
        help="Source to ingest from",
    )
    ingest_parser.add_argument(
        "--query",
        action="append",
        default=None,
        help="Title keywords; repeat for several searches (default: settings ingest_queries)",
    )
    ingest_parser.add_argument("--days-back", type=int, default=None, help="Posted-date window start, days before today")
    ingest_parser.add_argument("--days-forward", type=int, default=None, help="Posted-date window end, days after today")
    ingest_parser.add_argument("--limit", type=int, default=None, help="Page size per request")
    ingest_parser.add_argument("--max-pages", type=int, default=None, help="Pages to fetch per query")

    # list
    list_parser = subparsers.add_parser("list", help="List active opportunities")
    list_parser.add_argument("--search", type=str, default=None, help="Text in title, description or organization")
    list_parser.add_argument("--technology", action="append", default=None, help="Technology category (repeatable)")
    list_parser.add_argument("--org-type", action="append", default=None, help="Organization type (repeatable)")
    list_parser.add_argument("--budget", type=str, default=None, help="Budget range, e.g. 100000-500000 or 500000+")
    list_parser.add_argument("--deadline-within", type=str, default=None, help="Deadline within N days")
    list_parser.add_argument(
        "--preset",
        type=Path,
        default=None,
        help="Filter preset YAML (replaces the filter flags)",
    )
    list_parser.add_argument(
        "--sort",
        choices=["deadline", "budget", "posted"],
        default="deadline",
        help="deadline = priority category first, then soonest deadline",
    )
    list_parser.add_argument("--output", type=Path, default=None, help="Write results to file")

    # show
    show_parser = subparsers.add_parser("show", help="Show one opportunity by id")
    show_parser.add_argument("opp_id", help="Opportunity id")

    # stats
    stats_parser = subparsers.add_parser("stats", help="Summary statistics")
    stats_parser.add_argument("action", choices=["technologies", "live"])

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "seed":
        _run_seed(args)
    elif args.command == "ingest":
        _run_ingest(args)
    elif args.command == "list":
        _run_list(args)
    elif args.command == "show":
        _run_show(args)
    elif args.command == "stats":
        _run_stats(args)
    else:
        parser.print_help()


def _open_store(args: argparse.Namespace):
    """Settings and SQLite store for the given args."""
    from techrfp.config import load_settings
    from techrfp.store import SqliteOpportunityStore

    settings = load_settings(getattr(args, "config", None))
    db_path = getattr(args, "db", None) or settings.db_path
    return settings, SqliteOpportunityStore(db_path)


def _dump(data, output: Optional[Path] = None) -> None:
    text = json.dumps(data, indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
    else:
        print(text)


def _run_seed(args: argparse.Namespace) -> None:
    """Run seed command."""
    from techrfp.store import seed_opportunities

    _, store = _open_store(args)
    seeded = seed_opportunities()
    for opp in seeded:
        store.upsert(opp)
    print(f"Seeded {len(seeded)} opportunities ({len(store)} in store)")


def _run_ingest(args: argparse.Namespace) -> None:
    """Run ingest command."""
    from techrfp.connectors.base import SourceUnavailableError
    from techrfp.connectors.registry import ConnectorRegistry
    from techrfp.pipeline import IngestReport, IngestRequest, default_window, ingest_from_source

    settings, store = _open_store(args)
    connector = ConnectorRegistry.get(
        args.source,
        api_key=settings.sam_gov_api_key,
        base_url=settings.sam_gov_base_url,
        timeout=settings.request_timeout,
        priority_category=settings.priority_category,
    )

    posted_from, posted_to = default_window(
        days_back=args.days_back if args.days_back is not None else settings.days_back,
        days_forward=args.days_forward if args.days_forward is not None else settings.days_forward,
    )
    request = IngestRequest(
        queries=args.query or list(settings.ingest_queries),
        posted_from=posted_from,
        posted_to=posted_to,
        limit=args.limit or settings.page_limit,
        max_pages=args.max_pages or settings.max_pages,
    )

    run_record = store.start_run(args.source)
    report = IngestReport(source=args.source)
    try:
        ingest_from_source(store, connector, request, report=report)
    except SourceUnavailableError as e:
        store.finish_run(
            run_record.id,
            items_fetched=report.items_fetched,
            items_new=report.items_new,
            items_updated=report.items_updated,
            status="failed",
            error=str(e),
        )
        print(
            f"Source unavailable: {e}\n"
            f"Kept {report.items_fetched} opportunities ingested before the failure; "
            f"store still serves {len(store)} records.",
            file=sys.stderr,
        )
        raise SystemExit(1)

    store.finish_run(
        run_record.id,
        items_fetched=report.items_fetched,
        items_new=report.items_new,
        items_updated=report.items_updated,
    )
    print(f"Store: {report.items_fetched} fetched, {report.items_new} new, {report.items_updated} updated")


def _build_filter_spec(args: argparse.Namespace):
    from techrfp.models.filters import FilterSpec, InvalidFilterError

    try:
        if args.preset:
            return FilterSpec.from_yaml(args.preset)
        return FilterSpec.from_query(
            {
                "search": args.search,
                "technologies": args.technology,
                "organizationTypes": args.org_type,
                "budgetRange": args.budget,
                "deadlineFilter": args.deadline_within,
            }
        )
    except InvalidFilterError as e:
        raise SystemExit(f"Invalid filter: {e}")


def _run_list(args: argparse.Namespace) -> None:
    """Run list command."""
    from techrfp.pipeline import list_opportunities

    spec = _build_filter_spec(args)
    _, store = _open_store(args)
    opportunities = list_opportunities(store, spec, sort=args.sort)
    _dump([o.model_dump(mode="json") for o in opportunities], args.output)
    if args.output:
        print(f"Listed {len(opportunities)} of {len(store)} opportunities (wrote to {args.output})")


def _run_show(args: argparse.Namespace) -> None:
    """Run show command."""
    from techrfp.pipeline import get_opportunity

    _, store = _open_store(args)
    opp = get_opportunity(store, args.opp_id)
    if opp is None:
        print(f"Opportunity not found: {args.opp_id}", file=sys.stderr)
        raise SystemExit(1)
    _dump(opp.model_dump(mode="json"))


def _run_stats(args: argparse.Namespace) -> None:
    """Run stats command."""
    from techrfp.reporting import live_summary, technology_counts

    _, store = _open_store(args)
    if args.action == "technologies":
        _dump(technology_counts(store))
    elif args.action == "live":
        _dump(live_summary(store).model_dump())


if __name__ == "__main__":
    main()
