"""
Main CLI entry point for the board game lookup package.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from ..config import RESOLVER_BACKEND
from ..error_handling import ConfigurationError, GameLookupError
from ..logging_config import setup_logging
from ..models import GameRecord
from ..resolvers import build_resolver

logger = logging.getLogger(__name__)


def _format_players(record: GameRecord) -> str:
    if record.min_players is None and record.max_players is None:
        return "-"
    if record.min_players == record.max_players or record.max_players is None:
        return str(record.min_players)
    if record.min_players is None:
        return f"up to {record.max_players}"
    return f"{record.min_players}-{record.max_players}"


def print_records(records: List[GameRecord]) -> None:
    """Print records as a compact table."""
    print("\n" + "=" * 60)
    print(f"RESULTS ({len(records)})")
    print("=" * 60)
    if not records:
        print("No games found.")
        return
    for record in records:
        year = f" ({record.year_published})" if record.year_published is not None else ""
        print(f"{record.external_id:>7} | {record.name}{year}")
        details = [f"players {_format_players(record)}"]
        if record.playing_time is not None:
            details.append(f"{record.playing_time} min")
        if record.rating is not None:
            details.append(f"rating {record.rating:.2f}")
        if record.weight is not None:
            details.append(f"weight {record.weight:.2f}")
        print(f"        └─ {'  |  '.join(details)}")
        if record.categories:
            print(f"           categories: {', '.join(record.categories)}")
        if record.mechanics:
            print(f"           mechanics: {', '.join(record.mechanics)}")
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Look up board games on BoardGameGeek")
    parser.add_argument("--backend", choices=["xml", "ai"], default=RESOLVER_BACKEND,
                        help="Lookup backend (default from BGG_LOOKUP_BACKEND)")
    parser.add_argument("--log-file", type=str, default="bgg_lookup.log",
                        help="Custom log file name or absolute path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search games by name")
    search.add_argument("query", nargs="+", help="Game name")
    search.add_argument("--json", action="store_true", help="Print records as JSON")

    details = subparsers.add_parser("details", help="Fetch games by BGG id")
    details.add_argument("ids", nargs="+", type=int, help="BGG ids")
    details.add_argument("--json", action="store_true", help="Print records as JSON")

    serve = subparsers.add_parser("serve", help="Run the HTTP lookup API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.command == "serve":
            import uvicorn
            from ..api.app import create_app

            uvicorn.run(create_app(backend=args.backend), host=args.host, port=args.port)
            return 0

        resolver = build_resolver(args.backend)
        if args.command == "search":
            records = resolver.resolve_games(" ".join(args.query))
        else:
            records = resolver.resolve_ids(args.ids)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except GameLookupError as e:
        logger.error(f"Lookup failed: {e}")
        print(f"Error: {e.public_message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nProcess interrupted by user")
        return 130

    if args.json:
        print(json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False))
    else:
        print_records(records)
    return 0


if __name__ == "__main__":
    sys.exit(main())
