"""CLI entrypoint: compute the maximum release for a puzzle file."""
import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from valve_release.driver import run_release_search
from valve_release.errors import GraphStructureError, SearchDepthError, ValveParseError
from valve_release.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="valve-release",
        description="Maximise the pressure released by agents opening valves in a tunnel network.",
    )
    parser.add_argument("input", type=Path, help="Puzzle file, one valve per line")
    parser.add_argument("--minutes", type=int, default=None,
                        help="Time budget in minutes (default: VALVE_TIME_BUDGET or 25)")
    parser.add_argument("--agents", type=int, default=None,
                        help="Number of cooperating agents (default: VALVE_AGENT_COUNT or 2)")
    parser.add_argument("--start", type=str, default=None,
                        help="Start valve id (default: VALVE_START or AA)")
    parser.add_argument("--no-bound", action="store_true",
                        help="Disable upper-bound pruning (exhaustive search)")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Log threshold, e.g. DEBUG (default: LOG_LEVEL or INFO)")
    return parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        puzzle_text = args.input.read_text(encoding="utf-8")
        summary = asyncio.run(
            run_release_search(
                puzzle_text=puzzle_text,
                time_budget=args.minutes,
                agent_count=args.agents,
                start_valve=args.start,
                use_upper_bound=False if args.no_bound else None,
            )
        )
    except (ValveParseError, GraphStructureError, SearchDepthError, OSError) as exc:
        logger.error("structural_error", error=str(exc), input=str(args.input))
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    print(f"Maximum release: {summary['max_release']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
