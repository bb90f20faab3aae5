"""Crawl timing command line.

Usage example:
    # Lifecycle status and stop windows of a crawl definition
    python main.py status crawl.json

    # Pin the clock to check a schedule
    python main.py status crawl.json --now "2025-06-01 18:45"

    # Reveal state of stop 3, or tick every second until it opens
    python main.py reveal crawl.json --stop 3
    python main.py watch crawl.json --stop 3

    # Check a riddle answer
    python main.py check-answer "esb" "empire state building"

A crawl file is a JSON object with "start_time", "duration" and "stops"
(each stop has "stop_number" and optionally "reveal_after_minutes").
"""

from __future__ import annotations

import argparse
import asyncio
import json
import signal
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from src.core.answers.validator import get_answer_hint, validate_answer
from src.core.errors import InvalidTimeStringError
from src.core.schedule.crawl_status import calculate_crawl_status
from src.core.schedule.formatting import format_time_for_display, format_time_remaining
from src.core.schedule.reveal_gate import evaluate_stop_reveal
from src.core.schedule.reveal_watcher import signal_handler, watch_stop_reveal
from src.core.schedule.stop_timing import get_all_stop_timings
from src.core.schedule.time_parser import parse_time_string, try_parse_time_string
from src.core.schemas.crawl import CrawlScheduleInput

load_dotenv()


def _load_crawl(path: Path) -> CrawlScheduleInput:
    with path.open("r", encoding="utf-8") as fh:
        return CrawlScheduleInput.model_validate(json.load(fh))


def _resolve_now(raw: Optional[str]) -> datetime:
    if not raw:
        return datetime.now()
    return parse_time_string(raw)


def cmd_status(args: argparse.Namespace) -> int:
    crawl = _load_crawl(args.crawl_file)
    now = _resolve_now(args.now)
    status = calculate_crawl_status(crawl.start_time, crawl.duration, crawl.stops, now)
    print(status.model_dump_json(indent=2))

    start = try_parse_time_string(crawl.start_time, now)
    if start is not None:
        print(f"Starts: {format_time_for_display(start)}")
    if status.status == "ongoing" and start is not None:
        timings = get_all_stop_timings(
            start, status.stop_durations, status.current_stop_index or 0, now
        )
        for timing in timings:
            marker = "*" if timing.is_active else ("x" if timing.is_completed else " ")
            print(
                f"[{marker}] Stop {timing.stop_number}: "
                f"{timing.start_time:%H:%M} - {timing.end_time:%H:%M} "
                f"({timing.duration_minutes}m)"
            )
    return 0


def cmd_reveal(args: argparse.Namespace) -> int:
    crawl = _load_crawl(args.crawl_file)
    now = _resolve_now(args.now)
    start = try_parse_time_string(crawl.start_time, now)
    state = evaluate_stop_reveal(start, args.stop - 1, crawl.stops, now)
    print(state.model_dump_json(indent=2))
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    crawl = _load_crawl(args.crawl_file)
    start = try_parse_time_string(crawl.start_time)
    state = evaluate_stop_reveal(start, args.stop - 1, crawl.stops)
    if state.is_available or state.reveal_time is None:
        print(f"Stop {args.stop} is available now.")
        return 0

    def _print_tick(remaining: int) -> None:
        print(f"Stop {args.stop} opens in {format_time_remaining(remaining)}", flush=True)

    async def _run() -> bool:
        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, signal_handler, sig, stop_event)
            except NotImplementedError:
                # add_signal_handler is unavailable on Windows event loops
                pass
        return await watch_stop_reveal(
            state.reveal_time, stop_event, on_tick=_print_tick, tick_interval=args.tick
        )

    revealed = asyncio.run(_run())
    print(f"Stop {args.stop} is available now." if revealed else "Stopped.")
    return 0 if revealed else 1


def cmd_check_answer(args: argparse.Namespace) -> int:
    accepted = validate_answer(args.answer, args.correct)
    print("correct" if accepted else "incorrect")
    if not accepted and args.hint:
        hint = get_answer_hint(args.correct)
        if hint:
            print(hint)
    return 0 if accepted else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crawl timing and answer checks.")
    sub = parser.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="Show lifecycle status and stop windows.")
    status.add_argument("crawl_file", type=Path)
    status.add_argument("--now", help="Pin the current time (YYYY-MM-DD HH:MM[:SS]).")
    status.set_defaults(func=cmd_status)

    reveal = sub.add_parser("reveal", help="Show the reveal state of a stop.")
    reveal.add_argument("crawl_file", type=Path)
    reveal.add_argument("--stop", type=int, required=True, help="1-based stop number.")
    reveal.add_argument("--now", help="Pin the current time (YYYY-MM-DD HH:MM[:SS]).")
    reveal.set_defaults(func=cmd_reveal)

    watch = sub.add_parser("watch", help="Tick until a stop is revealed.")
    watch.add_argument("crawl_file", type=Path)
    watch.add_argument("--stop", type=int, required=True, help="1-based stop number.")
    watch.add_argument("--tick", type=float, default=None, help="Seconds between ticks.")
    watch.set_defaults(func=cmd_watch)

    check = sub.add_parser("check-answer", help="Validate a riddle answer.")
    check.add_argument("answer")
    check.add_argument("correct")
    check.add_argument("--hint", action="store_true", help="Print a hint when wrong.")
    check.set_defaults(func=cmd_check_answer)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if getattr(args, "stop", None) is not None and args.stop < 1:
        print("--stop must be 1 or greater", file=sys.stderr)
        return 2
    try:
        return args.func(args)
    except (OSError, json.JSONDecodeError, ValidationError) as error:
        print(f"Could not load crawl: {error}", file=sys.stderr)
        return 2
    except InvalidTimeStringError as error:
        print(str(error), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
