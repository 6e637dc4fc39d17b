"""harness.py - CLI runner and benchmark harness for the puzzle solvers.

Runs the selected days on inputs/dayNN.txt, prints answers to stdout and
progress to stderr, and writes one receipt per day.

Usage:
    python -m aocsearch.harness --days 16,17
    python -m aocsearch.harness --days 12-24 --input-dir inputs/ --repeat 5

Flags:
    --input-dir: Directory containing dayNN.txt files
    --days: Comma-separated days or ranges ("all" for every solver)
    --repeat: Run each part N times and report the best time
    --strict: Stop at the first failing day (default: continue and report)
"""
from __future__ import annotations
import argparse
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import blizzards, config, elves, filesystem, hills, receipts, robots, rocks, sand, valves
from .errors import PuzzleError
from .utils import hash_utils

# Day registry (extend-only)
DAY_MODULES = {
    7: filesystem,
    12: hills,
    14: sand,
    16: valves,
    17: rocks,
    19: robots,
    23: elves,
    24: blizzards,
}

# Parts that accept a worker count
PARALLEL_PARTS = {(16, 2)}


def parse_days(spec: str) -> List[int]:
    """Expand "16,17", "12-17" or "all" into a sorted list of known days.

    Raises:
        ValueError: On malformed ranges or days without a solver
    """
    if spec.strip() == "all":
        return sorted(DAY_MODULES)
    days = set()
    for token in spec.split(","):
        token = token.strip()
        if not token:
            continue
        if "-" in token:
            lo, _, hi = token.partition("-")
            candidates = range(int(lo), int(hi) + 1)
            days.update(d for d in candidates if d in DAY_MODULES)
        else:
            day = int(token)
            if day not in DAY_MODULES:
                raise ValueError(f"No solver for day {day} (available: {sorted(DAY_MODULES)})")
            days.add(day)
    return sorted(days)


def load_input(input_dir: Path, day: int) -> str:
    """Read inputs/dayNN.txt.

    Raises:
        FileNotFoundError: If the input file is missing
    """
    path = Path(input_dir) / f"day{day:02d}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")
    return path.read_text(encoding="utf-8")


def run_day(day: int, text: str, repeat: int = config.DEFAULT_REPEAT, workers: int = config.DEFAULT_WORKERS) -> Dict[str, Any]:
    """Parse and solve both parts of one day.

    Args:
        day: Puzzle day with a registered solver
        text: Raw puzzle input
        repeat: Runs per part; the best time is reported
        workers: Worker threads for parts that support them

    Returns:
        Receipt payload (answers, timings, engine counters, hashes)

    Raises:
        PuzzleError: If parsing or solving fails
    """
    module = DAY_MODULES[day]
    start = time.perf_counter()
    data = module.parse(text)
    parse_seconds = time.perf_counter() - start

    answers: Dict[str, int] = {}
    seconds: Dict[str, float] = {"parse": round(parse_seconds, 6)}
    stats: Dict[str, Dict] = {}
    for part, solve in ((1, module.solve_part1), (2, module.solve_part2)):
        key = f"part{part}"
        options = {"workers": workers} if (day, part) in PARALLEL_PARTS else {}
        best = None
        for _ in range(max(1, repeat)):
            part_stats: Dict[str, Any] = {}
            start = time.perf_counter()
            answer = solve(data, stats=part_stats, **options)
            elapsed = time.perf_counter() - start
            best = elapsed if best is None else min(best, elapsed)
        answers[key] = int(answer)
        seconds[key] = round(best, 6)
        stats[key] = part_stats

    return {
        "day": day,
        "input_sha256": hash_utils.hash_text(text),
        "answers": answers,
        "answers_sha256": hash_utils.hash_json_canonical(answers),
        "seconds": seconds,
        "stats": stats,
    }


def run(
    input_dir: Path,
    days: List[int],
    strict: bool = False,
    write_receipts: bool = True,
    receipts_dir: str = config.DEFAULT_RECEIPTS_DIR,
    repeat: int = config.DEFAULT_REPEAT,
    workers: int = config.DEFAULT_WORKERS,
) -> int:
    """Run every selected day; return the process exit code."""
    progress: Dict[str, Any] = {
        "days_total": len(days),
        "days_ok": 0,
        "failures": {},
        "env": receipts.make_env_payload(),
    }

    for day in days:
        tag = f"[day{day:02d}]"
        try:
            text = load_input(input_dir, day)
            payload = run_day(day, text, repeat=repeat, workers=workers)
        except (PuzzleError, FileNotFoundError) as e:
            print(f"{tag} Failed: {e}", file=sys.stderr)
            progress["failures"][str(day)] = f"{type(e).__name__}: {e}"
            if strict:
                break
            continue

        progress["days_ok"] += 1
        for key, answer in payload["answers"].items():
            print(f"day{day:02d} {key} {answer}")
        print(
            f"{tag} OK in {payload['seconds']['part1']:.3f}s + {payload['seconds']['part2']:.3f}s",
            file=sys.stderr,
        )
        if write_receipts:
            path = receipts.write_day_receipt(day, payload, out_dir=receipts_dir)
            print(f"{tag} Receipt written to {path}", file=sys.stderr)

    print(
        f"[harness] Complete: {progress['days_ok']}/{len(days)} days solved",
        file=sys.stderr,
    )
    if write_receipts:
        receipts.write_run_progress(progress, out_dir=receipts_dir)

    if progress["failures"] and strict:
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for harness."""
    parser = argparse.ArgumentParser(
        description="Advent of Code 2022 search/simulation solvers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve the valve and rock puzzles
  python -m aocsearch.harness --days 16,17

  # Benchmark every solver, best of 5 runs, no receipts
  python -m aocsearch.harness --days all --repeat 5 --no-receipts
        """,
    )
    parser.add_argument(
        "--input-dir",
        type=Path,
        default=Path(config.DEFAULT_INPUT_DIR),
        help="Directory containing dayNN.txt files (default: inputs/)",
    )
    parser.add_argument(
        "--days",
        type=str,
        default="all",
        help=f"Days to run, e.g. '16,17' or '12-17' (default: all of {sorted(DAY_MODULES)})",
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=config.DEFAULT_REPEAT,
        help="Runs per part for benchmarking; best time is reported (default: 1)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=config.DEFAULT_WORKERS,
        help="Worker threads for the two-actor valve pairing (default: 1)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first failing day and exit 1 (default: continue and report)",
    )
    parser.add_argument(
        "--receipts",
        dest="receipts",
        action="store_true",
        default=True,
        help="Write receipt JSON (default: enabled)",
    )
    parser.add_argument(
        "--no-receipts",
        dest="receipts",
        action="store_false",
        help="Disable receipt writing",
    )
    parser.add_argument(
        "--receipts-dir",
        type=str,
        default=config.DEFAULT_RECEIPTS_DIR,
        help="Receipt output directory (default: receipts/)",
    )

    args = parser.parse_args(argv)

    try:
        days = parse_days(args.days)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    if args.repeat < 1:
        print(f"Error: --repeat must be >= 1, got {args.repeat}", file=sys.stderr)
        return 2

    print(f"[harness] Running days {days} on {args.input_dir}", file=sys.stderr)
    return run(
        args.input_dir,
        days,
        strict=args.strict,
        write_receipts=args.receipts,
        receipts_dir=args.receipts_dir,
        repeat=args.repeat,
        workers=args.workers,
    )


if __name__ == "__main__":
    sys.exit(main())
