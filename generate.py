#!/usr/bin/env python3
"""
Generate labeled session telemetry and write it to disk.

Usage:
    python generate.py                            # telemetry_raw.csv, 10 users x 20 sessions
    python generate.py --users 1000               # 1k users
    python generate.py --malicious-rate 0.25      # 25% malicious sessions
    python generate.py --out telemetry.jsonl      # JSON Lines (format from extension)
    python generate.py --format sqlite --out t.db # SQLite
    python generate.py --now 2026-01-15T12:00:00  # fixed time anchor (byte-identical reruns)

Removes the previous output file if it exists before writing a new one.
"""

from __future__ import annotations

import argparse
import sys
import time
from datetime import datetime
from pathlib import Path

from config import DATASET_CONFIG, DatasetConfig, validate_generation_params
from core.enums import OutputFormat
from core.errors import ConfigurationError, WriterError
from core.validate import validate_dataset
from data.config_utils import get_cfg
from data.dataset import generate_all
from export import records_to_frame, summarize, write_dataset


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 date-time: {value!r}") from e


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    population = DATASET_CONFIG["population"]
    output = DATASET_CONFIG["output"]
    parser = argparse.ArgumentParser(description="Generate labeled session telemetry")
    parser.add_argument(
        "--users",
        type=int,
        default=population["num_users"],
        help=f"Number of synthetic users (default: {population['num_users']:,})",
    )
    parser.add_argument(
        "--sessions-per-user",
        type=int,
        default=population["sessions_per_user"],
        help=f"Sessions generated per user (default: {population['sessions_per_user']})",
    )
    parser.add_argument(
        "--malicious-rate",
        type=float,
        default=population["malicious_rate"],
        help=f"Probability a session is malicious, in [0, 1] (default: {population['malicious_rate']})",
    )
    parser.add_argument("--seed", type=int, default=population["seed"])
    parser.add_argument("--out", type=Path, default=Path(output["path"]), help="Output file path")
    parser.add_argument(
        "--format",
        choices=sorted(f.value for f in OutputFormat),
        default=None,
        help="Output format (default: inferred from --out extension)",
    )
    parser.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="Time anchor for timestamps, ISO-8601 (default: current UTC time)",
    )
    return parser.parse_args(argv)


def _print_summary(stats: dict) -> None:
    print("\n" + "=" * 50)
    print("SUMMARY")
    print("=" * 50)
    print(f"  Users:              {stats['users']:,}")
    print(f"  Sessions:           {stats['records']:,}")
    print(f"  Malicious sessions: {stats['malicious']:,} ({stats['malicious_fraction']:.2%})")
    if stats["categories"]:
        print("\n  Sessions by domain category:")
        width = max(6, len(f"{max(stats['categories'].values()):,}"))
        for category, count in stats["categories"].items():
            print(f"    {category:20s} {count:>{width},}")
    for label, means in stats["means"].items():
        print(f"\n  Mean features ({label}):")
        for name, value in means.items():
            print(f"    {name:22s} {value:>10.3f}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    errs = validate_generation_params(args.users, args.sessions_per_user, args.malicious_rate)
    if errs:
        print("Configuration error:\n  " + "\n  ".join(errs), file=sys.stderr)
        return 2

    try:
        config = DatasetConfig(
            **{
                **DATASET_CONFIG.to_dict(),
                "population": {
                    "num_users": args.users,
                    "sessions_per_user": args.sessions_per_user,
                    "malicious_rate": args.malicious_rate,
                    "seed": args.seed,
                },
            }
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    out_path: Path = args.out
    if out_path.exists():
        try:
            out_path.unlink()
        except OSError as e:
            print(f"Write failed: cannot remove {out_path}: {e}", file=sys.stderr)
            return 1
        print(f"Removed previous output: {out_path}")
    print(f"Output path: {out_path}")

    t0 = time.time()
    profiles, records = generate_all(config=config, now=args.now)
    print(f"\nData generation took {time.time() - t0:.2f}s")

    validate_dataset(profiles, records, get_cfg(config, "domains", "categories"))

    t0 = time.time()
    try:
        fmt = args.format or OutputFormat.from_path(out_path, OutputFormat(get_cfg(config, "output", "format")))
        written = write_dataset(records, out_path, fmt=fmt, profiles=profiles)
    except WriterError as e:
        print(f"Write failed: {e}", file=sys.stderr)
        return 1
    print(f"Wrote {written:,} sessions in {time.time() - t0:.2f}s")

    _print_summary(summarize(records_to_frame(records)))
    print(f"\nDone. Output: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
