"""
Command-line sampler for kernel counter rates.

Usage:
    procrate --interval 2 --count 5
    procrate --source pgswstats --state-dir /var/tmp/procrate
    procrate --raw --json
"""

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .collectors import COLLECTORS
from .constants import (
    DEFAULT_PROC_PATH,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    STATUS_ERROR,
    STATUS_OK,
    STATUS_WARN,
)
from .core import DeltaRateEngine
from .exceptions import ProcRateError

LOG = logging.getLogger("procrate")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_engines(sources: List[str], proc_path: str,
                  state_dir: Optional[str] = None) -> Dict[str, DeltaRateEngine]:
    """
    Create one engine per requested source.

    Args:
        sources: Collector names from COLLECTORS
        proc_path: Root of the proc filesystem
        state_dir: Directory for persisted baselines (disabled if None)

    Returns:
        Dictionary of source name to engine

    Raises:
        ConfigurationError: If the state directory is unusable
    """
    engines = {}
    for name in sources:
        collector = COLLECTORS[name](files={"base_path": proc_path})
        persist_path = None
        if state_dir is not None:
            persist_path = Path(state_dir) / f"{name}.yml"
        engines[name] = DeltaRateEngine(collector, persist_path=persist_path)
    return engines


def collect_samples(engines: Dict[str, DeltaRateEngine], interval: float,
                    count: int, raw: bool = False) -> List[Dict[str, Any]]:
    """
    Drive the engines from a single sampling loop.

    Args:
        engines: Source name to engine
        interval: Seconds to wait between samples
        count: Number of samples to take
        raw: Report raw counter values instead of rates

    Returns:
        List of samples, each with a timestamp and per-source values
    """
    samples = []

    if raw:
        for index in range(count):
            if index:
                time.sleep(interval)
            samples.append({
                "timestamp": datetime.now().isoformat(),
                "sources": {name: engine.raw() for name, engine in engines.items()}
            })
        return samples

    for name, engine in engines.items():
        engine.initialize()
        origin = "persisted state" if engine.resumed else "fresh snapshot"
        LOG.info("Baseline %s: %s (%s)", name, STATUS_OK, origin)

    # A persisted baseline is already old enough to sample right away
    wait_first = not all(engine.resumed for engine in engines.values())

    for index in range(count):
        if index or wait_first:
            time.sleep(interval)
        samples.append({
            "timestamp": datetime.now().isoformat(),
            "sources": {name: engine.compute() for name, engine in engines.items()}
        })

    return samples


def print_samples(samples: List[Dict[str, Any]]) -> None:
    """
    Print samples as a per-source table.

    Args:
        samples: Samples returned by collect_samples()
    """
    for sample in samples:
        print()
        print("=" * 60)
        print(f"Sample at {sample['timestamp']}")
        print("=" * 60)
        for name, values in sample["sources"].items():
            print(f"\n{name}")
            print("-" * 60)
            for key in sorted(values):
                value = values[key]
                if isinstance(value, float):
                    print(f"{key:<25} {value:>15.2f}")
                else:
                    print(f"{key:<25} {value:>15}")


def save_samples(samples: List[Dict[str, Any]], filename: str) -> str:
    """
    Save samples to a JSON file.

    Raises:
        ProcRateError: If the file cannot be written
    """
    try:
        filepath = Path(filename)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w") as f:
            json.dump(samples, f, indent=2)
    except OSError as e:
        raise ProcRateError(f"Failed to save samples to {filename}: {e}") from e
    print(f"Samples saved: {filename}", file=sys.stderr)
    return str(filename)


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="procrate",
        description="Per-second rates of /proc kernel counters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One sample of every source, one second apart
  procrate

  # Five paging samples every two seconds
  procrate --source pgswstats --interval 2 --count 5

  # Resume from the baseline left by a previous run (no sleep needed)
  procrate --state-dir /var/tmp/procrate

  # Raw counters as JSON
  procrate --raw --json
        """
    )

    parser.add_argument(
        "--source",
        action="append",
        choices=sorted(COLLECTORS),
        help="Source to sample, repeatable (default: all)"
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=1.0,
        help="Seconds between samples (default: 1.0)"
    )

    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of samples (default: 1)"
    )

    parser.add_argument(
        "--proc-path",
        default=DEFAULT_PROC_PATH,
        help=f"Root of the proc filesystem (default: {DEFAULT_PROC_PATH})"
    )

    parser.add_argument(
        "--state-dir",
        help="Directory holding persisted baselines, one YAML file per source"
    )

    parser.add_argument(
        "--raw",
        action="store_true",
        help="Report raw counter values instead of rates"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print samples as JSON"
    )

    parser.add_argument(
        "--output",
        help="Also write samples to this JSON file"
    )

    parser.add_argument(
        "--log",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: WARNING)"
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to sample counter rates.

    Returns:
        Exit code: 0 for success, 1 for failure.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log)

    if args.interval < 0:
        parser.error("--interval must not be negative")
    if args.count < 1:
        parser.error("--count must be at least 1")

    sources = args.source or sorted(COLLECTORS)

    try:
        engines = build_engines(sources, args.proc_path, args.state_dir)
        samples = collect_samples(engines, args.interval, args.count, raw=args.raw)

        if args.json:
            print(json.dumps(samples, indent=2))
        else:
            print_samples(samples)

        if args.output:
            save_samples(samples, args.output)

        return EXIT_SUCCESS

    except ProcRateError as e:
        print(f"Sampling: {STATUS_ERROR} ({e})", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print(f"\nSampling: {STATUS_WARN} (interrupted by user)", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
