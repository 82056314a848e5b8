"""
Benchmark command-line interface.

Runs the randomized heap workload for each requested size and writes one
CSV row per size.

Usage examples:
    python -m minheap.cli
    python -m minheap.cli --sizes 100,1000,10000 --seed 7 --ops 50000
    minheap-bench --dec-ratio 0.2 --output results.csv --log-level INFO
"""

import argparse
import sys

from minheap.benchmark import BenchmarkConfig, run_benchmark, write_csv
from minheap.logger import init_logger, set_level

logger = init_logger(__name__)


def _parse_sizes(text: str) -> tuple[int, ...]:
    try:
        sizes = tuple(int(part) for part in text.split(",") if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size list: {text!r}")
    if not sizes:
        raise argparse.ArgumentTypeError("at least one size is required")
    return sizes


def build_parser() -> argparse.ArgumentParser:
    defaults = BenchmarkConfig()
    p = argparse.ArgumentParser(
        prog="minheap-bench",
        description="Benchmark the indexed min-heap on random workloads",
    )
    p.add_argument(
        "--sizes",
        type=_parse_sizes,
        default=defaults.sizes,
        help="comma-separated initial heap sizes (default: %(default)s)",
    )
    p.add_argument("--seed", type=int, default=defaults.seed)
    p.add_argument("--ops", type=int, default=defaults.ops)
    p.add_argument(
        "--dec-ratio",
        type=float,
        default=defaults.dec_ratio,
        help="probability of a decrease-key operation",
    )
    p.add_argument("--output", help="CSV file to write (default: stdout)")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return p


def main(argv=None) -> int:
    """CLI entry point for `minheap-bench` and `python -m minheap.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    set_level(args.log_level)

    try:
        config = BenchmarkConfig(
            sizes=args.sizes,
            seed=args.seed,
            ops=args.ops,
            dec_ratio=args.dec_ratio,
        )
    except ValueError as e:
        parser.error(str(e))

    results = run_benchmark(config)
    if args.output:
        with open(args.output, "w", newline="") as f:
            write_csv(results, f)
        logger.info("wrote %d rows to %s", len(results), args.output)
    else:
        write_csv(results, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
