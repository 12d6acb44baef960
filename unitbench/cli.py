"""Command-line interface for unitbench."""

import argparse
import logging
import signal
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

from unitbench.configs.config import ConfigManager
from unitbench.reporting import SORT_KEYS, TerminalReporter
from unitbench.serializer import save_results
from unitbench.suite import load_suite
from unitbench.utils.errors import AbortError, ConfigError, SuiteLoadError

try:
    UNITBENCH_CLI_VERSION = package_version("unitbench")
except PackageNotFoundError:
    UNITBENCH_CLI_VERSION = "0.1.0"

EXIT_ABORTED = 130


def run_suite(args: argparse.Namespace) -> int:
    """Execute `unitbench run`."""
    try:
        config = ConfigManager.load(args.config) if args.config else None
        bench = load_suite(args.suite, config=config)
    except (ConfigError, SuiteLoadError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.warmup_time is not None:
        bench.set_warmup_time(args.warmup_time)
    if args.max_unit_time is not None:
        bench.set_max_unit_time(args.max_unit_time)
    if args.runs_per_unit is not None:
        bench.set_runs_per_unit(args.runs_per_unit)

    reporter = TerminalReporter(sort_by=args.sort)
    on_cycle = None if args.quiet else reporter.on_cycle

    previous = signal.signal(signal.SIGINT, lambda signum, frame: bench.abort())
    try:
        results = bench.run_sync(on_cycle=on_cycle)
    except AbortError:
        print("\nBenchmark aborted", file=sys.stderr)
        return EXIT_ABORTED
    finally:
        signal.signal(signal.SIGINT, previous)

    if not args.quiet:
        print()
    reporter.render(results)

    if args.output:
        save_results(results, args.output)
        print(f"\n[OK] Results written to: {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="unitbench",
        description="Measure and compare the throughput of small units of Python code.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"unitbench {UNITBENCH_CLI_VERSION}",
        help="Show CLI version and exit",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="Run a benchmark suite file")
    run.add_argument("suite", help="Python file defining register(bench) or a Benchmark")
    run.add_argument("--config", "-c", help="YAML or JSON runner config file")
    run.add_argument("--warmup-time", type=float, help="Warmup time in ms (0 disables warmup)")
    run.add_argument("--max-unit-time", type=float, help="Time budget per unit in ms")
    run.add_argument("--runs-per-unit", type=int, help="Number of samples per unit")
    run.add_argument(
        "--sort",
        choices=list(SORT_KEYS),
        default="registration",
        help="Summary table order (default: registration)",
    )
    run.add_argument("--output", "-o", help="Optional output JSON results path")
    run.add_argument("--quiet", "-q", action="store_true", help="Only print the summary table")
    run.set_defaults(func=run_suite)

    return parser


def main(argv=None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not getattr(args, "command", None):
        parser.print_help()
        return 0
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
