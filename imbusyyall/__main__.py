"""
I'm Busy Y'all - Main Entry Point

Prints fake, colorized server logs so your terminal looks busy.

Usage:
    python -m imbusyyall                          # 1000 Rails entries
    python -m imbusyyall -d nginx -l INFINITY     # Nginx logs until Ctrl-C
    python -m imbusyyall -s 0.2 --max-factor 4    # Slower, with deeper lulls
    python -m imbusyyall --steady                 # Constant delay, no bell curve
    python -m imbusyyall 500                      # Legacy form: just a line count
"""
import argparse
import logging
import sys
from typing import List, Optional

from .config import RunConfig, apply_overrides, load_config
from .exceptions import ConfigError
from .generator import create_generator
from .output import COLOR_MODES, create_output_handler
from .sources import SOURCES, available_sources

logger = logging.getLogger("imbusyyall")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="imbusyyall",
        description="Generate fake colorized logs for various data sources"
    )

    parser.add_argument(
        "legacy_lines",
        nargs="?",
        default=None,
        metavar="LINES",
        help="Number of entries to generate (same as --lines)"
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a YAML configuration file (default: bundled config.yaml)"
    )

    parser.add_argument(
        "--lines", "-l",
        default=None,
        help="Number of log entries to generate (use INFINITY for endless logs)"
    )

    parser.add_argument(
        "--sleep", "-s",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Base sleep time between log entries in seconds"
    )

    parser.add_argument(
        "--data-source", "-d",
        default=None,
        metavar="SOURCE",
        help=f"Data source to use ({', '.join(available_sources())})"
    )

    parser.add_argument(
        "--min-factor",
        type=float,
        default=None,
        help="Multiplier for the fastest delay (default: 0.2)"
    )

    parser.add_argument(
        "--max-factor",
        type=float,
        default=None,
        help="Multiplier for the slowest delay (default: 2.0)"
    )

    parser.add_argument(
        "--period",
        type=float,
        default=None,
        help="Entries per bell curve for INFINITY runs (default: 1000)"
    )

    parser.add_argument(
        "--std-dev",
        type=float,
        default=None,
        help="Width of the bell curve (default: period / 6)"
    )

    parser.add_argument(
        "--steady",
        action="store_true",
        help="Sleep exactly --sleep seconds between entries"
    )

    parser.add_argument(
        "--color",
        choices=COLOR_MODES,
        default=None,
        help="Colorize output (default: auto)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible output"
    )

    parser.add_argument(
        "--list-sources",
        action="store_true",
        help="List available data sources and exit"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log pacing details to stderr"
    )

    args = parser.parse_args(argv)

    # Bare positional count, e.g. `imbusyyall 500`
    if args.lines is None and args.legacy_lines is not None:
        args.lines = args.legacy_lines

    return args


def setup_logging(verbose: bool = False) -> None:
    """Send diagnostics to stderr so stdout only carries generated logs"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr
    )


def list_sources() -> None:
    for name in available_sources():
        print(f"{name:10} {SOURCES[name].description}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.list_sources:
        list_sources()
        return 0

    try:
        config = load_config(args.config)
        config = apply_overrides(config, args)
        run_config = RunConfig.from_dict(config)
        generator = create_generator(run_config)
    except ConfigError as e:
        logger.error(str(e))
        return 1

    output_handler = create_output_handler(run_config)

    pacing = generator.pacing
    logger.info("Starting log generation...")
    logger.info(f"  Data source: {generator.source.name}")
    logger.info(f"  Entries: {generator.total if generator.total is not None else 'unlimited (INFINITY)'}")
    logger.info(f"  Pacing: {pacing.describe()}")
    if generator.total is not None:
        logger.info(f"  Expected duration: {pacing.expected_duration():.1f}s")
    else:
        logger.info(f"  Seconds per period: {pacing.expected_duration():.1f}s")

    generator.run(output_handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
