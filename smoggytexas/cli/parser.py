"""Command line argument parser"""

import argparse
from typing import Optional, Sequence

from smoggytexas import __version__
from smoggytexas.cli.output import FORMATTERS


def positive_int(value: str) -> int:
    """argparse type for integers >= 1"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def positive_float(value: str) -> float:
    """argparse type for numbers > 0"""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""
    from smoggytexas.cli.commands import cmd_spot_prices

    parser = argparse.ArgumentParser(
        prog="smoggytexas",
        description="Show current EC2 spot prices for instance types across every AWS region, "
                    "most expensive first.",
        epilog="Example: smoggytexas -i t3.small,t3.micro -x us-gov,cn-",
    )
    parser.add_argument(
        "-i", "--instance-types",
        dest="instance_types",
        help="Comma-separated list of instance types to query (required)",
    )
    parser.add_argument(
        "-x", "--exclude-regions",
        dest="exclude_regions",
        help="Comma-separated region code prefixes to skip (e.g. us-gov,cn-)",
    )
    parser.add_argument(
        "-c", "--max-concurrent",
        dest="max_concurrent",
        type=positive_int,
        help="Maximum number of regions queried at the same time (default: 10)",
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        help="Per-region query deadline in seconds (default: 5)",
    )
    parser.add_argument(
        "--profile",
        help="AWS profile to use",
    )
    parser.add_argument(
        "-f", "--format",
        choices=sorted(FORMATTERS),
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Also write debug logs to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.set_defaults(func=cmd_spot_prices, usage=parser.format_usage())
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    return create_parser().parse_args(argv)
