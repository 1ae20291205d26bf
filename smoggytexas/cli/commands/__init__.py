"""CLI command handlers"""

import sys

from .spot_price_commands import cmd_spot_prices
from .base import print_error, status


def run_cli(args) -> int:
    """Run CLI command based on args"""
    if hasattr(args, 'func'):
        return args.func(args)
    else:
        print("Error: No command specified", file=sys.stderr)
        return 1


__all__ = [
    'cmd_spot_prices',
    'print_error',
    'status',
    'run_cli',
]
