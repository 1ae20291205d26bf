"""Entry point for the application"""

import sys

from smoggytexas.cli.commands import run_cli
from smoggytexas.cli.parser import parse_args
from smoggytexas.logging_config import setup_logging


def main():
    """Main entry point"""
    args = parse_args()

    log_level = "DEBUG" if args.verbose else "INFO"
    setup_logging(level=log_level, log_file=args.log_file)

    try:
        exit_code = run_cli(args)
    except KeyboardInterrupt:
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
