"""Base utilities for CLI commands"""

import sys
import traceback


def status(message: str, quiet: bool = False) -> None:
    """Print status message to stderr unless quiet mode is on.

    Args:
        message: Status message to display
        quiet: Whether to suppress the message
    """
    if not quiet:
        print(message, file=sys.stderr)


def print_error(message: str, debug: bool = False, exception: Exception = None) -> None:
    """Print error message to stderr with consistent formatting.

    Args:
        message: Error message to display
        debug: Whether to print full traceback
        exception: Optional exception for traceback
    """
    print(f"Error: {message}", file=sys.stderr)
    if debug and exception:
        traceback.print_exception(type(exception), exception, exception.__traceback__)
