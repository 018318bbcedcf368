"""Log-line sinks used for import diagnostics."""

import sys

RED = "\033[31m"
RESET = "\033[0m"


def cli_log(message):
    """Informational line on stdout."""
    print(message, flush=True)


def error_log(message):
    """Error line on stderr, in red."""
    print(f"{RED}{message}{RESET}", file=sys.stderr, flush=True)
