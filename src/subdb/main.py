from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI controller and traps unexpected exceptions so
they are logged and reported with a non-zero exit code.
"""

import logging
import sys
import traceback
from typing import Any


def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """Log an unhandled exception with its stack trace and print it to stderr."""
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("subdb.supervisor").critical(f"FATAL EXCEPTION DETECTED: {value}")
    print("CRITICAL ERROR (SUBDB CLI)", file=sys.stderr)
    print(stack_trace, file=sys.stderr)


def main() -> int:
    from subdb.interface.cli.app import main as cli_main

    try:
        return cli_main()
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
