import logging
import sys
from typing import List, Optional

from .cli import run_cli
from .ui import console, display_error

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None):
    """Console script entry point; exits the process with the pipeline's status."""
    try:
        exit_code = run_cli(argv)
    except KeyboardInterrupt:
        logger.debug("Interrupted by user")
        console.print()
        display_error("Operation cancelled by user", console=console)
        exit_code = 130  # 128 + SIGINT
    except Exception as e:
        logger.exception(f"Unhandled exception: {e}")
        display_error(f"Error: {e}", console=console)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
