import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from . import shell_context
from .api import OracleClient
from .config import DEFAULT_MODEL, Config
from .errors import API_KEY_INFO, ConfigurationError, GptCliError
from .executor import executor
from .logger import setup_logging
from .shell_context import ShellContext
from .ui import console, display_error, display_hint

logger = logging.getLogger(__name__)

EXAMPLE = "Find files larger than 42kB in the current directory"


def program_name() -> str:
    name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    if not name or name in ("__main__.py", "-c"):
        return "gpt-cli-tool"
    return name


def build_parser(ctx: ShellContext) -> argparse.ArgumentParser:
    """Builds the argument parser; the help text names the detected platform and shell."""
    prog = program_name()
    parser = argparse.ArgumentParser(
        prog=prog,
        usage=f"{prog} [-v] [-m <model>] <pseudo command>",
        description=(
            f"Convert a pseudo command into a real command that can be run on "
            f"{ctx.platform.value} and {ctx.shell_name or 'an unknown'} command shell.\n\n"
            f"{prog}-{__version__}\n\n"
            f"Command requires API key from OpenAI. {API_KEY_INFO}"
        ),
        epilog=f"Example: {prog} {EXAMPLE}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose")
    parser.add_argument(
        "-m", "--model",
        default=None,
        help=(
            f"OpenAI model (gpt-3.5-turbo, gpt-4, ...), default: {DEFAULT_MODEL}. "
            "For further information, refer to https://platform.openai.com/docs/models/overview"
        ),
    )
    parser.add_argument("-V", "--version", action="store_true", help="display version")
    # Everything from the first word on belongs to the pseudo command, dashes included.
    parser.add_argument("pseudo_command", nargs=argparse.REMAINDER, help="The pseudo command to translate.")
    return parser


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Runs one translate-and-run cycle.

    Returns:
        The process exit code: 0 on normal completion (also when the run was
        declined or the command itself failed), 1 on any terminal error.
    """
    ctx = shell_context.resolve()
    parser = build_parser(ctx)
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help exits 0; usage errors map onto the tool's own failure status
        return 0 if e.code in (0, None) else 1

    if args.version:
        console.print(f"Version: {__version__}", markup=False, highlight=False)
        return 0

    try:
        config = Config.load(model=args.model, verbose=args.verbose)
    except ConfigurationError as e:
        display_error(str(e), console=console)
        return 1
    setup_logging(config)
    logger.debug(f"platform: {ctx.platform.value}, parent process name: {ctx.shell_name!r}")

    pseudo = " ".join(args.pseudo_command)
    if not pseudo.strip():
        parser.print_help()
        console.print(f"Example: {parser.prog} {EXAMPLE}", markup=False, highlight=False)
        return 1

    try:
        config.validate()
        client = OracleClient(
            api_key=config.api_key,
            api_url=config.api_url,
            timeout=config.timeout,
            max_tokens=config.max_tokens,
        )
        with console.status("[yellow]Translating pseudo command...[/yellow]"):
            result = client.translate(pseudo, ctx, config.model)
        executor.confirm_and_run(result, ctx, console=console)
    except ConfigurationError as e:
        display_error(e.message, console=console)
        if e.remediation:
            display_hint(e.remediation, console=console)
        return 1
    except GptCliError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        display_error(str(e), console=console)
        return 1

    return 0
