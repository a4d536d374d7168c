import logging
import subprocess
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from rich.console import Console

from .errors import ExecutionError, UnsupportedShellError
from .response import TranslationResult
from .shell_context import Platform, ShellContext
from . import ui

# Configure logging
logger = logging.getLogger(__name__)

AFFIRMATIVE = "y"


@dataclass(frozen=True)
class Launcher:
    """A shell executable and the flag that makes it run one command line."""

    executable: str
    flag: str

    def argv(self, command: str) -> List[str]:
        # The command stays a single argument; quoting is left to the shell.
        return [self.executable, self.flag, command]


_POSIX_LAUNCHERS = {
    "zsh": Launcher("zsh", "-c"),
    "bash": Launcher("bash", "-c"),
}

LAUNCHERS: Dict[Platform, Dict[str, Launcher]] = {
    Platform.WINDOWS: {
        "powershell.exe": Launcher("powershell.exe", "-c"),
        "cmd.exe": Launcher("cmd.exe", "/C"),
    },
    Platform.DARWIN: _POSIX_LAUNCHERS,
    Platform.LINUX: _POSIX_LAUNCHERS,
    Platform.OTHER: _POSIX_LAUNCHERS,
}


@dataclass(frozen=True)
class ExitOutcome:
    """What happened after the translated command was shown."""

    executed: bool
    returncode: Optional[int] = None
    error: Optional[str] = None


def resolve_launcher(ctx: ShellContext) -> Launcher:
    """
    Look up the launcher for a shell context.

    Raises:
        UnsupportedShellError: No launcher is known for the platform and shell.
    """
    launcher = LAUNCHERS.get(ctx.platform, {}).get(ctx.shell_name)
    if launcher is None:
        raise UnsupportedShellError(ctx.platform.value, ctx.shell_name)
    return launcher


def is_confirmed(answer: str) -> bool:
    """Only the exact answer "y" confirms; everything else declines."""
    return answer == AFFIRMATIVE


class CommandExecutor:
    """Handles execution of the confirmed command."""

    def execute_command(self, argv: List[str]) -> int:
        """
        Run a command with the tool's own stdout and stderr.

        Args:
            argv: The launcher argv, e.g. ``["bash", "-c", "ls -la"]``.

        Returns:
            The child's return code.

        Raises:
            ExecutionError: The child could not be started or exited non-zero.
        """
        logger.info(f"Executing command: {argv}")
        try:
            # stdout/stderr are inherited so output streams live; stdin is not forwarded.
            process = subprocess.run(argv, stdin=subprocess.DEVNULL, check=False)
        except OSError as e:
            logger.error(f"Could not start {argv[0]}: {e}")
            raise ExecutionError(f"Error: could not start {argv[0]}: {e}") from e

        if process.returncode != 0:
            logger.error(f"Command failed with return code {process.returncode}")
            raise ExecutionError(f"Error: exit status {process.returncode}", process.returncode)

        logger.info("Command executed successfully")
        return process.returncode

    def confirm_and_run(
        self,
        result: TranslationResult,
        ctx: ShellContext,
        console: Console = ui.console,
        ask: Optional[Callable[[], str]] = None,
    ) -> ExitOutcome:
        """
        Show the translated command, ask for confirmation and run it.

        A failing child is reported on the console and returned in the outcome,
        it is not raised.

        Raises:
            UnsupportedShellError: The user confirmed, but the shell has no launcher.
        """
        ui.display_translation(result, console=console)
        answer = ask() if ask is not None else ui.ask_confirmation(console=console)
        if not is_confirmed(answer):
            logger.debug(f"Run not confirmed (answer {answer!r})")
            return ExitOutcome(executed=False)

        launcher = resolve_launcher(ctx)
        try:
            returncode = self.execute_command(launcher.argv(result.command))
        except ExecutionError as e:
            ui.display_error(str(e), console=console)
            return ExitOutcome(executed=True, returncode=e.returncode, error=str(e))
        return ExitOutcome(executed=True, returncode=returncode)


# Create a global executor instance
executor = CommandExecutor()
