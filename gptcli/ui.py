from rich.console import Console
from rich.text import Text

from .response import TranslationResult

console = Console()

LEAD_IN = "Looks insanely complicated? Don't panic. The answer is ..."
CONFIRM_PROMPT = "Run? (y/n) "


def display_translation(result: TranslationResult, console: Console = console) -> None:
    """Display the token usage and the translated command."""
    console.print(LEAD_IN, markup=False, highlight=False)
    console.print(f"number of tokens used (total_tokens): {result.total_tokens}", markup=False, highlight=False)
    # Text keeps brackets in the command from being read as rich markup
    console.print(Text(result.command, style="cyan"))


def ask_confirmation(console: Console = console) -> str:
    """Read one line of input from the user. End of input counts as an empty answer."""
    try:
        return console.input(CONFIRM_PROMPT)
    except EOFError:
        console.print()
        return ""


def display_error(message: str, console: Console = console) -> None:
    console.print(Text(message, style="bold red"))


def display_hint(message: str, console: Console = console) -> None:
    console.print(Text(message, style="yellow"))
