"""Clean error display for activation failures."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..errors import ActivationError
from ..errors import CyclicOrderingError
from ..errors import InvalidExclusionError
from ..utils.error_format import format_error_message


def _offending_modules(error: ActivationError) -> tuple[str, list[str]]:
    if isinstance(error, InvalidExclusionError):
        return "Invalid Exclusions", error.invalid_exclusions
    if isinstance(error, CyclicOrderingError):
        return "Ordering Cycle", error.unresolved
    return "Activation Failed", []


def display_activation_error(console: Console, error: Exception, verbose: bool = False) -> bool:
    """
    Display an ActivationError with clean Rich formatting.

    Args:
        console: Rich console for output
        error: The error to display
        verbose: If True, also print traceback

    Returns:
        True if error was handled as activation error, False if not (caller should handle)
    """
    if not isinstance(error, ActivationError):
        return False

    title, modules = _offending_modules(error)
    content = Text(format_error_message(error, include_type=False).splitlines()[0], style="red")

    console.print()
    console.print(
        Panel(
            content,
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
            padding=(1, 2),
        )
    )

    if modules:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Status", style="red", width=3)
        table.add_column("Module", style="bold")
        for module_id in modules:
            table.add_row("✗", module_id)
        console.print(table)
    console.print()

    if verbose:
        console.print_exception()

    return True
