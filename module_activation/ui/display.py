"""Rich tables for resolution output."""

from rich.console import Console
from rich.table import Table

from ..conditions import ConditionEvaluationReport
from ..coordinator import Import
from ..utils.error_format import escape_markup


def render_imports(console: Console, imports: list[Import], exclusions: set[str]) -> None:
    """Print the activation order and the exclusions."""
    if not imports:
        console.print("[dim]No modules activated[/dim]")
    else:
        table = Table(title="Activated Modules", show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Module", style="green")
        table.add_column("Site", style="magenta")
        for index, item in enumerate(imports, start=1):
            table.add_row(str(index), escape_markup(item.module_id), escape_markup(item.site))
        console.print(table)

    if exclusions:
        console.print(f"\n[yellow]Excluded:[/yellow] {escape_markup(', '.join(sorted(exclusions)))}")


def render_report(console: Console, report: ConditionEvaluationReport) -> None:
    """Print why candidates were rejected."""
    if not report.outcomes:
        console.print("[dim]No candidates were rejected by conditions[/dim]")
    else:
        table = Table(title="Condition Evaluation Report", show_header=True, header_style="bold cyan")
        table.add_column("Module", style="yellow")
        table.add_column("Filter", style="cyan")
        table.add_column("Reason")
        for outcome in report.outcomes:
            table.add_row(
                escape_markup(outcome.module_id),
                escape_markup(outcome.filter_name),
                escape_markup(outcome.message),
            )
        console.print(table)

    if report.exclusions:
        console.print(f"\n[yellow]Excluded:[/yellow] {escape_markup(', '.join(report.exclusions))}")
