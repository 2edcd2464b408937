"""Exclusion management commands."""

import click

from ..console import console
from ..settings import SettingsManager
from ..utils.error_format import escape_markup

SCOPE_OPTION = click.option(
    "--scope",
    type=click.Choice(["user", "project", "local"]),
    default="project",
    show_default=True,
    help="Settings scope to modify",
)


@click.group(invoke_without_command=True)
@click.pass_context
def exclude(ctx: click.Context):
    """Manage persistent module exclusions."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@exclude.command("add")
@click.argument("module_id")
@SCOPE_OPTION
def add_exclusion(module_id: str, scope: str):
    """Exclude a module from activation."""
    SettingsManager().add_exclusion(module_id, scope)  # type: ignore[arg-type]
    console.print(f"[green]✓ Excluded {escape_markup(module_id)} ({scope})[/green]")


@exclude.command("remove")
@click.argument("module_id")
@SCOPE_OPTION
def remove_exclusion(module_id: str, scope: str):
    """Remove a module exclusion."""
    if SettingsManager().remove_exclusion(module_id, scope):  # type: ignore[arg-type]
        console.print(f"[green]✓ Removed exclusion {escape_markup(module_id)} ({scope})[/green]")
    else:
        console.print(f"[yellow]No {scope} exclusion for {escape_markup(module_id)}[/yellow]")


@exclude.command("list")
def list_exclusions():
    """List exclusions from merged settings."""
    excluded = SettingsManager().get_activation_settings().exclude
    if not excluded:
        console.print("[dim]No exclusions configured[/dim]")
        return
    for module_id in excluded:
        console.print(f"  • {escape_markup(module_id)}")
