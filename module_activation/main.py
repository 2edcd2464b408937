"""module-activation CLI - resolve which modules activate and in what order."""

import click

from .commands.exclude import exclude as exclude_group
from .commands.resolve import explain_cmd
from .commands.resolve import resolve_cmd
from .logging_setup import init_json_logging


@click.group(invoke_without_command=True)
@click.version_option(package_name="module-activation")
@click.option("--log-file", type=click.Path(), default=None, help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for the JSONL log",
)
@click.pass_context
def cli(ctx: click.Context, log_file: str | None, log_level: str | None):
    """Module activation - resolve activated modules and their order."""
    if log_file or log_level:
        init_json_logging(log_file, log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(resolve_cmd)
cli.add_command(explain_cmd)
cli.add_command(exclude_group)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
