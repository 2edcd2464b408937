"""Resolution commands for the module-activation CLI."""

import json
import sys

import click

from ..console import console
from ..errors import ActivationError
from ..ui import display_activation_error
from ..ui import render_imports
from ..ui import render_report
from ._options import build_run
from ._options import resolution_options


@click.command("resolve")
@resolution_options
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Show tracebacks on failure")
def resolve_cmd(candidates, metadata, exclude, properties, sites, no_discover, as_json, verbose):
    """Resolve which modules activate and in what order."""
    try:
        resolver, requests = build_run(candidates, metadata, exclude, properties, sites, no_discover)
        result = resolver.resolve(requests)
    except ActivationError as e:
        display_activation_error(console, e, verbose=verbose)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    render_imports(console, result.imports, result.exclusions)


@click.command("explain")
@resolution_options
@click.option("--verbose", "-v", is_flag=True, help="Show tracebacks on failure")
def explain_cmd(candidates, metadata, exclude, properties, sites, no_discover, verbose):
    """Explain why candidates were rejected."""
    try:
        resolver, requests = build_run(candidates, metadata, exclude, properties, sites, no_discover)
        result = resolver.resolve(requests)
    except ActivationError as e:
        display_activation_error(console, e, verbose=verbose)
        sys.exit(1)

    render_report(console, result.report)
    console.print(f"\n[green]✓ {len(result.imports)} modules activated[/green]")
