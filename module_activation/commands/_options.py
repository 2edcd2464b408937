"""Options shared by the resolution commands."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from ..resolver import ActivationResolver
from ..selector import ActivationRequest
from ..settings import SettingsManager


def parse_properties(values: tuple[str, ...]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs.

    Raises:
        click.BadParameter: If a pair has no '='
    """
    properties = {}
    for value in values:
        key, sep, prop = value.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got '{value}'", param_hint="--property")
        properties[key.strip()] = prop.strip()
    return properties


def resolution_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options describing one resolution run."""
    options = [
        click.option(
            "--candidates",
            "-c",
            multiple=True,
            type=click.Path(path_type=Path),
            help="Candidate list file (one module id per line); repeatable",
        ),
        click.option("--metadata", "-m", type=click.Path(path_type=Path), help="Module metadata YAML file"),
        click.option("--exclude", "-x", multiple=True, help="Module id to exclude from the first site; repeatable"),
        click.option("--property", "-p", "properties", multiple=True, help="Environment property KEY=VALUE; repeatable"),
        click.option("--site", "-s", "sites", multiple=True, help="Request site name; repeatable"),
        click.option("--no-discover", is_flag=True, help="Do not scan installed entry points"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_run(
    candidates: tuple[Path, ...],
    metadata: Path | None,
    exclude: tuple[str, ...],
    properties: tuple[str, ...],
    sites: tuple[str, ...],
    no_discover: bool,
) -> tuple[ActivationResolver, list[ActivationRequest]]:
    """Create the resolver and site requests for a CLI invocation."""
    resolver = ActivationResolver.from_settings(
        settings_manager=SettingsManager(),
        properties=parse_properties(properties),
        candidate_files=list(candidates),
        metadata_path=metadata,
        discover=not no_discover,
    )
    names = list(sites) or ["application"]
    requests = [ActivationRequest(site=name) for name in names]
    requests[0].exclude = list(exclude)
    return resolver, requests
