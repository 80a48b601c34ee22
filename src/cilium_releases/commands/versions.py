"""Versions command implementation."""

import click
from rich.console import Console
from rich.markup import escape

from cilium_releases.core.errors import CiliumReleasesError
from cilium_releases.core.github import GitHubClient
from cilium_releases.core.releases import latest_release_names

console = Console()


@click.command()
@click.option(
    "--limit",
    "-n",
    default=5,
    show_default=True,
    type=click.IntRange(min=0),
    help="Maximum number of versions to show",
)
@click.option(
    "--semantic",
    is_flag=True,
    help="Order by numeric version components instead of plain string order",
)
def versions(limit: int, semantic: bool):
    """Show the newest stable release versions, newest first."""
    with GitHubClient() as client:
        try:
            names = latest_release_names(limit, client=client, semantic=semantic)
        except CiliumReleasesError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise SystemExit(1)

    if not names:
        console.print("No matching versions found")
        raise SystemExit(0)

    for name in names:
        console.print(name, highlight=False, markup=False)
