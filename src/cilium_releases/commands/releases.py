"""Releases command implementation."""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cilium_releases.core.config import get_config
from cilium_releases.core.errors import CiliumReleasesError
from cilium_releases.core.github import GitHubClient

console = Console()


@click.command()
@click.option(
    "--count",
    "-n",
    default=30,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of releases to fetch",
)
def releases(count: int):
    """List the latest releases of the upstream repository."""
    config = get_config()

    with GitHubClient(config) as client:
        try:
            results = client.get_latest_releases(count)
        except CiliumReleasesError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise SystemExit(1)

    if not results:
        console.print(f"No releases found for {config.repo_slug}")
        raise SystemExit(0)

    table = Table(show_header=True, header_style="bold", title=config.repo_slug)
    table.add_column("ID", justify="right")
    table.add_column("Tag")
    table.add_column("Name")
    table.add_column("Draft")
    table.add_column("Assets", justify="right")

    for release in results:
        table.add_row(
            str(release.id),
            escape(release.tag_name),
            escape(release.name),
            "yes" if release.draft else "",
            str(len(release.assets)),
        )

    console.print(table)
