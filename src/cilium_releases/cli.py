"""CLI entry point for cilium-releases."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from cilium_releases import __version__
from cilium_releases.commands import files, releases, versions
from cilium_releases.core.config import get_config
from cilium_releases.core.errors import ConfigError

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route log records through rich, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="cilium-releases")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """cilium-releases - look up Cilium releases and repository files.

    Examples:

        cilium-releases releases --count 10

        cilium-releases versions --limit 3

        cilium-releases files cilium/cilium install/kubernetes
    """
    setup_logging(verbose)

    try:
        get_config()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)


# Register commands
main.add_command(releases.releases)
main.add_command(versions.versions)
main.add_command(files.files)


if __name__ == "__main__":
    main()
