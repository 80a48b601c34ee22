"""Files command implementation."""

import click
from rich.console import Console
from rich.markup import escape

from cilium_releases.core.errors import GetFileNamesError
from cilium_releases.core.files import get_file_names
from cilium_releases.core.github import parse_repo_spec

console = Console()


@click.command()
@click.argument("repo_spec")
@click.argument("path", default="")
def files(repo_spec: str, path: str):
    """List the files in a repository directory on the master branch.

    REPO_SPEC is owner/repo or a GitHub URL. Append '/**' to PATH to
    include files in subdirectories.
    """
    try:
        owner, repo = parse_repo_spec(repo_spec)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    try:
        names = get_file_names(owner, repo, path)
    except GetFileNamesError as e:
        for name in sorted(e.names):
            console.print(name, highlight=False, markup=False)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if not names:
        console.print(f"No files found under '{escape(path or '/')}'")
        raise SystemExit(0)

    for name in sorted(names):
        console.print(name, highlight=False, markup=False)
