from __future__ import annotations

import typer

from modrel import __version__
from modrel.cli.commands.prerelease_cmd import prerelease
from modrel.cli.commands.tag_cmd import tag
from modrel.cli.commands.verify_cmd import verify


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Versioning and tagging for repositories with multiple modules.",
)


app.command()(verify)
app.command()(prerelease)
app.command()(tag)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_show_version,
        is_eager=True,
    ),
) -> None:
    pass


def main() -> None:
    app()
