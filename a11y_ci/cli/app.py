"""Typer-based CLI application for a11y-ci."""

from importlib.metadata import version as get_version
from typing import Annotated

import typer

from a11y_ci.cli.commands.run import run_command


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"a11y-ci {get_version('a11y-ci')}")
        raise typer.Exit()


# Main Typer app
app = typer.Typer(
    name="a11y-ci",
    help="a11y-ci - Accessibility checks for a batch of URLs.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """a11y-ci - Accessibility checks for a batch of URLs."""


app.command(name="run")(run_command)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
