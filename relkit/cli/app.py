from __future__ import annotations

import typer

from relkit import __version__
from relkit.core.errors import ErrorCode
from relkit.core.variables import NO_INTERACTIVE_ENV

from .context import build_context
from .steps import STEPS, Pipeline

USAGE = """\
Usage: relkit [OPTIONS] [clean] [build] [release]

  clean    Remove and recreate the release directory
  build    Cross-compile every main package for linux/amd64, linux/386, darwin/amd64
  release  Create the GitHub release and upload every artifact

With no step, runs clean, build and release in that order.

Environment: GIT_TAG, GITHUB_REPOSITORY, GITHUB_OAUTH_TOKEN, RELEASE_NAME,
SCRIPTS_NO_INTERACTIVE (never prompt, use defaults).

Options:
  --no-interactive  Same as SCRIPTS_NO_INTERACTIVE=1
  --version         Show version and exit
"""


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def select_steps(tokens: list[str] | None) -> list[str] | None:
    """Steps to run, or None if any token is not a known step."""
    if not tokens:
        return list(STEPS)
    if any(token not in STEPS for token in tokens):
        return None
    return list(tokens)


@app.command(context_settings={"ignore_unknown_options": True})
def relkit(
    steps: list[str] | None = typer.Argument(None, help="Steps: clean, build, release."),
    no_interactive: bool = typer.Option(
        False, "--no-interactive", help="Never prompt; use defaults for missing values."
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Clean, cross-compile and publish a release."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    selected = select_steps(steps)
    if selected is None:
        typer.echo(USAGE)
        raise typer.Exit(code=int(ErrorCode.FATAL))

    ctx = build_context()
    if no_interactive:
        ctx.env[NO_INTERACTIVE_ENV] = "1"

    Pipeline(ctx).run(selected)


def main() -> None:
    app()
