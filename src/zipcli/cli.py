"""Main CLI entry point for zipcli."""

from __future__ import annotations

from typing import List

import click

from .arguments import USAGE, ArgumentError, parse_argv
from .config import ArchiverConfig
from .exporters.zip import ZipExporter
from .planner import Planner


class RawArgsCommand(click.Command):
    """A click command whose callback receives the argument vector untouched.

    zipcli's options (``-nr``, ``-content``, ``-separate``, ``-o``) follow their
    own grammar, scanned by :func:`zipcli.arguments.parse_argv`.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.params["argv"] = list(args)
        return []


def fail(ctx: click.Context, message: str) -> None:
    click.secho(message, fg="red", err=True)
    ctx.exit(1)


@click.command(cls=RawArgsCommand, add_help_option=False)
@click.pass_context
def main(ctx: click.Context, argv: List[str]):
    """Packages files and directories into ZIP archives."""
    try:
        plan = parse_argv(argv)
    except ArgumentError as e:
        if str(e):
            click.secho(str(e), fg="red", err=True)
        click.echo(USAGE)
        ctx.exit(1)

    try:
        config = ArchiverConfig.load()
    except (OSError, ValueError) as e:
        fail(ctx, f"Invalid configuration: {e}")

    exporter = ZipExporter(config)
    try:
        for target in Planner(plan).targets():
            exporter.export(target)
    except OSError as e:
        fail(ctx, f"Error during zipping: {e}")


if __name__ == "__main__":
    main()
