"""The `jforge` console script: root group, global options, subcommand table."""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from jforge_cli import __version__
from jforge_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

_LOG_LEVELS = ("WARNING", "INFO", "DEBUG")


class LazyGroup(rclick.RichGroup):
    """Group whose subcommands are imported on first use.

    `jforge --help` only needs command names, so listing commands never
    imports the build pipeline.

    Attributes:
        lazy_subcommands: Command name to "module.attribute" of the command.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is None and cmd_name in self.lazy_subcommands:
            cmd = self._load(cmd_name)
        return cmd

    def _load(self, cmd_name: str) -> click.Command:
        module_name, _, attr = self.lazy_subcommands[cmd_name].rpartition(".")
        cmd = getattr(importlib.import_module(module_name), attr)
        # Later lookups find it in self.commands
        self.add_command(cmd, cmd_name)
        return cmd  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "build": "jforge_cli.commands.build.build_cmd",
    "compile": "jforge_cli.commands.compile.compile_cmd",
    "sources": "jforge_cli.commands.sources.sources",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="jforge")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log pipeline events to stderr (-vv for debug detail).",
)
def cli(verbose: int) -> None:
    """jforge - Compile every Java source, then run the application.

    Sources are read from `src/main/java`, compiled with `javac` into
    `classes/`, and `main.java.Main` is run with `java`.

    **Commands:**

    - `jforge build` - Compile, then run the entry point
    - `jforge compile` - Compile only
    - `jforge sources` - List the sources that would be compiled
    """
    from jforge_core.observability import configure_logging

    configure_logging(log_level=_LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)])


if __name__ == "__main__":
    cli()
