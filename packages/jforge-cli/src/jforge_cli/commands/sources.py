"""jforge sources command - List the sources that would be compiled."""

from __future__ import annotations

import click

from jforge_cli.errors import build_errors
from jforge_cli.output import info


@click.command()
@click.pass_context
def sources(ctx: click.Context) -> None:
    """List the Java sources that `jforge build` would compile.

    Paths are printed one per line in compiler command-line order. Nothing
    is created or compiled.

    Examples:

        jforge sources
    """
    from jforge_cli.progress import language_label
    from jforge_core.config import BuildConfig
    from jforge_core.errors import EmptyInputError
    from jforge_core.runner import BuildRunner

    with build_errors():
        config = ctx.ensure_object(BuildConfig)
        found = BuildRunner(config).discover_sources()
        if not found:
            raise EmptyInputError(config.source_root, config.extension)

        for path in found:
            info(str(path))
        info(f"Found {len(found)} {language_label(config.extension)} files")
