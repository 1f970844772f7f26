"""jforge build command - Compile all sources, then run the entry point."""

from __future__ import annotations

import click

from jforge_cli.errors import build_errors


@click.command("build")
@click.pass_context
def build_cmd(ctx: click.Context) -> None:
    """Compile every Java source, then run the application.

    Discovers all `.java` files under `src/main/java`, compiles them into
    `classes/` with `javac`, and runs `main.java.Main` with `java`. Tool
    output is shown as it is produced. Any failure exits with status 1.

    Examples:

        jforge build

        jforge -v build
    """
    # Import here to keep CLI startup light
    from jforge_cli.progress import stage_reporter
    from jforge_core.config import BuildConfig
    from jforge_core.runner import BuildRunner

    with build_errors():
        config = ctx.ensure_object(BuildConfig)
        BuildRunner(config, on_stage=stage_reporter(config)).execute()
