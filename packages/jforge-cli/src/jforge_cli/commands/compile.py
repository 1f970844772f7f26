"""jforge compile command - Compile all sources without running them."""

from __future__ import annotations

import click

from jforge_cli.errors import build_errors


@click.command("compile")
@click.pass_context
def compile_cmd(ctx: click.Context) -> None:
    """Compile every Java source into the output directory.

    Same as `jforge build` without the run step.

    Examples:

        jforge compile
    """
    from jforge_cli.progress import stage_reporter
    from jforge_core.config import BuildConfig
    from jforge_core.runner import BuildRunner

    with build_errors():
        config = ctx.ensure_object(BuildConfig)
        BuildRunner(config, on_stage=stage_reporter(config)).execute(run=False)
