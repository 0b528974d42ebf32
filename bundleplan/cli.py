from pathlib import Path

from click import Choice, Path as ClickPath, echo, group, option, pass_context
from rich.markup import escape
from rich.table import Table

from bundleplan.assembler import assemble, verify_sources
from bundleplan.config import BuildSettings, load_settings
from bundleplan.console import CONSOLE, ERROR_CONSOLE
from bundleplan.exceptions import ConfigurationError
from bundleplan.logging import LOGGER, debug_log_artifact, log_time_duration
from bundleplan.mode import BuildMode, mode_from_environment, resolve_mode
from bundleplan.render import render_config_module, render_json

MODE_CHOICES = Choice([mode.value for mode in BuildMode])


def resolve_cli_mode(mode_flag: str | None) -> BuildMode:
    """
    The mode is resolved exactly once per invocation: the explicit flag wins,
    otherwise we fall back to NODE_ENV.

    """
    mode = resolve_mode(mode_flag) if mode_flag else mode_from_environment()
    LOGGER.debug(f"Resolved build mode: {mode.value}", extra={"build_mode": mode.value})
    return mode


def exit_with_error(error: ConfigurationError):
    ERROR_CONSOLE.print(f"[bold red]Configuration error: {escape(str(error))}")
    raise SystemExit(1)


@group()
@option(
    "--project-root",
    type=ClickPath(file_okay=False, path_type=Path),
    default=None,
    help="Directory that holds the source and output directories.",
)
@pass_context
def main(ctx, project_root: Path | None):
    """
    Compose the bundler configuration for a development or production build.

    """
    overrides = {"PROJECT_ROOT": project_root} if project_root else {}
    try:
        ctx.obj = load_settings(**overrides)
    except ConfigurationError as e:
        exit_with_error(e)


@main.command()
@option("--mode", type=MODE_CHOICES, default=None, help="Overrides NODE_ENV.")
@option(
    "--format",
    "output_format",
    type=Choice(["json", "js"]),
    default="json",
    help="json for the raw descriptor, js for a webpack.config.js module.",
)
@option(
    "--output",
    type=ClickPath(dir_okay=False, path_type=Path),
    default=None,
    help="Write the descriptor to this file instead of stdout.",
)
@option(
    "--check/--no-check",
    default=True,
    help="Verify that entry points and the template exist before writing.",
)
@pass_context
def describe(
    ctx,
    mode: str | None,
    output_format: str,
    output: Path | None,
    check: bool,
):
    """
    Assemble the build descriptor and print or write it.

    """
    settings: BuildSettings = ctx.obj
    build_mode = resolve_cli_mode(mode)

    try:
        if check:
            verify_sources(settings)
    except ConfigurationError as e:
        exit_with_error(e)

    with log_time_duration("Assemble build descriptor", build_mode=build_mode.value):
        descriptor = assemble(build_mode, settings)

    if output_format == "js":
        rendered = render_config_module(descriptor)
    else:
        rendered = render_json(descriptor) + "\n"

    debug_log_artifact("descriptor", output_format, rendered)

    if output is None:
        echo(rendered, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered)
    CONSOLE.print(f"[green]Wrote {build_mode.value} descriptor to {output}")


@main.command(name="check")
@option("--mode", type=MODE_CHOICES, default=None, help="Overrides NODE_ENV.")
@pass_context
def check_sources(ctx, mode: str | None):
    """
    Validate the build sources and summarize the decisions for the mode.

    """
    settings: BuildSettings = ctx.obj
    build_mode = resolve_cli_mode(mode)

    try:
        verify_sources(settings)
    except ConfigurationError as e:
        exit_with_error(e)

    descriptor = assemble(build_mode, settings)

    table = Table(title=f"{build_mode.value} build")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Script filename", descriptor.output.filename.template)
    table.add_row(
        "Minimizers",
        ", ".join(minimizer.name for minimizer in descriptor.optimization.minimizer)
        or "none",
    )
    table.add_row("Plugins", ", ".join(plugin.name for plugin in descriptor.plugins))
    table.add_row("Source maps", str(descriptor.devtool or "disabled"))
    table.add_row("Loader rules", str(len(descriptor.rules)))
    CONSOLE.print(table)
    CONSOLE.print("[green]Build sources verified")
