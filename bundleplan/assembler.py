from pathlib import Path

from bundleplan.config import BuildSettings
from bundleplan.descriptor import (
    BuildDescriptor,
    DevServerSettings,
    OutputSettings,
    ResolveSettings,
)
from bundleplan.exceptions import MissingSourceError
from bundleplan.filenames import filename_pattern
from bundleplan.loaders import loader_rules
from bundleplan.logging import LOGGER, pluralize
from bundleplan.mode import BuildMode
from bundleplan.optimization import optimization_config
from bundleplan.plugins import plugins


def assemble(mode: BuildMode, settings: BuildSettings) -> BuildDescriptor:
    """
    Compose the full build descriptor for one build invocation. Every
    mode-dependent decision is delegated to the individual composers, which
    all receive the same resolved mode; this function only merges their
    results with the static project structure.

    Settings are passed in rather than read here, so assembly never looks at
    the process environment. Pure: the same mode and settings always produce
    an equal descriptor, and no two descriptors share mutable state.

    """
    output_path = str(settings.output_path)

    optimization = optimization_config(mode)
    build_plugins = plugins(mode, settings)
    rules = loader_rules(mode)

    minimizer_count = len(optimization.minimizer)
    plugin_count = len(build_plugins)
    LOGGER.debug(
        f"Assembling {mode.value} descriptor: "
        f"{minimizer_count} {pluralize(minimizer_count, 'minimizer', 'minimizers')}, "
        f"{plugin_count} {pluralize(plugin_count, 'plugin', 'plugins')}, "
        f"{len(rules)} loader rules",
        extra={"build_mode": mode.value},
    )

    return BuildDescriptor(
        mode=mode,
        context=str(settings.source_path),
        entry={name: tuple(modules) for name, modules in settings.ENTRY_POINTS.items()},
        output=OutputSettings(
            path=output_path,
            filename=filename_pattern("js", mode),
            public_path=output_path if settings.PUBLIC_PATH_ENABLED else None,
        ),
        resolve=ResolveSettings(
            extensions=tuple(settings.RESOLVE_EXTENSIONS),
            alias={
                name: str(settings.resolve_project_path(target))
                for name, target in settings.ALIASES.items()
            },
        ),
        optimization=optimization,
        dev_server=DevServerSettings(
            content_base=output_path,
            port=settings.DEV_SERVER_PORT,
            open=settings.DEV_SERVER_OPEN,
            hot=True,
            inline=True,
            write_to_disk=settings.WRITE_TO_DISK,
        ),
        devtool="source-map" if mode.is_development else False,
        plugins=build_plugins,
        rules=rules,
    )


def is_local_module(module: str) -> bool:
    # Bare specifiers like "@babel/polyfill" resolve through node_modules
    return module.startswith(".") or module.startswith("/")


def find_missing_sources(settings: BuildSettings) -> list[Path]:
    source_path = settings.source_path

    candidates = [
        source_path / module
        for modules in settings.ENTRY_POINTS.values()
        for module in modules
        if is_local_module(module)
    ]
    candidates.append(source_path / settings.TEMPLATE)

    return [path.resolve() for path in candidates if not path.is_file()]


def verify_sources(settings: BuildSettings) -> None:
    """
    Check that every local entry point module and the HTML template exist in
    the source directory. Must run before the descriptor is handed to the
    engine; a missing source stops the build before any bundling starts.

    :raises MissingSourceError: Lists every path that couldn't be found

    """
    missing = find_missing_sources(settings)
    if missing:
        noun = pluralize(len(missing), "source", "sources")
        LOGGER.error(f"Missing {len(missing)} build {noun}")
        raise MissingSourceError(missing)
