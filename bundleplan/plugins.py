from bundleplan.config import BuildSettings
from bundleplan.filenames import filename_pattern
from bundleplan.mode import BuildMode
from bundleplan.references import PackageReference


class PluginDescriptor(PackageReference):
    pass


def clean_plugin() -> PluginDescriptor:
    return PluginDescriptor(
        name="clean",
        package="clean-webpack-plugin",
        export="CleanWebpackPlugin",
        named_export=True,
    )


def html_plugin(mode: BuildMode, settings: BuildSettings) -> PluginDescriptor:
    return PluginDescriptor(
        name="html",
        package="html-webpack-plugin",
        export="HTMLWebpackPlugin",
        options={
            "template": settings.TEMPLATE,
            "filename": settings.HTML_FILENAME,
            "minify": {"collapseWhitespace": mode.is_production},
            "cache": False,
        },
    )


def copy_plugin(settings: BuildSettings) -> PluginDescriptor:
    return PluginDescriptor(
        name="copy",
        package="copy-webpack-plugin",
        export="CopyWebpackPlugin",
        options={
            "patterns": tuple(
                {
                    "from": str(settings.resolve_project_path(pattern.source)),
                    "to": str(settings.resolve_project_path(pattern.destination)),
                }
                for pattern in settings.COPY_PATTERNS
            ),
        },
    )


def css_extract_plugin(mode: BuildMode) -> PluginDescriptor:
    return PluginDescriptor(
        name="css-extract",
        package="mini-css-extract-plugin",
        export="MiniCssExtractPlugin",
        options={"filename": filename_pattern("css", mode).template},
    )


def bundle_analyzer_plugin() -> PluginDescriptor:
    return PluginDescriptor(
        name="bundle-analyzer",
        package="webpack-bundle-analyzer",
        export="BundleAnalyzerPlugin",
        named_export=True,
    )


def plugins(mode: BuildMode, settings: BuildSettings) -> tuple[PluginDescriptor, ...]:
    """
    Whole-build plugins, in the order the engine should apply them. Production
    builds get the same list as development plus a bundle size report at the end.

    """
    copy_step = (copy_plugin(settings),) if settings.COPY_ASSETS else ()
    analysis_step = (bundle_analyzer_plugin(),) if mode.is_production else ()

    return (
        clean_plugin(),
        html_plugin(mode, settings),
        *copy_step,
        css_extract_plugin(mode),
        *analysis_step,
    )
