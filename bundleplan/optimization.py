from pydantic import BaseModel, Field

from bundleplan.mode import BuildMode
from bundleplan.references import PackageReference


class SplitChunksPolicy(BaseModel):
    # Split every shared chunk, async and initial alike
    chunks: str = "all"

    model_config = {"frozen": True}


class MinimizerDescriptor(PackageReference):
    pass


class OptimizationConfig(BaseModel):
    split_chunks: SplitChunksPolicy = Field(default_factory=SplitChunksPolicy)
    minimizer: tuple[MinimizerDescriptor, ...] = ()

    model_config = {"frozen": True}


def stylesheet_minimizer() -> MinimizerDescriptor:
    return MinimizerDescriptor(
        name="css-minimizer",
        package="optimize-css-assets-webpack-plugin",
        export="OptimizeCssAssetsWebpackPlugin",
    )


def script_minimizer() -> MinimizerDescriptor:
    return MinimizerDescriptor(
        name="terser",
        package="terser-webpack-plugin",
        export="TerserWebpackPlugin",
    )


def minimizers(mode: BuildMode) -> tuple[MinimizerDescriptor, ...]:
    if mode.is_development:
        return ()
    # Stylesheets are minimized before scripts
    return (stylesheet_minimizer(), script_minimizer())


def optimization_config(mode: BuildMode) -> OptimizationConfig:
    """
    Chunk splitting applies in both modes since it changes how assets are
    cached, not how large they are. Minification only runs for production
    builds to keep development rebuilds fast and their output readable.

    """
    return OptimizationConfig(
        split_chunks=SplitChunksPolicy(chunks="all"),
        minimizer=minimizers(mode),
    )
