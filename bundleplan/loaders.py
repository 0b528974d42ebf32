from enum import Enum
from re import search as re_search
from typing import Any

from pydantic import BaseModel, Field

from bundleplan.frozen import FrozenMapping
from bundleplan.mode import BuildMode


class AssetType(str, Enum):
    CSS = "css"
    LESS = "less"
    SASS = "sass"
    IMAGE = "image"
    FONT = "font"
    XML = "xml"
    CSV = "csv"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


# Declaration order is the order rules are handed to the engine
ASSET_PATTERNS: dict[AssetType, str] = {
    AssetType.CSS: r"\.css$",
    AssetType.LESS: r"\.less$",
    AssetType.SASS: r"\.s[ac]ss$",
    AssetType.IMAGE: r"\.(png|jpg|jpeg|svg|gif)$",
    AssetType.FONT: r"\.(ttf|woff|woff2|eot)$",
    AssetType.XML: r"\.xml$",
    AssetType.CSV: r"\.csv$",
    AssetType.TYPESCRIPT: r"\.ts$",
    AssetType.TSX: r"\.tsx$",
}

STYLESHEET_PREPROCESSORS: dict[AssetType, str | None] = {
    AssetType.CSS: None,
    AssetType.LESS: "less-loader",
    AssetType.SASS: "sass-loader",
}

SINGLE_STEP_LOADERS: dict[AssetType, str] = {
    AssetType.IMAGE: "file-loader",
    AssetType.FONT: "file-loader",
    AssetType.XML: "xml-loader",
    AssetType.CSV: "csv-loader",
}

SCRIPT_PRESETS: dict[AssetType, tuple[str, ...]] = {
    AssetType.TYPESCRIPT: ("@babel/preset-typescript",),
    AssetType.TSX: ("@babel/preset-typescript", "@babel/preset-react"),
}

BASE_BABEL_PRESET = "@babel/preset-env"
CLASS_PROPERTIES_PLUGIN = "@babel/plugin-proposal-class-properties"

DEPENDENCY_DIRECTORIES = r"(node_modules|bower_components)"


class TransformStep(BaseModel):
    """
    A single loader in a chain. When `provided_by` is set the loader isn't
    referenced by package name but through the plugin class that ships it
    (ie. `MiniCssExtractPlugin.loader`).

    """

    loader: str
    options: FrozenMapping = Field(default_factory=FrozenMapping)
    provided_by: str | None = None

    model_config = {"frozen": True}


class LoaderRule(BaseModel):
    asset_type: AssetType

    # Regex sources, matched against the full module path
    test: str
    exclude: str | None = None

    use: tuple[TransformStep, ...]

    model_config = {"frozen": True}


def extract_step(mode: BuildMode) -> TransformStep:
    return TransformStep(
        loader="mini-css-extract-plugin",
        provided_by="MiniCssExtractPlugin",
        options={"hmr": mode.is_development},
    )


def stylesheet_chain(
    mode: BuildMode, preprocessor: str | None = None
) -> tuple[TransformStep, ...]:
    """
    The engine runs loaders from the last declared to the first, so the
    preprocessor is declared last to run first: sass/less output feeds
    css-loader, whose output is then extracted into its own file.

    """
    steps = (extract_step(mode), TransformStep(loader="css-loader"))
    if preprocessor:
        steps += (TransformStep(loader=preprocessor),)
    return steps


def babel_options(extra_presets: tuple[str, ...] = ()) -> dict[str, Any]:
    return {
        "presets": (BASE_BABEL_PRESET, *extra_presets),
        "plugins": (CLASS_PROPERTIES_PLUGIN,),
    }


def script_chain(asset_type: AssetType) -> tuple[TransformStep, ...]:
    return (
        TransformStep(
            loader="babel-loader",
            options=babel_options(SCRIPT_PRESETS[asset_type]),
        ),
    )


def chain(asset_type: AssetType, mode: BuildMode) -> tuple[TransformStep, ...]:
    if asset_type in STYLESHEET_PREPROCESSORS:
        return stylesheet_chain(mode, STYLESHEET_PREPROCESSORS[asset_type])
    if asset_type in SINGLE_STEP_LOADERS:
        return (TransformStep(loader=SINGLE_STEP_LOADERS[asset_type]),)
    return script_chain(asset_type)


def loader_rules(mode: BuildMode) -> tuple[LoaderRule, ...]:
    return tuple(
        LoaderRule(
            asset_type=asset_type,
            test=pattern,
            exclude=DEPENDENCY_DIRECTORIES if asset_type in SCRIPT_PRESETS else None,
            use=chain(asset_type, mode),
        )
        for asset_type, pattern in ASSET_PATTERNS.items()
    )


def match_asset_type(filename: str) -> AssetType | None:
    """
    Find the rule the engine would apply to the given file. Files that match
    no rule return None; the engine passes them through unprocessed.

    """
    for asset_type, pattern in ASSET_PATTERNS.items():
        if not re_search(pattern, filename):
            continue
        if asset_type in SCRIPT_PRESETS and re_search(DEPENDENCY_DIRECTORIES, filename):
            continue
        return asset_type
    return None
