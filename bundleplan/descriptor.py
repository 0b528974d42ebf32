from typing import Any, Literal

from pydantic import BaseModel

from bundleplan.filenames import FilenamePattern
from bundleplan.frozen import FrozenMapping, thaw
from bundleplan.loaders import LoaderRule, TransformStep
from bundleplan.mode import BuildMode
from bundleplan.optimization import OptimizationConfig
from bundleplan.plugins import PluginDescriptor
from bundleplan.references import PackageReference


class OutputSettings(BaseModel):
    path: str
    filename: FilenamePattern
    public_path: str | None = None

    model_config = {"frozen": True}


class ResolveSettings(BaseModel):
    extensions: tuple[str, ...]

    # Short import name to absolute directory
    alias: FrozenMapping

    model_config = {"frozen": True}


class DevServerSettings(BaseModel):
    """
    Always assembled, only read by the engine when it's started in serve mode.

    """

    content_base: str
    port: int
    open: bool
    hot: bool
    inline: bool = True
    write_to_disk: bool = False

    model_config = {"frozen": True}


class BuildDescriptor(BaseModel):
    """
    The complete configuration handed to the bundling engine. Frozen once
    assembled: the engine receives it by value and nothing on our side changes
    it afterwards.

    """

    mode: BuildMode
    context: str
    # Entry name to the modules bundled into it
    entry: FrozenMapping
    output: OutputSettings
    resolve: ResolveSettings
    optimization: OptimizationConfig
    dev_server: DevServerSettings

    # Either the engine's source map style or False to disable source maps
    devtool: Literal["source-map"] | Literal[False]

    plugins: tuple[PluginDescriptor, ...]
    rules: tuple[LoaderRule, ...]

    model_config = {"frozen": True}

    def to_engine_dict(self) -> dict[str, Any]:
        """
        Convert into the key layout the bundling engine expects. Only JSON types
        are used in the payload so it can be written to disk as-is.

        """
        output: dict[str, Any] = {
            "filename": self.output.filename.template,
            "path": self.output.path,
        }
        if self.output.public_path is not None:
            output["publicPath"] = self.output.public_path

        optimization: dict[str, Any] = {
            "splitChunks": self.optimization.split_chunks.model_dump(mode="json"),
        }
        if self.optimization.minimizer:
            optimization["minimizer"] = [
                reference_to_engine_dict(minimizer)
                for minimizer in self.optimization.minimizer
            ]

        dev_server: dict[str, Any] = {
            "contentBase": self.dev_server.content_base,
            "port": self.dev_server.port,
            "open": self.dev_server.open,
            "hot": self.dev_server.hot,
            "inline": self.dev_server.inline,
        }
        if self.dev_server.write_to_disk:
            dev_server["writeToDisk"] = True

        return {
            "mode": self.mode.value,
            "context": self.context,
            "entry": thaw(self.entry),
            "output": output,
            "resolve": {
                "extensions": list(self.resolve.extensions),
                "alias": thaw(self.resolve.alias),
            },
            "optimization": optimization,
            "devServer": dev_server,
            "devtool": self.devtool,
            "plugins": [reference_to_engine_dict(plugin) for plugin in self.plugins],
            "module": {"rules": [rule_to_engine_dict(rule) for rule in self.rules]},
        }


def reference_to_engine_dict(reference: PackageReference) -> dict[str, Any]:
    return {
        "package": reference.package,
        "export": reference.export,
        "namedExport": reference.named_export,
        "options": thaw(reference.options),
    }


def step_to_engine_dict(step: TransformStep) -> dict[str, Any]:
    payload: dict[str, Any] = {"loader": step.loader}
    if step.options:
        payload["options"] = thaw(step.options)
    if step.provided_by:
        payload["providedBy"] = step.provided_by
    return payload


def rule_to_engine_dict(rule: LoaderRule) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "test": rule.test,
        "use": [step_to_engine_dict(step) for step in rule.use],
    }
    if rule.exclude:
        payload["exclude"] = rule.exclude
    return payload
