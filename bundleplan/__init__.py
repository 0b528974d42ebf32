from bundleplan.assembler import assemble as assemble, verify_sources as verify_sources
from bundleplan.config import (
    BuildSettings as BuildSettings,
    load_settings as load_settings,
)
from bundleplan.descriptor import BuildDescriptor as BuildDescriptor
from bundleplan.exceptions import (
    BundlePlanException as BundlePlanException,
    ConfigurationError as ConfigurationError,
)
from bundleplan.filenames import (
    FilenamePattern as FilenamePattern,
    filename_pattern as filename_pattern,
)
from bundleplan.loaders import (
    AssetType as AssetType,
    LoaderRule as LoaderRule,
    TransformStep as TransformStep,
    chain as chain,
    loader_rules as loader_rules,
    match_asset_type as match_asset_type,
)
from bundleplan.mode import (
    BuildMode as BuildMode,
    mode_from_environment as mode_from_environment,
    resolve_mode as resolve_mode,
)
from bundleplan.optimization import (
    OptimizationConfig as OptimizationConfig,
    optimization_config as optimization_config,
)
from bundleplan.plugins import PluginDescriptor as PluginDescriptor, plugins as plugins
from bundleplan.render import (
    render_config_module as render_config_module,
    render_json as render_json,
)
