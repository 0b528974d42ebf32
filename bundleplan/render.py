from dataclasses import dataclass
from json import dumps as json_dumps
from re import match as re_match
from typing import Any

from jinja2 import Template

from bundleplan.descriptor import BuildDescriptor
from bundleplan.references import PackageReference

CONFIG_MODULE_TEMPLATE = """\
// Generated by bundleplan for a {{ mode }} build. Edits will be overwritten.
{% for statement in require_statements %}
{{ statement }}
{% endfor %}

module.exports = {{ config }};
"""

INDENT = "  "


class RawJS(str):
    """
    Expression emitted verbatim into the config module instead of being quoted
    as a string literal.

    """


def render_json(descriptor: BuildDescriptor, indent: int = 2) -> str:
    return json_dumps(descriptor.to_engine_dict(), indent=indent)


def render_config_module(descriptor: BuildDescriptor) -> str:
    """
    Render the descriptor as a CommonJS `webpack.config.js` module. Regex
    sources become regex literals and plugin / minimizer descriptors become
    constructor calls, with one `require` per package they come from.

    """
    references: list[PackageReference] = [
        *descriptor.plugins,
        *descriptor.optimization.minimizer,
    ]
    require_statements = list(
        dict.fromkeys(reference.require_statement for reference in references)
    )

    template = Template(
        CONFIG_MODULE_TEMPLATE, trim_blocks=True, keep_trailing_newline=True
    )
    return template.render(
        mode=descriptor.mode.value,
        require_statements=require_statements,
        config=to_js(build_module_tree(descriptor)),
    )


def build_module_tree(descriptor: BuildDescriptor) -> dict[str, Any]:
    tree = descriptor.to_engine_dict()

    tree["plugins"] = [
        construct_reference(plugin["export"], plugin["options"])
        for plugin in tree["plugins"]
    ]

    if "minimizer" in tree["optimization"]:
        tree["optimization"]["minimizer"] = [
            construct_reference(minimizer["export"], minimizer["options"])
            for minimizer in tree["optimization"]["minimizer"]
        ]

    for rule in tree["module"]["rules"]:
        rule["test"] = regex_literal(rule["test"])
        if "exclude" in rule:
            rule["exclude"] = regex_literal(rule["exclude"])
        for step in rule["use"]:
            provided_by = step.pop("providedBy", None)
            if provided_by:
                step["loader"] = RawJS(f"{provided_by}.loader")

    return tree


@dataclass
class Constructor:
    export: str
    options: dict[str, Any]


def construct_reference(export: str, options: dict[str, Any]) -> Constructor:
    return Constructor(export=export, options=options)


def regex_literal(pattern: str) -> RawJS:
    return RawJS("/" + pattern.replace("/", "\\/") + "/")


def format_key(key: str) -> str:
    if re_match(r"^[A-Za-z_$][A-Za-z0-9_$]*$", key):
        return key
    return json_dumps(key)


def to_js(value: Any, depth: int = 0) -> str:
    """
    Serialize a JSON-like payload into a JavaScript expression. Mirrors
    json.dumps, but leaves RawJS values untouched and only quotes object keys
    that aren't valid identifiers.

    """
    if isinstance(value, RawJS):
        return str(value)
    if isinstance(value, Constructor):
        if not value.options:
            return f"new {value.export}()"
        return f"new {value.export}({to_js(value.options, depth)})"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float, str)):
        return json_dumps(value)

    inner = INDENT * (depth + 1)
    outer = INDENT * depth

    if isinstance(value, dict):
        if not value:
            return "{}"
        entries = [
            f"{inner}{format_key(str(key))}: {to_js(item, depth + 1)},"
            for key, item in value.items()
        ]
        return "{\n" + "\n".join(entries) + f"\n{outer}}}"

    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        entries = [f"{inner}{to_js(item, depth + 1)}," for item in value]
        return "[\n" + "\n".join(entries) + f"\n{outer}]"

    raise TypeError(f"Can't serialize {type(value).__name__} into the config module")
