from pydantic import BaseModel, Field

from bundleplan.frozen import FrozenMapping


class PackageReference(BaseModel):
    """
    A class exported by an npm package that the bundling engine instantiates,
    like a plugin or a minimizer. We only describe it; the engine's runtime
    is responsible for requiring and constructing it.

    """

    # Stable identifier used in logs and tests
    name: str

    package: str
    export: str

    # True for `const { Export } = require(package)`, False when the package's
    # default export is the class itself
    named_export: bool = False

    options: FrozenMapping = Field(default_factory=FrozenMapping)

    model_config = {"frozen": True}

    @property
    def require_statement(self) -> str:
        if self.named_export:
            return f'const {{ {self.export} }} = require("{self.package}");'
        return f'const {self.export} = require("{self.package}");'
