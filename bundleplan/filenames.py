from pydantic import BaseModel

from bundleplan.mode import BuildMode

NAME_PLACEHOLDER = "[name]"
HASH_PLACEHOLDER = "[contenthash]"


class FilenamePattern(BaseModel):
    """
    Output filename template understood by the bundling engine. The engine
    substitutes the placeholders when it writes each chunk.

    """

    template: str

    model_config = {"frozen": True}

    @property
    def has_hash(self) -> bool:
        return HASH_PLACEHOLDER in self.template

    def __str__(self) -> str:
        return self.template


def filename_pattern(asset_kind: str, mode: BuildMode) -> FilenamePattern:
    """
    Production filenames embed a content hash so browsers can cache them
    indefinitely; development filenames stay stable so rebuilds overwrite
    the same file.

    """
    asset_kind = asset_kind.lstrip(".")
    if mode.is_development:
        return FilenamePattern(template=f"{NAME_PLACEHOLDER}.{asset_kind}")
    return FilenamePattern(
        template=f"{NAME_PLACEHOLDER}.{HASH_PLACEHOLDER}.{asset_kind}"
    )
