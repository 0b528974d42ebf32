from types import MappingProxyType
from typing import Any, Iterator, Mapping

from pydantic_core import core_schema


def freeze(value: Any) -> Any:
    """
    Recursively convert mappings into FrozenMapping and sequences into tuples,
    so nested plugin / loader options can't be edited in place.

    """
    if isinstance(value, FrozenMapping):
        return value
    if isinstance(value, Mapping):
        return FrozenMapping(value)
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """
    Inverse of freeze(), producing plain dicts and lists for the engine payload.

    """
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


class FrozenMapping(Mapping[str, Any]):
    """
    Read-only, hashable mapping. Compares equal to a dict with the same items.

    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data = MappingProxyType(
            {key: freeze(value) for key, value in (data or {}).items()}
        )

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        return f"FrozenMapping({dict(self._data)!r})"

    @classmethod
    def validate(cls, value: Any) -> "FrozenMapping":
        if not isinstance(value, Mapping):
            raise ValueError(f"Expected a mapping, got {type(value).__name__}")
        return freeze(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            cls.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(thaw),
        )
