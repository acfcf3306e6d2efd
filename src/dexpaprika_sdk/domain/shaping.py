"""Response shaping between raw JSON values and named-field object graphs.

Shaping is lossless: `unshape(shape(raw)) == raw` for every decoded JSON value.

Usage example:
    from dexpaprika_sdk.domain.shaping import shape

    stats = shape({"chains": 15, "networks": [{"id": "ethereum"}]})
    stats.chains            # 15
    stats.networks[0].id    # "ethereum"
    stats["chains"]         # item access for keys that are not identifiers
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import cast

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]
type ShapedValue = JsonScalar | ShapedObject | list[ShapedValue]
type ApiResponse = JsonValue | ShapedValue


class ShapedObject:
    """Named-field view of a JSON object.

    Every key of the source mapping becomes an attribute. Keys that are not valid
    identifiers remain reachable with item access.
    """

    def __init__(self, fields: Mapping[str, ShapedValue] | None = None) -> None:
        if fields:
            self.__dict__.update(fields)

    def __getattr__(self, name: str) -> ShapedValue:
        # only reached for missing fields
        raise AttributeError(f"ShapedObject has no field {name!r}")

    def __getitem__(self, key: str) -> ShapedValue:
        return cast(ShapedValue, self.__dict__[key])

    def __contains__(self, key: object) -> bool:
        return key in self.__dict__

    def __iter__(self) -> Iterator[str]:
        return iter(self.__dict__)

    def __len__(self) -> int:
        return len(self.__dict__)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShapedObject):
            return NotImplemented
        return self.__dict__ == other.__dict__

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.__dict__.items())
        return f"ShapedObject({fields})"


def shape(value: object) -> ShapedValue:
    """Recursively convert a decoded JSON value into its shaped form.

    Mappings become `ShapedObject`s, sequences stay lists with every element shaped,
    and scalars pass through unchanged. Already-shaped values are returned as-is.
    """
    if isinstance(value, ShapedObject):
        return value
    if isinstance(value, Mapping):
        items = cast(Mapping[object, object], value).items()
        return ShapedObject({str(key): shape(item) for key, item in items})
    if isinstance(value, list | tuple):
        return [shape(item) for item in cast(list[object], value)]
    return cast(JsonScalar, value)


def unshape(value: object) -> JsonValue:
    """Flatten a shaped value back to plain dicts, lists and scalars."""
    if isinstance(value, ShapedObject):
        return {key: unshape(item) for key, item in vars(value).items()}
    if isinstance(value, Mapping):
        items = cast(Mapping[object, object], value).items()
        return {str(key): unshape(item) for key, item in items}
    if isinstance(value, list | tuple):
        return [unshape(item) for item in cast(list[object], value)]
    return cast(JsonScalar, value)


def get_field(value: object, key: str, default: object = None) -> object:
    """Read a field from either a raw mapping or a shaped object."""
    if isinstance(value, ShapedObject):
        return vars(value).get(key, default)
    if isinstance(value, Mapping):
        return cast(Mapping[str, object], value).get(key, default)
    return default
