"""API sets and catalog entries used during resolution."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSet
from dataclasses import dataclass, field
from itertools import chain
from typing import Any

from catalogresolver.projection import Property
from catalogresolver.registry import CatalogKey

SourceKey = CatalogKey

_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class APIKey:
    """Group, version, kind and plural name of an API."""

    group: str = ""
    version: str = ""
    kind: str = ""
    plural: str = ""


def api_key_to_gvk_string(key: APIKey) -> str:
    """Render a key as ``Kind.version.group``."""
    return ".".join((key.kind, key.version, key.group))


def api_key_to_gvk_hash(key: APIKey) -> str:
    """Return the 64-bit FNV-1a hash of the key's GVK string, in hex."""
    value = _FNV64_OFFSET
    for byte in api_key_to_gvk_string(key).encode("utf-8"):
        value ^= byte
        value = (value * _FNV64_PRIME) & _MASK64
    return format(value, "x")


class APISet(MutableSet):
    """A mutable set of APIKey values."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, keys: Iterable[APIKey] = ()) -> None:
        self._keys: set[APIKey] = set(keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[APIKey]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def add(self, key: APIKey) -> None:
        self._keys.add(key)

    def discard(self, key: APIKey) -> None:
        self._keys.discard(key)

    def __repr__(self) -> str:
        return f"APISet({self._keys!r})"

    def __str__(self) -> str:
        return ",".join(sorted(api_key_to_gvk_string(key) for key in self._keys))

    def pop_api_key(self) -> APIKey | None:
        """Remove and return an arbitrary key, or None if the set is empty."""
        if not self._keys:
            return None
        return self._keys.pop()

    def union(self, *sets: Iterable[APIKey]) -> APISet:
        """Keys in this set or in any of ``sets``."""
        return APISet(chain(self._keys, *sets))

    def intersection(self, *sets: Iterable[APIKey]) -> APISet:
        """Keys of this set that appear in at least one of ``sets``."""
        return APISet(key for other in sets for key in other if key in self._keys)

    def difference(self, other: Iterable[APIKey]) -> APISet:
        """Keys of this set that are not in ``other``."""
        excluded = set(other)
        return APISet(key for key in self._keys if key not in excluded)

    def is_subset(self, other: Iterable[APIKey]) -> bool:
        """True if every key of this set is in ``other``."""
        return self._keys.issubset(other)

    def strip_plural(self) -> APISet:
        """A copy of the set with the plural name cleared from every key."""
        return APISet(APIKey(key.group, key.version, key.kind) for key in self._keys)


def gvk_string_to_provided_api_set(gvks: str) -> APISet:
    """Parse a comma separated list of ``Kind.version.group`` strings.

    Entries with fewer than two dots are skipped.
    """
    result = APISet()
    for gvk in gvks.replace(" ", "").split(","):
        if gvk.count(".") >= 2:
            kind, version, group = gvk.split(".", 2)
            result.add(APIKey(group=group, version=version, kind=kind))
    return result


@dataclass
class OperatorSourceInfo:
    """Where an operator comes from: package, channel and catalog."""

    package: str = ""
    channel: str = ""
    starting_csv: str = ""
    catalog: CatalogKey = field(default_factory=CatalogKey)
    default_channel: bool = False
    subscription: Any = None

    def __str__(self) -> str:
        return (
            f"{self.package}/{self.channel} in "
            f"{self.catalog.name}/{self.catalog.namespace}"
        )


@dataclass
class Entry:
    """An operator bundle as seen by the resolver."""

    name: str = ""
    replaces: str = ""
    skips: list[str] = field(default_factory=list)
    skip_range: Any = None
    provided_apis: APISet = field(default_factory=APISet)
    required_apis: APISet = field(default_factory=APISet)
    version: Any = None
    source_info: OperatorSourceInfo | None = None
    properties: list[Property] = field(default_factory=list)
    bundle_path: str = ""
    bundle: Any = None

    def package(self) -> str:
        """The package name, or an empty string if the source is unknown."""
        return self.source_info.package if self.source_info is not None else ""

    def channel(self) -> str:
        """The channel name, or an empty string if the source is unknown."""
        return self.source_info.channel if self.source_info is not None else ""