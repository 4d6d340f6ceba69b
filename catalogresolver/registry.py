"""Catalog keys, resource keys and package manifests."""

from __future__ import annotations

from dataclasses import dataclass, field

CONFIG_MAP_CRD_NAME = "customResourceDefinitions"
CONFIG_MAP_CSV_NAME = "clusterServiceVersions"
CONFIG_MAP_PACKAGE_NAME = "packages"
EXISTING_OPERATOR_KEY = "@existing"


@dataclass(frozen=True)
class CatalogKey:
    """Identifies a catalog by name and namespace."""

    name: str = ""
    namespace: str = ""

    def __str__(self) -> str:
        return f"{self.name}/{self.namespace}"

    def empty(self) -> bool:
        """True when neither name nor namespace is set."""
        return self.name == "" and self.namespace == ""

    def virtual(self) -> bool:
        """True for the catalog standing for operators already installed in a namespace."""
        return self.name == EXISTING_OPERATOR_KEY and self.namespace != ""


def new_virtual_catalog_key(namespace: str) -> CatalogKey:
    """Return the key of the virtual catalog of installed operators in ``namespace``."""
    return CatalogKey(name=EXISTING_OPERATOR_KEY, namespace=namespace)


@dataclass(frozen=True)
class ResourceKey:
    """Metadata that uniquely identifies a resource."""

    name: str = ""
    kind: str = ""
    namespace: str = ""


@dataclass
class PackageChannel:
    """A single channel of a package, pointing at its current CSV."""

    name: str = ""
    current_csv_name: str = ""

    def is_default_channel(self, manifest: PackageManifest) -> bool:
        """True if this channel is the default one of ``manifest``."""
        return self.name == manifest.default_channel_name or len(manifest.channels) == 1


@dataclass
class PackageManifest:
    """A package and the channels declared for it."""

    package_name: str = ""
    channels: list[PackageChannel] = field(default_factory=list)
    default_channel_name: str = ""

    def default_channel(self) -> str:
        """The declared default channel, the only channel, or an empty string."""
        if self.default_channel_name:
            return self.default_channel_name
        if len(self.channels) == 1:
            return self.channels[0].name
        return ""