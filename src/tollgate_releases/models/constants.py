"""Shared constants for the models layer.

Defines the enumerations and default values used across the release
resolution engine: the NIP-94 event kind, release channels, product types
and their categories, and the tag names of every schema generation found
in the TollGate release stream.

See Also:
    [tollgate_releases.nips.nip94.tags][]: Reads the
        tag names declared here.
    [ReleaseView][tollgate_releases.models.release.ReleaseView]: Typed
        projection whose fields use these enums.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from types import MappingProxyType


class EventKind(IntEnum):
    """Nostr event kinds consumed by the release browser.

    Attributes:
        FILE_METADATA: Kind 1063 -- NIP-94 file metadata. Every release
            artifact (OS image or package) is published as one of these.
    """

    FILE_METADATA = 1063


class ReleaseChannel(StrEnum):
    """Maturity classification of a release.

    Events without a ``release_channel`` tag are treated as ``DEV`` so that
    unlabeled builds never masquerade as stable releases.
    """

    STABLE = "stable"
    BETA = "beta"
    ALPHA = "alpha"
    DEV = "dev"


class ProductType(StrEnum):
    """Artifact family a release belongs to.

    Attributes:
        TOLLGATE_OS: Full OpenWrt firmware image, one build per target device.
        TOLLGATE_WRT: Core package installable on an existing OpenWrt system,
            one build per CPU architecture.
        TOLLGATE_BASIC: Basic Go module package, one build per CPU architecture.
    """

    TOLLGATE_OS = "tollgate-os"
    TOLLGATE_WRT = "tollgate-wrt"
    TOLLGATE_BASIC = "tollgate-module-basic-go"


class ServiceName(StrEnum):
    """Canonical service identifiers used in logging and metrics labels."""

    BROWSER = "browser"


class ProductCategory(StrEnum):
    """Top-level grouping of products (firmware images vs. packages)."""

    OS = "os"
    PACKAGES = "packages"


PRODUCT_CATEGORY_MAP: MappingProxyType[ProductType, ProductCategory] = MappingProxyType(
    {
        ProductType.TOLLGATE_OS: ProductCategory.OS,
        ProductType.TOLLGATE_WRT: ProductCategory.PACKAGES,
        ProductType.TOLLGATE_BASIC: ProductCategory.PACKAGES,
    }
)

PRODUCT_DISPLAY_NAMES: MappingProxyType[ProductType, str] = MappingProxyType(
    {
        ProductType.TOLLGATE_OS: "TollGate OS",
        ProductType.TOLLGATE_WRT: "TollGate WRT",
        ProductType.TOLLGATE_BASIC: "TollGate Basic Module",
    }
)

DEFAULT_PRODUCT_DISPLAY_NAME = "TollGate"

PRERELEASE_CHANNELS: frozenset[ReleaseChannel] = frozenset(
    {ReleaseChannel.BETA, ReleaseChannel.ALPHA, ReleaseChannel.DEV}
)


class Tag(StrEnum):
    """NIP-94 tag names read from release events.

    ``TOLLGATE_OS_VERSION`` and ``PACKAGE_NAME`` belong to the deprecated
    schema generation and are only consulted as fallbacks.
    """

    VERSION = "version"
    RELEASE_CHANNEL = "release_channel"
    ARCHITECTURE = "architecture"
    COMPRESSION = "compression"
    DEVICE_ID = "device_id"
    SUPPORTED_DEVICES = "supported_devices"
    OPENWRT_VERSION = "openwrt_version"
    URL = "url"
    HASH = "x"
    ORIGINAL_HASH = "ox"
    MIME_TYPE = "m"
    NAME = "name"
    FILENAME = "filename"
    PACKAGE_NAME = "package_name"
    TOLLGATE_OS_VERSION = "tollgate_os_version"


UNKNOWN = "Unknown"
NO_COMPRESSION = "none"
DEFAULT_MIME_TYPE = "application/octet-stream"
VERSION_ID_PREFIX_LENGTH = 8

DEFAULT_PUBLISHER = "5075e61f0b048148b60105c1dd72bbeae1957336ae5824087e52efa374f8416a"
DEFAULT_RELAYS: tuple[str, ...] = (
    "wss://relay.damus.io",
    "wss://relay.nostr.band",
    "wss://nos.lol",
    "wss://relay.snort.social",
)
DEFAULT_EVENT_LIMIT = 5000
DEFAULT_EMPTY_TIMEOUT = 5.0
