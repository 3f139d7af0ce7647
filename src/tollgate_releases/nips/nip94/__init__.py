"""NIP-94 file metadata events carrying TollGate release artifacts.

Attributes:
    extract_field: Total tag-row lookup, the primitive every accessor uses.
    get_tag_value: Second element of the first matching row, or a default.
    classify: Product type resolution over current and deprecated schemas.
    get_release_view: Typed projection of an event.

See Also:
    [tollgate_releases.nips.nip94.tags][]: Field extractor.
    [tollgate_releases.nips.nip94.classifier][]: Classifier.
    [tollgate_releases.nips.nip94.view][]: Release view projection.
"""

from .classifier import classify
from .tags import (
    EventLike,
    extract_field,
    get_architecture,
    get_channel,
    get_compression,
    get_content,
    get_created_at,
    get_device_id,
    get_download_url,
    get_event_id,
    get_file_hash,
    get_filename,
    get_mime_type,
    get_openwrt_version,
    get_supported_devices,
    get_tag_value,
    get_version,
)
from .view import get_release_view


__all__ = [
    "EventLike",
    "classify",
    "extract_field",
    "get_architecture",
    "get_channel",
    "get_compression",
    "get_content",
    "get_created_at",
    "get_device_id",
    "get_download_url",
    "get_event_id",
    "get_file_hash",
    "get_filename",
    "get_mime_type",
    "get_openwrt_version",
    "get_release_view",
    "get_supported_devices",
    "get_tag_value",
    "get_version",
]
