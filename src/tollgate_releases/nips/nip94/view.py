"""Typed release projection.

[get_release_view()][tollgate_releases.nips.nip94.view.get_release_view]
assembles every tag accessor and the classifier into a single
[ReleaseView][tollgate_releases.models.release.ReleaseView]. The view is a
pure function of the event and is never cached or stored.
"""

from __future__ import annotations

from tollgate_releases.models.release import ReleaseView

from .classifier import classify
from .tags import (
    EventLike,
    get_architecture,
    get_channel,
    get_compression,
    get_content,
    get_created_at,
    get_device_id,
    get_download_url,
    get_event_id,
    get_file_hash,
    get_mime_type,
    get_openwrt_version,
    get_supported_devices,
    get_version,
)


def get_release_view(event: EventLike | None) -> ReleaseView:
    """Project a release event onto its typed fields.

    Args:
        event: Release event (record or NIP-01 mapping).

    Returns:
        A [ReleaseView][tollgate_releases.models.release.ReleaseView] where
        every absent or malformed field carries its documented default.
    """
    return ReleaseView(
        event_id=get_event_id(event),
        version=get_version(event),
        released_at=get_created_at(event),
        channel=get_channel(event),
        architecture=get_architecture(event),
        compression=get_compression(event),
        device_id=get_device_id(event),
        supported_devices=get_supported_devices(event),
        openwrt_version=get_openwrt_version(event),
        download_url=get_download_url(event),
        file_hash=get_file_hash(event),
        mime_type=get_mime_type(event),
        product_type=classify(event),
        content=get_content(event),
    )
