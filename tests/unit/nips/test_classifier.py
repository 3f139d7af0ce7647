"""
Unit tests for nips.nip94.classifier and nips.nip94.view modules.

Tests:
- classify() precedence for every step of the fallback chain
- get_release_view() projection and defaults
"""

import logging

import pytest

from tollgate_releases.models import ProductType, ReleaseChannel
from tollgate_releases.nips.nip94 import classify, get_release_view


OS = ProductType.TOLLGATE_OS
WRT = ProductType.TOLLGATE_WRT
BASIC = ProductType.TOLLGATE_BASIC


# ============================================================================
# Step 1: name tag
# ============================================================================


class TestClassifyNameTag:
    """The ``name`` tag is consulted first."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("tollgate-os", OS),
            ("tollgate-os-gl-mt3000", OS),
            ("tollgate-wrt", WRT),
            ("tollgate-module-basic-go", BASIC),
        ],
    )
    def test_substring_match(self, make_event, name, expected) -> None:
        assert classify(make_event(name=name)) == expected

    def test_os_checked_before_wrt(self, make_event) -> None:
        assert classify(make_event(name="tollgate-wrt-for-tollgate-os")) == OS

    def test_wrt_checked_before_basic(self, make_event) -> None:
        assert classify(make_event(name="tollgate-module-basic-go+tollgate-wrt")) == WRT

    def test_name_beats_package_name(self, make_event) -> None:
        event = make_event(name="tollgate-wrt", package_name="tollgate-module-basic-go")
        assert classify(event) == WRT

    def test_unmatched_name_falls_through(self, make_event) -> None:
        event = make_event(name="something", package_name="tollgate-wrt")
        assert classify(event) == WRT


# ============================================================================
# Step 2: package_name tag
# ============================================================================


class TestClassifyPackageName:
    """The deprecated ``package_name`` tag is consulted second."""

    def test_basic(self, make_event) -> None:
        assert classify(make_event(package_name="tollgate-module-basic-go")) == BASIC

    def test_wrt(self, make_event) -> None:
        assert classify(make_event(package_name="tollgate-wrt")) == WRT

    def test_basic_checked_before_wrt(self, make_event) -> None:
        assert classify(make_event(package_name="tollgate-wrt/tollgate-module-basic-go")) == BASIC

    def test_os_not_recognised(self, make_event) -> None:
        event = make_event(package_name="tollgate-os", content="core package")
        assert classify(event) == WRT

    def test_package_name_beats_legacy_version(self, make_event) -> None:
        event = make_event(package_name="tollgate-wrt", tollgate_os_version="0.1")
        assert classify(event) == WRT


# ============================================================================
# Step 3: tollgate_os_version tag
# ============================================================================


class TestClassifyLegacyVersion:
    """Presence of ``tollgate_os_version`` means an OS image."""

    def test_legacy_version_tag(self, make_event) -> None:
        assert classify(make_event(tollgate_os_version="0.0.1", content="core")) == OS

    def test_empty_legacy_version_ignored(self, make_event) -> None:
        assert classify(make_event(tollgate_os_version="", content="core")) == WRT


# ============================================================================
# Step 4: heuristic
# ============================================================================


class TestClassifyHeuristic:
    """Content, URL and filename keywords."""

    @pytest.mark.parametrize(
        "fields",
        [
            {"content": "Basic module build"},
            {"url": "https://cdn.example/MODULE.ipk"},
            {"filename": "basic.ipk"},
        ],
    )
    def test_basic_keywords(self, make_event, fields) -> None:
        assert classify(make_event(**fields)) == BASIC

    @pytest.mark.parametrize(
        "fields",
        [
            {"content": "TollGate CORE"},
            {"url": "https://cdn.example/core.ipk"},
            {"filename": "tollgate-core.ipk"},
        ],
    )
    def test_core_keywords(self, make_event, fields) -> None:
        assert classify(make_event(**fields)) == WRT

    def test_basic_beats_core(self, make_event) -> None:
        event = make_event(content="core", filename="module.ipk")
        assert classify(event) == BASIC


# ============================================================================
# Step 5: default
# ============================================================================


class TestClassifyDefault:
    """Events matching no rule are OS images."""

    def test_no_tags(self, make_event) -> None:
        assert classify(make_event()) == OS

    def test_none(self) -> None:
        assert classify(None) == OS

    def test_logs_rule_at_debug(self, make_event, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="tollgate_releases.nips.nip94.classifier"):
            classify(make_event(package_name="tollgate-wrt"))
        assert "rule=package_name" in caplog.text


# ============================================================================
# Release view
# ============================================================================


class TestGetReleaseView:
    """Tests for get_release_view()."""

    def test_full_event(self, make_event) -> None:
        event = make_event(
            created_at=1_704_467_040,
            content="notes",
            version="0.0.4",
            release_channel="beta",
            architecture="aarch64_cortex-a53",
            compression="gzip",
            device_id="gl-mt3000",
            supported_devices="gl-mt3000",
            openwrt_version="23.05.3",
            url="https://example.com/fw.bin",
            x="ab" * 32,
            m="application/octet-stream",
            name="tollgate-os",
        )
        view = get_release_view(event)

        assert view.event_id == event.id
        assert view.version == "0.0.4"
        assert view.released_at == 1_704_467_040
        assert view.channel == ReleaseChannel.BETA
        assert view.architecture == "aarch64_cortex-a53"
        assert view.compression == "gzip"
        assert view.device_id == "gl-mt3000"
        assert view.download_url == "https://example.com/fw.bin"
        assert view.file_hash == "ab" * 32
        assert view.product_type == OS
        assert view.content == "notes"
        assert view.released_date == "Jan 5, 2024"

    def test_missing_version_uses_id_prefix(self, make_event) -> None:
        event = make_event(id="0123abcd" + "e" * 56)
        assert get_release_view(event).version == "0123abcd"

    def test_missing_channel_is_dev(self, make_event) -> None:
        assert get_release_view(make_event(version="1.0")).channel == ReleaseChannel.DEV

    def test_malformed_mapping(self) -> None:
        view = get_release_view({"id": "ab", "tags": [None, 3, ["version"]]})
        assert view.version == "ab"
        assert view.released_at is None
        assert view.architecture == "Unknown"
