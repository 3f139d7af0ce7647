"""
Unit tests for services.common.variants module.

Tests:
- find_alternatives() device vs. architecture matching
- release_family()
- group_by_architecture() newest-per-compression and ordering
- variant_label() / search_variants()
"""

from tollgate_releases.nips.nip94 import get_release_view
from tollgate_releases.services.common import (
    find_alternatives,
    group_by_architecture,
    release_family,
    search_variants,
    variant_label,
)


# ============================================================================
# find_alternatives
# ============================================================================


class TestFindAlternativesOs:
    """OS images are told apart by device."""

    def test_different_device_is_alternative(self, make_event) -> None:
        a = make_event(name="tollgate-os", version="1.0", device_id="x1", architecture="arm")
        b = make_event(name="tollgate-os", version="1.0", device_id="x2", architecture="arm")
        assert find_alternatives([a, b], a) == [b]

    def test_same_device_other_arch_is_not(self, make_event) -> None:
        a = make_event(name="tollgate-os", version="1.0", device_id="x1", architecture="arm")
        b = make_event(name="tollgate-os", version="1.0", device_id="x1", architecture="mips")
        assert find_alternatives([a, b], a) == []


class TestFindAlternativesPackages:
    """Packages are told apart by architecture."""

    def test_different_arch_is_alternative(self, make_event) -> None:
        a = make_event(name="tollgate-wrt", version="1.0", architecture="arm64", device_id="d")
        b = make_event(name="tollgate-wrt", version="1.0", architecture="mips", device_id="d")
        assert find_alternatives([a, b], a) == [b]

    def test_same_arch_other_device_is_not(self, make_event) -> None:
        a = make_event(name="tollgate-wrt", version="1.0", architecture="arm64", device_id="d1")
        b = make_event(name="tollgate-wrt", version="1.0", architecture="arm64", device_id="d2")
        assert find_alternatives([a, b], a) == []

    def test_version_must_match(self, make_event) -> None:
        a = make_event(name="tollgate-wrt", version="1.0", architecture="arm64")
        b = make_event(name="tollgate-wrt", version="1.1", architecture="mips")
        assert find_alternatives([a, b], a) == []

    def test_product_must_match(self, make_event) -> None:
        a = make_event(name="tollgate-wrt", version="1.0", architecture="arm64")
        b = make_event(name="tollgate-module-basic-go", version="1.0", architecture="mips")
        assert find_alternatives([a, b], a) == []


class TestFindAlternativesEdges:
    """Edge cases of find_alternatives()."""

    def test_none_target(self, make_event) -> None:
        assert find_alternatives([make_event()], None) == []

    def test_never_includes_target(self, make_event) -> None:
        a = make_event(name="tollgate-wrt", version="1.0", architecture="arm64")
        assert find_alternatives([a, a], a) == []

    def test_keeps_catalogue_order(self, make_event) -> None:
        a = make_event(name="tollgate-wrt", version="1.0", architecture="arm64")
        b = make_event(name="tollgate-wrt", version="1.0", architecture="mips")
        c = make_event(name="tollgate-wrt", version="1.0", architecture="x86_64")
        assert find_alternatives([c, a, b], a) == [c, b]

    def test_release_family(self, make_event) -> None:
        a = make_event(name="tollgate-wrt", version="1.0", architecture="arm64")
        b = make_event(name="tollgate-wrt", version="1.0", architecture="mips")
        assert release_family([b, a], a) == [a, b]


# ============================================================================
# group_by_architecture
# ============================================================================


class TestGroupByArchitecture:
    """Tests for group_by_architecture()."""

    def test_newest_per_compression(self, make_event) -> None:
        gzip = make_event(architecture="arm64", compression="gzip", created_at=10)
        old_none = make_event(architecture="arm64", compression="none", created_at=10)
        new_none = make_event(architecture="arm64", compression="none", created_at=20)

        groups = group_by_architecture([gzip, old_none, new_none])

        assert len(groups) == 1
        assert groups[0].architecture == "arm64"
        assert groups[0].compressions == ("none", "gzip")
        assert groups[0].variant_for("none") is new_none
        assert groups[0].variant_for("gzip") is gzip

    def test_winner_independent_of_order(self, make_event) -> None:
        old = make_event(architecture="arm64", created_at=10)
        new = make_event(architecture="arm64", created_at=20)
        assert group_by_architecture([old, new])[0].variant_for("none") is new
        assert group_by_architecture([new, old])[0].variant_for("none") is new

    def test_tie_broken_by_id(self, make_event) -> None:
        low = make_event(id="1" * 64, architecture="arm64", created_at=10)
        high = make_event(id="2" * 64, architecture="arm64", created_at=10)
        assert group_by_architecture([low, high])[0].variant_for("none") is high
        assert group_by_architecture([high, low])[0].variant_for("none") is high

    def test_missing_compression_is_none(self, make_event) -> None:
        groups = group_by_architecture([make_event(architecture="mips")])
        assert groups[0].compressions == ("none",)

    def test_compression_order(self, make_event) -> None:
        events = [
            make_event(architecture="arm64", compression=c) for c in ("zstd", "gzip", "none")
        ]
        assert group_by_architecture(events)[0].compressions == ("none", "gzip", "zstd")

    def test_first_seen_group_order(self, make_event) -> None:
        events = [make_event(architecture="mips"), make_event(architecture="arm64")]
        assert [g.architecture for g in group_by_architecture(events)] == ["mips", "arm64"]

    def test_sorted_group_order(self, make_event) -> None:
        events = [make_event(architecture="mips"), make_event(architecture="arm64")]
        groups = group_by_architecture(events, sort_groups=True)
        assert [g.architecture for g in groups] == ["arm64", "mips"]

    def test_missing_architecture_grouped_as_unknown(self, make_event) -> None:
        assert group_by_architecture([make_event()])[0].architecture == "Unknown"

    def test_empty(self) -> None:
        assert group_by_architecture([]) == []

    def test_variant_for_missing(self, make_event) -> None:
        group = group_by_architecture([make_event(architecture="arm64")])[0]
        assert group.variant_for("xz") is None


# ============================================================================
# Labels and search
# ============================================================================


class TestVariantLabel:
    """Tests for variant_label()."""

    def test_os_uses_device(self, make_event) -> None:
        view = get_release_view(make_event(name="tollgate-os", device_id="gl-mt3000"))
        assert variant_label(view) == "gl-mt3000"

    def test_package_uses_architecture(self, make_event) -> None:
        view = get_release_view(make_event(name="tollgate-wrt", architecture="mipsel_24kc"))
        assert variant_label(view) == "mipsel_24kc"


class TestSearchVariants:
    """Tests for search_variants()."""

    def test_case_insensitive_release_search(self, make_event) -> None:
        a = make_event(name="tollgate-os", device_id="GL-MT3000")
        b = make_event(name="tollgate-os", device_id="gl-ar300m")
        assert search_variants([a, b], "mt3000") == [a]

    def test_group_search(self, make_event) -> None:
        groups = group_by_architecture(
            [make_event(architecture="aarch64_cortex-a53"), make_event(architecture="mips_24kc")]
        )
        result = search_variants(groups, "AARCH")
        assert [g.architecture for g in result] == ["aarch64_cortex-a53"]

    def test_empty_query_matches_all(self, make_event) -> None:
        events = [make_event(), make_event()]
        assert search_variants(events, "") == events
