"""Tests for path normalization and mask membership."""

import pytest

from msgguard.domain.paths import is_path_in_mask, normalize_path, paths_from_mask


class TestNormalizePath:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("first_name", "firstName"),
            ("firstName", "firstName"),
            ("user.first_name", "user.firstName"),
            ("user.primary_address.line1", "user.primaryAddress.line1"),
            ("user.primaryAddress.line1", "user.primaryAddress.line1"),
            ("id", "id"),
        ],
    )
    def test_snake_and_camel_converge(self, path: str, expected: str) -> None:
        assert normalize_path(path) == expected

    @pytest.mark.parametrize("path", ["", ".", "user.", ".user", "user..first_name"])
    def test_empty_segments_normalize_to_empty(self, path: str) -> None:
        assert normalize_path(path) == ""

    def test_deterministic(self) -> None:
        assert normalize_path("a_b.c_d") == normalize_path("a_b.c_d")


class TestPathsFromMask:
    def test_absent_mask_is_none(self) -> None:
        assert paths_from_mask(None) is None

    def test_empty_mask_is_none(self) -> None:
        assert paths_from_mask([]) is None

    def test_entries_normalized(self) -> None:
        assert paths_from_mask(["user.first_name", "lastName"]) == frozenset(
            {"user.firstName", "lastName"}
        )


class TestIsPathInMask:
    def test_exact_match(self) -> None:
        mask = paths_from_mask(["user.firstName"])
        assert is_path_in_mask("user.firstName", mask)

    def test_no_mask_never_matches(self) -> None:
        assert not is_path_in_mask("user.firstName", None)

    def test_resource_relative_match(self) -> None:
        mask = paths_from_mask(["first_name", "last_name"])
        assert is_path_in_mask(normalize_path("user.last_name"), mask)

    def test_resource_relative_disabled(self) -> None:
        mask = paths_from_mask(["first_name"])
        assert not is_path_in_mask("user.firstName", mask, resource_relative=False)

    def test_only_first_segment_dropped(self) -> None:
        mask = paths_from_mask(["line1"])
        assert not is_path_in_mask(normalize_path("user.primary_address.line1"), mask)

    def test_other_field_not_matched(self) -> None:
        mask = paths_from_mask(["first_name"])
        assert not is_path_in_mask(normalize_path("user.last_name"), mask)

    def test_empty_path_never_matches(self) -> None:
        mask = paths_from_mask(["first_name"])
        assert not is_path_in_mask("", mask)
