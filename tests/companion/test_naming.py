"""Tests for filename normalization primitives."""

from pathlib import Path

import pytest

from takeout_datefix.companion.naming import (
    MediaReference,
    direct_names,
    sidecar_has_counter,
    split_counter,
    split_media_path,
    strip_edited_suffix,
)


class TestStripEditedSuffix:
    """Tests for strip_edited_suffix function."""

    @pytest.mark.parametrize("stem,expected", [
        ("IMG_1234-edited", "IMG_1234"),
        ("IMG_1234-EDITED", "IMG_1234"),
        ("IMG_1234-Edited", "IMG_1234"),
        ("foo-edited-edited", "foo-edited"),
        ("IMG_1234", "IMG_1234"),
        ("edited", "edited"),
        ("IMG-edited_1234", "IMG-edited_1234"),
    ])
    def test_strips_exactly_one_trailing_suffix(self, stem, expected):
        assert strip_edited_suffix(stem) == expected


class TestSplitCounter:
    """Tests for split_counter function."""

    def test_with_counter(self):
        assert split_counter("foo(1)") == ("foo", "(1)")

    def test_multi_digit_counter(self):
        assert split_counter("IMG_0001(12)") == ("IMG_0001", "(12)")

    def test_without_counter(self):
        assert split_counter("foo") == ("foo", None)

    def test_counter_not_at_end(self):
        assert split_counter("foo(1)bar") == ("foo(1)bar", None)

    def test_non_numeric_parentheses(self):
        assert split_counter("foo(a)") == ("foo(a)", None)

    def test_only_last_counter_removed(self):
        assert split_counter("foo(1)(2)") == ("foo(1)", "(2)")


class TestSidecarHasCounter:
    """Tests for sidecar_has_counter function."""

    @pytest.mark.parametrize("name,expected", [
        ("SNOW.mp4.supplemental-metadata(1).json", True),
        ("foo.jpg(2).json", True),
        ("foo.jpg.json", False),
        ("foo(1).jpg.json", False),
        ("foo(1)", False),
    ])
    def test_detects_counter_before_json(self, name, expected):
        assert sidecar_has_counter(name) is expected


def test_split_media_path(tmp_path):
    directory, extension, stem = split_media_path(tmp_path / "IMG_1234-edited.JPG")

    assert directory == tmp_path
    assert extension == ".JPG"
    assert stem == "IMG_1234"


def test_split_media_path_without_extension(tmp_path):
    directory, extension, stem = split_media_path(tmp_path / "README")

    assert extension == ""
    assert stem == "README"


class TestMediaReference:
    """Tests for MediaReference construction."""

    def test_from_path_with_counter(self, tmp_path):
        media = MediaReference.from_path(tmp_path / "FullSizeRender(1).MP4")

        assert media.path == tmp_path / "FullSizeRender(1).MP4"
        assert media.directory == tmp_path
        assert media.extension == ".MP4"
        assert media.stem == "FullSizeRender(1)"
        assert media.counter == "(1)"
        assert media.stem_without_counter == "FullSizeRender"
        assert media.has_counter

    def test_edited_stripped_before_counter(self, tmp_path):
        media = MediaReference.from_path(tmp_path / "foo(2)-edited.jpg")

        assert media.stem == "foo(2)"
        assert media.counter == "(2)"

    def test_from_path_without_counter(self, tmp_path):
        media = MediaReference.from_path(tmp_path / "photo.jpg")

        assert media.counter is None
        assert media.stem_without_counter == "photo"
        assert not media.has_counter

    def test_relative_path_made_absolute(self):
        media = MediaReference.from_path("photo.jpg")

        assert media.path.is_absolute()

    def test_sibling(self, tmp_path):
        media = MediaReference.from_path(tmp_path / "photo.jpg")

        assert media.sibling("photo.jpg.json") == tmp_path / "photo.jpg.json"


def test_direct_names():
    assert direct_names("foo", ".jpg") == (
        "foo.json",
        "foo.jpg.json",
        "foo.jpg.supplemental-metadata.json",
    )
