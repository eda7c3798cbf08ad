"""Tests for MetadataVerifier."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from PIL import Image

from takeout_datefix.companion.errors import MetadataReadError
from takeout_datefix.companion.exiftool import ExifTool
from takeout_datefix.companion.verifier import MetadataVerifier, read_with_pillow
from takeout_datefix.companion.writer import MetadataWriter

TAKEN = datetime(2021, 1, 1, tzinfo=timezone.utc)


class FakeExifTool:
    """In-memory stand-in keeping written tags per path."""

    def __init__(self):
        self.tags = {}

    def read_tags(self, file_path, tags):
        stored = self.tags.get(str(file_path), {})
        return {tag: stored[tag] for tag in tags if tag in stored}

    def write_tags(self, file_path, values):
        self.tags.setdefault(str(file_path), {}).update(values)


@pytest.fixture
def exiftool():
    return MagicMock(spec=ExifTool)


class TestRead:
    """Tests for MetadataVerifier.read."""

    def test_utc_value(self, tmp_path, exiftool):
        exiftool.read_tags.return_value = {"DateTimeOriginal": "2021:01:01 00:00:00+00:00"}

        assert MetadataVerifier(exiftool).read(tmp_path / "a.jpg") == TAKEN

    def test_separate_offset_tag(self, tmp_path, exiftool):
        exiftool.read_tags.return_value = {
            "DateTimeOriginal": "2021:01:01 02:00:00",
            "OffsetTimeOriginal": "+02:00",
        }

        assert MetadataVerifier(exiftool).read(tmp_path / "a.jpg") == TAKEN

    def test_no_value(self, tmp_path, exiftool):
        exiftool.read_tags.return_value = {}

        assert MetadataVerifier(exiftool).read(tmp_path / "a.jpg") is None

    @pytest.mark.parametrize("value", ["0000:00:00 00:00:00", "garbage"])
    def test_unparseable_value_raises(self, tmp_path, exiftool, value):
        exiftool.read_tags.return_value = {"DateTimeOriginal": value}

        with pytest.raises(MetadataReadError) as exc_info:
            MetadataVerifier(exiftool).read(tmp_path / "a.jpg")

        assert exc_info.value.context["value"] == value

    def test_video_without_exiftool(self, tmp_path, exiftool):
        with pytest.raises(MetadataReadError):
            MetadataVerifier(exiftool, use_exiftool=False).read(tmp_path / "clip.mp4")
        exiftool.read_tags.assert_not_called()

    def test_image_without_exiftool_uses_pillow(self, tmp_path, exiftool):
        photo = tmp_path / "plain.jpg"
        Image.new("RGB", (8, 8), color="red").save(photo)

        assert MetadataVerifier(exiftool, use_exiftool=False).read(photo) is None
        exiftool.read_tags.assert_not_called()


class TestMatches:
    """Tests for MetadataVerifier.matches."""

    def test_equal_instant(self, tmp_path, exiftool):
        exiftool.read_tags.return_value = {"DateTimeOriginal": "2021:01:01 00:00:00+00:00"}

        assert MetadataVerifier(exiftool).matches(tmp_path / "a.jpg", TAKEN)

    def test_equal_instant_other_zone(self, tmp_path, exiftool):
        exiftool.read_tags.return_value = {"DateTimeOriginal": "2021:01:01 00:00:00+00:00"}
        expected = TAKEN.astimezone(timezone(timedelta(hours=-8)))

        assert MetadataVerifier(exiftool).matches(tmp_path / "a.jpg", expected)

    def test_different_instant(self, tmp_path, exiftool):
        exiftool.read_tags.return_value = {"DateTimeOriginal": "2020:06:15 10:00:00+00:00"}

        assert not MetadataVerifier(exiftool).matches(tmp_path / "a.jpg", TAKEN)

    def test_missing_embedded_value(self, tmp_path, exiftool):
        exiftool.read_tags.return_value = {}

        assert not MetadataVerifier(exiftool).matches(tmp_path / "a.jpg", TAKEN)

    def test_unsupported_format(self, tmp_path, exiftool):
        assert MetadataVerifier(exiftool).matches(tmp_path / "clip.mkv", TAKEN)
        exiftool.read_tags.assert_not_called()

    def test_no_expected_value(self, tmp_path, exiftool):
        assert MetadataVerifier(exiftool).matches(tmp_path / "a.jpg", None)
        exiftool.read_tags.assert_not_called()

    @pytest.mark.parametrize("value", ["0000:00:00 00:00:00", "garbage"])
    def test_unparseable_embedded_value_counts_as_match(self, tmp_path, exiftool, value):
        exiftool.read_tags.return_value = {"DateTimeOriginal": value}

        assert MetadataVerifier(exiftool).matches(tmp_path / "a.jpg", TAKEN) is True

    def test_read_failure_counts_as_match(self, tmp_path, exiftool):
        exiftool.read_tags.side_effect = MetadataReadError("exiftool failed")

        assert MetadataVerifier(exiftool).matches(tmp_path / "a.jpg", TAKEN)

    def test_video_without_exiftool_counts_as_match(self, tmp_path, exiftool):
        assert MetadataVerifier(exiftool, use_exiftool=False).matches(tmp_path / "clip.mp4", TAKEN)


class TestWriteThenVerify:
    """A write followed by a verification of the same instant agrees."""

    @pytest.mark.parametrize("name", ["photo.jpg", "clip.mp4", "clip.MOV"])
    def test_written_value_matches(self, tmp_path, name):
        fake = FakeExifTool()
        target = tmp_path / name

        MetadataWriter(fake).write(target, TAKEN)

        assert MetadataVerifier(fake).matches(target, TAKEN)
        assert not MetadataVerifier(fake).matches(target, TAKEN + timedelta(seconds=1))


class TestReadWithPillow:
    """Tests for read_with_pillow function."""

    def test_not_an_image(self, tmp_path):
        bogus = tmp_path / "bogus.jpg"
        bogus.write_text("not an image")

        with pytest.raises(MetadataReadError):
            read_with_pillow(bogus)

    def test_missing_file(self, tmp_path):
        with pytest.raises(MetadataReadError):
            read_with_pillow(tmp_path / "missing.jpg")

    def test_image_without_exif(self, tmp_path):
        photo = tmp_path / "plain.png"
        Image.new("RGB", (4, 4)).save(photo)

        assert read_with_pillow(photo) is None
