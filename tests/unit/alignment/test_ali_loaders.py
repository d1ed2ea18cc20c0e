"""
Tests for alignment archive loading.
"""

import pytest

from conftest import ALI_ARCHIVE_TXT


class TestParseAlignmentLine:
    """Tests for parse_alignment_line."""

    def test_basic(self):
        from alignment import parse_alignment_line

        assert parse_alignment_line("utt1 5 5 6\n") == ("utt1", [5, 5, 6])

    def test_key_only(self):
        """A key with no labels is an empty alignment."""
        from alignment import parse_alignment_line

        assert parse_alignment_line("utt1") == ("utt1", [])

    def test_non_integer(self):
        from alignment import parse_alignment_line

        with pytest.raises(ValueError, match="utt1"):
            parse_alignment_line("utt1 5 x")

    def test_zero_label(self):
        from alignment import parse_alignment_line

        with pytest.raises(ValueError, match="utt1"):
            parse_alignment_line("utt1 5 0 6")


class TestAlignmentArchive:
    """Tests for read_alignment_archive / AlignmentArchive."""

    def test_read(self, tmp_path):
        from alignment import read_alignment_archive

        path = tmp_path / "ali.txt"
        path.write_text(ALI_ARCHIVE_TXT)

        alignments = read_alignment_archive(f"ark,t:{path}")
        assert alignments == {"utt1": [5, 5, 6, 3, 4], "utt2": [7]}

    def test_blank_lines_skipped(self, tmp_path):
        from alignment import read_alignment_archive

        path = tmp_path / "ali.txt"
        path.write_text("\nutt1 5\n\n")

        assert read_alignment_archive(path) == {"utt1": [5]}

    def test_missing_file(self, tmp_path):
        from alignment import read_alignment_archive

        with pytest.raises(FileNotFoundError):
            read_alignment_archive(tmp_path / "nope.txt")

    def test_random_access(self, tmp_path):
        from alignment import AlignmentArchive

        path = tmp_path / "ali.txt"
        path.write_text(ALI_ARCHIVE_TXT)

        archive = AlignmentArchive(path)
        assert len(archive) == 2
        assert "utt2" in archive
        assert archive.keys() == ["utt1", "utt2"]
        assert archive["utt2"] == [7]

    def test_missing_key(self, tmp_path):
        from alignment import AlignmentArchive

        path = tmp_path / "ali.txt"
        path.write_text(ALI_ARCHIVE_TXT)

        with pytest.raises(KeyError, match="utt9"):
            AlignmentArchive(path)["utt9"]
