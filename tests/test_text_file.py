"""Tests for the plain text file adapter."""

import pytest

from texttodo.adapters.text_file import TextFileDocument


class TestTextFileDocument:
    def test_read_lines(self, tmp_path):
        path = tmp_path / "todo.txt"
        path.write_text("TODOs:\n* A\n")
        assert TextFileDocument(path).read_lines() == ["TODOs:", "* A"]

    def test_read_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TextFileDocument(tmp_path / "missing.txt").read_lines()

    def test_write_lines_adds_trailing_newline(self, tmp_path):
        path = tmp_path / "todo.txt"
        TextFileDocument(path).write_lines(["TODOs:", "* A"])
        assert path.read_text() == "TODOs:\n* A\n"

    def test_append_creates_file(self, tmp_path):
        path = tmp_path / "archive" / "done.txt"
        doc = TextFileDocument(path)
        doc.append_lines(["TODOs:", "M A"])
        assert path.read_text() == "TODOs:\nM A\n"

    def test_append_separates_blocks(self, tmp_path):
        path = tmp_path / "done.txt"
        path.write_text("TODOs:\nM A\n")
        TextFileDocument(path).append_lines(["TODOs:", "T B"])
        assert path.read_text() == "TODOs:\nM A\n\nTODOs:\nT B\n"

    def test_expands_user(self):
        doc = TextFileDocument("~/todo.txt")
        assert "~" not in str(doc.path)
