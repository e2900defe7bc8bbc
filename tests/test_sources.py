"""Tests for the input sources."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from user_intake.schemas.user import FIELDS
from user_intake.sources.console import ConsoleSource
from user_intake.sources.json_file import JSONFileSource
from user_intake.sources.mapping import MappingSource


class TestConsoleSource:
    def test_reads_one_line_per_field(self):
        lines = ["Alice", "30", "a@b.c", "5551234567", "f", "canada", "1994-05-01"]
        stdin = io.StringIO("\n".join(lines) + "\n")
        stdout = io.StringIO()

        with ConsoleSource(stdin=stdin, stdout=stdout) as source:
            raw = source.read()

        assert list(raw) == list(FIELDS)
        assert raw["name"] == "Alice"
        assert raw["dob"] == "1994-05-01"
        assert "Enter Name: " in stdout.getvalue()
        assert "Enter Date of Birth (YYYY-MM-DD): " in stdout.getvalue()

    def test_keeps_surrounding_spaces(self):
        source = ConsoleSource(stdin=io.StringIO(" Alice \r\n"), stdout=io.StringIO())
        assert source.supplies("name") == " Alice "

    def test_end_of_input_yields_none(self):
        stdin = io.StringIO("Alice\n30\n")
        source = ConsoleSource(stdin=stdin, stdout=io.StringIO())
        raw = source.read()
        assert raw["age"] == "30"
        assert raw["email"] is None
        assert raw["dob"] is None

    def test_blank_line_is_empty_string(self):
        source = ConsoleSource(stdin=io.StringIO("\n"), stdout=io.StringIO())
        assert source.supplies("gender") == ""


class TestJSONFileSource:
    def test_reads_record(self, tmp_record_file: Path):
        with JSONFileSource({"file_path": str(tmp_record_file)}) as source:
            raw = source.read()
        assert raw["name"] == " Alice "
        assert raw["country"] == " canada"

    def test_values_stringified_and_null_kept(self, tmp_path: Path):
        path = tmp_path / "user.json"
        path.write_text(json.dumps({"name": "Bob", "age": 40, "dob": None}))
        source = JSONFileSource({"file_path": str(path)})
        raw = source.read()
        assert raw["age"] == "40"
        assert raw["dob"] is None
        assert raw["email"] is None

    def test_non_object_rejected(self, tmp_path: Path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps([{"name": "Bob"}]))
        with pytest.raises(ValueError, match="JSON object"):
            JSONFileSource({"file_path": str(path)}).open()

    def test_file_path_required(self):
        with pytest.raises(ValueError, match="file_path"):
            JSONFileSource({})


class TestMappingSource:
    def test_supplies_from_record(self, alice_raw):
        source = MappingSource({"record": alice_raw})
        assert source.read() == alice_raw

    def test_missing_field_is_none(self):
        source = MappingSource({"record": {"name": "Bob"}})
        assert source.supplies("age") is None

    def test_empty_config(self):
        assert MappingSource().supplies("name") is None


class TestConsoleSourceEndOfInput:
    def test_no_prompts_after_end_of_input(self):
        stdout = io.StringIO()
        source = ConsoleSource(stdin=io.StringIO("Alice\n30\n"), stdout=stdout)

        raw = source.read()

        prompts = stdout.getvalue()
        assert "Enter Email: " in prompts
        assert "Enter Phone: " not in prompts
        assert "Enter Date of Birth" not in prompts
        assert raw["phone"] is None
        assert raw["dob"] is None
