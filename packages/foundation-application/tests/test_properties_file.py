"""Unit tests for hoodie.foundation.application.properties_file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from hoodie.foundation.application.properties_file import (
    dump_properties,
    load_properties,
    parse_properties,
    write_properties,
)
from hoodie.foundation.domain.exceptions import PropertiesFormatError

if TYPE_CHECKING:
    from pathlib import Path


class TestParseProperties:
    @pytest.mark.unit
    def test_separators(self) -> None:
        text = "a=1\nb = 2\nc:3\nd 4\n"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4"}

    @pytest.mark.unit
    def test_comments_and_blank_lines_skipped(self) -> None:
        text = "# comment\n! bang comment\n   # indented comment\n\n   \nk=v\n"
        assert parse_properties(text) == {"k": "v"}

    @pytest.mark.unit
    def test_value_keeps_separator_characters(self) -> None:
        assert parse_properties("url=jdbc:hive2://host:10000/db=x") == {
            "url": "jdbc:hive2://host:10000/db=x"
        }

    @pytest.mark.unit
    def test_trailing_whitespace_in_value_kept(self) -> None:
        assert parse_properties("k=v  ") == {"k": "v  "}

    @pytest.mark.unit
    def test_key_without_value(self) -> None:
        assert parse_properties("flag\nempty=\n") == {"flag": "", "empty": ""}

    @pytest.mark.unit
    def test_last_duplicate_wins(self) -> None:
        text = "hoodie.memory.merge.fraction=0.5\nhoodie.memory.merge.fraction=0.75\n"
        assert parse_properties(text) == {"hoodie.memory.merge.fraction": "0.75"}

    @pytest.mark.unit
    def test_line_continuation(self) -> None:
        text = "k=one \\\n    two\nnext=1\n"
        assert parse_properties(text) == {"k": "one two", "next": "1"}

    @pytest.mark.unit
    def test_continuation_ignores_comment_marker(self) -> None:
        text = "k=a\\\n#b\n"
        assert parse_properties(text) == {"k": "a#b"}

    @pytest.mark.unit
    def test_even_backslashes_do_not_continue(self) -> None:
        text = "k=a\\\\\nb=c\n"
        assert parse_properties(text) == {"k": "a\\", "b": "c"}

    @pytest.mark.unit
    def test_escaped_separator_in_key(self) -> None:
        assert parse_properties("a\\=b\\ c=d") == {"a=b c": "d"}

    @pytest.mark.unit
    def test_escapes(self) -> None:
        assert parse_properties("k=tab\\there\\nline\\q") == {"k": "tab\there\nlineq"}

    @pytest.mark.unit
    def test_unicode_escape(self) -> None:
        assert parse_properties("k=\\u00e9t\\u00E9") == {"k": "\u00e9t\u00e9"}

    @pytest.mark.unit
    def test_surrogate_pair_escape_combined(self) -> None:
        assert parse_properties("k=\\uD83D\\uDE00") == {"k": "\U0001f600"}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        ["k=\\uD83D", "k=\\uD83Dx", "k=\\uD83D\\u0041", "k=\\uDE00", "k=a\\uDE00\\uD83D"],
    )
    def test_unpaired_surrogate_raises(self, text: str) -> None:
        with pytest.raises(PropertiesFormatError) as exc_info:
            parse_properties(text, source="mem.properties")
        assert "surrogate" in exc_info.value.reason
        assert exc_info.value.line_number == 1

    @pytest.mark.unit
    def test_crlf_and_cr_line_endings(self) -> None:
        assert parse_properties("a=1\r\nb=2\rc=3") == {"a": "1", "b": "2", "c": "3"}

    @pytest.mark.unit
    def test_malformed_unicode_escape(self) -> None:
        with pytest.raises(PropertiesFormatError) as exc_info:
            parse_properties("ok=1\nbad=\\u12\n", source="mem.properties")
        assert exc_info.value.line_number == 2
        assert exc_info.value.source == "mem.properties"

    @pytest.mark.unit
    def test_empty_text(self) -> None:
        assert parse_properties("") == {}


class TestLoadProperties:
    @pytest.mark.unit
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "memory.properties"
        path.write_text(
            "# memory tuning\nhoodie.memory.merge.fraction=0.5\n"
            "hoodie.memory.spillable.map.path=/data/spill/\n",
            encoding="utf-8",
        )
        assert load_properties(path) == {
            "hoodie.memory.merge.fraction": "0.5",
            "hoodie.memory.spillable.map.path": "/data/spill/",
        }

    @pytest.mark.unit
    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "memory.properties"
        path.write_text("k=v\n", encoding="utf-8")
        assert load_properties(str(path)) == {"k": "v"}

    @pytest.mark.unit
    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_properties(tmp_path / "absent.properties")

    @pytest.mark.unit
    def test_directory_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_properties(tmp_path)

    @pytest.mark.unit
    def test_format_error_reports_path(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.properties"
        path.write_text("a=1\nb=\\uzzzz\n", encoding="utf-8")
        with pytest.raises(PropertiesFormatError) as exc_info:
            load_properties(path)
        assert exc_info.value.source == str(path)
        assert exc_info.value.line_number == 2

    @pytest.mark.unit
    def test_non_utf8_bytes_raise_format_error(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.properties"
        path.write_bytes(b"k=caf\xe9\n")
        with pytest.raises(PropertiesFormatError) as exc_info:
            load_properties(path)
        assert exc_info.value.source == str(path)
        assert exc_info.value.line_number == 1
        assert "UTF-8" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.unit
    def test_non_utf8_line_number_counts_preceding_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.properties"
        path.write_bytes(b"a=1\nb=2\nk=caf\xe9\n")
        with pytest.raises(PropertiesFormatError) as exc_info:
            load_properties(path)
        assert exc_info.value.line_number == 3

    @pytest.mark.unit
    def test_escaped_surrogate_pair_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "emoji.properties"
        path.write_text("k=\\uD83D\\uDE00\n", encoding="utf-8")
        assert load_properties(path) == {"k": "\U0001f600"}


class TestDumpProperties:
    @pytest.mark.unit
    def test_sorted_output(self) -> None:
        assert dump_properties({"b": "2", "a": "1"}) == "a=1\nb=2\n"

    @pytest.mark.unit
    def test_comment_header(self) -> None:
        assert dump_properties({"a": "1"}, comment="memory\ntuning") == (
            "# memory\n# tuning\na=1\n"
        )

    @pytest.mark.unit
    def test_empty_mapping(self) -> None:
        assert dump_properties({}) == ""

    @pytest.mark.unit
    def test_escaping(self) -> None:
        text = dump_properties({"key with=sep": " lead\ttab"})
        assert text == "key\\ with\\=sep=\\ lead\\ttab\n"
        assert parse_properties(text) == {"key with=sep": " lead\ttab"}


class TestWriteProperties:
    @pytest.mark.unit
    def test_write_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "out.properties"
        props = {
            "hoodie.memory.dfs.buffer.max.size": "16777216",
            "hoodie.memory.spillable.map.path": "C:\\spill\\",
        }
        write_properties(path, props, comment="generated")
        assert path.read_text(encoding="utf-8").startswith("# generated\n")
        assert load_properties(path) == props

    @pytest.mark.unit
    def test_supplementary_character_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "emoji.properties"
        props = {"hoodie.memory.spillable.map.path": "/data/\U0001f600/"}
        write_properties(path, props)
        assert load_properties(path) == props
