"""Tests for reading a log message from stdin (cli/message_reader.py)."""

from __future__ import annotations

import io

from dsjob.cli.message_reader import MAX_MESSAGE_LENGTH, read_message


class TestReadMessage:
    def test_reads_to_end_of_input(self) -> None:
        assert read_message(io.StringIO("line one\nline two\n")) == "line one\nline two\n"

    def test_drops_control_characters(self) -> None:
        assert read_message(io.StringIO("a\tb\x07c\r\n")) == "abc\n"

    def test_caps_length_but_drains_stream(self) -> None:
        stream = io.StringIO("x" * (MAX_MESSAGE_LENGTH * 3))
        message = read_message(stream)
        assert len(message) == MAX_MESSAGE_LENGTH
        assert stream.read() == ""

    def test_custom_limit(self) -> None:
        assert read_message(io.StringIO("abcdef"), limit=3) == "abc"

    def test_empty_input(self) -> None:
        assert read_message(io.StringIO("")) == ""

    def test_undecodable_bytes_are_replaced(self) -> None:
        stream = io.TextIOWrapper(io.BytesIO(b"caf\xe9 latte\n"), encoding="utf-8")
        assert read_message(stream) == "caf\ufffd latte\n"

    def test_explicit_encoding_decodes_buffer(self) -> None:
        stream = io.TextIOWrapper(io.BytesIO(b"caf\xe9\n"), encoding="utf-8")
        assert read_message(stream, encoding="latin-1") == "caf\xe9\n"

    def test_multibyte_character_split_across_reads(self) -> None:
        payload = ("x" * 1023 + "é").encode("utf-8")
        stream = io.TextIOWrapper(io.BytesIO(payload), encoding="utf-8")
        assert read_message(stream) == "x" * 1023 + "é"
