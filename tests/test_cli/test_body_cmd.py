"""Tests for CLI body command."""

from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from haricot.cli.main import app

runner = CliRunner()


class TestBodyCommand:
    """Tests for extracting bodies from the command line."""

    def test_raw_response(self, sample_har: Path) -> None:
        """Test the body is a literal string without a decode flag."""
        result = runner.invoke(app, ["body", str(sample_har), "1", "resp"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["body"] == '{"ok":false}'
        assert data["mimeType"] == "application/json; charset=utf-8"
        assert data["size"] == 12
        assert data["structured"] is False

    def test_structured_response(self, sample_har: Path) -> None:
        """Test --decode-structured embeds the JSON body."""
        result = runner.invoke(app, ["body", str(sample_har), "1", "resp", "--decode-structured"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["body"] == {"ok": False}
        assert data["decodeMode"] == "structured"

    def test_request_body(self, sample_har: Path) -> None:
        """Test the request side."""
        result = runner.invoke(app, ["body", str(sample_har), "1", "req", "-s"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["body"] == {"user": "admin"}

    def test_expand_nested(self, write_har, make_entry) -> None:
        """Test --expand-nested unpacks JSON strings inside the body."""
        body = json.dumps({"AddDevice": {"DevicePrivateData": "%7B%22a%22%3A1%7D"}})
        har_file = write_har([make_entry(text=body, mime_type="application/json")])

        result = runner.invoke(app, ["body", str(har_file), "0", "resp", "--expand-nested"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["body"] == {"AddDevice": {"DevicePrivateData": {"a": 1}}}
        assert data["decodeMode"] == "expanded"

    def test_base64_body(self, write_har, make_entry) -> None:
        """Test base64 bodies are decoded."""
        encoded = base64.b64encode(b'{"items": [1, 2]}').decode()
        har_file = write_har([make_entry(text=encoded, encoding="base64")])

        result = runner.invoke(app, ["body", str(har_file), "0", "resp", "--decode-structured"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["body"] == {"items": [1, 2]}

    def test_empty_body_succeeds(self, write_har, make_entry) -> None:
        """Test an empty body is printed as an empty string."""
        har_file = write_har([make_entry(text="")])

        result = runner.invoke(app, ["body", str(har_file), "0", "resp"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["body"] == ""

    def test_too_deep_body_printed_as_string(self, write_har, make_entry) -> None:
        """Test a body nested too deeply to parse comes out as text."""
        deep = "[" * 100_000 + "]" * 100_000
        har_file = write_har([make_entry(text=deep)])

        result = runner.invoke(app, ["body", str(har_file), "0", "resp", "--decode-structured"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["body"] == deep
        assert data["structured"] is False

    def test_unicode_preserved(self, write_har, make_entry) -> None:
        """Test non-ASCII text is printed as is."""
        har_file = write_har([make_entry(text="grüße")])

        result = runner.invoke(app, ["body", str(har_file), "0", "resp"])

        assert result.exit_code == 0
        assert "grüße" in result.stdout


class TestBodyErrors:
    """Tests for body command failures."""

    def test_out_of_range(self, sample_har: Path) -> None:
        """Test ordinal 5 on three entries reports the valid range."""
        result = runner.invoke(app, ["body", str(sample_har), "5", "req"])

        assert result.exit_code == 1
        assert "Entry 5 out of range" in result.output
        assert "[0, 3)" in result.output
        assert result.stdout == ""

    def test_no_body(self, sample_har: Path) -> None:
        """Test a missing body is an error, not an empty result."""
        result = runner.invoke(app, ["body", str(sample_har), "2", "resp"])

        assert result.exit_code == 1
        assert "has no response body" in result.output
        assert result.stdout == ""

    def test_decode_failed(self, write_har, make_entry) -> None:
        """Test malformed base64 is reported."""
        har_file = write_har([make_entry(text="%%%not-base64%%%", encoding="base64")])

        result = runner.invoke(app, ["body", str(har_file), "0", "resp"])

        assert result.exit_code == 1
        assert "Cannot decode base64" in result.output
        assert result.stdout == ""

    @pytest.mark.parametrize("which", ["request", "both", "RESP"])
    def test_invalid_side_is_usage_error(self, sample_har: Path, which: str) -> None:
        """Test anything but req/resp is rejected by the CLI."""
        result = runner.invoke(app, ["body", str(sample_har), "0", which])

        assert result.exit_code == 2
        assert result.stdout == ""

    def test_non_integer_ordinal(self, sample_har: Path) -> None:
        """Test a non-numeric ordinal is a usage error."""
        result = runner.invoke(app, ["body", str(sample_har), "first", "resp"])

        assert result.exit_code == 2
