"""Pytest configuration and fixtures for haricot tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from haricot.index import EntryIndex
from haricot.model import parse_document


def build_entry(
    method: str = "GET",
    url: str = "http://example.com/",
    status: int = 200,
    text: str | None = "",
    mime_type: str = "text/html",
    encoding: str | None = None,
    size: int | None = 0,
    time: float = 10.0,
    content: bool = True,
    headers: list[dict] | None = None,
    response_headers: list[dict] | None = None,
    query_string: list[dict] | None = None,
    post_data: dict | None = None,
    started: str = "2024-01-01T00:00:00.000Z",
) -> dict[str, Any]:
    """Build a HAR entry dict. text=None or size=None leaves the field out."""
    entry: dict[str, Any] = {
        "startedDateTime": started,
        "time": time,
        "request": {
            "method": method,
            "url": url,
            "httpVersion": "HTTP/1.1",
            "headers": headers or [],
            "queryString": query_string or [],
            "cookies": [],
            "headersSize": -1,
            "bodySize": -1,
        },
        "response": {
            "status": status,
            "statusText": "OK",
            "httpVersion": "HTTP/1.1",
            "headers": response_headers or [],
            "cookies": [],
            "redirectURL": "",
            "headersSize": -1,
            "bodySize": -1,
        },
        "cache": {},
        "timings": {"send": 0, "wait": time, "receive": 0},
    }
    if content:
        content_data: dict[str, Any] = {"mimeType": mime_type}
        if size is not None:
            content_data["size"] = size
        if text is not None:
            content_data["text"] = text
        if encoding is not None:
            content_data["encoding"] = encoding
        entry["response"]["content"] = content_data
    if post_data is not None:
        entry["request"]["postData"] = post_data
        if "text" in post_data:
            entry["request"]["bodySize"] = len(post_data["text"])
    return entry


def build_har(entries: list[dict[str, Any]]) -> dict[str, Any]:
    """Wrap entries in a HAR document dict."""
    return {
        "log": {
            "version": "1.2",
            "creator": {"name": "test", "version": "1.0"},
            "entries": entries,
        }
    }


def sample_entries() -> list[dict[str, Any]]:
    """Three entries; entry 1 is a 404 JSON response."""
    return [
        build_entry(
            method="GET",
            url="http://example.com/index.html?lang=en",
            status=200,
            text="<html>Hello</html>",
            mime_type="text/html; charset=utf-8",
            size=18,
            time=12.5,
            query_string=[{"name": "lang", "value": "en"}],
        ),
        build_entry(
            method="POST",
            url="http://example.com/api/login",
            status=404,
            text='{"ok":false}',
            mime_type="application/json; charset=utf-8",
            size=12,
            time=30.0,
            headers=[{"name": "Content-Type", "value": "application/json"}],
            post_data={"mimeType": "application/json", "text": '{"user":"admin"}'},
        ),
        build_entry(
            method="GET",
            url="http://example.com/logo.png",
            status=200,
            text=None,
            mime_type="image/png",
            size=-1,
            time=7.5,
        ),
    ]


@pytest.fixture
def make_entry():
    """Factory for HAR entry dicts."""
    return build_entry


@pytest.fixture
def write_har(tmp_path: Path):
    """Write HAR data to a temporary file and return its path."""

    def _write(entries: list[dict[str, Any]] | None = None, name: str = "test.har") -> Path:
        har_file = tmp_path / name
        har_file.write_text(json.dumps(build_har(entries or [])), encoding="utf-8")
        return har_file

    return _write


@pytest.fixture
def sample_har(write_har) -> Path:
    """HAR file with the three sample entries."""
    return write_har(sample_entries(), name="sample.har")


@pytest.fixture
def index_for():
    """Build an EntryIndex directly from entry dicts."""

    def _index(entries: list[dict[str, Any]]) -> EntryIndex:
        return EntryIndex(parse_document(build_har(entries)))

    return _index


@pytest.fixture
def sample_index(index_for) -> EntryIndex:
    """EntryIndex over the three sample entries."""
    return index_for(sample_entries())


@pytest.fixture(autouse=True)
def _reset_haricot_logging():
    """Remove handlers and levels the CLI installs on the haricot logger."""
    yield
    logger = logging.getLogger("haricot")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
