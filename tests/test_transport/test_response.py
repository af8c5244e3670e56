"""Tests for derivekit.transport.response."""

from __future__ import annotations

import httpx
import pytest

from derivekit.output import OutputFormat, OutputManager, set_output
from derivekit.transport.response import extract_response_data, format_api_response


class TestExtractResponseData:
    def test_json_body(self) -> None:
        assert extract_response_data(httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_text_body(self) -> None:
        assert extract_response_data(httpx.Response(200, text="hello")) == "hello"

    def test_empty_body(self) -> None:
        assert extract_response_data(httpx.Response(204)) is None


class TestFormatApiResponse:
    def test_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        format_api_response(httpx.Response(200, json={"id": 1}))

        captured = capsys.readouterr()
        assert '"id": 1' in captured.out
        assert "HTTP 200 OK" in captured.err

    def test_plain_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        format_api_response(httpx.Response(200, json={"id": 1, "title": "Hi"}))

        out = capsys.readouterr().out
        assert "id\t1" in out
        assert "title\tHi" in out

    def test_empty_body_prints_status_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        format_api_response(httpx.Response(204))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "HTTP 204 No Content" in captured.err
