from __future__ import annotations

import http.client
import io
import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from adapters.shlink_client import ShlinkClient
from core.errors import ShlinkApiError
from core.models import ShlinkRequest

RESPONSE = {"longUrl": "https://example.org/a/", "shortUrl": "https://s.example/a1", "shortCode": "a1"}


def _urlopen_returning(body: bytes) -> MagicMock:
    mock_urlopen = MagicMock()
    mock_urlopen.return_value.__enter__.return_value.read.return_value = body
    return mock_urlopen


def _sent_request(mock_urlopen: MagicMock):
    return mock_urlopen.call_args.args[0]


def test_create_posts_json_with_api_key() -> None:
    mock_urlopen = _urlopen_returning(json.dumps(RESPONSE).encode("utf-8"))
    client = ShlinkClient("https://s.example/", "secret", timeout=5)
    request = ShlinkRequest(long_url="https://example.org/a/", title="A", tags=["x"])

    with patch("adapters.shlink_client.urllib.request.urlopen", mock_urlopen):
        response = client.create_short_url(request)

    assert response == RESPONSE
    sent = _sent_request(mock_urlopen)
    assert sent.get_method() == "POST"
    assert sent.full_url == "https://s.example/rest/v3/short-urls"
    assert sent.get_header("X-api-key") == "secret"
    assert sent.get_header("Content-type") == "application/json"
    assert json.loads(sent.data) == {"longUrl": "https://example.org/a/", "title": "A", "tags": ["x"]}
    assert mock_urlopen.call_args.kwargs["timeout"] == 5


def test_update_patches_short_code_and_omits_missing_tags() -> None:
    mock_urlopen = _urlopen_returning(json.dumps(RESPONSE).encode("utf-8"))
    client = ShlinkClient("https://s.example", "secret")
    request = ShlinkRequest(long_url="https://example.org/a/", title="A")

    with patch("adapters.shlink_client.urllib.request.urlopen", mock_urlopen):
        client.update_short_url("a1", request)

    sent = _sent_request(mock_urlopen)
    assert sent.get_method() == "PATCH"
    assert sent.full_url == "https://s.example/rest/v3/short-urls/a1"
    assert "tags" not in json.loads(sent.data)


def test_http_error_maps_to_api_error_with_detail() -> None:
    error = urllib.error.HTTPError(
        "https://s.example/rest/v3/short-urls/zz",
        404,
        "Not Found",
        hdrs=None,
        fp=io.BytesIO(b'{"title": "Short URL not found", "detail": "No URL found with short code \\"zz\\""}'),
    )
    client = ShlinkClient("https://s.example", "secret")

    with patch("adapters.shlink_client.urllib.request.urlopen", MagicMock(side_effect=error)):
        with pytest.raises(ShlinkApiError) as excinfo:
            client.update_short_url("zz", ShlinkRequest(long_url="https://example.org/", title=""))

    assert excinfo.value.status == 404
    assert 'No URL found with short code "zz"' in str(excinfo.value)


def test_transport_error_maps_to_api_error() -> None:
    client = ShlinkClient("https://s.example", "secret")
    failing = MagicMock(side_effect=urllib.error.URLError("connection refused"))

    with patch("adapters.shlink_client.urllib.request.urlopen", failing):
        with pytest.raises(ShlinkApiError) as excinfo:
            client.create_short_url(ShlinkRequest(long_url="https://example.org/", title=""))

    assert excinfo.value.status is None
    assert "connection refused" in str(excinfo.value)


def test_non_json_body_raises_api_error() -> None:
    client = ShlinkClient("https://s.example", "secret")

    with patch("adapters.shlink_client.urllib.request.urlopen", _urlopen_returning(b"<html>oops</html>")):
        with pytest.raises(ShlinkApiError):
            client.create_short_url(ShlinkRequest(long_url="https://example.org/", title=""))


@pytest.mark.parametrize(
    "read_error",
    [TimeoutError("timed out"), http.client.IncompleteRead(b'{"shortUrl"', 40)],
)
def test_body_read_failure_maps_to_api_error(read_error: Exception) -> None:
    mock_urlopen = MagicMock()
    mock_urlopen.return_value.__enter__.return_value.read.side_effect = read_error
    client = ShlinkClient("https://s.example", "secret")

    with patch("adapters.shlink_client.urllib.request.urlopen", mock_urlopen):
        with pytest.raises(ShlinkApiError) as excinfo:
            client.create_short_url(ShlinkRequest(long_url="https://example.org/", title=""))

    assert excinfo.value.__cause__ is read_error


def test_non_utf8_body_raises_api_error() -> None:
    client = ShlinkClient("https://s.example", "secret")

    with patch("adapters.shlink_client.urllib.request.urlopen", _urlopen_returning(b"\xff\xfe")):
        with pytest.raises(ShlinkApiError):
            client.create_short_url(ShlinkRequest(long_url="https://example.org/", title=""))
