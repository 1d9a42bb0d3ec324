"""Tests for the HTTP layer talking to the difficulty estimation service."""

import io
import json
import socket
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from difficulty_estimation_client.errors import TransportFailure
from difficulty_estimation_client.tools import make_transport, post_estimate


def _response(body: bytes) -> MagicMock:
    resp = MagicMock()
    resp.__enter__.return_value.read.return_value = body
    return resp


def _http_error(code: int, body: bytes) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(
        "https://api.example.com/api/estimate", code, "error", {}, io.BytesIO(body)
    )


class TestPostEstimate:
    def test_posts_json_to_estimate_endpoint(self, config, marathon_response):
        body = json.dumps(marathon_response).encode("utf-8")
        with patch("urllib.request.urlopen", return_value=_response(body)) as mock_urlopen:
            data = post_estimate(config, {"text": "마라톤 완주"})

        assert data == marathon_response
        req = mock_urlopen.call_args.args[0]
        assert req.full_url == "https://api.example.com/api/estimate"
        assert req.get_method() == "POST"
        assert req.get_header("Content-type") == "application/json"
        assert json.loads(req.data.decode("utf-8")) == {"text": "마라톤 완주"}
        assert "마라톤".encode("utf-8") in req.data
        assert mock_urlopen.call_args.kwargs["timeout"] == config.timeout_s

    def test_empty_body_is_none(self, config):
        with patch("urllib.request.urlopen", return_value=_response(b"")):
            assert post_estimate(config, {"text": "x"}) is None

    def test_invalid_json(self, config):
        with patch("urllib.request.urlopen", return_value=_response(b"<html>502</html>")):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"text": "x"})
        assert exc.value.message == "Invalid JSON response"


class TestHttpErrors:
    def test_status_without_body(self, config):
        with patch("urllib.request.urlopen", side_effect=_http_error(500, b"")):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"text": "x"})
        assert exc.value.message == "Request failed with status code 500"
        assert exc.value.status == 500

    def test_detail_from_json_body(self, config):
        err = _http_error(422, json.dumps({"detail": "text 필드가 필요합니다"}).encode("utf-8"))
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"experience": "x"})
        assert exc.value.message == "text 필드가 필요합니다"
        assert exc.value.status == 422

    def test_error_from_json_body(self, config):
        err = _http_error(400, b'{"error": "bad input"}')
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"text": "x"})
        assert exc.value.message == "bad input"

    def test_non_string_detail_is_ignored(self, config):
        err = _http_error(422, b'{"detail": [{"loc": ["body", "text"]}]}')
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"text": "x"})
        assert exc.value.message == "Request failed with status code 422"


class TestNetworkErrors:
    def test_connection_refused(self, config):
        err = urllib.error.URLError(ConnectionRefusedError("refused"))
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"text": "x"})
        assert exc.value.message == "Network Error"
        assert exc.value.status is None

    def test_timeout_inside_url_error(self, config):
        err = urllib.error.URLError(socket.timeout("timed out"))
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"text": "x"})
        assert exc.value.message == "timeout exceeded"

    def test_read_timeout(self, config):
        with patch("urllib.request.urlopen", side_effect=TimeoutError("timed out")):
            with pytest.raises(TransportFailure) as exc:
                post_estimate(config, {"text": "x"})
        assert exc.value.message == "timeout exceeded"


class TestMakeTransport:
    def test_binds_config(self, config):
        with patch("difficulty_estimation_client.tools.post_estimate", return_value={"ok": 1}) as mock_post:
            transport = make_transport(config)
            assert transport({"text": "x"}) == {"ok": 1}
        mock_post.assert_called_once_with(config, {"text": "x"})
