import inspect
import io
import json
from http.server import BaseHTTPRequestHandler

import pytest

from api import index
from core.frame_builder import render_initial_frame
from prompts.templates import APOLOGY_MESSAGE


class FakeConnection:
    """Stands in for the socket a request handler is bound to."""

    def __init__(self, raw_request):
        self._reader = io.BytesIO(raw_request)
        self.sent = io.BytesIO()

    def makefile(self, mode, *args, **kwargs):
        return self._reader

    def sendall(self, data):
        self.sent.write(data)


def serve(raw_request):
    connection = FakeConnection(raw_request)
    index.handler(connection, ("127.0.0.1", 40000), None)

    head, _, body = connection.sent.getvalue().partition(b"\r\n\r\n")
    status_line, *header_lines = head.decode("iso-8859-1").split("\r\n")
    headers = {}
    for line in header_lines:
        name, _, value = line.partition(":")
        headers[name.strip().lower()] = value.strip()
    return status_line, headers, body.decode("utf-8")


def get_request(path="/"):
    return f"GET {path} HTTP/1.1\r\nHost: frame.example.com\r\nConnection: close\r\n\r\n".encode()


def post_request(payload, path="/"):
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    head = (
        f"POST {path} HTTP/1.1\r\n"
        "Host: frame.example.com\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Connection: close\r\n\r\n"
    )
    return head.encode() + body


def press(button_index):
    return {"untrustedData": {"fid": 3, "inputText": "Vercel", "buttonIndex": button_index}}


@pytest.fixture
def wired(monkeypatch, services):
    monkeypatch.setattr(index, "get_services", lambda: services)
    return services


def test_handler_is_a_request_handler_class():
    assert inspect.isclass(index.handler)
    assert issubclass(index.handler, BaseHTTPRequestHandler)


def test_get_returns_initial_frame(wired):
    status_line, headers, body = serve(get_request())

    assert status_line.endswith(" 200 OK")
    assert headers["content-type"] == "text/html"
    assert int(headers["content-length"]) == len(body.encode("utf-8"))
    assert body == render_initial_frame()
    assert wired.profiles.calls == []


def test_get_on_any_path_returns_initial_frame(wired):
    _, _, body = serve(get_request("/api/index?x=1"))
    assert body == render_initial_frame()


def test_post_generate_returns_result_frame(wired, parse_frame):
    status_line, headers, body = serve(post_request(press(1)))

    assert status_line.endswith(" 200 OK")
    assert headers["content-type"] == "text/html"
    meta, _ = parse_frame(body)
    assert wired.profiles.picture_url in meta["fc:frame:image"]
    assert wired.profiles.calls == [3]
    assert wired.topics.calls == ["Vercel"]


def test_post_reset_returns_initial_frame(wired):
    status_line, _, body = serve(post_request(press(2)))

    assert status_line.endswith(" 200 OK")
    assert body == render_initial_frame()
    assert wired.profiles.calls == []


def test_post_failure_returns_500_apology(wired):
    wired.topics.error = RuntimeError("quota exceeded")

    status_line, headers, body = serve(post_request(press(1)))

    assert " 500 " in status_line
    assert headers["content-type"] == "text/html"
    assert body == render_initial_frame(APOLOGY_MESSAGE)
    assert "quota exceeded" not in body


def test_post_with_invalid_json_returns_500_apology(wired):
    status_line, _, body = serve(post_request(b"{not json"))

    assert " 500 " in status_line
    assert body == render_initial_frame(APOLOGY_MESSAGE)


def test_post_without_body_returns_500_apology(wired):
    raw = b"POST / HTTP/1.1\r\nHost: frame.example.com\r\nConnection: close\r\n\r\n"

    status_line, _, body = serve(raw)

    assert " 500 " in status_line
    assert body == render_initial_frame(APOLOGY_MESSAGE)
