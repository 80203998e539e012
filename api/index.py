"""Vercel serverless entrypoint for the Frame cover generator.

GET serves the initial Frame; POST handles a Farcaster button press.
"""

from __future__ import annotations

import functools
import logging
import sys
from http.server import BaseHTTPRequestHandler
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.models import FrameResponse
from core.pipeline import FrameServices, handle_frame_request
from core.settings import Settings, configure_logging

SETTINGS = Settings.from_env()
configure_logging(SETTINGS)

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_services() -> FrameServices:
    """Service handles live for the lifetime of the warm instance."""
    logger.info("Initialising Frame services")
    return FrameServices.from_settings(SETTINGS)


class handler(BaseHTTPRequestHandler):
    """Vercel Python serverless function handler."""

    def do_GET(self):
        self._dispatch(None)

    def do_POST(self):
        self._dispatch(self._read_body())

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length > 0 else b""

    def _dispatch(self, body) -> None:
        self._write(handle_frame_request(self.command, body, get_services))

    def _write(self, response: FrameResponse) -> None:
        payload = response.body.encode("utf-8")
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)
