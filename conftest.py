"""
Shared test helpers: a fake CGP library served through httpx.MockTransport
and a rendering engine that needs no WeasyPrint.
"""

import asyncio
import io
import re
import sys
from pathlib import Path

import httpx
import pytest
from PIL import Image
from pypdf import PdfWriter

# Add the src directory to the path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from cgpripper.core.http_client import create_client


GRANT_SET_COOKIES = [
    "CloudFront-Signature=sig123; Path=/; Secure; HttpOnly",
    "CloudFront-Policy=pol456; Path=/; Secure; HttpOnly",
    "CloudFront-Key-Pair-Id=KP789; Path=/; Secure; HttpOnly",
]

BACKGROUND_RE = re.compile(r"/page-html5-substrates/page(\d{4})_(\d)\.(jpg|png)$")
OVERLAY_RE = re.compile(r"/page-vectorlayers/(\d{4})\.svg$")

SVG = b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"><rect width="5" height="5"/></svg>'


def image_bytes(width: int, height: int, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(255, 255, 255)).save(buf, format=fmt)
    return buf.getvalue()


class FakeLibrary:
    """Async request handler standing in for library.cgpbooks.co.uk."""

    def __init__(self, backgrounds=None, overlays=None, grant_cookies=None, delays=None):
        self.backgrounds = backgrounds or {}  # page -> (ext, bytes)
        self.overlays = overlays or {}  # page -> bytes
        self.grant_cookies = GRANT_SET_COOKIES if grant_cookies is None else grant_cookies
        self.delays = delays or {}  # page -> seconds
        self.requests = []
        self.completed = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.startswith("/digitalaccess/"):
            return httpx.Response(200, headers=[("set-cookie", c) for c in self.grant_cookies])

        match = BACKGROUND_RE.search(path)
        if match:
            page, ext = int(match.group(1)), match.group(3)
            await asyncio.sleep(self.delays.get(page, 0))
            entry = self.backgrounds.get(page)
            if entry and entry[0] == ext:
                self.completed.append(page)
                return httpx.Response(200, content=entry[1])
            return httpx.Response(404)

        match = OVERLAY_RE.search(path)
        if match:
            page = int(match.group(1))
            if page in self.overlays:
                return httpx.Response(200, content=self.overlays[page])
            return httpx.Response(403)

        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return create_client(transport=httpx.MockTransport(self))

    def background_requests(self):
        return [r for r in self.requests if BACKGROUND_RE.search(r.url.path)]


class FakeEngine:
    """Renders each page as a blank PDF page of the requested size."""

    def __init__(self):
        self.rendered = []
        self.closed = False

    async def render(self, html_content: str, width: int, height: int) -> bytes:
        self.rendered.append((width, height))
        writer = PdfWriter()
        writer.add_blank_page(width=width, height=height)
        buf = io.BytesIO()
        writer.write(buf)
        return buf.getvalue()

    def close(self):
        self.closed = True


@pytest.fixture
def fake_engine():
    return FakeEngine()
