"""
Page asset retrieval.

Fetches the two per-page payloads of a CGP book from the digital content
host: the optional SVG vector overlay and the raster background, which the
platform stores as either JPEG or PNG with no way to tell in advance.
Optionally saves each payload under the output directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .book import Book
from .errors import AssetFetchError
from ..utils.file_manager import FileManager, pad_page


OVERLAY_PATH = "{book_id}/assets/common/page-vectorlayers/{page}.svg"
BACKGROUND_PATH = "{book_id}/assets/common/page-html5-substrates/page{page}_{quality}."

# (format, url extension) in the order they are tried
BACKGROUND_ENCODINGS = (("JPEG", "jpg"), ("PNG", "png"))


@dataclass
class PageBackground:
    content: bytes
    format: str  # 'JPEG' | 'PNG'

    @property
    def mime_type(self) -> str:
        return f"image/{self.format.lower()}"

    @property
    def extension(self) -> str:
        """Extension for saved files: the format name, e.g. page-0001.JPEG."""
        return self.format


class PageAssetFetcher:
    def __init__(self, client: httpx.AsyncClient, output_dir: Optional[str] = None,
                 uni_token: Optional[str] = None):
        """
        Args:
            client: Client rooted at the digital content base URL
            output_dir: Save fetched assets under this directory when set
            uni_token: Optional UNI token appended to overlay requests
        """
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.uni_token = uni_token or None
        self.files = FileManager(output_dir) if output_dir else None

    def overlay_url(self, book_id: str, page: int) -> str:
        url = OVERLAY_PATH.format(book_id=book_id, page=pad_page(page))
        if self.uni_token:
            url += f"?uni={self.uni_token}"
        return url

    def background_url(self, book_id: str, page: int, quality: int, extension: str) -> str:
        return BACKGROUND_PATH.format(book_id=book_id, page=pad_page(page), quality=quality) + extension

    async def _get(self, book: Book, url: str) -> bytes:
        # Cookie header is built per request, never stored on the client
        resp = await self.client.get(url, headers={"cookie": book.cookie_header()},
                                     follow_redirects=True)
        resp.raise_for_status()
        return resp.content

    async def get_overlay(self, book: Book, page: int) -> bytes:
        """
        Fetch the SVG overlay of a page.

        Raises httpx.HTTPError when the fetch fails and OSError when saving
        fails; callers treat either as "this page has no overlay".
        """
        self.logger.info(f"Attempting to get SVG for {book.book_id}:{page}")
        svg = await self._get(book, self.overlay_url(book.book_id, page))
        self.logger.info(f"Got SVG for {book.book_id}:{page}")

        if self.files:
            self.files.save_overlay(book.book_id, page, svg)
        return svg

    async def get_background(self, book: Book, page: int, quality: int = 4) -> PageBackground:
        """
        Fetch the raster background of a page, trying JPEG then PNG.

        Raises:
            AssetFetchError: neither encoding could be fetched
        """
        self.logger.info(f"Attempting to get background for {book.book_id}:{page}")

        background = None
        last_error: Optional[Exception] = None
        for fmt, extension in BACKGROUND_ENCODINGS:
            url = self.background_url(book.book_id, page, quality, extension)
            try:
                content = await self._get(book, url)
            except httpx.HTTPError as e:
                self.logger.debug(f"No {fmt} background for {book.book_id}:{page} ({e})")
                last_error = e
                continue
            background = PageBackground(content=content, format=fmt)
            break

        if background is None:
            raise AssetFetchError(
                f"Could not fetch background for {book.book_id}:{page} as JPEG or PNG"
            ) from last_error

        self.logger.info(f"Got {background.format} background for {book.book_id}:{page}")

        if self.files:
            self.files.save_background(book.book_id, page, background.extension, background.content)
        return background
