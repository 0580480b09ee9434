"""
Rip Orchestrator: runs the end-to-end pipeline for one book.

Derive the access grant, fetch and compose every page concurrently, then
render the pages one at a time in page order and write the merged PDF.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, List, Tuple

import httpx

from .assets import PageAssetFetcher, PageBackground
from .book import Book
from .composer import DEFAULT_PAGE_TEMPLATE, PageComposer, read_dimensions
from .credentials import derive_access_grant
from .errors import RenderError, RipperError
from .logger import ErrorTracker
from .pdf_generator import PDFGenerator
from ..utils.file_manager import FileManager


@dataclass
class RipConfig:
    book_id: str
    session_id: str
    pages: int
    quality: int = 4
    output_dir: str = "."
    save_assets: bool = True
    uni_token: Optional[str] = None
    template: str = DEFAULT_PAGE_TEMPLATE
    max_concurrency: Optional[int] = None  # None = every page in flight at once


@dataclass
class BuiltPage:
    number: int
    html: Optional[str]
    dimensions: Optional[Tuple[int, int]]
    has_overlay: bool


@dataclass
class RipResult:
    output_path: str
    rendered_pages: List[int] = field(default_factory=list)
    skipped_pages: List[int] = field(default_factory=list)
    pages_without_overlay: List[int] = field(default_factory=list)


class RipController:
    def __init__(self, config: RipConfig, client: httpx.AsyncClient, engine=None,
                 logger: Optional[logging.Logger] = None):
        self.config = config
        self.client = client
        self.engine = engine
        self.logger = logger or logging.getLogger(__name__)
        self.tracker = ErrorTracker(self.logger)
        self.files = FileManager(config.output_dir)
        self.fetcher = PageAssetFetcher(
            client,
            output_dir=config.output_dir if config.save_assets else None,
            uni_token=config.uni_token,
        )
        self.composer = PageComposer(config.template)
        self._limit = asyncio.Semaphore(config.max_concurrency) if config.max_concurrency else None

    async def _build_page(self, book: Book, number: int,
                          progress: Optional[Callable[[object], None]] = None) -> BuiltPage:
        if self._limit is not None:
            async with self._limit:
                return await self._fetch_and_compose(book, number, progress)
        return await self._fetch_and_compose(book, number, progress)

    async def _fetch_and_compose(self, book: Book, number: int,
                                 progress: Optional[Callable[[object], None]] = None) -> BuiltPage:
        if progress:
            progress({"type": "page", "page": number, "stage": "fetching"})

        try:
            overlay = await self.fetcher.get_overlay(book, number)
        except (httpx.HTTPError, OSError) as e:
            self.logger.debug(f"Overlay unavailable for page {number}: {e}")
            self.tracker.log_warning("Overlay unavailable", context="fetch", page=number)
            overlay = None

        background: PageBackground = await self.fetcher.get_background(book, number, self.config.quality)

        dimensions = read_dimensions(background.content)
        if dimensions is None:
            return BuiltPage(number=number, html=None, dimensions=None, has_overlay=overlay is not None)

        html = self.composer.compose(background, dimensions, overlay)
        self.logger.info(f"Built HTML for page {number}")
        if progress:
            progress({"type": "page", "page": number, "stage": "composed"})
        return BuiltPage(number=number, html=html, dimensions=dimensions, has_overlay=overlay is not None)

    async def run(self, progress: Optional[Callable[[object], None]] = None) -> RipResult:
        """Rip the configured book and return where the PDF was written."""
        cfg = self.config
        output_path = str(self.files.pdf_path(cfg.book_id))
        result = RipResult(output_path=output_path)

        pdf = PDFGenerator(self.engine)
        try:
            grant = await derive_access_grant(self.client, cfg.book_id, cfg.session_id)
            book = Book(cfg.book_id)
            book.attach_grant(grant)

            if progress:
                progress({"type": "start", "total": cfg.pages})

            # Every page is attempted even when one fails; the first failure in
            # page order then aborts the run before anything is rendered
            outcomes = await asyncio.gather(
                *(self._build_page(book, n, progress) for n in range(1, cfg.pages + 1)),
                return_exceptions=True,
            )
            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome

            pages: List[BuiltPage] = sorted(outcomes, key=lambda p: p.number)

            for page in pages:
                if not page.has_overlay:
                    result.pages_without_overlay.append(page.number)
                if page.html is None or page.dimensions is None:
                    self.tracker.log_warning("Missing dimensions, page skipped", context="render", page=page.number)
                    result.skipped_pages.append(page.number)
                    continue

                width, height = page.dimensions
                await pdf.add_page(page.number, page.html, width, height)
                result.rendered_pages.append(page.number)
                if progress:
                    progress({"type": "page", "page": page.number, "stage": "rendered"})

            if not result.rendered_pages:
                raise RenderError(f"No page of {cfg.book_id} could be rendered")
            pdf.save(output_path)
        except (RipperError, httpx.HTTPError) as e:
            self.tracker.log_error(e, context="rip")
            raise
        finally:
            pdf.close()

        summary = self.tracker.get_error_summary()
        self.logger.info(
            f"Ripped {cfg.book_id}: {len(result.rendered_pages)} pages rendered, "
            f"{len(result.skipped_pages)} skipped, {summary['total_warnings']} warnings"
        )
        if progress:
            progress({"type": "done", "output": output_path})
        return result
