"""
PDF Assembly Module (WeasyPrint-backed)

Renders composed pages one at a time and merges the single-page PDFs into one
document with pypdf.
"""

import asyncio
import io
import logging
import os
from typing import List

from pypdf import PdfReader, PdfWriter

from .pdf_engines.weasyprint_engine import WeasyPrintEngine


class PDFGenerator:
    """Accumulates rendered pages and writes the merged book PDF."""

    def __init__(self, engine=None):
        """
        Args:
            engine: Object with an async render(html, width, height) -> bytes
                and a close() method; defaults to WeasyPrintEngine
        """
        self.logger = logging.getLogger(__name__)
        self.engine = engine or WeasyPrintEngine()
        self.writer = PdfWriter()
        self.pages: List[int] = []
        # The rendering surface handles one page at a time
        self._render_lock = asyncio.Lock()

    async def add_page(self, page_number: int, html_content: str, width: int, height: int) -> None:
        """
        Render one page and append it to the document.

        Pages must be added in the order they should appear.
        """
        async with self._render_lock:
            pdf_bytes = await self.engine.render(html_content, width, height)
            reader = PdfReader(io.BytesIO(pdf_bytes))
            for page in reader.pages:
                self.writer.add_page(page)
        self.pages.append(page_number)
        self.logger.info(f"Added page {page_number} to PDF")

    def save(self, output_path: str) -> str:
        """Write the merged document and return its path."""
        os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
        with open(output_path, 'wb') as f:
            self.writer.write(f)
        self.logger.info(f"Successfully generated PDF: {output_path} ({len(self.pages)} pages)")
        return output_path

    def close(self):
        """Release the PDF writer and the rendering engine."""
        try:
            self.writer.close()
        finally:
            self.engine.close()
