"""
WeasyPrint PDF Engine

Renders one composed page to a single-page PDF using WeasyPrint. Pages embed
their images as data URIs, so no base URL is needed for rendering.
"""

import logging

try:
    from weasyprint import CSS, HTML
except Exception:  # pragma: no cover - handled at runtime
    CSS = HTML = None

from ..errors import RenderError


class WeasyPrintEngine:
    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def available(self) -> bool:
        """Return True if WeasyPrint is importable."""
        return HTML is not None

    def _page_stylesheet(self, width: int, height: int):
        return CSS(string=f"@page {{ size: {width}px {height}px; margin: 0; }}")

    async def render(self, html_content: str, width: int, height: int) -> bytes:
        """
        Render HTML to a PDF page of exactly width x height CSS pixels.

        Raises:
            RenderError: WeasyPrint is missing or failed
        """
        if HTML is None:
            raise RenderError("WeasyPrint is not installed. Please install 'weasyprint'.")

        try:
            document = HTML(string=html_content)
            pdf = document.write_pdf(stylesheets=[self._page_stylesheet(width, height)])
        except Exception as e:
            raise RenderError(f"WeasyPrint generation failed: {e}") from e

        if not pdf:
            raise RenderError("WeasyPrint produced an empty document")
        return pdf

    def close(self):
        """No-op for WeasyPrint engine."""
        return None
