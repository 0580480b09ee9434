"""
File Management Utilities

Lays out the on-disk artifacts of a rip: saved page overlays, saved page
backgrounds and the final merged PDF.
"""

import os
from pathlib import Path
import logging


def pad_page(page: int) -> str:
    """Zero-pad a 1-based page number to the 4 digits used in asset paths."""
    return f"{page:04d}"


class FileManager:
    """
    Manages file organization and naming for ripped books.

    Layout under the output directory:
        svgs/<book_id>/page-NNNN.svg
        bgs/<book_id>/page-NNNN.<JPEG|PNG>
        <book_id>.pdf
    """

    def __init__(self, base_output_dir: str = "."):
        """
        Initialize the file manager.

        Args:
            base_output_dir: Base directory for all output files
        """
        self.base_output_dir = Path(base_output_dir)
        self.svg_dir = self.base_output_dir / "svgs"
        self.bg_dir = self.base_output_dir / "bgs"
        self.logger = logging.getLogger(__name__)

    def overlay_path(self, book_id: str, page: int) -> Path:
        return self.svg_dir / book_id / f"page-{pad_page(page)}.svg"

    def background_path(self, book_id: str, page: int, extension: str) -> Path:
        return self.bg_dir / book_id / f"page-{pad_page(page)}.{extension}"

    def pdf_path(self, book_id: str) -> Path:
        return self.base_output_dir / f"{book_id}.pdf"

    def save_overlay(self, book_id: str, page: int, content: bytes) -> Path:
        return self._write(self.overlay_path(book_id, page), content)

    def save_background(self, book_id: str, page: int, extension: str, content: bytes) -> Path:
        return self._write(self.background_path(book_id, page, extension), content)

    def _write(self, path: Path, content: bytes) -> Path:
        """Write bytes, creating parent directories if needed."""
        os.makedirs(path.parent, exist_ok=True)
        with open(path, 'wb') as f:
            f.write(content)
        self.logger.debug(f"Saved {len(content)} bytes: {path}")
        return path
