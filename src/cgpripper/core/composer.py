"""
Page composition.

Builds the HTML for one book page: the raster background fills a box sized to
its own pixel dimensions and the SVG overlay, when present, is layered on top.
Both images are embedded as data URIs so the page renders without any
further fetches.
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from bs4 import BeautifulSoup
from PIL import Image, UnidentifiedImageError

from .assets import PageBackground
from .errors import InvalidArgumentError


DEFAULT_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
html, body { margin: 0; padding: 0; }
#page { position: relative; overflow: hidden; }
#page img { position: absolute; top: 0; left: 0; width: 100%; height: 100%; }
</style>
</head>
<body>
<div id="page">
<img id="background" alt="">
<img id="overlay" alt="">
</div>
</body>
</html>
"""


def load_template(path: Optional[str] = None) -> str:
    """
    Read a page template from disk, or return the built-in one.

    Raises:
        InvalidArgumentError: the template has no element with id "background"
    """
    if not path:
        return DEFAULT_PAGE_TEMPLATE
    template = Path(path).read_text(encoding='utf-8')
    if BeautifulSoup(template, 'lxml').find(id='background') is None:
        raise InvalidArgumentError(f"Page template {path} has no element with id 'background'")
    return template


def read_dimensions(data: bytes) -> Optional[Tuple[int, int]]:
    """
    Read (width, height) in pixels from an encoded raster.

    Returns None when the header cannot be decoded.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError):
        return None
    if not width or not height:
        return None
    return width, height


def data_uri(mime_type: str, content: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


class PageComposer:
    """Fills a page template with one page's background and overlay."""

    def __init__(self, template: str = DEFAULT_PAGE_TEMPLATE):
        self.logger = logging.getLogger(__name__)
        self.template = template

    def compose(self,
                background: PageBackground,
                dimensions: Tuple[int, int],
                overlay: Optional[bytes] = None) -> str:
        """
        Compose the HTML of one page.

        Args:
            background: Raster background and its detected format
            dimensions: (width, height) of the background in pixels
            overlay: Optional SVG overlay bytes

        Returns:
            HTML document sized exactly to the background
        """
        width, height = dimensions
        soup = BeautifulSoup(self.template, 'lxml')

        # Page box and PDF page size both follow the raster
        head = soup.find('head')
        if head is None:
            head = soup.new_tag('head')
            soup.html.insert(0, head)
        page_style = soup.new_tag('style')
        page_style.string = f"@page {{ size: {width}px {height}px; margin: 0; }}"
        head.append(page_style)

        page = soup.find(id='page')
        if page is not None:
            page['style'] = f"width: {width}px; height: {height}px;"

        bg = soup.find(id='background')
        if bg is None:
            raise InvalidArgumentError("Page template has no element with id 'background'")
        bg['src'] = data_uri(background.mime_type, background.content)

        layer = soup.find(id='overlay')
        if layer is not None:
            if overlay:
                layer['src'] = data_uri('image/svg+xml', overlay)
            else:
                layer.decompose()

        return str(soup)
