"""
Tests for PDF assembly and the WeasyPrint engine.
"""

import asyncio
import io

import pytest
from pypdf import PdfReader

from conftest import SVG, image_bytes
from cgpripper.core.assets import PageBackground
from cgpripper.core.composer import PageComposer
from cgpripper.core.pdf_engines.weasyprint_engine import WeasyPrintEngine
from cgpripper.core.pdf_generator import PDFGenerator


def test_generator_merges_in_added_order(tmp_path, fake_engine):
    generator = PDFGenerator(fake_engine)

    async def add_all():
        for number, width in ((1, 300), (2, 200), (3, 100)):
            await generator.add_page(number, "<html></html>", width, 50)
    asyncio.run(add_all())

    out = generator.save(str(tmp_path / "nested" / "book.pdf"))
    generator.close()

    widths = [float(p.mediabox.width) for p in PdfReader(out).pages]
    assert widths == [300.0, 200.0, 100.0]
    assert generator.pages == [1, 2, 3]
    assert fake_engine.closed


def test_weasyprint_renders_page_at_raster_size():
    engine = WeasyPrintEngine()
    if not engine.available():
        pytest.skip("WeasyPrint is not available")

    background = PageBackground(image_bytes(120, 160), "PNG")
    html = PageComposer().compose(background, (120, 160), SVG)

    pdf = asyncio.run(engine.render(html, 120, 160))

    pages = PdfReader(io.BytesIO(pdf)).pages
    assert len(pages) == 1
    # 1 CSS px = 0.75 pt
    assert float(pages[0].mediabox.width) == pytest.approx(90, abs=0.5)
    assert float(pages[0].mediabox.height) == pytest.approx(120, abs=0.5)
