"""Tests for rasterizers."""

from pathlib import Path

import pytest

from conftest import make_pdf
from paged_export.exceptions import InvalidInputError, RasterizationError
from paged_export.rasterizers import HTMLRasterizer, ImageRasterizer, PDFRasterizer
from schemas.geometry import A4, PageGeometry

TALL_HTML = """<!DOCTYPE html>
<html>
<head><style>body { margin: 0 } .block { height: 500px; background: #000 }</style></head>
<body><div class="block"></div></body>
</html>"""


# ---------------------------------------------------------------------------
# Tests: HTMLRasterizer
# ---------------------------------------------------------------------------


class TestHTMLRasterizerInit:
    def test_defaults(self):
        rasterizer = HTMLRasterizer()

        assert rasterizer.geometry == A4
        assert rasterizer.scale == 2.0
        assert rasterizer.trim_whitespace is True

    def test_rejects_non_positive_scale(self):
        with pytest.raises(ValueError):
            HTMLRasterizer(scale=0)


class TestHTMLRasterizer:
    def test_width_follows_page_width(self):
        """A4 width at 1 device pixel per CSS pixel is 210mm at 96 DPI."""
        raster = HTMLRasterizer(scale=1).rasterize(TALL_HTML)

        assert raster.width == pytest.approx(210 / 25.4 * 96, abs=2)

    def test_height_is_trimmed_to_content(self):
        raster = HTMLRasterizer(scale=1).rasterize(TALL_HTML)

        assert raster.height == pytest.approx(500, abs=2)

    def test_trims_non_white_background(self):
        raster = HTMLRasterizer(scale=1, background="#f5f5f5").rasterize(TALL_HTML)

        assert raster.height == pytest.approx(500, abs=2)

    def test_scale_multiplies_pixels(self):
        raster = HTMLRasterizer(scale=2).rasterize(TALL_HTML)

        assert raster.height == pytest.approx(1000, abs=3)

    def test_untrimmed_keeps_tall_page(self):
        geometry = PageGeometry(page_width_units=100, page_height_units=20)
        raster = HTMLRasterizer(geometry=geometry, scale=1, trim_whitespace=False).rasterize(
            TALL_HTML
        )

        expected = 20 * 16 / 25.4 * 96
        assert raster.height == pytest.approx(expected, abs=3)

    def test_content_taller_than_tall_page_is_stacked(self):
        """Content overflowing the tall page continues on the next raster band."""
        geometry = PageGeometry(page_width_units=50, page_height_units=5)
        html = TALL_HTML.replace("height: 500px", "height: 100px").replace(
            '<div class="block"></div>', '<div class="block"></div>' * 10
        )

        raster = HTMLRasterizer(geometry=geometry, scale=1).rasterize(html)

        # 10 blocks of 100px over ~302px tall pages; unsplit blocks leave a
        # small gap at the foot of each full page.
        assert 997 <= raster.height <= 1012

    def test_rasterize_file(self, tmp_path):
        path = tmp_path / "doc.html"
        path.write_text(TALL_HTML)

        raster = HTMLRasterizer(scale=1).rasterize(path)

        assert raster.height == pytest.approx(500, abs=2)


# ---------------------------------------------------------------------------
# Tests: PDFRasterizer
# ---------------------------------------------------------------------------


class TestPDFRasterizer:
    def test_stacks_all_pages(self, tmp_path):
        path = tmp_path / "doc.pdf"
        make_pdf(path, pages=2)

        raster = PDFRasterizer(dpi=72).rasterize(path)

        assert raster.width == 595
        assert raster.height == 842 * 2

    def test_dpi_scales(self, tmp_path):
        path = tmp_path / "doc.pdf"
        make_pdf(path, pages=1, width=72, height=144)

        raster = PDFRasterizer(dpi=144).rasterize(path)

        assert (raster.width, raster.height) == (144, 288)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RasterizationError):
            PDFRasterizer().rasterize(tmp_path / "missing.pdf")

    def test_not_a_pdf(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf")

        with pytest.raises(RasterizationError):
            PDFRasterizer().rasterize(path)


# ---------------------------------------------------------------------------
# Tests: ImageRasterizer
# ---------------------------------------------------------------------------


class TestImageRasterizer:
    def test_loads_image(self, tall_png: Path):
        raster = ImageRasterizer().rasterize(tall_png)

        assert (raster.width, raster.height) == (1000, 2500)

    def test_missing_image(self, tmp_path):
        with pytest.raises(InvalidInputError):
            ImageRasterizer().rasterize(tmp_path / "missing.png")
