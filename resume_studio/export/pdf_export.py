"""PDF export: rasterize the resume preview and place it on an A4 page.

Uses PyMuPDF (``fitz``) for both steps.  The rasterizer is pluggable so the
preview can be captured by any renderer that yields PNG bytes.
"""

from __future__ import annotations

import io
import logging
from typing import List, Optional, Protocol, Tuple

import fitz  # PyMuPDF

from ..errors import RasterizationError
from .preview import PreviewElement, PreviewSurface, find_preview, hidden_overlays

logger = logging.getLogger(__name__)

RASTER_SCALE = 2.0
A4_WIDTH, A4_HEIGHT = fitz.paper_size("a4")
MARGIN_MM = 10
MARGIN = MARGIN_MM * 72 / 25.4

# CSS pixels to PDF points.
_PX_TO_PT = 0.75
# Height of one layout chunk; longer previews continue in further chunks.
_MAX_LAYOUT_HEIGHT = 14400
_MAX_LAYOUT_CHUNKS = 50


class Rasterizer(Protocol):
    def rasterize(self, element: PreviewElement, scale: float) -> bytes:
        """Return PNG bytes for *element* rendered at *scale*."""
        ...


class StoryRasterizer:
    """Lay out the preview HTML with PyMuPDF's Story and render a pixmap."""

    def __init__(self, padding: float = 24.0, max_height: float = _MAX_LAYOUT_HEIGHT):
        self.padding = padding
        self.max_height = max_height

    def rasterize(self, element: PreviewElement, scale: float) -> bytes:
        width = element.width * _PX_TO_PT
        story = fitz.Story(html=element.html)
        where = fitz.Rect(self.padding, self.padding, width - self.padding, self.max_height - self.padding)

        buffer = io.BytesIO()
        writer = fitz.DocumentWriter(buffer)
        more = True
        chunks = 0
        while more:
            if chunks == _MAX_LAYOUT_CHUNKS:
                writer.close()
                raise RasterizationError(
                    "Resume preview is too long to rasterize",
                    details={"chunks": chunks},
                )
            # place() reports the filled area as a plain (x0, y0, x1, y1) tuple
            more, filled = story.place(where)
            height = fitz.Rect(filled).y1 + self.padding
            if chunks == 0:
                height = max(element.height * _PX_TO_PT, height)
            device = writer.begin_page(fitz.Rect(0, 0, width, height))
            story.draw(device)
            writer.end_page()
            chunks += 1
        writer.close()

        matrix = fitz.Matrix(scale, scale)
        with fitz.open("pdf", buffer.getvalue()) as doc:
            pixmaps = [page.get_pixmap(matrix=matrix, alpha=False) for page in doc]
        if len(pixmaps) > 1:
            logger.debug("Preview overflowed into %d layout chunks", len(pixmaps))
        return _stack_vertically(pixmaps).tobytes("png")


def _stack_vertically(pixmaps: List[fitz.Pixmap]) -> fitz.Pixmap:
    """Join layout chunks top to bottom into one white-backed pixmap."""
    if len(pixmaps) == 1:
        return pixmaps[0]
    sheet = fitz.Pixmap(
        fitz.csRGB,
        fitz.IRect(0, 0, max(p.width for p in pixmaps), sum(p.height for p in pixmaps)),
        False,
    )
    sheet.set_rect(sheet.irect, (255, 255, 255))
    offset = 0
    for pixmap in pixmaps:
        pixmap.set_origin(0, offset)
        sheet.copy(pixmap, pixmap.irect)
        offset += pixmap.height
    return sheet


def export_pdf(surface: PreviewSurface, rasterizer: Optional[Rasterizer] = None) -> bytes:
    """Rasterize the preview on *surface* and return the PDF bytes.

    Preview problems raise before anything is rendered; overlays are
    restored even when rasterization fails.
    """
    rasterizer = rasterizer or StoryRasterizer()
    element = find_preview(surface)

    with hidden_overlays(element):
        try:
            png = rasterizer.rasterize(element, RASTER_SCALE)
        except RasterizationError:
            raise
        except Exception as exc:
            raise RasterizationError(f"Failed to rasterize the resume preview: {exc}") from exc

    image_size = _image_size(png)
    logger.debug("Rasterized preview to %dx%d PNG", *image_size)
    return embed_on_a4(png, image_size)


def fit_to_page(image_size: Tuple[int, int]) -> fitz.Rect:
    """Rect for an image on A4: fit width or height by aspect ratio, centered."""
    img_w, img_h = image_size
    avail_w = A4_WIDTH - 2 * MARGIN
    avail_h = A4_HEIGHT - 2 * MARGIN
    image_ratio = img_w / img_h

    if image_ratio > A4_WIDTH / A4_HEIGHT:
        width = avail_w
        height = width / image_ratio
    else:
        height = avail_h
        width = height * image_ratio

    x = (A4_WIDTH - width) / 2
    y = (A4_HEIGHT - height) / 2
    return fitz.Rect(x, y, x + width, y + height)


def embed_on_a4(png: bytes, image_size: Tuple[int, int]) -> bytes:
    doc = fitz.open()
    try:
        page = doc.new_page(width=A4_WIDTH, height=A4_HEIGHT)
        page.insert_image(fit_to_page(image_size), stream=png)
        return doc.tobytes(garbage=3, deflate=True)
    finally:
        doc.close()


def _image_size(png: bytes) -> Tuple[int, int]:
    if not png:
        raise RasterizationError("Failed to generate image data from the preview")
    try:
        pixmap = fitz.Pixmap(png)
    except Exception as exc:
        raise RasterizationError(f"Rasterized preview is not a readable image: {exc}") from exc
    if pixmap.width == 0 or pixmap.height == 0:
        raise RasterizationError(
            "Generated image has invalid dimensions",
            details={"width": pixmap.width, "height": pixmap.height},
        )
    return pixmap.width, pixmap.height
