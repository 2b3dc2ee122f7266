"""Resume preview model used as the source for PDF rasterization.

A :class:`PreviewSurface` is the set of currently mounted preview
elements.  The PDF exporter locates the resume preview on it, checks that
it is usable, and rasterizes it with watermark/anti-theft overlays hidden.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from html import escape
from typing import Dict, Iterator, List, Optional, Set

from ..domain.models import ResumeData
from ..errors import PreviewNotFoundError, PreviewNotVisibleError, PreviewZeroSizeError
from .html_export import render_body, render_document
from .layout import build_layout

logger = logging.getLogger(__name__)

# Lookup order when searching a surface for the resume preview.
PREVIEW_MARKERS = ("data-resume-preview", "ClassicResumePreview", "resume")

OVERLAY_SELECTORS = (".watermark", "[data-anti-theft]", ".anti-theft", '[class*="watermark"]')

# A4 at 96 dpi.
PREVIEW_WIDTH = 794
PREVIEW_HEIGHT = 1123


@dataclass
class Overlay:
    """A watermark or anti-theft layer drawn over the preview."""

    selector: str
    markup: str
    display: str = "block"

    @property
    def hidden(self) -> bool:
        return self.display == "none"


@dataclass
class PreviewElement:
    body_html: str
    title: str = "Resume"
    width: int = PREVIEW_WIDTH
    height: int = PREVIEW_HEIGHT
    attached: bool = True
    visible: bool = True
    markers: Set[str] = field(default_factory=lambda: {"data-resume-preview"})
    overlays: List[Overlay] = field(default_factory=list)

    @property
    def html(self) -> str:
        """Full document for the preview, including visible overlays only."""
        layers = [o.markup for o in self.overlays if not o.hidden]
        body = "\n".join([self.body_html] + layers)
        return render_document(body, self.title)


class PreviewSurface:
    """Mounted preview elements, looked up by marker."""

    def __init__(self) -> None:
        self._elements: Dict[str, PreviewElement] = {}

    def mount(self, element_id: str, element: PreviewElement) -> PreviewElement:
        element.attached = True
        self._elements[element_id] = element
        return element

    def unmount(self, element_id: str) -> None:
        element = self._elements.pop(element_id, None)
        if element is not None:
            element.attached = False

    def query(self, marker: str) -> Optional[PreviewElement]:
        for element in self._elements.values():
            if element.attached and marker in element.markers:
                return element
        return None

    def __len__(self) -> int:
        return len(self._elements)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_preview(data: ResumeData, watermark: Optional[str] = None) -> PreviewElement:
    """Build a preview element for *data*, with an optional watermark overlay."""
    overlays: List[Overlay] = []
    if watermark:
        overlays.append(
            Overlay(
                selector=".watermark",
                markup=f'        <div class="watermark" data-anti-theft="true">{escape(watermark)}</div>',
            )
        )
    return PreviewElement(
        body_html=render_body(build_layout(data)),
        title=data.personal_info.name.strip() or "Resume",
        overlays=overlays,
    )


def find_preview(surface: PreviewSurface) -> PreviewElement:
    """Locate the resume preview and check it can be rasterized.

    Raises :class:`PreviewNotFoundError`, :class:`PreviewNotVisibleError` or
    :class:`PreviewZeroSizeError`; each is distinct so callers can tell the
    user what to fix.
    """
    element = None
    for marker in PREVIEW_MARKERS:
        element = surface.query(marker)
        if element is not None:
            logger.debug("Found resume preview by marker %s", marker)
            break

    if element is None:
        raise PreviewNotFoundError(
            "Resume preview element not found. Please ensure the resume is visible on the page."
        )
    if not element.visible:
        raise PreviewNotVisibleError(
            "Resume element is not visible. Please ensure the resume preview is displayed."
        )
    if element.width <= 0 or element.height <= 0:
        raise PreviewZeroSizeError(
            "Resume preview has no size",
            details={"width": element.width, "height": element.height},
        )
    return element


@contextmanager
def hidden_overlays(element: PreviewElement) -> Iterator[PreviewElement]:
    """Hide every overlay on *element* for the duration of the block.

    Each overlay's original display value is restored on exit, whether the
    block succeeds or raises.
    """
    saved = [(overlay, overlay.display) for overlay in element.overlays]
    try:
        for overlay in element.overlays:
            overlay.display = "none"
        if saved:
            logger.debug("Hid %d preview overlay(s)", len(saved))
        yield element
    finally:
        for overlay, display in saved:
            overlay.display = display
