"""PDF rendering utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import fitz  # PyMuPDF

from .layout.primitives import DrawOp, LineOp, RectOp, RenderedPage, TextOp
from .models.enums import Alignment
from .models.geometry import PageGeometry

logger = logging.getLogger(__name__)

MM_TO_PT = 72 / 25.4

# Base-14 Helvetica short names understood by PyMuPDF.
REGULAR_FONT = "helv"
BOLD_FONT = "hebo"

BLACK = (0.0, 0.0, 0.0)


def mm(value: float) -> float:
    return value * MM_TO_PT


class PdfRenderer:
    """Draw laid-out report pages into a PDF document with PyMuPDF."""

    def render(self, pages: Sequence[RenderedPage], geometry: PageGeometry) -> bytes:
        """Return the PDF bytes of `pages`, all sized after `geometry`."""

        with fitz.open() as doc:
            for page in pages:
                pdf_page = doc.new_page(width=mm(geometry.width), height=mm(geometry.height))
                self._draw_all(pdf_page, page.all_ops)
            content = doc.tobytes(garbage=3, deflate=True, no_new_id=True)
        logger.debug("Rendered %d pages (%d bytes)", len(pages), len(content))
        return content

    def _draw_all(self, pdf_page: fitz.Page, ops: Iterable[DrawOp]) -> None:
        for op in ops:
            if isinstance(op, TextOp):
                self._draw_text(pdf_page, op)
            elif isinstance(op, RectOp):
                pdf_page.draw_rect(
                    fitz.Rect(mm(op.x), mm(op.y), mm(op.x + op.width), mm(op.y + op.height)),
                    color=None,
                    fill=tuple(channel / 255 for channel in op.fill),
                    width=0,
                )
            elif isinstance(op, LineOp):
                pdf_page.draw_line(
                    fitz.Point(mm(op.x1), mm(op.y1)),
                    fitz.Point(mm(op.x2), mm(op.y2)),
                    color=BLACK,
                    width=mm(op.width),
                )

    @staticmethod
    def _draw_text(pdf_page: fitz.Page, op: TextOp) -> None:
        fontname = BOLD_FONT if op.bold else REGULAR_FONT
        x = mm(op.x)
        if op.align != Alignment.LEFT:
            text_width = fitz.get_text_length(op.text, fontname=fontname, fontsize=op.size)
            x -= text_width if op.align == Alignment.RIGHT else text_width / 2
        pdf_page.insert_text(
            fitz.Point(x, mm(op.y)),
            op.text,
            fontsize=op.size,
            fontname=fontname,
            color=BLACK,
        )


def render_pdf_to_images(
    pdf_path: Path,
    out_dir: Path,
    dpi: int = 110,
) -> List[Path]:
    """
    Render each page of a generated report to PNG images at the given DPI.

    Returns the written image paths in page order.
    """

    out_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Rendering PDF preview: %s -> %s (dpi=%d)", pdf_path, out_dir, dpi)

    images: List[Path] = []
    with fitz.open(pdf_path) as doc:
        zoom = dpi / 72.0
        matrix = fitz.Matrix(zoom, zoom)
        total_pages = doc.page_count
        for idx, page in enumerate(doc, start=1):
            pix = page.get_pixmap(matrix=matrix, alpha=False)
            dest = out_dir / f"page_{idx:02d}.png"
            pix.save(dest)
            logger.debug("Rendered page %d/%d -> %s", idx, total_pages, dest)
            images.append(dest)

    return images
