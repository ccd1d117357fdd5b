"""Report layout: formatting, drawing instructions, variants and the paginator."""

from simpledfe_reports.layout.engine import generate_report
from simpledfe_reports.layout.primitives import LayoutCursor, LineOp, RectOp, RenderedPage, TextOp
from simpledfe_reports.layout.variants import (
    NFE_VARIANT,
    NFSE_TRIBUTOS_VARIANT,
    NFSE_VARIANT,
    VARIANTS,
    get_variant,
)

__all__ = [
    "LayoutCursor",
    "LineOp",
    "NFE_VARIANT",
    "NFSE_TRIBUTOS_VARIANT",
    "NFSE_VARIANT",
    "RectOp",
    "RenderedPage",
    "TextOp",
    "VARIANTS",
    "generate_report",
    "get_variant",
]
