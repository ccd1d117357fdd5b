from __future__ import annotations

from enum import Enum


class ReportKind(str, Enum):
    """Supported fiscal document report variants."""

    NFE = "nfe"  # Goods invoices, portrait A4.
    NFSE = "nfse"  # Service invoices, landscape A4.
    NFSE_TRIBUTOS = "nfse_tributos"  # Service invoices with withheld taxes, landscape A4.


class Orientation(str, Enum):
    """Page orientation of a report variant."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class Alignment(str, Enum):
    """Horizontal anchoring of a text instruction."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class JobStatus(str, Enum):
    """Lifecycle status for a background report job."""

    QUEUED = "queued"  # Waiting in queue.
    RUNNING = "running"  # Layout/rendering is running.
    COMPLETED = "completed"  # PDF written to the report store.
    FAILED = "failed"  # Generation or persistence failed.
