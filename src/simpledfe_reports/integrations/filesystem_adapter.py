from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalReportStore:
    """Report store writing finished documents into a local directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def save(self, filename: str, content: bytes) -> Path:
        """Write content under root without overwriting an existing report."""

        self.root.mkdir(parents=True, exist_ok=True)
        safe_name = Path(filename).name
        stem = Path(safe_name).stem
        suffix = Path(safe_name).suffix
        dest_path = self.root / safe_name
        attempt = 0
        while True:
            try:
                # Exclusive create, so an existing report is never replaced.
                with dest_path.open("xb") as handle:
                    handle.write(content)
                break
            except FileExistsError:
                attempt += 1
                dest_path = self.root / f"{stem}_{attempt}{suffix}"
        logger.debug("Saved %d bytes to %s", len(content), dest_path)
        return dest_path

    def contains(self, path: Path) -> bool:
        """Whether `path` is an existing file inside this store."""

        resolved = path.resolve()
        return resolved.is_file() and resolved.is_relative_to(self.root.resolve())
