"""
File management service for workflow artifacts.
Writes the CSV exports produced by list-style workflows.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Sequence

from goalflow.config import settings
from goalflow.schemas.messages import FileRef

logger = logging.getLogger(__name__)

JOBS_CSV = "jobs.csv"
JOBS_HEADER = ("Title", "Company", "Location", "Link")
SCRAPED_CSV = "scraped_data.csv"
SCRAPED_HEADER = ("Result",)


class FileManager:
    """Manages artifact files written by workflows."""

    @staticmethod
    def artifacts_dir(base_dir: Optional[Path] = None) -> Path:
        return Path(base_dir) if base_dir is not None else Path(settings.ARTIFACTS_DIR)

    @staticmethod
    def _safe_component(value: str, fallback: str) -> str:
        """Normalize filename component to avoid invalid path chars."""
        clean = re.sub(r"[^A-Za-z0-9._-]", "", (value or "").replace(" ", ""))
        return clean or fallback

    @staticmethod
    def _quote(value: object) -> str:
        # Only wrapped in quotes; embedded quotes and commas are not escaped.
        text = "" if value is None else str(value)
        return f'"{text.replace(chr(10), " ").strip()}"'

    @staticmethod
    def render_csv(header: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
        """Header row followed by one double-quoted, comma-separated row per record."""
        lines = [",".join(header)]
        lines.extend(",".join(FileManager._quote(value) for value in row) for row in rows)
        return "\n".join(lines)

    @staticmethod
    def write_csv(
        filename: str,
        header: Sequence[str],
        rows: Sequence[Sequence[object]],
        base_dir: Optional[Path] = None,
    ) -> FileRef:
        directory = FileManager.artifacts_dir(base_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / FileManager._safe_component(filename, "export.csv")
        content = FileManager.render_csv(header, rows)
        path.write_text(content, encoding="utf-8")
        logger.info(f"💾 Saved {len(rows)} rows to: {path}")
        return FileRef(path=str(path), rows=len(rows), written=True, preview=content.split("\n", 1)[0])

    @staticmethod
    def placeholder_csv(filename: str, header: Sequence[str], base_dir: Optional[Path] = None) -> FileRef:
        """Describe the CSV a live run would write, without touching the disk."""
        path = FileManager.artifacts_dir(base_dir) / FileManager._safe_component(filename, "export.csv")
        return FileRef(path=str(path), rows=0, written=False, preview=FileManager.render_csv(header, []))

