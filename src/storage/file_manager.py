# src/storage/file_manager.py

"""Reads JSON-lines input files and writes reconciliation results."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.errors import InvalidRecordError
from src.models.result import Result

logger = logging.getLogger("listing_matcher.storage")


class FileManager:
    """One JSON object per line, in and out."""

    def __init__(self, results_dir: Path | None = None) -> None:
        self.results_dir: Path = results_dir or Settings.RESULTS_DIR
        logger.debug("FileManager initialised, results_dir=%s", self.results_dir)

    @staticmethod
    def read_records(path: Path) -> list[dict[str, Any]]:
        """Load every record of a JSON-lines file.

        Blank lines are skipped. A line that is not a JSON object raises
        :class:`InvalidRecordError` naming the file and line.
        """
        records: list[dict[str, Any]] = []
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as exc:
                    raise InvalidRecordError(
                        "line", f"is not valid JSON ({exc.msg})",
                        path.name, line_no,
                    ) from exc
                if not isinstance(record, dict):
                    raise InvalidRecordError(
                        "line", "is not a JSON object", path.name, line_no
                    )
                records.append(record)

        logger.info("Read %d records from %s", len(records), path)
        return records

    def write_results(
        self,
        results: Iterable[Result],
        path: Path | None = None,
    ) -> Path:
        """Write one ``{product_name, listings}`` object per line."""
        filepath = path or self.results_dir / Settings.RESULTS_FILE
        filepath.parent.mkdir(parents=True, exist_ok=True)

        count = 0
        with open(filepath, "w", encoding="utf-8") as f:
            for result in results:
                f.write(json.dumps(result.to_dict(), ensure_ascii=False))
                f.write("\n")
                count += 1

        logger.info("Wrote %d results to %s", count, filepath)
        return filepath
