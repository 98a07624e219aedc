"""File helpers for metric bundles and analysis reports.

Bundles are read as raw JSON and left to the normalizer; reports are written
with pydantic's JSON mode so enums and datetimes serialize cleanly.
"""

import json
import logging
from pathlib import Path
from typing import Any

from orghealth.models.model_score import AnalysisReport

logger = logging.getLogger(__name__)


def load_bundle_file(path: Path | str) -> dict[str, Any]:
    """Load a raw metric bundle from a JSON file.

    Args:
        path: Path to the bundle file.

    Returns:
        The decoded JSON object.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the JSON document is not an object.
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Metric bundle must be a JSON object, got {type(data).__name__}")

    logger.debug(f"Loaded metric bundle: {path} ({len(data)} top-level keys)")
    return data


def report_to_dict(report: AnalysisReport) -> dict[str, Any]:
    return report.model_dump(mode="json")


def save_report(report: AnalysisReport, path: Path | str) -> Path:
    """Write an analysis report as indented JSON.

    Parent directories are created as needed.

    Returns:
        Path to the saved file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report_to_dict(report), indent=2), encoding="utf-8")
    logger.info(f"Saved analysis report: {path}")
    return path
