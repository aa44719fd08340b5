"""Discovery snapshot persistence and export.

Snapshots are the JSON documents read by the research explorer:
``discovery_<timestamp>.json`` files holding a :class:`DiscoveryResult`
serialized with two-space indentation. CSV export flattens the file
records with pandas for spreadsheet review.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd  # type: ignore
from pydantic import ValidationError

from ..config.settings import settings
from ..core.errors import SnapshotError
from ..discovery.models import DiscoveryResult
from ..utils.logging import get_logger

logger = get_logger(__name__)

CSV_COLUMNS = (
    "file_url",
    "source",
    "title",
    "medical_terms_found",
    "concept_hits",
    "confidence",
    "snippet",
    "has_doi",
    "has_pmid",
    "has_arxiv",
    "doc_type",
    "dates",
    "timestamp",
)


def snapshot_filename(timestamp: Optional[datetime] = None) -> str:
    """``discovery_<YYYYmmdd_HHMMSS_ffffff>.json`` for ``timestamp`` (default: now)."""
    if timestamp is None:
        timestamp = datetime.now()
    return f"discovery_{timestamp.strftime('%Y%m%d_%H%M%S_%f')}.json"


def _unused_path(path: Path) -> Path:
    counter = 1
    candidate = path
    while candidate.exists():
        candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
        counter += 1
    return candidate


def save_snapshot(
    result: DiscoveryResult,
    snapshot_dir: Optional[Path] = None,
    filename: Optional[str] = None,
) -> Path:
    """Write ``result`` to the snapshot directory and return the file path.

    Generated names never overwrite an existing snapshot; an explicit
    ``filename`` is written as given.
    """
    snapshot_dir = Path(snapshot_dir) if snapshot_dir else settings.snapshot_dir
    snapshot_dir.mkdir(parents=True, exist_ok=True)
    if filename:
        path = snapshot_dir / filename
    else:
        path = _unused_path(snapshot_dir / snapshot_filename())
    path.write_text(json.dumps(result.model_dump(mode="json"), indent=2), encoding="utf-8")
    logger.info("Saved snapshot", extra={"path": str(path), "files": result.total_files_found})
    return path


def read_snapshot_data(path: Path) -> Dict[str, Any]:
    """Raw JSON content of a snapshot, for validation before parsing.

    Raises:
        SnapshotError: If the file is missing or is not a JSON object.
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"Snapshot not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot {path} must contain a JSON object")
    return data


def load_snapshot(path: Path) -> DiscoveryResult:
    """Parse a snapshot file into a :class:`DiscoveryResult`.

    Raises:
        SnapshotError: If the file cannot be read or does not match the schema.
    """
    data = read_snapshot_data(path)
    try:
        return DiscoveryResult.model_validate(data)
    except ValidationError as exc:
        raise SnapshotError(f"Snapshot {path} does not match the discovery schema: {exc}") from exc


def export_files_csv(result: DiscoveryResult, output_file: Path) -> Path:
    """Write one CSV row per discovered file.

    List fields are joined with ``;`` and concept hits are stored as a
    JSON object string.
    """
    rows = []
    for record in result.files:
        row = record.model_dump(mode="json")
        row["medical_terms_found"] = ";".join(row["medical_terms_found"])
        row["dates"] = ";".join(row["dates"])
        row["concept_hits"] = json.dumps(row["concept_hits"], sort_keys=True)
        rows.append(row)
    df = pd.DataFrame(rows, columns=list(CSV_COLUMNS))
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_file, index=False)
    logger.info("Exported discovery CSV", extra={"path": str(output_file), "files": len(df)})
    return output_file
