"""Integration tests for snapshot persistence and CSV export."""

import json
from datetime import datetime
from pathlib import Path
import shutil
import tempfile

import pandas as pd
import pytest

from mdp.core.errors import SnapshotError
from mdp.discovery.models import SourceDocument
from mdp.discovery.pipeline import DiscoveryPipeline
from mdp.discovery.validator import schema_validator
from mdp.io.snapshot import export_files_csv, load_snapshot, read_snapshot_data, save_snapshot, snapshot_filename

PAPER_TEXT = (
    "Abstract. Rapamycin and metformin extend lifespan. Introduction. Methods. Results. "
    "References. https://doi.org/10.1038/nature08221 (2009-07-08)"
)


@pytest.fixture
def temp_workspace():
    """Create a temporary workspace for I/O tests."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def discovery_result():
    documents = [
        SourceDocument(file_url=f"https://mirror.example.org/{i}.pdf", source="mirror", title=f"Doc {i}", text=PAPER_TEXT)
        for i in range(3)
    ]
    return DiscoveryPipeline(min_confidence=0.5).run(documents).result


@pytest.mark.integration
def test_snapshot_roundtrip(discovery_result, temp_workspace):
    """Saved snapshots load back identically and pass validation."""
    path = save_snapshot(discovery_result, temp_workspace, filename="discovery_test.json")
    assert path == temp_workspace / "discovery_test.json"

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["total_files_found"] == 3
    assert raw["files"][0]["dates"] == ["2009-07-08"]
    assert raw["files"][0]["medical_terms_found"] == ["longevity", "metformin", "rapamycin"]
    assert schema_validator.validate_discovery_result(raw).valid

    loaded = load_snapshot(path)
    assert loaded == discovery_result


@pytest.mark.integration
def test_default_filename(discovery_result, temp_workspace):
    path = save_snapshot(discovery_result, temp_workspace / "nested")
    assert path.parent == temp_workspace / "nested"
    assert path.name.startswith("discovery_") and path.suffix == ".json"


@pytest.mark.integration
def test_consecutive_saves_keep_both_snapshots(discovery_result, temp_workspace):
    """Back-to-back saves with generated names never overwrite each other."""
    empty = discovery_result.model_copy(update={"files": [], "total_files_found": 0})
    first = save_snapshot(discovery_result, temp_workspace)
    second = save_snapshot(empty, temp_workspace)
    assert first != second
    assert load_snapshot(first).total_files_found == 3
    assert load_snapshot(second).total_files_found == 0


@pytest.mark.integration
def test_colliding_generated_name_gets_suffix(discovery_result, temp_workspace, monkeypatch):
    monkeypatch.setattr("mdp.io.snapshot.snapshot_filename", lambda: "discovery_fixed.json")
    first = save_snapshot(discovery_result, temp_workspace)
    second = save_snapshot(discovery_result, temp_workspace)
    assert first.name == "discovery_fixed.json"
    assert second.name == "discovery_fixed_1.json"


def test_snapshot_filename_has_microseconds():
    assert snapshot_filename(datetime(2025, 1, 2, 3, 4, 5, 678901)) == "discovery_20250102_030405_678901.json"


@pytest.mark.integration
def test_missing_snapshot(temp_workspace):
    with pytest.raises(SnapshotError, match="not found"):
        load_snapshot(temp_workspace / "missing.json")


@pytest.mark.integration
def test_invalid_json(temp_workspace):
    path = temp_workspace / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError, match="not valid JSON"):
        read_snapshot_data(path)


@pytest.mark.integration
def test_schema_mismatch(temp_workspace):
    path = temp_workspace / "partial.json"
    path.write_text(json.dumps({"files": []}), encoding="utf-8")
    assert read_snapshot_data(path) == {"files": []}
    with pytest.raises(SnapshotError, match="does not match"):
        load_snapshot(path)


@pytest.mark.integration
def test_export_csv(discovery_result, temp_workspace):
    output = export_files_csv(discovery_result, temp_workspace / "export" / "files.csv")
    df = pd.read_csv(output)
    assert len(df) == 3
    assert list(df.columns)[:3] == ["file_url", "source", "title"]
    assert df.loc[0, "medical_terms_found"] == "longevity;metformin;rapamycin"
    assert json.loads(df.loc[0, "concept_hits"])["RAPAMYCIN"] == pytest.approx(0.82)
