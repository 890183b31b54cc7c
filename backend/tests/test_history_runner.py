"""
Tests for the command-line history report
"""

import json

import pandas as pd

from acquisitions.history.history_analysis import AnalysisOverrideStore
from acquisitions.history.history_data import DISTRICT_LABEL
from acquisitions.history.history_runner import (
    CRITERIA_FILENAME,
    REPORT_FILENAME,
    generate_history_report,
    main,
)


def test_generate_history_report_scopes(history_class, arabic_class):
    records = [history_class, arabic_class]
    reports = generate_history_report(records, {"selected_schools": ["School1"]})

    assert [r["scope"] for r in reports] == ["district", "school"]
    district = reports[0]
    assert district["context_name"] == DISTRICT_LABEL
    assert district["indicators"]["student_count"] == 2
    assert district["indicators"]["pair_count"] == 2
    assert set(district["analysis"]) == {"identityIndex", "chronoAwareness", "nationalDepth", "crossLang"}


def test_generate_history_report_uses_overrides(history_class):
    store = AnalysisOverrideStore()
    store.save("identityIndex", f"{DISTRICT_LABEL}_district", {"reading": "edited"})
    reports = generate_history_report([history_class], {}, store)
    assert reports[0]["analysis"]["identityIndex"]["reading"] == "edited"
    assert reports[0]["analysis"]["crossLang"]["diagnosis"] == ""


def test_main_writes_outputs(tmp_path, history_class, arabic_class):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "acquisitions.json").write_text(
        json.dumps([history_class, arabic_class], ensure_ascii=False), encoding="utf-8"
    )
    out_dir = tmp_path / "out"

    paths = main(["--data-dir", str(data_dir), "--output-dir", str(out_dir), "--config-json", '{"selected_classes": ["School1/5A"]}'])

    assert paths == [str(out_dir / REPORT_FILENAME), str(out_dir / CRITERIA_FILENAME)]
    reports = json.loads((out_dir / REPORT_FILENAME).read_text(encoding="utf-8"))
    assert [r["scope"] for r in reports] == ["district", "class"]
    # JSON round-trip turns criterion keys into strings; scores are unchanged
    assert reports[1]["indicators"]["identity_index"] == reports[0]["indicators"]["identity_index"]

    criteria = pd.read_csv(out_dir / CRITERIA_FILENAME)
    assert len(criteria) == 14


def test_main_with_records_file_and_yaml(tmp_path, history_class):
    records_path = tmp_path / "records.json"
    records_path.write_text(json.dumps({"records": [history_class]}, ensure_ascii=False), encoding="utf-8")
    config_path = tmp_path / "config.yaml"
    config_path.write_text("include_district_scope: true\n", encoding="utf-8")

    main(["--records", str(records_path), "--config", str(config_path), "--output-dir", str(tmp_path / "out")])
    reports = json.loads((tmp_path / "out" / REPORT_FILENAME).read_text(encoding="utf-8"))
    assert reports[0]["indicators"]["cross_subject_available"] is False


def test_main_raw_cells_normalizes_grades(tmp_path):
    record = {
        "schoolName": "School1", "className": "5A", "subject": "التاريخ", "level": "5AP",
        "students": [{"fullName": ' "Ali"  Ben ', "results": {"national_history": {"1": "a", "2": "أ"}}}],
    }
    records_path = tmp_path / "records.json"
    records_path.write_text(json.dumps([record], ensure_ascii=False), encoding="utf-8")

    main(["--records", str(records_path), "--output-dir", str(tmp_path / "stored")])
    stored = json.loads((tmp_path / "stored" / REPORT_FILENAME).read_text(encoding="utf-8"))
    assert stored[0]["indicators"]["has_data"]["identity_index"] is False

    main(["--records", str(records_path), "--raw-cells", "--output-dir", str(tmp_path / "raw")])
    raw = json.loads((tmp_path / "raw" / REPORT_FILENAME).read_text(encoding="utf-8"))
    assert raw[0]["indicators"]["has_data"]["identity_index"] is True
    assert raw[0]["indicators"]["identity_index"] == 100.0
