"""
Data ingestion for uploaded acquisitions (class grade sheets)
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .helper_functions import (
    GRADE_ALIASES,
    GRADE_SYMBOLS,
    _safe_strip,
    grade_points,
    lookup_criterion,
)
from .identity import record_student_key

RECORDS_FILENAME = "acquisitions.json"

GRADES_FRAME_COLUMNS = [
    "schoolname",
    "classname",
    "level",
    "subject",
    "student_key",
    "fullname",
    "competency",
    "criterion",
    "grade",
    "points",
]


def normalize_grade(cell) -> Optional[str]:
    """
    Map a raw sheet cell to a grade symbol (A/B/C/D) or None.

    Accepts Latin or Arabic letters in either case. Longer strings are
    names or comments, never grades.
    """
    if cell is None:
        return None
    s = str(cell).strip()
    if not s or len(s) > 3:
        return None

    upper = s.upper()
    if upper in GRADE_SYMBOLS:
        return upper
    if s in GRADE_ALIASES:
        return GRADE_ALIASES[s]

    # Short cells like "A+" or "ب-"
    if len(s) <= 2:
        for alias, symbol in GRADE_ALIASES.items():
            if s.startswith(alias):
                return symbol
        for symbol in GRADE_SYMBOLS:
            if upper.startswith(symbol):
                return symbol
    return None


def _criterion_key(criterion_id):
    """Criterion ids arrive as int or str depending on the serializer."""
    s = _safe_strip(criterion_id)
    try:
        return int(s)
    except ValueError:
        return s


def clean_name(name) -> str:
    """Strip quotes and collapse whitespace in a student name."""
    s = _safe_strip(name).replace('"', "").replace("'", "")
    return " ".join(s.split())


def normalize_student(student: Dict[str, Any], normalize: bool = False) -> Dict[str, Any]:
    """
    Return a copy of a student with a trimmed name and validated results.

    With normalize=True the student comes from raw sheet cells: quotes and
    inner whitespace are cleaned from the name, criterion keys become ints
    and grade cells go through normalize_grade. Stored records keep their
    names and grades as given.
    """
    if not isinstance(student, dict):
        raise ValueError(f"student must be a dict, got {type(student)}")
    raw_results = student.get("results") or {}
    if not isinstance(raw_results, dict):
        raise ValueError(f"student results must be a dict, got {type(raw_results)}")

    results = {}
    for comp_id, criteria in raw_results.items():
        if not isinstance(criteria, dict):
            continue
        if normalize:
            results[str(comp_id)] = {
                _criterion_key(crit_id): normalize_grade(grade)
                for crit_id, grade in criteria.items()
            }
        else:
            results[str(comp_id)] = dict(criteria)

    out = dict(student)
    out["fullName"] = clean_name(student.get("fullName")) if normalize else _safe_strip(student.get("fullName"))
    out["results"] = results
    return out


def normalize_class_record(record: Dict[str, Any], normalize: bool = False) -> Dict[str, Any]:
    """Normalize one class record (trimmed labels, validated students)."""
    if not isinstance(record, dict):
        raise ValueError(f"class record must be a dict, got {type(record)}")
    students = record.get("students") or []
    if not isinstance(students, list):
        raise ValueError(f"students must be a list, got {type(students)}")

    out = dict(record)
    for field in ("schoolName", "className", "subject", "level"):
        out[field] = _safe_strip(record.get(field))
    out["students"] = [normalize_student(s, normalize=normalize) for s in students]
    return out


def load_class_records(data_dir=None, records=None, normalize=False) -> List[Dict[str, Any]]:
    """
    Load and normalize class records from memory or from acquisitions.json

    Args:
        data_dir: Directory containing acquisitions.json (optional if records provided)
        records: List of class record dicts, or a {"records": [...]} database dict
        normalize: Clean raw sheet cells (names and grade letters). Leave off
            for stored records, which are scored exactly as given.

    Returns:
        List of normalized class record dicts
    """
    if records is None:
        if data_dir is None:
            raise ValueError("Either data_dir or records must be provided")
        json_path = Path(data_dir) / RECORDS_FILENAME
        if not json_path.exists():
            raise FileNotFoundError(f"Expected records file not found: {json_path}")
        with open(json_path, "r", encoding="utf-8") as f:
            records = json.load(f)
        source = f"file {json_path}"
    else:
        source = "memory"

    if isinstance(records, dict):
        records = records.get("records", [])
    if not isinstance(records, list):
        raise ValueError(f"records must be a list of dicts, got {type(records)}")

    normalized = [normalize_class_record(r, normalize=normalize) for r in records]
    n_students = sum(len(r["students"]) for r in normalized)
    print(f"[Data Ingestion] Loaded {len(normalized)} class records ({n_students:,} students) from {source}")
    return normalized


def records_to_grades_frame(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Flatten class records into one row per (student, competency, criterion).

    `points` is NaN for grades that do not count, so pooled sums skip them.
    """
    rows = []
    for r in records or []:
        for s in r.get("students") or []:
            key = record_student_key(r, s)
            for comp_id, criteria in (s.get("results") or {}).items():
                if not isinstance(criteria, dict):
                    continue
                # 1 and "1" are the same criterion
                crit_ids = list(dict.fromkeys(_criterion_key(c) for c in criteria))
                for crit_id in crit_ids:
                    grade = lookup_criterion(criteria, crit_id)
                    rows.append(
                        {
                            "schoolname": _safe_strip(r.get("schoolName")),
                            "classname": _safe_strip(r.get("className")),
                            "level": _safe_strip(r.get("level")),
                            "subject": _safe_strip(r.get("subject")),
                            "student_key": key,
                            "fullname": _safe_strip(s.get("fullName")),
                            "competency": str(comp_id),
                            "criterion": str(crit_id),
                            "grade": grade,
                            "points": grade_points(grade),
                        }
                    )

    df = pd.DataFrame(rows, columns=GRADES_FRAME_COLUMNS)
    df["points"] = pd.to_numeric(df["points"], errors="coerce")
    return df
