"""
Competency scoring: grade points pooled into mastery percentages
"""
from typing import Iterable, List, NamedTuple, Optional, Tuple

import pandas as pd

from .data_ingestion import records_to_grades_frame
from .helper_functions import MAX_GRADE_POINTS, clamp_pct, grade_points, lookup_criterion

CompetencySpec = Tuple[str, int]


class ScoreTally(NamedTuple):
    """Raw points and attainable maximum over a set of graded criteria."""

    points: int = 0
    max_points: int = 0

    def __add__(self, other):
        return ScoreTally(self.points + other.points, self.max_points + other.max_points)

    @property
    def has_data(self) -> bool:
        return self.max_points > 0

    @property
    def percentage(self) -> Optional[float]:
        """Share of attainable points in [0, 100], or None when nothing was graded."""
        if not self.has_data:
            return None
        return clamp_pct(self.points / self.max_points * 100)

    def reported(self) -> float:
        pct = self.percentage
        return 0.0 if pct is None else pct


def get_grade(student: dict, competency_id: str, criterion_id):
    """Grade a student holds for one criterion, or None."""
    results = (student or {}).get("results")
    if not isinstance(results, dict):
        return None
    return lookup_criterion(results.get(competency_id), criterion_id)


def competency_specs(subject_def: dict, competency_id=None, criterion_ids=None) -> List[CompetencySpec]:
    """
    (competency, criterion) pairs of a subject definition.

    With no filters every criterion of every competency is returned, in
    catalog order.
    """
    specs = []
    for comp in subject_def.get("competencies", []):
        if competency_id is not None and comp["id"] != competency_id:
            continue
        for crit in comp.get("criteria", []):
            if criterion_ids is not None and crit["id"] not in criterion_ids:
                continue
            specs.append((comp["id"], crit["id"]))
    return specs


def score_competency_set(student: dict, specs: Iterable[CompetencySpec]) -> ScoreTally:
    """Tally one student's grades over the given (competency, criterion) pairs."""
    points = 0
    max_points = 0
    for comp_id, crit_id in specs:
        p = grade_points(get_grade(student, comp_id, crit_id))
        if p is None:
            continue
        points += p
        max_points += MAX_GRADE_POINTS
    return ScoreTally(points, max_points)


def iter_students(class_records: Iterable[dict]):
    """Yield (class_record, student) for every student of a cohort."""
    for r in class_records or []:
        for s in r.get("students") or []:
            yield r, s


def score_cohort(class_records: Iterable[dict], specs: Iterable[CompetencySpec]) -> ScoreTally:
    """
    Pooled tally across a cohort.

    Points and maxima are summed over all students first, so a class of
    two does not weigh as much as a class of thirty.
    """
    specs = list(specs)
    total = ScoreTally()
    for _, s in iter_students(class_records):
        total = total + score_competency_set(s, specs)
    return total


def criterion_breakdown(class_records: List[dict], subject_def: dict) -> pd.DataFrame:
    """
    Pooled mastery per criterion of a subject definition.

    Returns one row per catalog criterion with graded count, points,
    max_points and pct (NaN when nobody was graded on it).
    """
    df = records_to_grades_frame(class_records)
    df = df[df["points"].notna()].copy()

    agg = (
        df.groupby(["competency", "criterion"])
        .agg(graded=("points", "size"), points=("points", "sum"))
        .reset_index()
    )

    catalog = pd.DataFrame(
        [
            {
                "competency": comp["id"],
                "competency_label": comp.get("label", ""),
                "criterion": str(crit["id"]),
                "criterion_label": crit.get("label", ""),
            }
            for comp in subject_def.get("competencies", [])
            for crit in comp.get("criteria", [])
        ],
        columns=["competency", "competency_label", "criterion", "criterion_label"],
    )

    out = catalog.merge(agg, on=["competency", "criterion"], how="left")
    out["graded"] = out["graded"].fillna(0).astype(int)
    out["points"] = out["points"].fillna(0).astype(int)
    out["max_points"] = out["graded"] * MAX_GRADE_POINTS
    out["pct"] = (100 * out["points"] / out["max_points"].where(out["max_points"] > 0)).clip(0, 100)
    return out
