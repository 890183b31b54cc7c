"""
Cross-subject analysis: Arabic reading vs. history understanding

Students are matched across two independently uploaded subjects by their
school/class/name identity key, scored on each side, and placed on a
reading (x) / history (y) grid.
"""
import logging
from typing import Dict, List, NamedTuple, Optional

import pandas as pd

from . import helper_functions as hf
from .identity import identity_key, record_student_key
from .scoring import score_competency_set


class MatchedPair(NamedTuple):
    student_name: str
    reading_score: float
    history_score: float

    @property
    def gap(self) -> float:
        return abs(self.reading_score - self.history_score)

    @property
    def gap_category(self) -> str:
        return classify_gap(self.gap)

    @property
    def quadrant(self) -> str:
        return classify_quadrant(self.reading_score, self.history_score)

    def to_dict(self) -> dict:
        return {
            "name": self.student_name,
            "x": self.reading_score,
            "y": self.history_score,
            "gap": self.gap,
            "gap_category": self.gap_category,
            "quadrant": self.quadrant,
        }


class CorrelationSummary(NamedTuple):
    pairs: List[MatchedPair]
    count: int
    average_gap: Optional[float]

    @property
    def available(self) -> bool:
        return self.count > 0


NO_COMPARABLE_DATA = CorrelationSummary(pairs=[], count=0, average_gap=None)


def classify_gap(gap: float) -> str:
    """Gaps under the threshold are "correlated", the rest "divergent"."""
    return hf.GAP_CORRELATED if gap < hf.GAP_THRESHOLD else hf.GAP_DIVERGENT


def classify_quadrant(reading_score: float, history_score: float) -> str:
    """Quadrant of a (reading, history) point; 50 belongs to the high side."""
    high_reading = reading_score >= hf.QUADRANT_MIDPOINT
    high_history = history_score >= hf.QUADRANT_MIDPOINT
    if high_reading and high_history:
        return hf.QUADRANT_GLOBAL_MASTERY
    if high_history:
        return hf.QUADRANT_ORAL_CULTURE
    if high_reading:
        return hf.QUADRANT_NON_COMPREHENDING_READER
    return hf.QUADRANT_GLOBAL_STRUGGLE


def join_by_subject(
    all_classes: List[dict],
    target_level: str = hf.DEFAULT_SECONDARY_LEVEL,
    target_subject_substring: str = hf.DEFAULT_SECONDARY_SUBJECT,
) -> Dict[str, dict]:
    """
    Index the students of the secondary subject by identity key.

    Only classes at `target_level` whose subject label contains
    `target_subject_substring` are used. A later duplicate key replaces
    an earlier one.
    """
    index = {}
    n_classes = 0
    for r in all_classes or []:
        if r.get("level") != target_level:
            continue
        if target_subject_substring not in (r.get("subject") or ""):
            continue
        n_classes += 1
        for s in r.get("students") or []:
            index[record_student_key(r, s)] = s

    logging.info(
        f"[Cross Subject] Indexed {len(index)} students from {n_classes} "
        f"'{target_subject_substring}' classes at level {target_level}"
    )
    return index


def _reading_specs(reading_competency, reading_criteria):
    return [(reading_competency, crit_id) for crit_id in reading_criteria]


def match_pairs(
    history_classes: List[dict],
    external_index: Dict[str, dict],
    history_specs,
    reading_competency: str = hf.DEFAULT_READING_COMPETENCY,
    reading_criteria=None,
) -> List[MatchedPair]:
    """
    Pair every history student found in the external index, in input order.

    Students with no counterpart are left out of the analysis.
    """
    if reading_criteria is None:
        reading_criteria = hf.DEFAULT_READING_CRITERIA
    reading_specs = _reading_specs(reading_competency, reading_criteria)
    history_specs = list(history_specs)

    pairs = []
    misses = 0
    for r in history_classes or []:
        for h_student in r.get("students") or []:
            key = identity_key(r.get("schoolName"), r.get("className"), h_student.get("fullName"))
            a_student = external_index.get(key)
            if a_student is None:
                misses += 1
                continue

            reading = score_competency_set(a_student, reading_specs).reported()
            history = score_competency_set(h_student, history_specs).reported()
            pairs.append(MatchedPair(hf._safe_strip(h_student.get("fullName")), reading, history))

    if misses:
        logging.debug(f"[Cross Subject] {misses} history students had no reading record")
    return pairs


def summarize_pairs(pairs: List[MatchedPair]) -> CorrelationSummary:
    """Mean absolute gap over matched pairs, or the no-data summary."""
    if not pairs:
        return NO_COMPARABLE_DATA
    avg_gap = sum(p.gap for p in pairs) / len(pairs)
    return CorrelationSummary(pairs=list(pairs), count=len(pairs), average_gap=avg_gap)


def analyze_correlation(
    history_classes: List[dict],
    all_classes: Optional[List[dict]],
    history_specs,
    target_level: str = hf.DEFAULT_SECONDARY_LEVEL,
    target_subject_substring: str = hf.DEFAULT_SECONDARY_SUBJECT,
    reading_competency: str = hf.DEFAULT_READING_COMPETENCY,
    reading_criteria=None,
) -> CorrelationSummary:
    """Join, score and summarize history students against their reading grades."""
    if not all_classes:
        logging.info("[Cross Subject] No secondary records supplied")
        return NO_COMPARABLE_DATA

    index = join_by_subject(all_classes, target_level, target_subject_substring)
    pairs = match_pairs(
        history_classes,
        index,
        history_specs,
        reading_competency=reading_competency,
        reading_criteria=reading_criteria,
    )
    summary = summarize_pairs(pairs)
    if summary.available:
        logging.info(f"[Cross Subject] {summary.count} matched pairs, average gap {summary.average_gap:.1f}")
    else:
        logging.info("[Cross Subject] No comparable students between the two subjects")
    return summary


def quadrant_counts(summary: CorrelationSummary) -> Dict[str, int]:
    """Number of pairs per quadrant; every quadrant is present."""
    counts = {q: 0 for q in hf.QUADRANT_ORDER}
    for p in summary.pairs:
        counts[p.quadrant] += 1
    return counts


def pairs_to_frame(summary: CorrelationSummary) -> pd.DataFrame:
    """Point cloud as a DataFrame (one row per matched student)."""
    columns = ["name", "x", "y", "gap", "gap_category", "quadrant"]
    return pd.DataFrame([p.to_dict() for p in summary.pairs], columns=columns)
