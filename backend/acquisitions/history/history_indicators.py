"""
Headline indicators for the Year 5 history dashboard
"""

import logging

import pandas as pd

from .. import helper_functions as hf
from ..cross_subject import analyze_correlation, quadrant_counts
from ..scoring import competency_specs, criterion_breakdown, iter_students, score_cohort
from .history_data import resolve_config
from .history_definitions import (
    CAUSES_CRITERION,
    GENERAL_HISTORY,
    NATIONAL_HISTORY,
    YEAR5_HISTORY_DEF,
)

IDENTITY_SPECS = competency_specs(YEAR5_HISTORY_DEF, NATIONAL_HISTORY)
CHRONO_SPECS = competency_specs(YEAR5_HISTORY_DEF, GENERAL_HISTORY)
DEPTH_SPECS = competency_specs(YEAR5_HISTORY_DEF, NATIONAL_HISTORY, [CAUSES_CRITERION])
HISTORY_SPECS = competency_specs(YEAR5_HISTORY_DEF)


def identity_index(records):
    """Pooled mastery of national history (all criteria)"""
    return score_cohort(records, IDENTITY_SPECS)


def chrono_awareness(records):
    """Pooled mastery of general history (all criteria)"""
    return score_cohort(records, CHRONO_SPECS)


def national_depth(records):
    """Pooled mastery of the causes-of-occupation criterion"""
    return score_cohort(records, DEPTH_SPECS)


def cross_subject_summary(records, all_records, config=None):
    cfg = resolve_config(config)
    return analyze_correlation(
        records,
        all_records,
        HISTORY_SPECS,
        target_level=cfg["secondary_level"],
        target_subject_substring=cfg["secondary_subject"],
        reading_competency=cfg["reading_competency"],
        reading_criteria=cfg["reading_criteria"],
    )


def compute_history_indicators(records, all_records=None, config=None):
    """
    Recompute every indicator for a set of history class records.

    Percentages are reported as 0 when nothing was graded; the matching
    `has_data` flag tells a true zero from an empty cohort. The cross-subject
    gap is None when no student could be matched.
    """
    student_count = sum(1 for _ in iter_students(records))

    tallies = {
        "identity_index": identity_index(records),
        "chrono_awareness": chrono_awareness(records),
        "depth": national_depth(records),
    }
    correlation = cross_subject_summary(records, all_records, config)

    indicators = {"student_count": student_count}
    for name, tally in tallies.items():
        indicators[name] = tally.reported()
    indicators["has_data"] = {name: tally.has_data for name, tally in tallies.items()}

    indicators.update(
        {
            "cross_subject_available": correlation.available,
            "cross_subject_gap": correlation.average_gap,
            "pair_count": correlation.count,
            "correlated_count": sum(1 for p in correlation.pairs if p.gap_category == hf.GAP_CORRELATED),
            "quadrants": quadrant_counts(correlation),
            "points": [p.to_dict() for p in correlation.pairs],
            "criteria": criterion_table(records),
        }
    )

    logging.info(
        f"[History Y5] {student_count} students | identity {indicators['identity_index']:.1f}% | "
        f"chrono {indicators['chrono_awareness']:.1f}% | depth {indicators['depth']:.1f}% | "
        f"pairs {correlation.count}"
    )
    return indicators


def criterion_table(records):
    """Per-criterion pooled mastery for the history catalog, as plain dicts"""
    df = criterion_breakdown(records, YEAR5_HISTORY_DEF)
    return [
        {
            "competency": row.competency,
            "competency_label": row.competency_label,
            "criterion": int(row.criterion),
            "criterion_label": row.criterion_label,
            "graded": int(row.graded),
            "points": int(row.points),
            "max_points": int(row.max_points),
            "pct": None if pd.isna(row.pct) else float(row.pct),
        }
        for row in df.itertuples(index=False)
    ]
