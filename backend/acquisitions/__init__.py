"""
Acquisitions analytics: grade scoring, identity matching and cross-subject analysis
"""
from .helper_functions import grade_points, GRADE_POINTS, MAX_GRADE_POINTS
from .identity import identity_key, class_prefix
from .data_ingestion import load_class_records, normalize_class_record, records_to_grades_frame
from .scoring import (
    ScoreTally,
    get_grade,
    competency_specs,
    score_competency_set,
    score_cohort,
    criterion_breakdown,
)
from .cross_subject import (
    MatchedPair,
    CorrelationSummary,
    NO_COMPARABLE_DATA,
    classify_gap,
    classify_quadrant,
    join_by_subject,
    match_pairs,
    summarize_pairs,
    analyze_correlation,
    quadrant_counts,
    pairs_to_frame,
)

__all__ = [
    'grade_points',
    'GRADE_POINTS',
    'MAX_GRADE_POINTS',
    'identity_key',
    'class_prefix',
    'load_class_records',
    'normalize_class_record',
    'records_to_grades_frame',
    'ScoreTally',
    'get_grade',
    'competency_specs',
    'score_competency_set',
    'score_cohort',
    'criterion_breakdown',
    'MatchedPair',
    'CorrelationSummary',
    'NO_COMPARABLE_DATA',
    'classify_gap',
    'classify_quadrant',
    'join_by_subject',
    'match_pairs',
    'summarize_pairs',
    'analyze_correlation',
    'quadrant_counts',
    'pairs_to_frame',
]
