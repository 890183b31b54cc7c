"""
Tests for the cross-subject join and correlation analysis
"""

import pytest

from acquisitions import helper_functions as hf
from acquisitions.cross_subject import (
    NO_COMPARABLE_DATA,
    MatchedPair,
    analyze_correlation,
    classify_gap,
    classify_quadrant,
    join_by_subject,
    match_pairs,
    pairs_to_frame,
    quadrant_counts,
    summarize_pairs,
)
from acquisitions.history.history_indicators import HISTORY_SPECS
from conftest import make_class, make_student


def _arabic(school, class_name, name, level="5AP", subject="اللغة العربية"):
    student = make_student(name, {"reading_perf": {1: "A", 2: "A", 3: "A", 4: "A"}})
    return make_class(school, class_name, [student], subject=subject, level=level)


def _history(school, class_name, name):
    student = make_student(name, {"national_history": {1: "B"}})
    return make_class(school, class_name, [student])


# ---------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------
@pytest.mark.parametrize(
    "x, y, expected",
    [
        (80, 20, hf.QUADRANT_NON_COMPREHENDING_READER),
        (20, 80, hf.QUADRANT_ORAL_CULTURE),
        (80, 80, hf.QUADRANT_GLOBAL_MASTERY),
        (20, 20, hf.QUADRANT_GLOBAL_STRUGGLE),
        (50, 50, hf.QUADRANT_GLOBAL_MASTERY),
        (49.9, 50, hf.QUADRANT_ORAL_CULTURE),
        (50, 49.9, hf.QUADRANT_NON_COMPREHENDING_READER),
    ],
)
def test_classify_quadrant(x, y, expected):
    assert classify_quadrant(x, y) == expected


def test_classify_gap_boundary():
    assert classify_gap(14.9) == hf.GAP_CORRELATED
    assert classify_gap(15.0) == hf.GAP_DIVERGENT
    assert classify_gap(0) == hf.GAP_CORRELATED


def test_matched_pair_derived_fields():
    pair = MatchedPair("Ali", 80.0, 20.0)
    assert pair.gap == 60.0
    assert pair.gap_category == hf.GAP_DIVERGENT
    assert pair.quadrant == hf.QUADRANT_NON_COMPREHENDING_READER
    assert pair.to_dict()["x"] == 80.0


# ---------------------------------------------------------------------
# Join
# ---------------------------------------------------------------------
def test_join_matches_same_school_class_and_name():
    index = join_by_subject([_arabic("School1", "5A", "Ali")])
    pairs = match_pairs([_history("School1", "5A", "Ali")], index, HISTORY_SPECS)
    assert len(pairs) == 1
    assert pairs[0].student_name == "Ali"


@pytest.mark.parametrize("school, class_name", [("School2", "5A"), ("School1", "5B")])
def test_join_breaks_on_other_school_or_class(school, class_name):
    index = join_by_subject([_arabic(school, class_name, "Ali")])
    assert match_pairs([_history("School1", "5A", "Ali")], index, HISTORY_SPECS) == []


def test_join_ignores_surrounding_whitespace():
    index = join_by_subject([_arabic(" School1 ", "5A ", " Ali")])
    assert len(match_pairs([_history("School1", " 5A", "Ali ")], index, HISTORY_SPECS)) == 1


def test_join_filters_level_and_subject():
    classes = [
        _arabic("S", "4A", "Ali", level="4AP"),
        _arabic("S", "5A", "Sara", subject="الرياضيات"),
        _arabic("S", "5A", "Omar"),
    ]
    index = join_by_subject(classes, "5AP", "العربية")
    assert list(index) == ["S-5A-Omar"]


def test_join_later_duplicate_wins():
    first = _arabic("S", "5A", "Ali")
    second = make_class("S", "5A", [make_student("Ali", {"reading_perf": {1: "C"}})], subject="اللغة العربية")
    index = join_by_subject([first, second])
    assert index["S-5A-Ali"]["results"]["reading_perf"] == {1: "C"}


def test_match_pairs_keeps_history_order():
    arabic = make_class(
        "S", "5A", [make_student(n, {"reading_perf": {1: "A"}}) for n in ["C", "B", "A"]],
        subject="اللغة العربية",
    )
    history = make_class("S", "5A", [make_student(n) for n in ["A", "Missing", "B", "C"]])
    pairs = match_pairs([history], join_by_subject([arabic]), HISTORY_SPECS)
    assert [p.student_name for p in pairs] == ["A", "B", "C"]


def test_match_pairs_reports_trimmed_name():
    arabic = make_class("S", "5A", [make_student("Ali", {"reading_perf": {1: "A"}})], subject="العربية")
    history = make_class("S", "5A", [make_student("  Ali ")])
    pairs = match_pairs([history], join_by_subject([arabic]), HISTORY_SPECS)
    assert [p.student_name for p in pairs] == ["Ali"]
    assert pairs[0].to_dict()["name"] == "Ali"


# ---------------------------------------------------------------------
# Scores and summary
# ---------------------------------------------------------------------
def test_pair_scores(history_class, arabic_class):
    summary = analyze_correlation([history_class], [arabic_class], HISTORY_SPECS)
    ali, sara = summary.pairs

    assert ali.reading_score == pytest.approx(100 / 3)
    assert ali.history_score == 100.0
    assert ali.quadrant == hf.QUADRANT_ORAL_CULTURE

    assert sara.reading_score == 100.0
    assert sara.history_score == pytest.approx(100 / 3)
    assert sara.quadrant == hf.QUADRANT_NON_COMPREHENDING_READER

    assert summary.count == 2
    assert summary.available is True
    assert summary.average_gap == pytest.approx(200 / 3)


def test_reading_score_uses_only_reading_criteria():
    """Other Arabic competencies and criteria beyond 4 are ignored"""
    arabic = make_class(
        "S", "5A",
        [make_student("Ali", {"reading_perf": {1: "A", 5: "C"}, "oral_comms": {1: "C"}})],
        subject="العربية",
    )
    history = make_class("S", "5A", [make_student("Ali", {"general_history": {1: "C"}})])
    summary = analyze_correlation([history], [arabic], HISTORY_SPECS)
    assert summary.pairs[0].reading_score == 100.0


def test_matched_student_without_grades_scores_zero():
    arabic = make_class("S", "5A", [make_student("Ali")], subject="العربية")
    history = make_class("S", "5A", [make_student("Ali")])
    summary = analyze_correlation([history], [arabic], HISTORY_SPECS)
    assert summary.pairs[0].reading_score == 0.0
    assert summary.pairs[0].history_score == 0.0
    assert summary.average_gap == 0.0


def test_no_matches_is_unavailable(history_class):
    other = _arabic("Elsewhere", "5A", "Ali")
    summary = analyze_correlation([history_class], [other], HISTORY_SPECS)
    assert summary is NO_COMPARABLE_DATA
    assert summary.available is False
    assert summary.average_gap is None
    assert summary.count == 0


def test_no_secondary_records_is_unavailable(history_class):
    assert analyze_correlation([history_class], [], HISTORY_SPECS).average_gap is None
    assert analyze_correlation([history_class], None, HISTORY_SPECS).available is False


def test_summarize_pairs_mean_gap():
    summary = summarize_pairs([MatchedPair("a", 50, 60), MatchedPair("b", 90, 60)])
    assert summary.average_gap == pytest.approx(20.0)


def test_quadrant_counts_and_frame(history_class, arabic_class):
    summary = analyze_correlation([history_class], [arabic_class], HISTORY_SPECS)
    counts = quadrant_counts(summary)
    assert set(counts) == set(hf.QUADRANT_ORDER)
    assert counts[hf.QUADRANT_ORAL_CULTURE] == 1
    assert counts[hf.QUADRANT_NON_COMPREHENDING_READER] == 1

    df = pairs_to_frame(summary)
    assert list(df["name"]) == ["Ali", "Sara"]
    assert pairs_to_frame(NO_COMPARABLE_DATA).empty


def test_analysis_is_deterministic(history_class, arabic_class):
    first = analyze_correlation([history_class], [arabic_class], HISTORY_SPECS)
    second = analyze_correlation([history_class], [arabic_class], HISTORY_SPECS)
    assert first == second
