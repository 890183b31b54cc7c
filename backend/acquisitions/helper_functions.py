"""
Shared constants and small helpers for acquisitions analytics
"""

# ---------------------------------------------------------------------
# Grade Scale
# ---------------------------------------------------------------------
GRADE_POINTS = {
    "A": 3,
    "B": 2,
    "C": 1,
}
MAX_GRADE_POINTS = 3

# Symbols accepted on upload. "D" is stored but never scored.
GRADE_SYMBOLS = ["A", "B", "C", "D"]
GRADE_ALIASES = {
    "أ": "A",
    "ب": "B",
    "ج": "C",
    "د": "D",
}

# ---------------------------------------------------------------------
# Cross-subject policy
# ---------------------------------------------------------------------
GAP_THRESHOLD = 15
QUADRANT_MIDPOINT = 50

GAP_CORRELATED = "correlated"
GAP_DIVERGENT = "divergent"

QUADRANT_GLOBAL_MASTERY = "global_mastery"
QUADRANT_GLOBAL_STRUGGLE = "global_struggle"
QUADRANT_ORAL_CULTURE = "oral_culture"
QUADRANT_NON_COMPREHENDING_READER = "non_comprehending_reader"

QUADRANT_ORDER = [
    QUADRANT_GLOBAL_MASTERY,
    QUADRANT_ORAL_CULTURE,
    QUADRANT_NON_COMPREHENDING_READER,
    QUADRANT_GLOBAL_STRUGGLE,
]

# Display text for the scatter-plot quadrants
QUADRANT_LABELS = {
    QUADRANT_GLOBAL_MASTERY: {
        "title": "تحكم شامل",
        "desc": "يقرأ السند جيداً ويفهم التاريخ.",
    },
    QUADRANT_GLOBAL_STRUGGLE: {
        "title": "تعثر شامل (العائق اللغوي)",
        "desc": "ضعف القراءة يعيق فهم التاريخ.",
    },
    QUADRANT_ORAL_CULTURE: {
        "title": "ثقافة شفهية",
        "desc": "يفهم التاريخ سماعياً لكن قراءته ضعيفة.",
    },
    QUADRANT_NON_COMPREHENDING_READER: {
        "title": "قارئ غير فاهم",
        "desc": "يقرأ النص بطلاقة لكن لا يستوعب المفهوم التاريخي.",
    },
}

# ---------------------------------------------------------------------
# Secondary subject defaults (Year 5 Arabic)
# ---------------------------------------------------------------------
DEFAULT_SECONDARY_LEVEL = "5AP"
DEFAULT_SECONDARY_SUBJECT = "العربية"
DEFAULT_READING_COMPETENCY = "reading_perf"
DEFAULT_READING_CRITERIA = [1, 2, 3, 4]


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def grade_points(grade):
    """
    Points for a grade symbol, or None when the grade does not count.
    Only the exact symbols A/B/C are scored; anything else (None, "D",
    blanks, numbers) is treated as ungraded.
    """
    if not isinstance(grade, str):
        return None
    return GRADE_POINTS.get(grade)


def clamp_pct(value: float) -> float:
    """Clamp a percentage to [0, 100]."""
    return max(0.0, min(100.0, float(value)))


def _safe_strip(value) -> str:
    """str.strip() that tolerates None."""
    if value is None:
        return ""
    return str(value).strip()


def lookup_criterion(criteria, criterion_id):
    """
    Grade stored under a criterion id, trying the id as given and then its
    int/str twin (JSON round-trips turn int keys into strings).
    """
    if not isinstance(criteria, dict):
        return None
    grade = criteria.get(criterion_id)
    if grade:
        return grade
    s = _safe_strip(criterion_id)
    grade = criteria.get(s)
    if grade:
        return grade
    try:
        return criteria.get(int(s))
    except ValueError:
        return None
