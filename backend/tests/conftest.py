import sys
from pathlib import Path

import pytest

# Add backend directory to path to import modules
sys.path.insert(0, str(Path(__file__).parent.parent))


def make_student(name, results=None, **extra):
    student = {"fullName": name, "results": results or {}}
    student.update(extra)
    return student


def make_class(school, class_name, students, subject="التاريخ", level="5AP"):
    return {
        "schoolName": school,
        "className": class_name,
        "subject": subject,
        "level": level,
        "students": students,
    }


@pytest.fixture
def history_class():
    """One history class with a strong and a weak student"""
    return make_class(
        "School1",
        "5A",
        [
            make_student(
                "Ali",
                {
                    "general_history": {1: "A", 2: "A", 3: "A"},
                    "national_history": {1: "A", 2: "A", 3: "A", 4: "A"},
                },
            ),
            make_student(
                "Sara",
                {
                    "general_history": {1: "C", 2: "C", 3: "C"},
                    "national_history": {1: "C", 2: "C", 3: "C", 4: "C"},
                },
            ),
        ],
    )


@pytest.fixture
def arabic_class():
    """Matching Arabic class: Ali reads poorly, Sara reads well"""
    return make_class(
        "School1",
        "5A",
        [
            make_student("Ali", {"reading_perf": {1: "C", 2: "C", 3: "C", 4: "C"}}),
            make_student("Sara", {"reading_perf": {1: "A", 2: "A", 3: "A", 4: "A"}}),
        ],
        subject="اللغة العربية",
    )
