"""
Student identity keys used to join independently uploaded subject files
"""

from .helper_functions import _safe_strip

KEY_SEPARATOR = "-"


def class_prefix(school_name, class_name) -> str:
    """Trimmed "<school>-<class>" prefix shared by every student of a class."""
    return f"{_safe_strip(school_name)}{KEY_SEPARATOR}{_safe_strip(class_name)}"


def identity_key(school_name, class_name, full_name) -> str:
    """
    Build the lookup key for a student.

    Only leading/trailing whitespace is ignored. Case and inner spacing are
    kept as-is, so "Ali  Ben" and "Ali Ben" are different students.
    """
    return f"{class_prefix(school_name, class_name)}{KEY_SEPARATOR}{_safe_strip(full_name)}"


def record_student_key(class_record: dict, student: dict) -> str:
    """Identity key of a student in the context of its own class record."""
    return identity_key(
        class_record.get("schoolName"),
        class_record.get("className"),
        student.get("fullName"),
    )
