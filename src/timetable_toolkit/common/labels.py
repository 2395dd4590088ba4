"""Centralized display strings.

Every Arabic label printed on a document lives here so the layout code
stays free of literal text and the wording can change in one place.
"""

from __future__ import annotations

EMPTY_CELL = "-"
UNKNOWN_TEACHER = "Unknown"

DAY_COLUMN = "اليوم"
NOTES_COLUMN = "ملاحظات"
LESSON_COUNT_COLUMN = "عدد\nالحصص"
SUBJECT_COLUMN = "المادة"
TEACHER_NAME_COLUMN = "اسم المعلم"
SEQUENCE_COLUMN = "م"

MASTER_TITLE = "جدول الحصص الأسبوعي"


def period_label(period: int) -> str:
    """Header label for one period column."""
    return f"الحصة {period}"


def teacher_title(name: str) -> str:
    return f"جدول حصص المعلم: {name}"


def teacher_page_title(name: str) -> str:
    """Title of one teacher's page in the all-teachers document."""
    return f"جدول حصص: {name}"


def subject_line(subject: str) -> str:
    return f"المادة: {subject}"


def lesson_count_line(count: int) -> str:
    return f"عدد الحصص: {count}"


# Output file names
def teacher_file_name(name: str) -> str:
    """Path separators in the name become underscores."""
    safe = name.replace("/", "_").replace("\\", "_").strip() or "_"
    return f"جدول_{safe}.pdf"


def class_file_name(grade: int, section: int) -> str:
    return f"جدول_صف_{grade}_{section}.pdf"


ALL_TEACHERS_FILE_NAME = "جداول_جميع_المعلمين.pdf"
ALL_CLASSES_FILE_NAME = "جداول_جميع_الصفوف.pdf"
MASTER_FILE_NAME = "الجدول_الرئيسي.pdf"
