"""
Unit tests for display strings and output file names.
"""

from timetable_toolkit.common import labels


def test_period_label_when_formatted_then_arabic_prefix():
    assert labels.period_label(3) == "الحصة 3"


def test_teacher_file_name_when_plain_name_then_prefixed():
    assert labels.teacher_file_name("أحمد") == "جدول_أحمد.pdf"


def test_teacher_file_name_when_name_has_separator_then_replaced():
    assert labels.teacher_file_name("أحمد/علي") == "جدول_أحمد_علي.pdf"


def test_teacher_file_name_when_blank_then_placeholder():
    assert labels.teacher_file_name("  ") == "جدول__.pdf"


def test_class_file_name_when_formatted_then_grade_and_section():
    assert labels.class_file_name(11, 4) == "جدول_صف_11_4.pdf"


def test_lesson_count_line_when_zero_then_shown():
    assert labels.lesson_count_line(0) == "عدد الحصص: 0"
