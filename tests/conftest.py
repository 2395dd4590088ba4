import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import timetable_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from timetable_toolkit.core.models import Assignment, Day, Subject, Teacher
from timetable_toolkit.exporter.layout import FontSet
from timetable_toolkit.exporter.options import resolve_options


# ReportLab standard font: no TTF file needed in tests
TEST_FONT = "Helvetica"


# Common test fixtures
@pytest.fixture
def teachers():
    """Three teachers in print order."""
    return [
        Teacher(id="t1", name="أحمد", subject=Subject.MATH),
        Teacher(id="t2", name="سارة", subject=Subject.PHYSICS),
        Teacher(id="t3", name="خالد", subject=Subject.ARABIC),
    ]


@pytest.fixture
def assignments():
    """A small week: t1 teaches 10/2 and 11/1, t2 teaches 10/2, t3 is free."""
    return [
        Assignment(Day.SUNDAY, 3, "t1", 10, 2),
        Assignment(Day.SUNDAY, 4, "t1", 11, 1),
        Assignment(Day.TUESDAY, 1, "t1", 10, 2),
        Assignment(Day.SUNDAY, 1, "t2", 10, 2),
        Assignment(Day.THURSDAY, 7, "t2", 12, 5),
    ]


@pytest.fixture
def fonts():
    return FontSet.uniform(TEST_FONT)


@pytest.fixture
def option_overrides():
    """Overrides that avoid loading Arabic TTF files."""
    return {
        "header_font": TEST_FONT,
        "content_font": TEST_FONT,
        "day_font": TEST_FONT,
        "title_font": TEST_FONT,
    }


@pytest.fixture
def options(option_overrides):
    return resolve_options(option_overrides)


@pytest.fixture
def schedule_dict():
    """Valid schedule document as parsed from JSON."""
    return {
        "schema_version": 1,
        "teachers": [
            {"id": "t1", "name": "أحمد", "subject": "رياضيات"},
            {"id": "t2", "name": "سارة", "subject": "PHYSICS"},
        ],
        "assignments": [
            {"day": "الأحد", "period": 3, "teacher_id": "t1", "grade": 10, "section": 2},
            {"day": "monday", "period": 1, "teacher_id": "t2", "grade": 11, "section": 4},
        ],
        "notes": {"t1": "منسق"},
        "grade_sections": {"10": [1, 2]},
    }
