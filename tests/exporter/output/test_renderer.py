"""
Integration tests for PDF rendering.

Plans are composed with ReportLab's standard Helvetica font and written
to tmp_path; the resulting files are inspected with PyMuPDF.
"""

import logging
from unittest.mock import patch

import fitz  # PyMuPDF
import pytest
from reportlab.lib.units import mm

from timetable_toolkit.core.models import Assignment, ClassRef, Day, Subject, Teacher
from timetable_toolkit.exporter.layout import (
    DocumentPlan,
    PageSetup,
    compose_all_classes,
    compose_all_teachers,
    compose_class_schedule,
    compose_master_schedule,
    compose_teacher_schedule,
)
from timetable_toolkit.exporter.layout.config import MASTER_LAYOUT
from timetable_toolkit.exporter.output.renderer import render_to_pdf

# Page sizes in points (1/72 inch)
A4_LANDSCAPE = (841.89, 595.28)
A3_LANDSCAPE = (1190.55, 841.89)
TOLERANCE_PT = 1.0


def _page_count(path):
    with fitz.open(path) as doc:
        return doc.page_count


def _page_size(path):
    with fitz.open(path) as doc:
        rect = doc[0].rect
        return rect.width, rect.height


def _page_text(path, index=0):
    with fitz.open(path) as doc:
        return doc[index].get_text()


class TestRenderSingleDocuments:
    """Tests for one-page documents."""

    def test_render_when_teacher_plan_then_one_a4_landscape_page(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_teacher_schedule(teachers[0], assignments, options, fonts)
        output = tmp_path / plan.file_name

        report = render_to_pdf(plan, output)

        assert report.page_count == 1
        assert report.output_path == output
        assert _page_count(output) == 1
        width, height = _page_size(output)
        assert abs(width - A4_LANDSCAPE[0]) < TOLERANCE_PT
        assert abs(height - A4_LANDSCAPE[1]) < TOLERANCE_PT

    def test_render_when_teacher_plan_then_class_labels_in_text(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_teacher_schedule(teachers[0], assignments, options, fonts)
        output = tmp_path / "teacher.pdf"

        render_to_pdf(plan, output)

        text = _page_text(output)
        assert "10/2" in text
        assert "11/1" in text

    def test_render_when_class_plan_with_names_then_one_page(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_class_schedule(
            ClassRef(10, 2), assignments, teachers, options, fonts, show_teacher_names=True
        )

        report = render_to_pdf(plan, tmp_path / "class.pdf")

        assert report.page_count == 1

    def test_render_when_output_dir_missing_then_created(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_teacher_schedule(teachers[0], assignments, options, fonts)
        output = tmp_path / "a" / "b" / "teacher.pdf"

        render_to_pdf(plan, output)

        assert output.exists()


class TestRenderPaginated:
    """Tests for one-page-per-entity documents."""

    def test_render_when_all_teachers_then_page_per_teacher(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_all_teachers(teachers, assignments, options, fonts)
        output = tmp_path / "teachers.pdf"

        report = render_to_pdf(plan, output)

        assert report.page_count == 3
        assert _page_count(output) == 3
        assert "12/5" in _page_text(output, 1)

    def test_render_when_all_classes_default_then_21_pages(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_all_classes(assignments, teachers, options, fonts)
        output = tmp_path / "classes.pdf"

        report = render_to_pdf(plan, output)

        assert report.page_count == 21
        assert _page_count(output) == 21
        assert "10/1" in _page_text(output, 0)
        assert "12/7" in _page_text(output, 20)

    def test_render_when_empty_plan_then_blank_page_and_warning(self, tmp_path, caplog):
        plan = DocumentPlan(file_name="empty.pdf", page=PageSetup("A4"), blocks=())
        output = tmp_path / "empty.pdf"

        with caplog.at_level(logging.WARNING):
            report = render_to_pdf(plan, output)

        assert report.page_count == 1
        assert _page_count(output) == 1
        assert "Empty plan" in caplog.text


class TestRenderMaster:
    """Tests for the master grid document."""

    def test_render_when_few_teachers_then_single_a3_page(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_master_schedule(teachers, assignments, options, fonts)
        output = tmp_path / "master.pdf"

        report = render_to_pdf(plan, output)

        assert report.page_count == 1
        width, height = _page_size(output)
        assert abs(width - A3_LANDSCAPE[0]) < TOLERANCE_PT
        assert abs(height - A3_LANDSCAPE[1]) < TOLERANCE_PT

    def test_render_when_headers_not_merged_then_still_one_page(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_master_schedule(teachers, assignments, options, fonts)

        report = render_to_pdf(plan, tmp_path / "master.pdf", merge_headers=False)

        assert report.page_count == 1

    def test_render_when_many_teachers_then_overflows_to_second_page(
        self, options, fonts, tmp_path
    ):
        staff = [Teacher(id=f"t{i}", name=f"T{i}", subject=Subject.MATH) for i in range(120)]
        rows = [Assignment(Day.SUNDAY, 1, f"t{i}", 10, 1 + i % 7) for i in range(120)]
        plan = compose_master_schedule(staff, rows, options, fonts)

        report = render_to_pdf(plan, tmp_path / "master.pdf")

        assert report.page_count > 1


class TestRenderWrapping:
    """Tests for body text wrapped inside its column."""

    @staticmethod
    def _words(path, word):
        with fitz.open(path) as doc:
            return [w for w in doc[0].get_text("words") if w[4] == word]

    def test_render_when_long_note_then_words_stay_in_notes_column(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_master_schedule(
            teachers, assignments, options, fonts, notes={"t1": "NOTEWORD " * 12}
        )
        output = tmp_path / "master.pdf"
        left = plan.page.margin_left * mm
        right = left + MASTER_LAYOUT.widths.notes * mm

        report = render_to_pdf(plan, output)

        words = self._words(output, "NOTEWORD")
        assert report.page_count == 1
        assert len(words) == 12
        assert min(w[0] for w in words) >= left - TOLERANCE_PT
        assert max(w[2] for w in words) <= right + TOLERANCE_PT

    def test_render_when_long_name_then_words_stay_in_name_column(
        self, assignments, options, fonts, tmp_path
    ):
        staff = [Teacher(id="t1", name="LONGNAME " * 4, subject=Subject.MATH)]
        plan = compose_master_schedule(staff, assignments, options, fonts)
        output = tmp_path / "master.pdf"
        widths = MASTER_LAYOUT.widths
        right = plan.page.width * mm - plan.page.margin_right * mm - widths.sequence * mm
        left = right - widths.name * mm

        render_to_pdf(plan, output)

        words = self._words(output, "LONGNAME")
        assert len(words) == 4
        assert min(w[0] for w in words) >= left - TOLERANCE_PT
        assert max(w[2] for w in words) <= right + TOLERANCE_PT


class TestRenderFailure:
    """Tests for failed renders."""

    def test_render_when_build_fails_then_no_file_left(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_teacher_schedule(teachers[0], assignments, options, fonts)
        output = tmp_path / "teacher.pdf"

        with patch(
            "timetable_toolkit.exporter.output.renderer._TimetableDocTemplate.build",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(OSError, match="disk full"):
                render_to_pdf(plan, output)

        assert not output.exists()
        assert list(tmp_path.iterdir()) == []

    def test_render_when_successful_then_no_partial_file(
        self, teachers, assignments, options, fonts, tmp_path
    ):
        plan = compose_teacher_schedule(teachers[0], assignments, options, fonts)

        render_to_pdf(plan, tmp_path / "teacher.pdf")

        assert [p.name for p in tmp_path.iterdir()] == ["teacher.pdf"]
