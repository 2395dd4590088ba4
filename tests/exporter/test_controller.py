"""
Tests for the export entry points.

Renders use ReportLab's standard Helvetica font so no TTF files are
required; collaborators are patched where a failure is simulated.
"""

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import fitz  # PyMuPDF
import pytest

from timetable_toolkit.core.models import Assignment, Day, Subject, Teacher
from timetable_toolkit.exporter import (
    ExportConfig,
    ExportError,
    export_all_classes,
    export_all_teachers,
    export_class_schedule,
    export_master_schedule,
    export_teacher_schedule,
)
from timetable_toolkit.exporter.output import FontLoadError, RenderReport


@pytest.fixture
def config(tmp_path):
    return ExportConfig(output_dir=tmp_path / "out")


class TestExportConfig:
    """Tests for ExportConfig."""

    def test_config_when_default_then_week_axes(self):
        config = ExportConfig()

        assert config.output_dir == Path("output")
        assert config.axes.display_periods == (7, 6, 5, 4, 3, 2, 1)
        assert config.grades == (10, 11, 12)

    def test_config_when_string_paths_then_converted(self):
        config = ExportConfig(output_dir="out", font_dirs=["fonts"])

        assert config.output_dir == Path("out")
        assert config.font_dirs == (Path("fonts"),)

    @pytest.mark.parametrize("kwargs", [
        {"periods": (0, 1)},
        {"grades": (-1,)},
        {"default_sections": (0,)},
        {"days": ()},
    ])
    def test_config_when_invalid_then_raises(self, kwargs):
        with pytest.raises(ValueError):
            ExportConfig(**kwargs)


class TestExportEntryPoints:
    """End-to-end tests writing real PDFs."""

    def test_export_when_teacher_then_pdf_named_after_teacher(
        self, teachers, assignments, option_overrides, config
    ):
        result = export_teacher_schedule(teachers[0], assignments, option_overrides, config=config)

        assert result.pdf_path == config.output_dir / "جدول_أحمد.pdf"
        assert result.pdf_path.exists()
        assert result.page_count == 1
        assert result.warnings == ()

    def test_export_when_class_then_pdf_named_after_class(
        self, teachers, assignments, option_overrides, config
    ):
        result = export_class_schedule(
            10, 2, assignments, teachers, option_overrides, show_teacher_names=True, config=config
        )

        assert result.pdf_path.name == "جدول_صف_10_2.pdf"
        assert result.plan.blocks[0].key == "10/2"

    def test_export_when_all_teachers_then_one_page_each(
        self, teachers, assignments, option_overrides, config
    ):
        result = export_all_teachers(teachers, assignments, option_overrides, config=config)

        assert result.page_count == 3
        with fitz.open(result.pdf_path) as doc:
            assert doc.page_count == 3

    def test_export_when_all_classes_with_override_then_15_pages(
        self, teachers, assignments, option_overrides, config
    ):
        result = export_all_classes(
            assignments, teachers, option_overrides, grade_sections={"10": [1]}, config=config
        )

        assert result.page_count == 15
        assert result.pdf_path.name == "جداول_جميع_الصفوف.pdf"

    def test_export_when_all_classes_custom_grades_then_config_used(
        self, teachers, assignments, option_overrides, tmp_path
    ):
        config = ExportConfig(output_dir=tmp_path, grades=(10,), default_sections=(1, 2, 3))

        result = export_all_classes(assignments, teachers, option_overrides, config=config)

        assert result.page_count == 3

    def test_export_when_master_fits_then_no_warning(
        self, teachers, assignments, option_overrides, config
    ):
        callback = MagicMock()

        result = export_master_schedule(
            teachers, assignments, option_overrides, notes={"t1": "x"}, on_overflow=callback, config=config
        )

        assert result.page_count == 1
        assert result.warnings == ()
        callback.assert_not_called()

    def test_export_when_no_teachers_then_blank_document(self, option_overrides, config):
        result = export_all_teachers([], [], option_overrides, config=config)

        assert result.plan.is_empty
        assert result.page_count == 1


class TestMasterOverflow:
    """Tests for overflow reporting of the master grid."""

    def test_export_when_master_overflows_then_warning_and_callback(
        self, teachers, assignments, option_overrides, config, caplog
    ):
        callback = MagicMock()
        report = RenderReport(output_path=config.output_dir / "master.pdf", page_count=2)

        with patch(
            "timetable_toolkit.exporter.controller.render_to_pdf",
            return_value=report,
        ), caplog.at_level(logging.WARNING):
            result = export_master_schedule(
                teachers, assignments, option_overrides, on_overflow=callback, config=config
            )

        callback.assert_called_once_with(2)
        assert result.page_count == 2
        assert len(result.warnings) == 1
        assert "2 pages" in result.warnings[0]
        assert "overflowed" in caplog.text

    def test_export_when_real_master_overflows_then_file_still_written(
        self, option_overrides, config
    ):
        staff = [Teacher(id=f"t{i}", name=f"T{i}", subject=Subject.ART) for i in range(100)]
        rows = [Assignment(Day.MONDAY, 2, f"t{i}", 11, 1 + i % 7) for i in range(100)]
        pages = []

        result = export_master_schedule(
            staff, rows, option_overrides, on_overflow=pages.append, config=config
        )

        assert result.pdf_path.exists()
        assert pages == [result.page_count]
        assert result.page_count > 1

    def test_export_when_multi_page_document_then_no_overflow_warning(
        self, teachers, assignments, option_overrides, config
    ):
        result = export_all_teachers(teachers, assignments, option_overrides, config=config)

        assert result.page_count == 3
        assert result.warnings == ()


class TestExportFailures:
    """Tests for failure propagation."""

    def test_export_when_font_missing_then_export_error_and_no_file(
        self, teachers, assignments, tmp_path
    ):
        config = ExportConfig(output_dir=tmp_path / "out", font_dirs=(tmp_path,))

        with pytest.raises(ExportError, match="Failed to load fonts") as exc_info:
            export_teacher_schedule(teachers[0], assignments, config=config)

        assert isinstance(exc_info.value.__cause__, FontLoadError)
        assert not (tmp_path / "out").exists()

    def test_export_when_title_font_missing_then_only_class_exports_fail(
        self, teachers, assignments, option_overrides, tmp_path
    ):
        config = ExportConfig(output_dir=tmp_path / "out", font_dirs=(tmp_path,))
        overrides = {**option_overrides, "title_font": "Uthmanic"}

        result = export_teacher_schedule(teachers[0], assignments, overrides, config=config)
        with pytest.raises(ExportError, match="Uthmanic"):
            export_class_schedule(10, 2, assignments, teachers, overrides, config=config)

        assert result.pdf_path.exists()

    def test_export_when_font_loader_fails_then_renderer_not_called(
        self, teachers, assignments, config
    ):
        with patch(
            "timetable_toolkit.exporter.controller.load_fonts",
            side_effect=FontLoadError("Amiri", "not found"),
        ), patch("timetable_toolkit.exporter.controller.render_to_pdf") as render:
            with pytest.raises(ExportError):
                export_master_schedule(teachers, assignments, config=config)

        render.assert_not_called()

    def test_export_when_render_fails_then_export_error(
        self, teachers, assignments, option_overrides, config
    ):
        with patch(
            "timetable_toolkit.exporter.controller.render_to_pdf",
            side_effect=PermissionError("read-only"),
        ):
            with pytest.raises(ExportError, match="Failed to render") as exc_info:
                export_all_teachers(teachers, assignments, option_overrides, config=config)

        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_export_when_teacher_double_booked_then_export_error(
        self, teachers, option_overrides, config
    ):
        rows = [
            Assignment(Day.SUNDAY, 1, "t1", 10, 1),
            Assignment(Day.SUNDAY, 1, "t1", 10, 2),
        ]

        with pytest.raises(ExportError, match="Invalid schedule"):
            export_teacher_schedule(teachers[0], rows, option_overrides, config=config)
