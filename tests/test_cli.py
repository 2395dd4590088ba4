"""
Tests for the timetable-export command line.
"""

import json

import pytest

from timetable_toolkit.cli import main


@pytest.fixture
def schedule_file(tmp_path, schedule_dict):
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps(schedule_dict, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def options_file(tmp_path, option_overrides):
    path = tmp_path / "options.json"
    path.write_text(json.dumps(option_overrides), encoding="utf-8")
    return path


def _run(*args):
    return main([str(a) for a in args])


class TestCli:
    """Tests for cli.main."""

    def test_main_when_teacher_then_writes_pdf_and_prints_path(
        self, schedule_file, options_file, tmp_path, capsys
    ):
        out = tmp_path / "out"

        code = _run("teacher", schedule_file, "--teacher", "t1",
                    "--options", options_file, "--output-dir", out)

        assert code == 0
        assert (out / "جدول_أحمد.pdf").exists()
        assert "جدول_أحمد.pdf" in capsys.readouterr().out

    def test_main_when_class_then_writes_class_pdf(self, schedule_file, options_file, tmp_path):
        out = tmp_path / "out"

        code = _run("class", schedule_file, 10, 2, "--show-teacher-names",
                    "--options", options_file, "--output-dir", out)

        assert code == 0
        assert (out / "جدول_صف_10_2.pdf").exists()

    def test_main_when_all_classes_then_uses_document_grade_sections(
        self, schedule_file, options_file, tmp_path
    ):
        import fitz  # PyMuPDF

        out = tmp_path / "out"

        code = _run("all-classes", schedule_file, "--options", options_file, "--output-dir", out)

        assert code == 0
        with fitz.open(out / "جداول_جميع_الصفوف.pdf") as doc:
            # grade 10 lists sections 1-2, grades 11 and 12 use 1-7
            assert doc.page_count == 2 + 7 + 7

    @pytest.mark.parametrize("command", ["all-teachers", "master"])
    def test_main_when_aggregate_command_then_succeeds(
        self, command, schedule_file, options_file, tmp_path
    ):
        out = tmp_path / "out"

        assert _run(command, schedule_file, "--options", options_file, "--output-dir", out) == 0
        assert len(list(out.glob("*.pdf"))) == 1

    def test_main_when_unknown_teacher_then_exit_code_one(
        self, schedule_file, options_file, tmp_path, caplog
    ):
        code = _run("teacher", schedule_file, "--teacher", "nobody",
                    "--options", options_file, "--output-dir", tmp_path / "out")

        assert code == 1
        assert "nobody" in caplog.text

    def test_main_when_schedule_invalid_then_exit_code_one(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"schema_version": 1, "teachers": []}), encoding="utf-8")

        assert _run("all-teachers", path, "--output-dir", tmp_path / "out") == 1

    def test_main_when_font_missing_then_exit_code_one(self, schedule_file, tmp_path):
        code = _run("master", schedule_file, "--output-dir", tmp_path / "out",
                    "--font-dir", tmp_path)

        assert code == 1

    def test_main_when_no_command_then_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
