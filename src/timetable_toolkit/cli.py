"""
Module: cli

Purpose:
    Command-line entry point (`timetable-export`). Reads a schedule JSON
    document and writes one PDF per invocation.

Usage:
    timetable-export teacher schedule.json --teacher t1
    timetable-export class schedule.json 10 2 --show-teacher-names
    timetable-export all-teachers schedule.json --output-dir out
    timetable-export all-classes schedule.json --options style.json
    timetable-export master schedule.json --font-dir ~/fonts
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from timetable_toolkit import __version__
from timetable_toolkit.core.schemas import ValidationError
from timetable_toolkit.core.utils import ScheduleData, load_schedule
from timetable_toolkit.exporter import (
    ExportConfig,
    ExportError,
    ExportResult,
    export_all_classes,
    export_all_teachers,
    export_class_schedule,
    export_master_schedule,
    export_teacher_schedule,
    load_options,
)

logger = logging.getLogger("timetable_toolkit.cli")


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("schedule", type=Path, help="Schedule JSON document")
    common.add_argument("--options", type=Path, help="JSON file with visual option overrides")
    common.add_argument("--output-dir", type=Path, default=Path("output"), help="Directory for PDFs")
    common.add_argument(
        "--font-dir",
        type=Path,
        action="append",
        dest="font_dirs",
        help="Directory searched for TTF fonts (repeatable)",
    )
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(
        prog="timetable-export",
        description="Export school timetables as right-to-left PDF documents",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    teacher = sub.add_parser("teacher", parents=[common], help="One teacher's schedule")
    teacher.add_argument("--teacher", required=True, dest="teacher_id", help="Teacher id")

    klass = sub.add_parser("class", parents=[common], help="One class's schedule")
    klass.add_argument("grade", type=int)
    klass.add_argument("section", type=int)
    klass.add_argument("--show-teacher-names", action="store_true")

    sub.add_parser("all-teachers", parents=[common], help="Every teacher, one page each")

    classes = sub.add_parser("all-classes", parents=[common], help="Every class, one page each")
    classes.add_argument("--show-teacher-names", action="store_true")

    sub.add_parser("master", parents=[common], help="All teachers on one A3 grid")
    return parser


def _run(args: argparse.Namespace, schedule: ScheduleData, options: dict, config: ExportConfig) -> ExportResult:
    if args.command == "teacher":
        try:
            teacher = schedule.teacher(args.teacher_id)
        except KeyError:
            raise ExportError(f"Unknown teacher id: {args.teacher_id!r}") from None
        return export_teacher_schedule(teacher, schedule.assignments, options, config=config)

    if args.command == "class":
        return export_class_schedule(
            args.grade,
            args.section,
            schedule.assignments,
            schedule.teachers,
            options,
            show_teacher_names=args.show_teacher_names,
            config=config,
        )

    if args.command == "all-teachers":
        return export_all_teachers(schedule.teachers, schedule.assignments, options, config=config)

    if args.command == "all-classes":
        return export_all_classes(
            schedule.assignments,
            schedule.teachers,
            options,
            show_teacher_names=args.show_teacher_names,
            grade_sections=schedule.grade_sections or None,
            config=config,
        )

    return export_master_schedule(
        schedule.teachers,
        schedule.assignments,
        options,
        notes=schedule.notes,
        config=config,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; returns the process exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        schedule = load_schedule(args.schedule)
        options = load_options(args.options) if args.options else {}
        config = ExportConfig(
            output_dir=args.output_dir,
            font_dirs=tuple(args.font_dirs) if args.font_dirs else None,
        )
        result = _run(args, schedule, options, config)
    except (ValidationError, ExportError, ValueError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1

    for warning in result.warnings:
        logger.warning(f"Warning: {warning}")
    print(result.pdf_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
