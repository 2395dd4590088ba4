"""
Module: exporter

Purpose:
    Export school timetables as printable right-to-left PDF documents.

Key Functions:
    - export_teacher_schedule() / export_class_schedule()
    - export_all_teachers() / export_all_classes()
    - export_master_schedule()
    - resolve_options(): Merge visual option overrides over defaults

Key Classes:
    - ExportConfig: Output directory, fonts, axes and grades
    - ExportResult / ExportError
    - RenderOptions: Resolved visual options
"""

from .config import ExportConfig
from .controller import (
    ExportError,
    ExportResult,
    export_all_classes,
    export_all_teachers,
    export_class_schedule,
    export_master_schedule,
    export_teacher_schedule,
)
from .options import RenderOptions, load_options, resolve_options

__all__ = [
    "ExportConfig",
    "ExportError",
    "ExportResult",
    "export_all_classes",
    "export_all_teachers",
    "export_class_schedule",
    "export_master_schedule",
    "export_teacher_schedule",
    "RenderOptions",
    "load_options",
    "resolve_options",
]
