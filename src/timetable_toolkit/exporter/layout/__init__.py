"""
Module: exporter.layout

Purpose:
    Turn schedule records into renderer-agnostic document plans.
    Sparse assignments become dense display grids, grids become table
    blocks, blocks become documents.

Key Functions:
    - compose_teacher_schedule() / compose_class_schedule()
    - compose_all_teachers() / compose_all_classes()
    - compose_master_schedule()
    - build_teacher_grid() / build_class_grid()
    - find_slot()

Key Classes:
    - AxisSequencer: Right-to-left display order of the axes
    - SlotIndex: Per-entity slot lookup
    - DisplayGrid: Dense day × period matrix
    - DocumentPlan / TableBlock / HeaderCell: Abstract table description

Used By:
    - exporter.controller: Export entry points
"""

from .axis import AxisSequencer, display_order
from .config import FontSet, TableLayout, MasterLayout
from .lookup import DuplicateAssignmentError, SlotIndex, find_slot
from .grid import DisplayGrid, build_class_grid, build_teacher_grid
from .models import (
    CellPadding,
    CellStyle,
    ColumnStyle,
    DocumentPlan,
    HeaderCell,
    PageSetup,
    TableBlock,
    TextLine,
    expand_header_row,
)
from .composer import (
    class_refs,
    compose_all_classes,
    compose_all_teachers,
    compose_class_schedule,
    compose_teacher_schedule,
)
from .master import compose_master_schedule, master_columns

__all__ = [
    # Axes and lookup
    "AxisSequencer",
    "display_order",
    "DuplicateAssignmentError",
    "SlotIndex",
    "find_slot",
    # Grids
    "DisplayGrid",
    "build_class_grid",
    "build_teacher_grid",
    # Config
    "FontSet",
    "TableLayout",
    "MasterLayout",
    # Models
    "CellPadding",
    "CellStyle",
    "ColumnStyle",
    "DocumentPlan",
    "HeaderCell",
    "PageSetup",
    "TableBlock",
    "TextLine",
    "expand_header_row",
    # Composition
    "class_refs",
    "compose_all_classes",
    "compose_all_teachers",
    "compose_class_schedule",
    "compose_teacher_schedule",
    "compose_master_schedule",
    "master_columns",
]
