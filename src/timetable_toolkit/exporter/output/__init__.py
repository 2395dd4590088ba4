"""
Module: exporter.output

Purpose:
    Paint document plans: font registration, right-to-left text shaping
    and PDF rendering.

Key Functions:
    - load_fonts(): Resolve font selections to registered fonts
    - shape_text(): Logical to visual order
    - render_to_pdf(): Write a DocumentPlan as PDF
"""

from .fonts import FontLoadError, load_fonts, resolve_font
from .renderer import RenderReport, render_to_pdf
from .text import shape_text

__all__ = [
    "FontLoadError",
    "load_fonts",
    "resolve_font",
    "RenderReport",
    "render_to_pdf",
    "shape_text",
]
