"""
Module: exporter.output.text

Purpose:
    Prepare logical-order text for ReportLab, which draws glyphs strictly
    left to right. Arabic letters are reshaped to their contextual forms
    and each line is reordered to visual order.

Key Functions:
    - shape_text(): Reshape and reorder every line of a string
    - wrap_text(): Break logical text into lines that fit a cell width

Dependencies:
    - arabic_reshaper: Contextual letter forms
    - bidi.algorithm: Unicode bidirectional reordering
    - reportlab.pdfbase.pdfmetrics: Text width measurement
"""

from __future__ import annotations

import re
from typing import List

import arabic_reshaper
from bidi.algorithm import get_display
from reportlab.pdfbase import pdfmetrics

_RTL_CHARS = re.compile(r"[\u0590-\u08FF\uFB1D-\uFDFF\uFE70-\uFEFF]")


def needs_shaping(text: str) -> bool:
    """True when the text contains right-to-left characters."""
    return bool(_RTL_CHARS.search(text))


def shape_text(text: str) -> str:
    """
    Convert logical-order text to visual order, line by line.

    Text without right-to-left characters is returned unchanged.

    Example:
        >>> shape_text("10/2")
        '10/2'
    """
    if not text or not needs_shaping(text):
        return text
    return "\n".join(
        get_display(arabic_reshaper.reshape(line)) if line else line
        for line in text.split("\n")
    )


def _shaped_width(text: str, font: str, size: float) -> float:
    return pdfmetrics.stringWidth(shape_text(text), font, size)


def _split_word(word: str, font: str, size: float, width: float) -> List[str]:
    pieces: List[str] = []
    current = ""
    for char in word:
        if current and _shaped_width(current + char, font, size) > width:
            pieces.append(current)
            current = char
        else:
            current += char
    pieces.append(current)
    return pieces


def wrap_text(text: str, font: str, size: float, width: float) -> List[str]:
    """
    Break logical-order text into lines no wider than `width` points.

    Lines are measured after shaping, so the result can be passed line
    by line to shape_text(). Explicit line breaks are kept and a word
    wider than the line is broken between characters.

    Args:
        text: Logical-order cell text
        font: Registered font name
        size: Font size in points
        width: Available line width in points

    Returns:
        Logical-order lines, at least one

    Example:
        >>> wrap_text("NOTEWORD NOTEWORD", "Helvetica", 5, 40)
        ['NOTEWORD', 'NOTEWORD']
    """
    if width <= 0:
        return text.split("\n")

    lines: List[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if _shaped_width(candidate, font, size) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            *full, current = _split_word(word, font, size, width)
            lines.extend(full)
        lines.append(current)
    return lines
