"""
Module: subjects

Purpose:
    Closed set of teaching subjects. Subject strings coming from input data
    are validated here, at the data-model boundary, so the layout code only
    ever sees known subjects.

Key Classes:
    - Subject: Subject enum (value is the Arabic display label)

Used By:
    - core.models.schedule.Teacher
    - core.utils.serialization: Input parsing
"""

from __future__ import annotations

from enum import Enum


class Subject(str, Enum):
    """Teaching subject."""
    ARABIC = "عربي"
    ENGLISH = "إنجليزي"
    FRENCH = "فرنسي"
    ISLAMIC = "إسلامية"
    MATH = "رياضيات"
    PHYSICS = "فيزياء"
    CHEMISTRY = "كيمياء"
    BIOLOGY = "أحياء"
    GEOLOGY = "جيولوجيا"
    SOCIAL_STUDIES = "اجتماعيات"
    HISTORY = "تاريخ"
    GEOGRAPHY = "جغرافيا"
    PHILOSOPHY = "فلسفة"
    COMPUTER = "حاسوب"
    PHYSICAL_EDUCATION = "بدنية"
    ART = "فنية"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> Subject:
        """
        Parse a subject from its Arabic label or English member name.

        Raises:
            ValueError: If the value is not a known subject
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for subject in cls:
            if text == subject.value or text.upper() == subject.name:
                return subject
        raise ValueError(f"Unknown subject: {value!r}")
