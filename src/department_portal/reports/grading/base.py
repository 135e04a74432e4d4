from __future__ import annotations

from abc import ABC, abstractmethod


class GradeCalculator(ABC):
    """Calculator interface (Strategy Pattern for grading scales)."""

    @abstractmethod
    def grade(self, marks_obtained: float, max_marks: float) -> str:
        raise NotImplementedError
