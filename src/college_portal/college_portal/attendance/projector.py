from __future__ import annotations

import math
from dataclasses import dataclass, field
from fractions import Fraction

from ..common.validators import require_counts
from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from ..core.exceptions import InvalidInputError
from .model import SubjectAttendanceSummary


def _as_fraction(threshold: float) -> Fraction:
    # str() first so 0.7 becomes exactly 7/10, not its binary approximation
    try:
        value = Fraction(str(threshold))
    except (TypeError, ValueError):
        raise InvalidInputError(f"Threshold must be a number, got {threshold!r}")
    if not 0 < value < 1:
        raise InvalidInputError(f"Threshold must be between 0 and 1 (exclusive), got {threshold!r}")
    return value


def round_half_up(value: Fraction, ndigits: int = 0) -> float:
    scale = 10 ** ndigits
    return math.floor(value * scale + Fraction(1, 2)) / scale


@dataclass(frozen=True)
class AttendanceProjector:
    """Turns attended/total counts into targets against a threshold.

    Counts are validated fail-fast: negative values, non-integers or
    attended > total raise InvalidInputError. A total of zero yields zeros.

    All arithmetic is exact (fractions), so the closed forms below agree with
    a brute-force search:

    - classes needed: smallest x with (attended + x) / (total + x) >= t,
      x = ceil((t * total - attended) / (1 - t))
    - max absences: largest x with attended / (total + x) >= t,
      x = floor((attended - t * total) / t)
    """

    threshold: float = DEFAULT_ATTENDANCE_THRESHOLD
    _t: Fraction = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_t", _as_fraction(self.threshold))

    @property
    def threshold_percent(self) -> float:
        return float(self._t * 100)

    def percentage(self, attended: int, total: int) -> float:
        attended, total = require_counts(attended, total)
        if total == 0:
            return 0.0
        return 100 * attended / total

    def display_percentage(self, attended: int, total: int, ndigits: int = 0) -> float:
        """Percentage rounded half-up: whole percent for summaries, 1 decimal for the calculator."""
        attended, total = require_counts(attended, total)
        if total == 0:
            return 0.0
        return round_half_up(Fraction(100 * attended, total), ndigits)

    def meets_threshold(self, attended: int, total: int) -> bool:
        attended, total = require_counts(attended, total)
        if total == 0:
            return False
        return Fraction(attended, total) >= self._t

    def classes_needed(self, attended: int, total: int) -> int:
        """Consecutive classes to attend before reaching the threshold."""
        attended, total = require_counts(attended, total)
        needed = math.ceil((self._t * total - attended) / (1 - self._t))
        return max(0, needed)

    def max_absences(self, attended: int, total: int) -> int:
        """Classes that can still be missed. Only meaningful when meets_threshold()."""
        attended, total = require_counts(attended, total)
        spare = math.floor((attended - self._t * total) / self._t)
        return max(0, spare)

    def summarize(self, subject: str, attended: int, total: int) -> SubjectAttendanceSummary:
        return SubjectAttendanceSummary(
            subject=subject,
            attended=attended,
            total=total,
            percentage=self.display_percentage(attended, total),
            classes_needed=self.classes_needed(attended, total),
            max_absences=self.max_absences(attended, total),
            meets_threshold=self.meets_threshold(attended, total),
        )

    def with_threshold(self, threshold: float) -> "AttendanceProjector":
        return AttendanceProjector(threshold=threshold)
