"""
Input Limits and Canonicalization

Turns raw form input into the numbers the calculators run on.

Raw input is canonicalized on every edit: empty or malformed input becomes
0 and values above the ceiling are clamped down. Values below the minimum
are kept as typed and reported through ``validate`` so the user sees the
error while typing; the calculation itself runs on ``safe_value``, which
falls back to the minimum.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class Limit:
    """Valid range for one parameter."""

    min: float
    max: Optional[float] = None
    suffix: str = ""  # unit shown after the minimum in messages, e.g. "%"

    @property
    def read_only(self) -> bool:
        """A parameter whose range is a single value cannot be edited."""
        return self.max is not None and self.max == self.min


class LimitSet(Mapping[str, Limit]):
    """Immutable mapping of parameter name to its Limit."""

    def __init__(self, limits: Mapping[str, Limit]):
        self._limits = MappingProxyType(dict(limits))

    def __getitem__(self, name: str) -> Limit:
        return self._limits[name]

    def __iter__(self):
        return iter(self._limits)

    def __len__(self) -> int:
        return len(self._limits)

    def __repr__(self) -> str:
        return f"LimitSet({dict(self._limits)!r})"


@dataclass(frozen=True)
class ValidationResult:
    """Validation outcome for one parameter."""

    error: bool
    message: str

    def as_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def canonicalize(raw: Any, ceiling: Optional[float] = None) -> float:
    """
    Convert raw input to a finite, non-negative number.

    Args:
        raw: Value as typed (string, number, or None)
        ceiling: Optional upper bound to clamp to

    Returns:
        0.0 for empty, malformed, non-finite or negative input; otherwise
        the number, clamped to ``ceiling``. No floor is applied.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if raw == "":
            return 0.0
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(number) or number < 0:
        return 0.0
    if ceiling is not None and number > ceiling:
        return float(ceiling)
    return number


def safe_value(canonical: float, limit: Limit) -> float:
    """Value to calculate with: the minimum if below it, else capped at max."""
    if canonical < limit.min:
        return limit.min
    if limit.max is not None:
        return min(canonical, limit.max)
    return canonical


def is_below_minimum(canonical: float, limit: Limit) -> bool:
    return canonical < limit.min


def validate(canonical: float, limit: Limit) -> ValidationResult:
    """Report whether a canonical value is below its minimum."""
    return ValidationResult(
        error=is_below_minimum(canonical, limit),
        message=f"Minimum value allowed is {_format_number(limit.min)}{limit.suffix}",
    )


def describe(limits: LimitSet) -> Dict[str, Dict[str, Any]]:
    """Plain-dict view of a LimitSet for API responses."""
    return {
        name: {"min": limit.min, "max": limit.max, "suffix": limit.suffix}
        for name, limit in limits.items()
    }
