from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

# Keys with no visible representation (C0 / C1 control ranges)
_CONTROL_ONLY = re.compile(r"[\x00-\x1f\x7f-\x9f]+")
# Everything but letters, digits and apostrophes
_NON_WORD = re.compile(r"[^\w']|_")


def is_number(value: Any) -> bool:
    """True for finite ints and floats (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


# ---------- range / normalization ----------

@dataclass(frozen=True)
class ValueRange:
    """Closed [min, max] interval over the known values of one input."""
    min: float = 0.0
    max: float = 1.0

    def __post_init__(self):
        if self.max < self.min:
            raise ValueError(f"Invalid range: max {self.max} < min {self.min}")

    @classmethod
    def from_values(cls, values: Iterable[float | None]) -> ValueRange:
        """Range over all numeric values; [0, 1] when there are none."""
        known = [float(v) for v in values if is_number(v)]
        if not known:
            return cls()
        return cls(min(known), max(known))

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def degenerate(self) -> bool:
        return self.max == self.min


def normalize(value: float | None, value_range: ValueRange) -> float | None:
    """
    Map a raw value onto [0, 1] relative to value_range.

    None stays None (no color). A degenerate range uses a denominator of 1,
    so every value in it normalizes to 0. A span that overflows to inf is
    computed on halved operands instead.
    """
    if value is None:
        return None
    span = value_range.span
    if span == 0:
        result = value - value_range.min
    elif math.isinf(span):
        result = (value / 2 - value_range.min / 2) / (value_range.max / 2 - value_range.min / 2)
    else:
        result = (value - value_range.min) / span
    return result if math.isfinite(result) else 0.0


# ---------- dictionary lookup ----------

def is_artifact_key(key: str) -> bool:
    return bool(_CONTROL_ONLY.fullmatch(key))


def build_dictionary(raw: Mapping[str, float]) -> dict[str, float]:
    """Drop keys consisting solely of control characters."""
    return {k: v for k, v in raw.items() if not is_artifact_key(k)}


def strip_punctuation(token: str) -> str:
    return _NON_WORD.sub("", token)


def lookup(token: str, dictionary: Mapping[str, float]) -> float | None:
    """
    Resolve a saliency value for a token.

    Tries the token as is, then with everything but letters, digits and
    apostrophes removed. Returns None when neither form is present.
    """
    if token in dictionary:
        return dictionary[token]
    stripped = strip_punctuation(token)
    if stripped and stripped != token and stripped in dictionary:
        return dictionary[stripped]
    return None
