from __future__ import annotations

import re
from dataclasses import dataclass, replace

from saliency_visualizer.colormap import RGB

# Byte-level BPE markers: Ġ encodes a leading space, Ċ a newline
SPACE_MARKER = "\u0120"
NEWLINE_MARKER = "\u010a"

_TEXT_UNITS = re.compile(r"\n|[^\S\n]+|\S+")
_LEADING_SPACES = re.compile(r"^ +")


# ---------- Segment ----------

@dataclass(frozen=True)
class Segment:
    """
    Minimal renderable unit.

    Fields:
    - kind: TEXT, SPACE or NEWLINE
    - value: the characters to display ("" for NEWLINE)
    - token_index: index of the source token; set only on interactive text segments
    - color: background color of an interactive text segment
    - label_color: foreground color chosen for readability on `color`
    - saliency: the raw value of the source token (None if unknown)
    - hovered: whether the source token is the currently hovered one
    """
    TEXT = "text"
    SPACE = "space"
    NEWLINE = "newline"

    kind: str
    value: str = ""
    token_index: int | None = None
    color: RGB | None = None
    label_color: str | None = None
    saliency: float | None = None
    hovered: bool = False

    @classmethod
    def text(cls, value: str) -> Segment:
        return cls(cls.TEXT, value)

    @classmethod
    def space(cls, value: str = " ") -> Segment:
        return cls(cls.SPACE, value)

    @classmethod
    def newline(cls) -> Segment:
        return cls(cls.NEWLINE)

    @property
    def interactive(self) -> bool:
        return self.kind == Segment.TEXT and self.token_index is not None

    def resolved(self, **changes) -> Segment:
        return replace(self, **changes)

    def to_dict(self) -> dict:
        d: dict = {"type": self.kind}
        if self.kind != Segment.NEWLINE:
            d["value"] = self.value
        if self.interactive:
            d.update(
                {
                    "token_index": self.token_index,
                    "color": list(self.color) if self.color is not None else None,
                    "label_color": self.label_color,
                    "saliency": self.saliency,
                    "hovered": self.hovered,
                }
            )
        return d


# ---------- mode A: artifact decoding ----------

def clean_token(raw: str) -> str:
    """Replace the space-prefix marker with ' ' and the newline marker with '\\n'."""
    return raw.replace(SPACE_MARKER, " ").replace(NEWLINE_MARKER, "\n")


def token_segments(raw: str) -> list[Segment]:
    """
    Decode a single raw token into renderable segments.

    A newline segment is emitted between consecutive newline-separated parts,
    a text segment for each non-empty part. The leading space run of a part is
    split into its own space segment so highlighting covers only visible text.
    Marker-only tokens still produce their newline segments.
    """
    parts = clean_token(raw).split("\n")
    segments: list[Segment] = []
    for i, part in enumerate(parts):
        if part:
            m = _LEADING_SPACES.match(part)
            if m:
                segments.append(Segment.space(m.group(0)))
                part = part[m.end():]
            if part:
                segments.append(Segment.text(part))
        if i < len(parts) - 1:
            segments.append(Segment.newline())
    return segments


# ---------- mode B: whitespace preserving ----------

def tokenize_text(text: str) -> list[str]:
    """
    Partition free text into newlines, whitespace runs and non-whitespace runs.

    >>> tokenize_text("a  b\\nc")
    ['a', '  ', 'b', '\\n', 'c']
    """
    return _TEXT_UNITS.findall(text)


def unit_segment(unit: str) -> Segment:
    """Classify one tokenizer unit."""
    if unit == "\n":
        return Segment.newline()
    if unit.isspace():
        return Segment.space(unit)
    return Segment.text(unit)
