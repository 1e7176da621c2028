from __future__ import annotations

from typing import Iterable, Mapping

from saliency_visualizer.colormap import RGB, Colormap, interpolate, label_color
from saliency_visualizer.parse import TokenRecord
from saliency_visualizer.tokens import Segment, token_segments, tokenize_text, unit_segment
from saliency_visualizer.values import ValueRange, lookup, normalize

PLACEHOLDER_COLOR: RGB = (238, 238, 238)


class HoverState:
    """
    Index of the currently highlighted token, or None.

    Owned by the caller and passed into each build. Updates are last-write-wins.
    """
    def __init__(self, token_index: int | None = None):
        self._token_index = token_index

    @property
    def token_index(self) -> int | None:
        return self._token_index

    def enter(self, token_index: int) -> None:
        """Pointer entered a token."""
        self._token_index = token_index

    def leave(self) -> None:
        self._token_index = None

    def is_hovered(self, token_index: int) -> bool:
        return self._token_index is not None and self._token_index == token_index

    def __repr__(self) -> str:
        return f"HoverState(token_index={self._token_index!r})"


def _resolve(
    segment: Segment,
    token_index: int,
    value: float | None,
    value_range: ValueRange,
    colormap: Colormap | str,
    hover: HoverState | None,
    placeholder_color: RGB,
) -> Segment:
    norm = normalize(value, value_range)
    color = placeholder_color if norm is None else interpolate(colormap, norm)
    return segment.resolved(
        token_index=token_index,
        color=color,
        label_color=label_color(color),
        saliency=value,
        hovered=hover is not None and hover.is_hovered(token_index),
    )


def project_pairs(
    records: Iterable[TokenRecord],
    value_range: ValueRange,
    *,
    colormap: Colormap | str = Colormap.DEFAULT,
    hover: HoverState | None = None,
    placeholder_color: RGB = PLACEHOLDER_COLOR,
) -> list[Segment]:
    """
    Segments for pair-list input, in record order.

    Every text segment of record i is interactive with token_index i, so
    duplicate tokens stay independently addressable.
    """
    out: list[Segment] = []
    for i, record in enumerate(records):
        for seg in token_segments(record.raw):
            if seg.kind == Segment.TEXT:
                seg = _resolve(seg, i, record.value, value_range, colormap, hover, placeholder_color)
            out.append(seg)
    return out


def project_text(
    text: str,
    dictionary: Mapping[str, float],
    value_range: ValueRange,
    *,
    colormap: Colormap | str = Colormap.DEFAULT,
    hover: HoverState | None = None,
    placeholder_color: RGB = PLACEHOLDER_COLOR,
) -> list[Segment]:
    """
    Segments for free text scored through a dictionary.

    Token indices are tokenizer unit positions; whitespace and newline units
    pass through as non-interactive segments.
    """
    out: list[Segment] = []
    for i, unit in enumerate(tokenize_text(text)):
        seg = unit_segment(unit)
        if seg.kind == Segment.TEXT:
            value = lookup(unit, dictionary)
            seg = _resolve(seg, i, value, value_range, colormap, hover, placeholder_color)
        out.append(seg)
    return out
