from __future__ import annotations

import math
from enum import Enum

import numpy as np

RGB = tuple[int, int, int]
ColorStop = tuple[float, RGB]

LIGHT_LABEL = "#ffffff"
DARK_LABEL = "#111111"
LUMINANCE_THRESHOLD = 140


class Colormap(str, Enum):
    """Closed set of named colormaps."""
    DEFAULT = "default"
    FIRE = "fire"
    COOL = "cool"
    GREEN = "green"
    DIVERGING = "diverging"

    @classmethod
    def from_name(cls, name: str | Colormap) -> Colormap:
        if isinstance(name, Colormap):
            return name
        try:
            return cls(name.strip().lower())
        except (ValueError, AttributeError) as e:
            raise ValueError(
                f"Unknown colormap: {name!r}. Expected one of {[c.value for c in cls]}"
            ) from e


# ---------- stop tables ----------

# White (low) -> orange -> deep red (high)
_DEFAULT_STOPS: list[ColorStop] = [
    (0.0, (248, 248, 245)),
    (0.3, (255, 235, 210)),
    (0.55, (255, 180, 100)),
    (0.8, (230, 90, 40)),
    (1.0, (160, 20, 10)),
]

_FIRE_STOPS: list[ColorStop] = [
    (0.0, (20, 0, 0)),
    (0.25, (180, 20, 10)),
    (0.5, (240, 110, 20)),
    (0.75, (255, 220, 130)),
    (1.0, (255, 255, 255)),
]

_COOL_STOPS: list[ColorStop] = [
    (0.0, (8, 29, 88)),
    (0.35, (34, 94, 168)),
    (0.7, (65, 182, 196)),
    (1.0, (224, 243, 248)),
]

_GREEN_STOPS: list[ColorStop] = [
    (0.0, (10, 15, 10)),
    (0.35, (0, 90, 50)),
    (0.7, (65, 171, 93)),
    (1.0, (229, 245, 224)),
]

# Two halves pivoting at t=0.5: blue below, red above
_DIVERGING_STOPS: list[ColorStop] = [
    (0.0, (33, 102, 172)),
    (0.25, (146, 197, 222)),
    (0.5, (247, 247, 247)),
    (0.75, (244, 165, 130)),
    (1.0, (178, 24, 43)),
]

_STOPS: dict[Colormap, list[ColorStop]] = {
    Colormap.DEFAULT: _DEFAULT_STOPS,
    Colormap.FIRE: _FIRE_STOPS,
    Colormap.COOL: _COOL_STOPS,
    Colormap.GREEN: _GREEN_STOPS,
    Colormap.DIVERGING: _DIVERGING_STOPS,
}


def _stop_table(colormap: Colormap | str) -> list[ColorStop]:
    cmap = Colormap.from_name(colormap)
    try:
        return _STOPS[cmap]
    except KeyError as e:
        raise ValueError(f"No stop table for colormap {cmap.value!r}") from e


def stops_for(colormap: Colormap | str) -> list[ColorStop]:
    """Return the stop table of a colormap (a copy, the tables are constants)."""
    return list(_stop_table(colormap))


def interpolate(colormap: Colormap | str, t: float) -> RGB:
    """
    Map a normalized scalar to an RGB triple.

    Each channel is interpolated linearly between the two stops bracketing t.
    Values of t outside [first stop, last stop] return the end stop colors,
    rounding is half up and results are clamped to [0, 255]. NaN is rejected.
    """
    t = float(t)
    if math.isnan(t):
        raise ValueError("Cannot interpolate a NaN position")
    stops = _stop_table(colormap)
    ts = np.array([s[0] for s in stops], dtype=float)
    channels = np.array([s[1] for s in stops], dtype=float)

    values = [np.interp(t, ts, channels[:, j]) for j in range(3)]
    rounded = np.clip(np.floor(np.array(values) + 0.5), 0, 255).astype(int)
    r, g, b = (int(c) for c in rounded)
    return r, g, b


def luminance(rgb: RGB) -> float:
    r, g, b = rgb
    return 0.299 * r + 0.587 * g + 0.114 * b


def label_color(rgb: RGB) -> str:
    """Dark background -> light text, otherwise dark text."""
    if luminance(rgb) < LUMINANCE_THRESHOLD:
        return LIGHT_LABEL
    return DARK_LABEL


def rgb_to_css(rgb: RGB) -> str:
    r, g, b = rgb
    return f"rgb({r},{g},{b})"


def rgb_to_hex(rgb: RGB) -> str:
    r, g, b = rgb
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hx: str) -> RGB:
    s = hx.strip().lstrip("#")
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        raise ValueError(f"Not a hex color: {hx!r}")
    try:
        return int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)
    except ValueError as e:
        raise ValueError(f"Not a hex color: {hx!r}") from e


def css_gradient(
    colormap: Colormap | str,
    samples: tuple[float, ...] = (0.0, 0.25, 0.5, 0.75, 1.0),
) -> str:
    """CSS linear-gradient sampling the colormap left (low) to right (high)."""
    colors = ", ".join(rgb_to_css(interpolate(colormap, t)) for t in samples)
    return f"linear-gradient(to right, {colors})"
