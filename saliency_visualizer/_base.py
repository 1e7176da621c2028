from __future__ import annotations

import abc
from pathlib import Path
from typing import IO, Any, Union

from saliency_visualizer.colormap import RGB, Colormap, hex_to_rgb
from saliency_visualizer.parse import ParseResult, parse_dictionary, parse_pairs
from saliency_visualizer.projector import PLACEHOLDER_COLOR, HoverState, project_pairs, project_text
from saliency_visualizer.tokens import Segment
from saliency_visualizer.util import ensure_text, format_value

Source = Union[str, bytes, Path, IO]


class VisualizerException(Exception):
    """
    Domain-specific error for visualizer configuration and rendering.

    Raised when:
    - configuration is invalid (unknown colormap, malformed placeholder color),
    - the requested output format is unsupported,
    - a spec has a missing or unknown mode,
    - input cannot be parsed or renders nothing in strict mode.
    """
    pass


# ---------- Base visualizer ----------

class Visualizer(abc.ABC):
    """
    Base class for saliency visualizers.

    Responsibilities:
    - hold the colormap and placeholder configuration,
    - parse input and project it onto resolved segments (build),
    - offer an HTML page wrapper (UTF‑8 meta) for fragments.

    Modes:
    - PAIRS: a JSON array of [token, value] pairs
    - TEXT: free text plus a JSON object mapping tokens to values

    Contract:
    - build never raises for bad input unless strict=True; a parse failure
      yields a spec with no segments, the default range and an error message.
    - visualize and render return a single string, always.
    """
    PAIRS: str = "PAIRS"
    TEXT: str = "TEXT"

    def __init__(
        self,
        colormap: Colormap | str = Colormap.DEFAULT,
        *,
        placeholder_color: str | RGB | None = None,
        page: bool = False,
        strict: bool = False,
    ):
        self.colormap = colormap
        self.placeholder_color = placeholder_color
        self._page = page
        self._strict = strict

    @property
    def colormap(self) -> Colormap:
        """Active colormap."""
        return self._colormap

    @colormap.setter
    def colormap(self, value: Colormap | str) -> None:
        try:
            self._colormap = Colormap.from_name(value)
        except ValueError as e:
            raise VisualizerException(str(e)) from e

    @property
    def placeholder_color(self) -> RGB:
        """Background for tokens without a saliency value."""
        return self._placeholder_color

    @placeholder_color.setter
    def placeholder_color(self, value: str | RGB | None) -> None:
        if value is None:
            self._placeholder_color = PLACEHOLDER_COLOR
        elif isinstance(value, str):
            try:
                self._placeholder_color = hex_to_rgb(value)
            except ValueError as e:
                raise VisualizerException(str(e)) from e
        else:
            r, g, b = value
            self._placeholder_color = (int(r), int(g), int(b))

    # ------------- build -------------

    def build(
        self,
        source: Source,
        dictionary: Source | None = None,
        *,
        hover: HoverState | None = None,
    ) -> dict[str, Any]:
        """
        Parse the input and resolve it into display segments.

        Parameters:
        - source: pair-list JSON (PAIRS mode) or free text (TEXT mode)
        - dictionary: JSON object of token values; selects TEXT mode when given
        - hover: caller-owned hover state, used to flag the hovered token

        Returns:
        - {'mode': 'PAIRS'|'TEXT', 'segments': list[Segment], 'records': list[TokenRecord],
           'range': ValueRange, 'colormap': Colormap, 'error': str|None}

        Errors:
        - VisualizerException in strict mode on parse failure or empty output.
        """
        if dictionary is None:
            mode = Visualizer.PAIRS
            source_text, error = self._read(source)
            result = parse_pairs(source_text) if error is None else ParseResult.failure(error)
            segments = project_pairs(
                result.records,
                result.value_range,
                colormap=self._colormap,
                hover=hover,
                placeholder_color=self._placeholder_color,
            )
        else:
            mode = Visualizer.TEXT
            dictionary_text, error = self._read(dictionary)
            result = parse_dictionary(dictionary_text) if error is None else ParseResult.failure(error)
            text = ""
            if result.ok:
                text, error = self._read(source)
                if error is not None:
                    result = ParseResult.failure(error)
                    text = ""
            segments = project_text(
                text,
                result.dictionary,
                result.value_range,
                colormap=self._colormap,
                hover=hover,
                placeholder_color=self._placeholder_color,
            )

        if self._strict:
            self._check_strict(result, segments)

        return {
            "mode": mode,
            "segments": segments,
            "records": result.records,
            "range": result.value_range,
            "colormap": self._colormap,
            "error": result.error,
        }

    @staticmethod
    def _read(source: Source) -> tuple[str, str | None]:
        """Decode an input source; undecodable bytes become a parse error message."""
        try:
            return ensure_text(source), None
        except UnicodeDecodeError as e:
            return "", f"Input is not valid UTF-8: {e.reason} at byte {e.start}"

    def _check_strict(self, result: ParseResult, segments: list[Segment]) -> None:
        if not result.ok:
            raise VisualizerException(f"Could not parse input: {result.error}")
        if not segments:
            raise VisualizerException("Nothing to render: input produced no segments.")

    # ------------- helpers -------------

    @staticmethod
    def hover_info(spec: dict[str, Any], hover: HoverState | None) -> str:
        """Describe the hovered token of a built spec for a status line."""
        if hover is None or hover.token_index is None:
            return "Hover over a token"
        idx = hover.token_index
        if spec.get("mode") == Visualizer.PAIRS:
            records = spec.get("records", [])
            if not 0 <= idx < len(records):
                return "Hover over a token"
            raw, value = records[idx].raw, records[idx].value
        else:
            hits = [s for s in spec.get("segments", []) if s.token_index == idx]
            if not hits:
                return "Hover over a token"
            raw, value = hits[0].value, hits[0].saliency
        if value is None:
            return f'"{raw}"  not in dictionary'
        return f'"{raw}"  value: {format_value(value)}'

    @staticmethod
    def _wrap_html_page(fragment: str, title: str = "Visualizer") -> str:
        """Wrap an HTML fragment into a full document with UTF‑8 meta."""
        return (
            "<!doctype html>\n"
            "<html lang=\"en\">\n"
            "<head>\n<meta charset=\"utf-8\">\n"
            f"<title>{title}</title>\n</head>\n<body>\n"
            f"{fragment}\n"
            "</body>\n</html>"
        )

    @abc.abstractmethod
    def render(self, spec: dict[str, Any], *, output_format: str) -> str:
        """Render a built spec to the requested format (subclasses validate it)."""
        raise NotImplementedError

    def visualize(
        self,
        source: Source,
        dictionary: Source | None = None,
        *,
        hover: HoverState | None = None,
        output_format: str = "html",
    ) -> str:
        """Convenience: build + render (returns str)."""
        spec = self.build(source, dictionary, hover=hover)
        return self.render(spec, output_format=output_format)
