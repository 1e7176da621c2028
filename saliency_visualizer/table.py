from __future__ import annotations

from typing import Any

import pandas as pd

from saliency_visualizer._base import Source, Visualizer, VisualizerException
from saliency_visualizer.colormap import rgb_to_hex
from saliency_visualizer.projector import HoverState
from saliency_visualizer.values import normalize


# ---------- Table visualizer ----------

class SaliencyTableVisualizer(Visualizer):
    """
    Tabular view of the scored tokens, one row per interactive token.

    Pipeline:
    - build: resolve segments (Visualizer.build) and tabulate them as a pandas DataFrame
    - render: export the DataFrame as HTML, CSV, JSON, or LaTeX (returns str)
    - visualize: build + render

    Columns: token_index, token, value, normalized, in_dictionary, color, label_color.
    A token split across several text segments (embedded newlines) is joined into one row,
    with its parts separated by "\\n".

    Strict mode:
    - If strict=True and the table is empty, render() raises VisualizerException.
    """
    COLUMNS = ["token_index", "token", "value", "normalized", "in_dictionary", "color", "label_color"]

    def __init__(
        self,
        colormap="default",
        *,
        default_render_options: dict[str, Any] | None = None,
        sort_by_value: bool = False,
        **kwargs,
    ):
        super().__init__(colormap, **kwargs)
        self._default_render_options = default_render_options or {}
        self._sort_by_value = sort_by_value

    def build_table(
        self,
        source: Source,
        dictionary: Source | None = None,
        *,
        hover: HoverState | None = None,
    ) -> pd.DataFrame:
        spec = self.build(source, dictionary, hover=hover)
        return self.tabulate(spec)

    def tabulate(self, spec: dict[str, Any]) -> pd.DataFrame:
        """Build the table spec (DataFrame) from a built segment spec."""
        rows: dict[int, dict[str, Any]] = {}
        for seg in spec["segments"]:
            if not seg.interactive:
                continue
            row = rows.get(seg.token_index)
            if row is not None:
                row["token"] += "\n" + seg.value
                continue
            rows[seg.token_index] = {
                "token_index": seg.token_index,
                "token": seg.value,
                "value": seg.saliency,
                "normalized": normalize(seg.saliency, spec["range"]),
                "in_dictionary": seg.saliency is not None,
                "color": rgb_to_hex(seg.color),
                "label_color": seg.label_color,
            }

        df = pd.DataFrame.from_records(list(rows.values()), columns=self.COLUMNS)
        if self._sort_by_value and not df.empty:
            df = df.sort_values(by=["value", "token_index"], ascending=[False, True], kind="mergesort")
        return df

    def render(
        self,
        spec: pd.DataFrame,
        *,
        output_format: str = "html",
        render_options: dict[str, Any] | None = None,
    ) -> str:
        """
        Export the table to the requested format.

        Supported formats:
        - 'html': returns an HTML fragment; wrap to a full page if page=True
        - 'csv': returns CSV text (no index)
        - 'json': returns JSON (records orientation)
        - 'latex': returns LaTeX tabular code

        Errors:
        - VisualizerException on unsupported format or empty result in strict mode.
        """
        fmt = output_format.lower()
        opts = {**self._default_render_options, **(render_options or {})}

        if spec.empty and self._strict:
            raise VisualizerException("SaliencyTableVisualizer: empty result (no tokens).")

        if fmt == "html":
            frag = spec.to_html(**({"index": False, "escape": True} | opts))
            return self._wrap_html_page(frag, "SaliencyTableVisualizer") if self._page else frag

        if fmt == "csv":
            return spec.to_csv(**({"index": False} | opts))

        if fmt == "json":
            return spec.to_json(**({"orient": "records", "force_ascii": False} | opts))

        if fmt == "latex":
            return spec.to_latex(**({"index": False, "escape": True} | opts))

        raise VisualizerException(f"Unsupported table output format: {fmt}")

    def visualize(
        self,
        source: Source,
        dictionary: Source | None = None,
        *,
        hover: HoverState | None = None,
        output_format: str = "html",
    ) -> str:
        """Convenience wrapper: build + render."""
        df = self.build_table(source, dictionary, hover=hover)
        return self.render(df, output_format=output_format)
