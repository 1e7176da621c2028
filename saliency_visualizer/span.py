from __future__ import annotations

import html
import json
from base64 import b64encode
from io import BytesIO
from typing import Any

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import RGBColor

from saliency_visualizer._base import Source, Visualizer, VisualizerException
from saliency_visualizer.colormap import css_gradient, hex_to_rgb, rgb_to_css, rgb_to_hex
from saliency_visualizer.projector import HoverState
from saliency_visualizer.tokens import Segment
from saliency_visualizer.util import format_value

EMPTY_MESSAGE = "Paste your token–value pairs to visualize."


# ---------- Span visualizer (HTML) ----------

class SaliencySpanVisualizer(Visualizer):
    """
    Inline token highlighting as HTML.

    Each interactive token becomes a <span> with the colormap background and a
    contrasting label color. Whitespace runs are kept verbatim and newline
    segments become <br>. The hovered token (if any) gets an outline.

    Supported formats:
    - 'html': an HTML fragment, or a full page if page=True
    - 'json': the resolved segment list
    """

    def __init__(self, colormap="default", *, legend: bool = True, **kwargs):
        super().__init__(colormap, **kwargs)
        self._legend = legend

    @property
    def legend(self) -> bool:
        """Whether the HTML output starts with a min/max gradient legend."""
        return self._legend

    @legend.setter
    def legend(self, value: bool):
        self._legend = value

    def render(
        self,
        spec: dict[str, Any],
        *,
        output_format: str = "html",
    ) -> str:
        """
        Render a built spec.

        Errors:
        - VisualizerException on unsupported format or invalid spec mode.
        """
        fmt = output_format.lower()
        if spec.get("mode") not in (Visualizer.PAIRS, Visualizer.TEXT):
            raise VisualizerException("Invalid spec: missing or unknown mode")

        if fmt == "json":
            return json.dumps(
                {
                    "mode": spec["mode"],
                    "colormap": spec["colormap"].value,
                    "range": {"min": spec["range"].min, "max": spec["range"].max},
                    "error": spec["error"],
                    "segments": [seg.to_dict() for seg in spec["segments"]],
                },
                ensure_ascii=False,
            )

        if fmt != "html":
            raise VisualizerException("SaliencySpanVisualizer supports only 'html' and 'json' output_format")

        parts: list[str] = []
        if self._legend:
            parts.append(self._render_legend(spec))
        if spec["error"]:
            parts.append(
                f'<p class="saliency-error" style="color:#d94f3c;font-size:11px;">⚠ {html.escape(spec["error"])}</p>'
            )
        if spec["segments"]:
            body = "".join(self._render_segment(seg) for seg in spec["segments"])
            parts.append(
                '<div class="saliency-text" style="white-space:pre-wrap;line-height:2.6;'
                f'font-size:19px;font-family:Georgia, serif;color:#111;">{body}</div>'
            )
        elif not spec["error"]:
            parts.append(f'<p class="saliency-empty" style="color:#bbb;font-style:italic;">{EMPTY_MESSAGE}</p>')

        frag = "\n".join(parts)
        return self._wrap_html_page(frag, "SaliencyViewer") if self._page else frag

    # ------------- private helpers -------------

    @staticmethod
    def _render_segment(seg: Segment) -> str:
        if seg.kind == Segment.NEWLINE:
            return "<br>"
        if not seg.interactive:
            return f"<span>{html.escape(seg.value)}</span>"

        css = rgb_to_css(seg.color)
        style = (
            f"background:{css};color:{seg.label_color};padding:2px 4px;"
            "border-radius:3px;display:inline-block;"
        )
        if seg.hovered:
            r, g, b = seg.color
            style += (
                "transform:translateY(-1px);"
                f"box-shadow:0 3px 12px rgba({r},{g},{b},0.45);"
                "outline:1.5px solid rgba(0,0,0,0.15);"
            )
        title = "not in dictionary" if seg.saliency is None else format_value(seg.saliency)
        classes = "saliency-token hovered" if seg.hovered else "saliency-token"
        return (
            f'<span class="{classes}" data-token-index="{seg.token_index}" '
            f'title="{html.escape(title)}" style="{style}">{html.escape(seg.value)}</span>'
        )

    @staticmethod
    def _render_legend(spec: dict[str, Any]) -> str:
        rng = spec["range"]
        return (
            '<div class="saliency-legend" style="display:flex;align-items:center;gap:8px;">'
            f'<span style="font-size:10px;font-family:monospace;">{rng.min:.2f}</span>'
            f'<div style="flex:1;height:10px;border-radius:4px;background:{css_gradient(spec["colormap"])};"></div>'
            f'<span style="font-size:10px;font-family:monospace;">{rng.max:.2f}</span>'
            "</div>"
        )


# ---------- DOCX span visualizer (Word document with shaded runs) ----------

class DocxSaliencyVisualizer(Visualizer):
    """
    Saliency visualization as a Word (.docx) document.

    Each interactive token becomes a run shaded with its exact background color
    and set in its label color. Whitespace runs are plain text and newline
    segments become line breaks inside a single paragraph.

    Contract:
    - render: supports 'docx' only; returns base64-encoded DOCX bytes as a string.
    - visualize: build + render (returns the base64-encoded DOCX string).
    """

    def render(
        self,
        spec: dict[str, Any],
        *,
        output_format: str = "docx",
    ) -> str:
        """
        Render the built spec to an in-memory .docx and return base64-encoded bytes.

        Errors:
        - VisualizerException on unsupported format or invalid spec mode.
        """
        fmt = output_format.lower()
        if fmt != "docx":
            raise VisualizerException("DocxSaliencyVisualizer supports only 'docx' output_format")
        if spec.get("mode") not in (Visualizer.PAIRS, Visualizer.TEXT):
            raise VisualizerException("Invalid spec: missing or unknown mode")

        doc = Document()
        if spec["error"]:
            doc.add_paragraph(f"⚠ {spec['error']}")
        para = doc.add_paragraph()

        for seg in spec["segments"]:
            if seg.kind == Segment.NEWLINE:
                para.add_run().add_break()
                continue
            run = para.add_run(seg.value)
            if seg.interactive:
                self._shade(run, rgb_to_hex(seg.color))
                run.font.color.rgb = RGBColor(*hex_to_rgb(seg.label_color))
                if seg.hovered:
                    run.font.bold = True

        buf = BytesIO()
        doc.save(buf)
        buf.seek(0)
        return b64encode(buf.getvalue()).decode("ascii")

    def visualize(
        self,
        source: Source,
        dictionary: Source | None = None,
        *,
        hover: HoverState | None = None,
        output_format: str = "docx",
    ) -> str:
        """Convenience: build + render (returns the base64-encoded DOCX string)."""
        spec = self.build(source, dictionary, hover=hover)
        return self.render(spec, output_format=output_format)

    @staticmethod
    def _shade(run, fill_hex: str) -> None:
        """Set a run's background via <w:shd w:fill=...>; Word highlight colors are a fixed palette."""
        rpr = run._element.get_or_add_rPr()
        shd = OxmlElement("w:shd")
        shd.set(qn("w:val"), "clear")
        shd.set(qn("w:color"), "auto")
        shd.set(qn("w:fill"), fill_hex.lstrip("#"))
        rpr.append(shd)
