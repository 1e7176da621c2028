"""
saliency_visualizer: Render token saliency as color-coded inline spans.

A Python library that turns (token, value) pairs, or free text scored through
a token dictionary, into an ordered list of colored, whitespace-preserving
segments, and renders them as HTML, JSON, DOCX, or tables.

Quick start:
    >>> from saliency_visualizer import SaliencySpanVisualizer
    >>> vis = SaliencySpanVisualizer("fire")
    >>> html = vis.visualize('[["Go", 19.6], ["\\u0120press", 16.6]]')
    >>> print(html)

Main visualizers:
    - SaliencySpanVisualizer: inline HTML spans (or the segment list as JSON)
    - DocxSaliencyVisualizer: DOCX document with shaded runs
    - SaliencyTableVisualizer: CSV/HTML/JSON/LaTeX table of scored tokens
"""

from saliency_visualizer._base import Visualizer, VisualizerException
from saliency_visualizer.colormap import Colormap, interpolate, label_color, luminance
from saliency_visualizer.parse import ParseResult, TokenRecord, parse_dictionary, parse_pairs
from saliency_visualizer.projector import HoverState, project_pairs, project_text
from saliency_visualizer.span import DocxSaliencyVisualizer, SaliencySpanVisualizer
from saliency_visualizer.table import SaliencyTableVisualizer
from saliency_visualizer.tokens import Segment, token_segments, tokenize_text
from saliency_visualizer.values import ValueRange, lookup, normalize

__version__ = "0.1.0"

__all__ = [
    "Visualizer",
    "VisualizerException",
    "Colormap",
    "interpolate",
    "label_color",
    "luminance",
    "ParseResult",
    "TokenRecord",
    "parse_pairs",
    "parse_dictionary",
    "HoverState",
    "project_pairs",
    "project_text",
    "Segment",
    "token_segments",
    "tokenize_text",
    "ValueRange",
    "normalize",
    "lookup",
    "SaliencySpanVisualizer",
    "DocxSaliencyVisualizer",
    "SaliencyTableVisualizer",
]
