import json
from base64 import b64decode
from io import BytesIO

import pytest
from docx import Document

from saliency_visualizer import HoverState, Visualizer
from saliency_visualizer.colormap import Colormap
from saliency_visualizer.span import EMPTY_MESSAGE, DocxSaliencyVisualizer, SaliencySpanVisualizer
from saliency_visualizer._base import VisualizerException

from tests.fixtures import *


# ------------------------------
# SaliencySpanVisualizer: initialization
# ------------------------------

def test_span_visualizer_init():
    vis = SaliencySpanVisualizer()
    assert vis.colormap is Colormap.DEFAULT
    assert vis.legend
    assert vis.placeholder_color == (238, 238, 238)


def test_span_visualizer_init_with_colormap():
    vis = SaliencySpanVisualizer("cool", placeholder_color="#cccccc")
    assert vis.colormap is Colormap.COOL
    assert vis.placeholder_color == (204, 204, 204)


def test_span_visualizer_init_errors():
    with pytest.raises(VisualizerException):
        SaliencySpanVisualizer("viridis")
    with pytest.raises(VisualizerException):
        SaliencySpanVisualizer(placeholder_color="#nothex")
    vis = SaliencySpanVisualizer()
    with pytest.raises(VisualizerException):
        vis.colormap = "unknown"


# ------------------------------
# build
# ------------------------------

def test_span_visualizer_build_pairs(two_pairs_json):
    vis = SaliencySpanVisualizer()
    spec = vis.build(two_pairs_json)
    assert spec["mode"] == Visualizer.PAIRS
    assert spec["error"] is None
    assert (spec["range"].min, spec["range"].max) == (16.6, 19.6)
    assert [s.value for s in spec["segments"]] == ["Go", " ", "press"]


def test_span_visualizer_build_text(fox_text, fox_dictionary_json):
    vis = SaliencySpanVisualizer()
    spec = vis.build(fox_text, fox_dictionary_json)
    assert spec["mode"] == Visualizer.TEXT
    assert spec["records"] == []
    assert len(spec["segments"]) == 9


def test_span_visualizer_build_parse_error_degrades():
    vis = SaliencySpanVisualizer()
    spec = vis.build('{"not": "an array"}')
    assert spec["segments"] == []
    assert spec["error"] == "Expected a JSON array"
    assert (spec["range"].min, spec["range"].max) == (0.0, 1.0)


def test_span_visualizer_build_bad_dictionary_degrades(fox_text):
    spec = SaliencySpanVisualizer().build(fox_text, "[1]")
    assert spec["segments"] == []
    assert spec["error"] == "Expected a JSON object"


def test_span_visualizer_strict_raises():
    vis = SaliencySpanVisualizer(strict=True)
    with pytest.raises(VisualizerException):
        vis.build("not json")
    with pytest.raises(VisualizerException):
        vis.build("[]")


def test_span_visualizer_build_is_idempotent(pairs_json):
    vis = SaliencySpanVisualizer("green")
    assert vis.build(pairs_json) == vis.build(pairs_json)


# ------------------------------
# render: html
# ------------------------------

def test_span_visualizer_html(two_pairs_json):
    html = SaliencySpanVisualizer().visualize(two_pairs_json)
    assert "background:rgb(160,20,10);color:#ffffff" in html
    assert "background:rgb(248,248,245);color:#111111" in html
    assert 'data-token-index="0"' in html and 'data-token-index="1"' in html
    assert "<span> </span>" in html
    assert "saliency-legend" in html
    assert "16.60" in html and "19.60" in html


def test_span_visualizer_html_newlines_and_escaping():
    html = SaliencySpanVisualizer(legend=False).visualize('[["<b>", 1], [".\\u010a", 2], ["x", 3]]')
    assert "&lt;b&gt;" in html
    assert "<b>" not in html
    assert html.count("<br>") == 1
    assert "saliency-legend" not in html


def test_span_visualizer_html_hover(two_pairs_json):
    hover = HoverState()
    hover.enter(1)
    html = SaliencySpanVisualizer().visualize(two_pairs_json, hover=hover)
    assert html.count("saliency-token hovered") == 1
    assert "outline:1.5px solid" in html


def test_span_visualizer_html_missing_value_title(fox_text, fox_dictionary_json):
    html = SaliencySpanVisualizer().visualize(fox_text, fox_dictionary_json)
    assert 'title="not in dictionary"' in html
    assert 'title="0.9500"' in html
    assert "background:rgb(238,238,238)" in html


def test_span_visualizer_html_error_and_empty():
    vis = SaliencySpanVisualizer()
    html = vis.visualize("[oops")
    assert "saliency-error" in html
    assert EMPTY_MESSAGE not in html

    html = vis.visualize("[]")
    assert EMPTY_MESSAGE in html


def test_span_visualizer_html_page(two_pairs_json):
    html = SaliencySpanVisualizer(page=True).visualize(two_pairs_json)
    assert html.startswith("<!doctype html>")
    assert '<meta charset="utf-8">' in html


# ------------------------------
# render: json
# ------------------------------

def test_span_visualizer_json(two_pairs_json):
    out = json.loads(SaliencySpanVisualizer("fire").visualize(two_pairs_json, output_format="json"))
    assert out["mode"] == "PAIRS"
    assert out["colormap"] == "fire"
    assert out["range"] == {"min": 16.6, "max": 19.6}
    assert out["segments"][0]["color"] == [255, 255, 255]
    assert out["segments"][1] == {"type": "space", "value": " "}


def test_span_visualizer_invalid_output_format(two_pairs_json):
    vis = SaliencySpanVisualizer()
    with pytest.raises(VisualizerException):
        vis.visualize(two_pairs_json, output_format="svg")


def test_span_visualizer_invalid_spec():
    with pytest.raises(VisualizerException):
        SaliencySpanVisualizer().render({"segments": []})


# ------------------------------
# hover info
# ------------------------------

def test_hover_info_pairs(two_pairs_json):
    vis = SaliencySpanVisualizer()
    spec = vis.build(two_pairs_json)
    assert vis.hover_info(spec, None) == "Hover over a token"
    assert vis.hover_info(spec, HoverState(1)) == '"Ġpress"  value: 16.6000'
    assert vis.hover_info(spec, HoverState(7)) == "Hover over a token"


def test_hover_info_text(fox_text, fox_dictionary_json):
    vis = SaliencySpanVisualizer()
    spec = vis.build(fox_text, fox_dictionary_json)
    assert vis.hover_info(spec, HoverState(4)) == '"fox,"  value: 0.9500'
    assert vis.hover_info(spec, HoverState(8)) == '"zzz"  not in dictionary'


# ------------------------------
# DocxSaliencyVisualizer
# ------------------------------

def _load_docx(b64: str):
    return Document(BytesIO(b64decode(b64)))


def test_docx_visualizer(two_pairs_json):
    doc = _load_docx(DocxSaliencyVisualizer().visualize(two_pairs_json))
    para = doc.paragraphs[-1]
    runs = {r.text: r for r in para.runs}
    assert set(runs) >= {"Go", " ", "press"}
    assert 'w:fill="A0140A"' in runs["Go"]._element.xml
    assert str(runs["Go"].font.color.rgb) == "FFFFFF"
    assert 'w:fill="F8F8F5"' in runs["press"]._element.xml
    assert "w:shd" not in runs[" "]._element.xml


def test_docx_visualizer_newline_break():
    doc = _load_docx(DocxSaliencyVisualizer().visualize('[["a", 1], [".\\u010a", 2], ["b", 3]]'))
    assert "<w:br/>" in doc.paragraphs[-1]._element.xml


def test_docx_visualizer_error_paragraph():
    doc = _load_docx(DocxSaliencyVisualizer().visualize("nope"))
    assert doc.paragraphs[0].text.startswith("⚠ Invalid JSON")


def test_docx_visualizer_invalid_output_format(two_pairs_json):
    with pytest.raises(VisualizerException):
        DocxSaliencyVisualizer().visualize(two_pairs_json, output_format="html")


# ------------------------------
# undecodable input
# ------------------------------

def test_span_visualizer_build_invalid_utf8_degrades():
    spec = SaliencySpanVisualizer().build(b'[["\xff", 1]]')
    assert spec["segments"] == []
    assert spec["error"].startswith("Input is not valid UTF-8")
    assert (spec["range"].min, spec["range"].max) == (0.0, 1.0)


def test_span_visualizer_build_invalid_utf8_text_mode(fox_dictionary_json):
    vis = SaliencySpanVisualizer()
    spec = vis.build(b"fox \xff", fox_dictionary_json)
    assert spec["segments"] == []
    assert spec["error"].startswith("Input is not valid UTF-8")

    spec = vis.build("fox", b"{\xfe}")
    assert spec["error"].startswith("Input is not valid UTF-8")


def test_span_visualizer_build_invalid_utf8_strict():
    with pytest.raises(VisualizerException):
        SaliencySpanVisualizer(strict=True).build(b'[["\xff", 1]]')
