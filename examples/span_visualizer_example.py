import tempfile
import webbrowser
from pathlib import Path

from saliency_visualizer import HoverState, SaliencySpanVisualizer

PAIRS = r"""[
  ["Ċ", 9.5],
  ["You", 1.0],
  ["Ġare", 0.9],
  ["Ġa", 4.0],
  ["Ġhelpful", 2.5],
  ["Ġassistant", 1.8],
  [".Ċ", 1.4],
  ["Command", 11.1],
  [":Ċ", 7.3],
  ["Go", 19.6],
  ["Ġpress", 16.6],
  ["Ġthat", 8.4],
  ["Ġswitch", 12.0]
]"""

span_vis = SaliencySpanVisualizer("default", page=True)

# Highlight "Go" as if the pointer rested on it
hover = HoverState()
hover.enter(9)

spec = span_vis.build(PAIRS, hover=hover)
print(span_vis.hover_info(spec, hover))
html = span_vis.render(spec, output_format="html")

# Render HTML in Browser
with tempfile.NamedTemporaryFile('w', delete=False, suffix='.html', encoding='utf-8') as f:
    f.write(html)
    url = Path(f.name).as_uri()
webbrowser.open(url)
