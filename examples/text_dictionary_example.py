import json
import tempfile
import webbrowser
from pathlib import Path

from saliency_visualizer import SaliencySpanVisualizer

text = "The quick brown fox,\njumps over  the lazy dog."
dictionary = json.dumps({"The": 0.2, "quick": 0.6, "brown": 0.1, "fox": 0.95, "jumps": 0.7, "lazy": 0.4, "dog": 0.8})

# Try the other colormaps: "fire", "cool", "green", "diverging"
span_vis = SaliencySpanVisualizer("cool", page=True)
html = span_vis.visualize(text, dictionary, output_format="html")

with tempfile.NamedTemporaryFile('w', delete=False, suffix='.html', encoding='utf-8') as f:
    f.write(html)
    url = Path(f.name).as_uri()
webbrowser.open(url)
