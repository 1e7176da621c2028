import tempfile
from base64 import b64decode
from pathlib import Path

from saliency_visualizer import DocxSaliencyVisualizer

with tempfile.NamedTemporaryFile('w', delete=False, suffix='.json', encoding='utf-8') as f:
    f.write('[["Go", 19.6], ["\\u0120press", 16.6], [".\\u010a", 3.0], ["Done", 10.0]]')
    pairs = Path(f.name)

docx_vis = DocxSaliencyVisualizer("green")
b64 = docx_vis.visualize(pairs)

with tempfile.NamedTemporaryFile('wb', delete=False, suffix='.docx') as f:
    f.write(b64decode(b64))
    print(f"Wrote {f.name}")
