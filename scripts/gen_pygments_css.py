"""Write the Pygments stylesheet used for highlighted code blocks to a file.

    python scripts/gen_pygments_css.py [STYLE] [OUTPUT]
"""
import sys

from redwood.core.config import get_settings
from redwood.markdown.highlight import highlight_css

style = sys.argv[1] if len(sys.argv) > 1 else get_settings().pygments_style
out = sys.argv[2] if len(sys.argv) > 2 else "pygments.css"
with open(out, "w", encoding="utf-8") as f:
    f.write(highlight_css(style))
print(f"Written {out} ({style})")
