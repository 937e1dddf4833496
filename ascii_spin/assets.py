"""Built-in default image: a whale drawn on a transparent canvas."""

import io
from functools import lru_cache

from PIL import Image, ImageDraw

# ==============================================================================
# 1. SETUP
# ==============================================================================
CANVAS_SIZE = (300, 200)
CLEAR = (0, 0, 0, 0)
WHALE_COLOR = (20, 60, 160, 255)
EYE_COLOR = (255, 255, 255, 255)  # Near-white, drops out when sampled


@lru_cache(maxsize=1)
def default_image_bytes() -> bytes:
    """PNG bytes of the default logo, fed through the normal decode path."""
    img = Image.new("RGBA", CANVAS_SIZE, CLEAR)
    draw = ImageDraw.Draw(img)

    # Body
    draw.ellipse([40, 70, 230, 170], fill=WHALE_COLOR)
    # Tail: wedge from the body out to two flukes
    draw.polygon([(215, 120), (270, 70), (285, 95), (255, 110), (290, 130), (270, 150)], fill=WHALE_COLOR)
    # Spout
    draw.line([(110, 70), (110, 35)], fill=WHALE_COLOR, width=6)
    draw.line([(110, 40), (90, 20)], fill=WHALE_COLOR, width=5)
    draw.line([(110, 40), (130, 20)], fill=WHALE_COLOR, width=5)
    # Eye
    draw.ellipse([75, 105, 87, 117], fill=EYE_COLOR)

    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()
