"""Print a full turn of the default (or a given) image as 12 ASCII frames.

Needs the ascii_spin package installed (pip install -e .); numpy and pillow come with it.
"""

import sys

import numpy as np

from ascii_spin.config import DEFAULT_CONFIG
from ascii_spin.assets import default_image_bytes
from ascii_spin.renderer import SceneRenderer
from ascii_spin.sampler import load_point_cloud

# ==============================================================================
# 1. CONFIGURATION
# ==============================================================================
NUM_FRAMES = 12  # 30 degrees per frame

# Smaller grid so a full turn fits in a scrollback
PREVIEW_CONFIG = DEFAULT_CONFIG.replace(render_width=60, render_height=24, sample_size=90, camera_dist=100, fov=50)

# ==============================================================================
# 2. MAIN
# ==============================================================================
if __name__ == "__main__":
    if len(sys.argv) > 1:
        with open(sys.argv[1], "rb") as f:
            data = f.read()
    else:
        data = default_image_bytes()

    cloud = load_point_cloud(data, PREVIEW_CONFIG)
    print(f"Loaded {len(cloud)} points.")

    renderer = SceneRenderer(PREVIEW_CONFIG)
    for i in range(NUM_FRAMES):
        angle_deg = i * (360.0 / NUM_FRAMES)
        print(f"--- Frame {i}: Rotation {angle_deg:.1f} ---")
        print(renderer.render(cloud, np.radians(angle_deg)), end="")
