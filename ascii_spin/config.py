from dataclasses import dataclass, replace

# ==============================================================================
# 1. CONFIGURATION
# ==============================================================================
# --- SAMPLER ---
SAMPLE_SIZE = 150   # Analysis grid bound (higher = more resolution, slower)
DENSITY = 2         # Pixel stride (higher = faster, less detail)
DEPTH = 15          # How "thick" the extrusion is
Z_STEP = 3          # Spacing between extruded layers
ALPHA_MIN = 50      # Pixel must be more opaque than this...
BRIGHTNESS_MAX = 250  # ...and darker than this to become geometry

# --- SCREEN ---
RENDER_WIDTH = 100
RENDER_HEIGHT = 50
ASPECT = 0.55       # Character cells are taller than wide

# --- CAMERA ---
FOV = 80
CAMERA_DIST = 150   # Roughly 1x the analysis grid
TILT_X = 0.2        # Fixed downward viewing angle (radians)
SPEED = 0.015       # Rotation per frame (radians)
FPS = 60

# --- SHADING ---
# Ramp ordered light -> heavy. Near points pick from the heavy end.
CHAR_MAP = " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"
DEPTH_OFFSET = 30
DEPTH_SPAN = 60

# --- COLORS ---
BG = "#0066FF"
COLOR = "#FFFFFF"


@dataclass(frozen=True)
class Config:
    """Every tunable of the sampler and renderer, fixed for the process."""

    sample_size: int = SAMPLE_SIZE
    density: int = DENSITY
    depth: float = DEPTH
    z_step: float = Z_STEP
    alpha_min: int = ALPHA_MIN
    brightness_max: float = BRIGHTNESS_MAX
    render_width: int = RENDER_WIDTH
    render_height: int = RENDER_HEIGHT
    aspect: float = ASPECT
    fov: float = FOV
    camera_dist: float = CAMERA_DIST
    tilt_x: float = TILT_X
    speed: float = SPEED
    fps: float = FPS
    char_map: str = CHAR_MAP
    depth_offset: float = DEPTH_OFFSET
    depth_span: float = DEPTH_SPAN
    bg: str = BG
    color: str = COLOR

    def __post_init__(self):
        if not self.char_map:
            raise ValueError("char_map must contain at least one glyph")
        if self.sample_size < 1:
            raise ValueError("sample_size must be a positive integer")
        if self.density < 1:
            raise ValueError("density must be a positive integer")
        if self.depth < 0:
            raise ValueError("depth must not be negative")
        if self.z_step <= 0:
            raise ValueError("z_step must be positive")
        if self.render_width < 1 or self.render_height < 1:
            raise ValueError("render_width and render_height must be positive integers")
        if self.depth_span <= 0:
            raise ValueError("depth_span must be positive")
        if self.fps <= 0:
            raise ValueError("fps must be positive")

    @property
    def layers(self) -> int:
        """Number of extruded points per qualifying pixel."""
        return int(self.depth // self.z_step) + 1

    @property
    def cells(self) -> int:
        return self.render_width * self.render_height

    def replace(self, **changes) -> "Config":
        return replace(self, **changes)


DEFAULT_CONFIG = Config()
