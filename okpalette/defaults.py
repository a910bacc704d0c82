"""Central place for okpalette default settings."""

# Palette shape
DEFAULT_SHADE_COUNT: int = 10
MIN_SHADE_COUNT: int = 2
MAX_SHADE_COUNT: int = 20

# Initial base color until the host reports a selection
DEFAULT_BASE_COLOR: tuple[float, float, float] = (0.5, 0.1, 0.0)  # (L, C, H)

# Channel ranges (formula output is scaled into these)
LUMINANCE_RANGE: tuple[float, float] = (0.0, 1.0)
CHROMA_RANGE: tuple[float, float] = (0.0, 0.4)
HUE_RANGE: tuple[float, float] = (0.0, 360.0)

# Manual slider scales (slider units per channel range)
LUMINANCE_SLIDER_MAX: float = 100.0
CHROMA_SLIDER_MAX: float = 40.0
HUE_SLIDER_MAX: float = 360.0

# Curve parameter bounds; anything not listed uses DEFAULT_PARAM_BOUNDS
PARAM_BOUNDS: dict[str, tuple[float, float]] = {
    "k": (0.0, 2.0),
    "d": (0.0, 5.0),
}
DEFAULT_PARAM_BOUNDS: tuple[float, float] = (0.0, 1.0)
PARAM_SLIDER_MAX: float = 100.0

# Hue below this chroma is undefined; reported as 0
ACHROMATIC_CHROMA_EPSILON: float = 1e-6

# Host timing (seconds)
SELECTION_DEBOUNCE_DELAY: float = 0.1
INITIAL_COLOR_DELAY: float = 0.2

# Preview rectangles placed on the canvas
PREVIEW_RECT_WIDTH: float = 100.0
PREVIEW_RECT_HEIGHT: float = 100.0
PREVIEW_RECT_SPACING: float = 10.0

# Library assets
DEFAULT_ASSET_GROUP: str = "new-palette"

# Color naming
NAMING_HUE_TOLERANCE: float = 20.0
NAMING_ACHROMATIC_SATURATION: float = 0.1

# Cosmetic
DEFAULT_THEME: str = "light"
