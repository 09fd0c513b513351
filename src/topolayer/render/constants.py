"""Rendering constants shared by the SVG renderers."""

GLOW_FILTER_ID: str = "glow"
GLOW_FILTER_REGION: tuple[str, str, str, str] = ("-40%", "-40%", "180%", "180%")

# Arrow marker viewBox is 10x6 with the tip at (10, 3)
MARKER_WIDTH: float = 8.0
MARKER_HEIGHT: float = 6.0
MARKER_PATH: str = "M0,0 L10,3 L0,6 Z"

BADGE_CORNER_RADIUS: float = 3.0
LEGEND_SWATCH_RADIUS: float = 2.0

RADIAL_LABEL_HEIGHT: float = 12.0
RADIAL_LABEL_FONT_SIZE: float = 7.0
RADIAL_NAME_FONT_SIZE: float = 10.0
RADIAL_TYPE_FONT_SIZE: float = 8.0
RADIAL_CENTER_NAME_FONT_SIZE: float = 14.0
RADIAL_CENTER_TYPE_FONT_SIZE: float = 11.0
