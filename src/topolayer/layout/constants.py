"""Layout constants for the layered topology engine.

Canvas sizing, row spacing, and decoration geometry. Values are in SVG
user units.
"""

# --- Node and row defaults ---
NODE_WIDTH: float = 72.0
NODE_HEIGHT: float = 44.0
LAYER_GAP: float = 72.0
NODE_GAP: float = 20.0

# --- Canvas ---
TOP_MARGIN: float = 20.0
ROW_PADDING: float = 8.0  # Below each node row, before the next row or caption
BOTTOM_MARGIN: float = 24.0  # Leaves room for badges hanging under the last row
EDGE_LABEL_OVERHANG: float = 40.0  # Horizontal slack for edge labels right of a curve
MIN_CANVAS_WIDTH: float = 240.0
MIN_CANVAS_HEIGHT: float = 120.0

# --- Inter-layer captions ---
CAPTION_ROW_HEIGHT: float = 22.0
CAPTION_BASELINE_OFFSET: float = 4.0

# --- Legend strip ---
LEGEND_ROW_HEIGHT: float = 32.0
LEGEND_BOTTOM_OFFSET: float = 16.0  # Strip centerline above the canvas bottom
LEGEND_SWATCH_SIZE: float = 8.0
LEGEND_TEXT_GAP: float = 12.0  # Swatch left edge to label start
LEGEND_CHAR_WIDTH: float = 6.0
LEGEND_ENTRY_PADDING: float = 24.0

# --- Badges ---
BADGE_CHAR_WIDTH: float = 5.5
BADGE_PADDING: float = 10.0
BADGE_HEIGHT: float = 14.0
BADGE_GAP: float = 4.0  # Node box bottom to badge top

# --- Node decoration ---
NODE_CORNER_RADIUS: float = 6.0
GLOW_SPREAD: float = 3.0
GLOW_CORNER_RADIUS: float = 8.0
SUBLABEL_LIFT: float = 4.0  # Primary label moves up when a sublabel is present
SUBLABEL_DROP: float = 10.0

# --- Edges ---
DEFAULT_EDGE_COLOR: str = "#71717a"
EDGE_LABEL_DX: float = 8.0

# --- Radial instance topology ---
CENTER_NODE_SIZE: float = 120.0
RING_NODE_SIZE: float = 90.0
RING_OFFSETS: tuple[tuple[float, float], ...] = (
    (-120.0, -140.0),
    (120.0, -140.0),
    (-180.0, 0.0),
    (180.0, 0.0),
    (-120.0, 140.0),
    (120.0, 140.0),
)
RADIAL_LABEL_MIN_WIDTH: float = 20.0
RADIAL_LABEL_WIDTH_FRACTION: float = 0.5
RADIAL_MARGIN: float = 40.0
