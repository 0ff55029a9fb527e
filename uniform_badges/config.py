"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import pathlib


CANVAS_WIDTH = 1000.0
CANVAS_HEIGHT = 1200.0

DATA_DIR = pathlib.Path(__file__).resolve().parent / "data"
DEFAULT_SLOTS_PATH = DATA_DIR / "slots.json"
DEFAULT_ITEMS_PATH = DATA_DIR / "badges.json"
DEFAULT_PNG_NAME = "uniform-arrangement.png"

PYRAMID_MAX_ITEMS = 3
PYRAMID_TILE_WIDTH = 90.0
PYRAMID_TILE_HEIGHT = 60.0
PYRAMID_GAP = 8.0

MEDAL_TILE_WIDTH = 50.0
MEDAL_TILE_MAX_HEIGHT = 400.0
MEDAL_GAP = 10.0

STACK_TILE_HEIGHT = 36.0
STACK_GAP = 8.0

DEFAULT_FONT_FAMILY = "Inter, Arial, sans-serif"
DEFAULT_FONT_WEIGHT = 600
BOLD_WEIGHT_THRESHOLD = 600
FIT_REFERENCE_SIZE = 100.0
FIT_MIN_SIZE = 10
FIT_FALLBACK_SIZE = 18
FIT_PADDING = 8.0
FIT_MAX_HEIGHT_RATIO = 0.7
FIT_CHAR_WIDTH_RATIO = 0.6

SLOT_OVERLAY_COLOR = "#10b981"
SLOT_OVERLAY_ALPHA = 0.12
SLOT_LABEL_SIZE = 16.0
SLOT_LABEL_OFFSET_X = 6.0
SLOT_LABEL_OFFSET_Y = 16.0
BADGE_CORNER_RADIUS = 6.0
BADGE_TEXT_COLOR = "#ffffff"
BACKGROUND_BOX = (160.0, 0.0, 700.0, 1400.0)
PNG_DPI = 72


@dataclasses.dataclass
class RenderConfig:
	canvas_width: float
	canvas_height: float
	show_slots: bool
	draw_badges: bool
	background_path: pathlib.Path | None
	font_family: str
	font_weight: int
	png_dpi: int


#============================================
def default_render_config() -> RenderConfig:
	"""
	Build a render config with the stock canvas and fonts.

	Returns:
		RenderConfig.
	"""
	return RenderConfig(
		canvas_width=CANVAS_WIDTH,
		canvas_height=CANVAS_HEIGHT,
		show_slots=True,
		draw_badges=True,
		background_path=None,
		font_family=DEFAULT_FONT_FAMILY,
		font_weight=DEFAULT_FONT_WEIGHT,
		png_dpi=PNG_DPI,
	)
