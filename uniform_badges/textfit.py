"""
Font size fitting for badge labels.
"""

# Standard Library
import math
import typing

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import uniform_badges as ub
import uniform_badges.config


DEFAULT_FONT_FAMILY = ub.config.DEFAULT_FONT_FAMILY
DEFAULT_FONT_WEIGHT = ub.config.DEFAULT_FONT_WEIGHT
BOLD_WEIGHT_THRESHOLD = ub.config.BOLD_WEIGHT_THRESHOLD
FIT_REFERENCE_SIZE = ub.config.FIT_REFERENCE_SIZE
FIT_MIN_SIZE = ub.config.FIT_MIN_SIZE
FIT_FALLBACK_SIZE = ub.config.FIT_FALLBACK_SIZE
FIT_PADDING = ub.config.FIT_PADDING
FIT_MAX_HEIGHT_RATIO = ub.config.FIT_MAX_HEIGHT_RATIO
FIT_CHAR_WIDTH_RATIO = ub.config.FIT_CHAR_WIDTH_RATIO

# standard PDF faces keyed by (family, bold)
PDF_FONTS = {
	("sans", False): "Helvetica",
	("sans", True): "Helvetica-Bold",
	("serif", False): "Times-Roman",
	("serif", True): "Times-Bold",
	("mono", False): "Courier",
	("mono", True): "Courier-Bold",
}
SERIF_NAMES = ("serif", "times", "georgia", "garamond")
MONO_NAMES = ("monospace", "mono", "courier", "consolas", "menlo")


class TextMeasurer(typing.Protocol):
	def measure_width(self, text: str, font_size: float, weight: int | str, family: str) -> float:
		...


#============================================
def map_font_name(family: str, weight: int | str) -> str:
	"""
	Map a CSS font family list and weight to a standard PDF font.

	Args:
		family: CSS family list like "Inter, Arial, sans-serif".
		weight: Numeric weight or "bold"/"normal".

	Returns:
		ReportLab font name.
	"""
	if isinstance(weight, str):
		normalized = weight.strip().lower()
		if normalized.isdigit():
			is_bold = int(normalized) >= BOLD_WEIGHT_THRESHOLD
		else:
			is_bold = normalized in ("bold", "bolder")
	else:
		is_bold = weight >= BOLD_WEIGHT_THRESHOLD

	kind = "sans"
	for name in family.split(","):
		name = name.strip().strip("'\"").lower()
		if any(token in name for token in MONO_NAMES):
			kind = "mono"
			break
		# "Microsoft Sans Serif" is a sans face
		if "sans" in name:
			break
		if any(token in name for token in SERIF_NAMES):
			kind = "serif"
			break
	return PDF_FONTS[(kind, is_bold)]


class ReportLabMeasurer:
	"""
	Measure text with ReportLab's built-in font metrics.
	"""

	def measure_width(self, text: str, font_size: float, weight: int | str, family: str) -> float:
		font_name = map_font_name(family, weight)
		return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)


DEFAULT_MEASURER = ReportLabMeasurer()


#============================================
def fit_font_size(
	label: str,
	box_width: float,
	box_height: float,
	padding: float = FIT_PADDING,
	max_height_ratio: float = FIT_MAX_HEIGHT_RATIO,
	weight: int | str = DEFAULT_FONT_WEIGHT,
	family: str = DEFAULT_FONT_FAMILY,
	measurer: TextMeasurer | None = DEFAULT_MEASURER,
) -> int:
	"""
	Find the largest font size that keeps a label inside a box.

	Args:
		label: Label text.
		box_width: Box width.
		box_height: Box height.
		padding: Left/right padding inside the box.
		max_height_ratio: Text height as a fraction of box height.
		weight: Font weight.
		family: Font family list.
		measurer: Text measurement oracle, None when unavailable.

	Returns:
		Font size, never below the minimum size.
	"""
	max_by_height = max(FIT_MIN_SIZE, box_height * max_height_ratio)
	if measurer is None:
		return math.floor(min(FIT_FALLBACK_SIZE, max_by_height))

	measured = measurer.measure_width(label, FIT_REFERENCE_SIZE, weight, family)
	if not measured:
		measured = FIT_REFERENCE_SIZE * FIT_CHAR_WIDTH_RATIO * len(label)
	available_width = max(FIT_MIN_SIZE, box_width - padding * 2.0)
	if measured > 0:
		max_by_width = (available_width / measured) * FIT_REFERENCE_SIZE
	else:
		max_by_width = max_by_height
	return max(FIT_MIN_SIZE, math.floor(min(max_by_height, max_by_width)))
