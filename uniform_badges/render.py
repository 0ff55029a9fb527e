"""
Rendering of badge placements to PDF and PNG.
"""

# Standard Library
import json
import pathlib
import types

# PIP3 modules
import fitz
import PIL.Image
import reportlab.lib.utils
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import uniform_badges as ub
import uniform_badges.config
import uniform_badges.layout
import uniform_badges.textfit


Placement = ub.layout.Placement
LayoutResult = ub.layout.LayoutResult
RenderConfig = ub.config.RenderConfig

SLOT_OVERLAY_COLOR = ub.config.SLOT_OVERLAY_COLOR
SLOT_OVERLAY_ALPHA = ub.config.SLOT_OVERLAY_ALPHA
SLOT_LABEL_SIZE = ub.config.SLOT_LABEL_SIZE
SLOT_LABEL_OFFSET_X = ub.config.SLOT_LABEL_OFFSET_X
SLOT_LABEL_OFFSET_Y = ub.config.SLOT_LABEL_OFFSET_Y
BADGE_CORNER_RADIUS = ub.config.BADGE_CORNER_RADIUS
BADGE_TEXT_COLOR = ub.config.BADGE_TEXT_COLOR
BACKGROUND_BOX = ub.config.BACKGROUND_BOX


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC" or "#ABC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range, black when unparseable.
	"""
	if not value or not value.startswith("#"):
		return (0.0, 0.0, 0.0)
	digits = value[1:]
	if len(digits) == 3:
		digits = "".join(char * 2 for char in digits)
	if len(digits) != 6:
		return (0.0, 0.0, 0.0)
	try:
		red = int(digits[0:2], 16) / 255.0
		green = int(digits[2:4], 16) / 255.0
		blue = int(digits[4:6], 16) / 255.0
	except ValueError:
		return (0.0, 0.0, 0.0)
	return (red, green, blue)


#============================================
def flip_y(y: float, height: float, config: RenderConfig) -> float:
	"""
	Convert a top-left canvas y into a PDF bottom-left y.

	Args:
		y: Top edge in canvas units.
		height: Box height.
		config: Render configuration.

	Returns:
		Bottom edge in PDF units.
	"""
	return config.canvas_height - y - height


#============================================
def draw_background(pdf: reportlab.pdfgen.canvas.Canvas, path: pathlib.Path, config: RenderConfig) -> None:
	"""
	Draw the uniform template image, scaled to fit its box.

	Args:
		pdf: ReportLab canvas.
		path: Image path.
		config: Render configuration.
	"""
	image = PIL.Image.open(path)
	image.load()
	reader = reportlab.lib.utils.ImageReader(image)
	x, y, width, height = BACKGROUND_BOX
	pdf.drawImage(
		reader,
		x,
		flip_y(y, height, config),
		width=width,
		height=height,
		preserveAspectRatio=True,
		anchor="c",
		mask="auto",
	)


#============================================
def draw_slot_overlay(
	pdf: reportlab.pdfgen.canvas.Canvas,
	slots: types.MappingProxyType,
	config: RenderConfig,
) -> None:
	"""
	Draw translucent slot boxes with their names.

	Args:
		pdf: ReportLab canvas.
		slots: Slot table.
		config: Render configuration.
	"""
	pdf.saveState()
	pdf.setFillAlpha(SLOT_OVERLAY_ALPHA)
	overlay = parse_hex_color(SLOT_OVERLAY_COLOR)
	font_name = ub.textfit.map_font_name(config.font_family, 400)
	for slot in sorted(slots.values(), key=lambda entry: entry.z):
		pdf.setFillColorRGB(overlay[0], overlay[1], overlay[2])
		pdf.rect(slot.x, flip_y(slot.y, slot.height, config), slot.width, slot.height, stroke=0, fill=1)
		pdf.setFillColorRGB(0.0, 0.0, 0.0)
		pdf.setFont(font_name, SLOT_LABEL_SIZE)
		pdf.drawString(
			slot.x + SLOT_LABEL_OFFSET_X,
			config.canvas_height - (slot.y + SLOT_LABEL_OFFSET_Y),
			slot.slot_id,
		)
	pdf.restoreState()


#============================================
def draw_placement(
	pdf: reportlab.pdfgen.canvas.Canvas,
	placement: Placement,
	config: RenderConfig,
	measurer: ub.textfit.TextMeasurer | None,
) -> int:
	"""
	Draw one badge tile with its centered label.

	Args:
		pdf: ReportLab canvas.
		placement: Placement to draw.
		config: Render configuration.
		measurer: Text measurement oracle.

	Returns:
		Font size used for the label.
	"""
	fill = parse_hex_color(placement.color)
	pdf.setFillColorRGB(fill[0], fill[1], fill[2])
	bottom = flip_y(placement.y, placement.height, config)
	pdf.roundRect(
		placement.x,
		bottom,
		placement.width,
		placement.height,
		BADGE_CORNER_RADIUS,
		stroke=0,
		fill=1,
	)

	font_size = ub.textfit.fit_font_size(
		placement.label,
		placement.width,
		placement.height,
		weight=config.font_weight,
		family=config.font_family,
		measurer=measurer,
	)
	font_name = ub.textfit.map_font_name(config.font_family, config.font_weight)
	ascent = reportlab.pdfbase.pdfmetrics.getAscent(font_name) * font_size / 1000.0
	descent = reportlab.pdfbase.pdfmetrics.getDescent(font_name) * font_size / 1000.0
	center_x = placement.x + placement.width / 2.0
	center_y = bottom + placement.height / 2.0
	baseline_y = center_y - (ascent + descent) / 2.0

	text_color = parse_hex_color(BADGE_TEXT_COLOR)
	pdf.setFillColorRGB(text_color[0], text_color[1], text_color[2])
	pdf.setFont(font_name, font_size)
	pdf.drawCentredString(center_x, baseline_y, placement.label)
	return font_size


#============================================
def render_layout_pdf(
	result: LayoutResult,
	slots: types.MappingProxyType,
	output_path: pathlib.Path,
	config: RenderConfig,
	measurer: ub.textfit.TextMeasurer | None = ub.textfit.DEFAULT_MEASURER,
) -> dict[str, int]:
	"""
	Render the template and badge placements to a one-page PDF.

	Args:
		result: Layout result.
		slots: Slot table.
		output_path: Output PDF path.
		config: Render configuration.
		measurer: Text measurement oracle.

	Returns:
		Font sizes keyed by item id for drawn badges.
	"""
	pdf = reportlab.pdfgen.canvas.Canvas(
		str(output_path),
		pagesize=(config.canvas_width, config.canvas_height),
	)
	pdf.setFillColorRGB(1.0, 1.0, 1.0)
	pdf.rect(0, 0, config.canvas_width, config.canvas_height, stroke=0, fill=1)
	if config.background_path is not None:
		draw_background(pdf, config.background_path, config)
	if config.show_slots:
		draw_slot_overlay(pdf, slots, config)

	font_sizes: dict[str, int] = {}
	if config.draw_badges:
		for placement in ub.layout.placements_by_z(result.placements):
			font_sizes[placement.item_id] = draw_placement(pdf, placement, config, measurer)
	pdf.showPage()
	pdf.save()
	return font_sizes


#============================================
def rasterize_pdf(pdf_path: pathlib.Path, dpi: int) -> PIL.Image.Image:
	"""
	Render the first page of a PDF to an image.

	Args:
		pdf_path: PDF path.
		dpi: Raster resolution; 72 keeps one pixel per canvas unit.

	Returns:
		PIL image.
	"""
	scale = dpi / 72.0
	matrix = fitz.Matrix(scale, scale)
	with fitz.open(pdf_path) as document:
		pixmap = document[0].get_pixmap(matrix=matrix, alpha=False)
		image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	return image


#============================================
def export_png(pdf_path: pathlib.Path, png_path: pathlib.Path, config: RenderConfig) -> tuple[int, int]:
	"""
	Export a rendered PDF page as PNG.

	Args:
		pdf_path: Rendered PDF path.
		png_path: Output PNG path.
		config: Render configuration.

	Returns:
		Tuple of (width, height) in pixels.
	"""
	image = rasterize_pdf(pdf_path, config.png_dpi)
	image.save(png_path, format="PNG")
	return image.size


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	selected_ids: list[str],
	result: LayoutResult,
	font_sizes: dict[str, int],
	config: RenderConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		selected_ids: Selection in order.
		result: Layout result.
		font_sizes: Font sizes keyed by item id.
		config: Render configuration.
	"""
	placements = []
	for placement in result.placements:
		placements.append({
			"id": placement.item_id,
			"label": placement.label,
			"slot": placement.slot_id,
			"x": placement.x,
			"y": placement.y,
			"w": placement.width,
			"h": placement.height,
			"z": placement.z,
			"color": placement.color,
			"asset": placement.asset,
			"font_size": font_sizes.get(placement.item_id),
		})
	data = {
		"selection": list(selected_ids),
		"placements": placements,
		"warnings": list(result.warnings),
		"canvas": {
			"width": config.canvas_width,
			"height": config.canvas_height,
		},
		"font": {
			"family": config.font_family,
			"weight": config.font_weight,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
