import dataclasses
import json
import pathlib

import fitz
import PIL.Image
import pypdf
import pytest

import uniform_badges.config
import uniform_badges.layout
import uniform_badges.render


COLOR_TOLERANCE = 3


#============================================
def render_selection(reference, selection: list[str], tmp_path: pathlib.Path, **overrides) -> tuple:
	"""
	Lay out a selection and render it to PDF.

	Args:
		reference: Loaded reference data.
		selection: Ordered item ids.
		tmp_path: Output directory.
		overrides: RenderConfig field overrides.

	Returns:
		Tuple of (result, pdf_path, font_sizes, config).
	"""
	config = dataclasses.replace(uniform_badges.config.default_render_config(), **overrides)
	result = uniform_badges.layout.compute_layout(selection, reference.slots, reference.items)
	pdf_path = tmp_path / "layout.pdf"
	font_sizes = uniform_badges.render.render_layout_pdf(result, reference.slots, pdf_path, config)
	return (result, pdf_path, font_sizes, config)


#============================================
def close_to(pixel: tuple[int, int, int], expected: tuple[float, float, float]) -> bool:
	"""
	Compare an RGB pixel to a 0-1 float color.

	Args:
		pixel: Pixel values.
		expected: Float RGB.

	Returns:
		True within tolerance.
	"""
	return all(abs(value - round(channel * 255)) <= COLOR_TOLERANCE for value, channel in zip(pixel, expected))


#============================================
def test_parse_hex_color() -> None:
	"""
	Hex colors parse in long and short form, bad values give black.
	"""
	assert uniform_badges.render.parse_hex_color("#ff0000") == (1.0, 0.0, 0.0)
	assert uniform_badges.render.parse_hex_color("#fff") == (1.0, 1.0, 1.0)
	assert uniform_badges.render.parse_hex_color("red") == (0.0, 0.0, 0.0)
	assert uniform_badges.render.parse_hex_color("#zzzzzz") == (0.0, 0.0, 0.0)
	assert uniform_badges.render.parse_hex_color("") == (0.0, 0.0, 0.0)


#============================================
def test_pdf_page_size_and_labels(reference, tmp_path: pathlib.Path) -> None:
	"""
	The PDF is one canvas-sized page carrying every badge label.
	"""
	selection = ["sergeant", "safCommando", "medalOperations", "profMedic"]
	result, pdf_path, font_sizes, _config = render_selection(reference, selection, tmp_path)
	reader = pypdf.PdfReader(str(pdf_path))
	assert len(reader.pages) == 1
	page = reader.pages[0]
	assert float(page.mediabox.width) == 1000.0
	assert float(page.mediabox.height) == 1200.0
	text = page.extract_text()
	for tile in result.placements:
		assert tile.label in text
	assert set(font_sizes) == set(selection)
	assert all(size >= 10 for size in font_sizes.values())


#============================================
def test_template_only_skips_badges(reference, tmp_path: pathlib.Path) -> None:
	"""
	Unconfirmed renders draw slot names but no badges.
	"""
	_result, pdf_path, font_sizes, _config = render_selection(
		reference,
		["sergeant"],
		tmp_path,
		draw_badges=False,
	)
	assert font_sizes == {}
	text = pypdf.PdfReader(str(pdf_path)).pages[0].extract_text()
	assert "leftSleeveRank" in text
	assert "SGT" not in text


#============================================
def test_png_export_places_badge_color(reference, tmp_path: pathlib.Path) -> None:
	"""
	The PNG shows the badge color inside its placement.
	"""
	result, pdf_path, _font_sizes, config = render_selection(reference, ["sergeant"], tmp_path)
	png_path = tmp_path / uniform_badges.config.DEFAULT_PNG_NAME
	size = uniform_badges.render.export_png(pdf_path, png_path, config)
	assert size == (1000, 1200)

	image = PIL.Image.open(png_path).convert("RGB")
	tile = result.placements[0]
	pixel = image.getpixel((int(tile.x + tile.width / 2.0), int(tile.y + 4)))
	assert close_to(pixel, uniform_badges.render.parse_hex_color(tile.color))
	assert close_to(image.getpixel((5, 5)), (1.0, 1.0, 1.0))


#============================================
def test_background_image_is_drawn(reference, tmp_path: pathlib.Path) -> None:
	"""
	A template image shows behind the slots.
	"""
	background = tmp_path / "uniform.png"
	PIL.Image.new("RGB", (70, 140), (0, 0, 255)).save(background)
	_result, pdf_path, _font_sizes, config = render_selection(
		reference,
		[],
		tmp_path,
		background_path=background,
		show_slots=False,
	)
	image = uniform_badges.render.rasterize_pdf(pdf_path, config.png_dpi)
	assert close_to(image.getpixel((510, 100)), (0.0, 0.0, 1.0))
	assert close_to(image.getpixel((50, 100)), (1.0, 1.0, 1.0))


#============================================
def test_rasterize_closes_document_on_error(reference, tmp_path: pathlib.Path, monkeypatch) -> None:
	"""
	The PDF document is closed even when rasterizing fails.
	"""
	_result, pdf_path, _font_sizes, config = render_selection(reference, ["sergeant"], tmp_path)
	opened = []
	real_open = fitz.open

	def tracking_open(*args, **kwargs):
		document = real_open(*args, **kwargs)
		opened.append(document)
		return document

	def broken_frombytes(*args, **kwargs):
		raise ValueError("bad raster")

	monkeypatch.setattr(fitz, "open", tracking_open)
	monkeypatch.setattr(PIL.Image, "frombytes", broken_frombytes)
	with pytest.raises(ValueError, match="bad raster"):
		uniform_badges.render.rasterize_pdf(pdf_path, config.png_dpi)
	assert len(opened) == 1
	assert opened[0].is_closed


#============================================
def test_manifest_contents(reference, tmp_path: pathlib.Path) -> None:
	"""
	The manifest records selection, placements, sizes and warnings.
	"""
	selection = ["corporal", "sergeant", "profDriver"]
	result, _pdf_path, font_sizes, config = render_selection(reference, selection, tmp_path)
	manifest_path = tmp_path / "layout.json"
	uniform_badges.render.write_manifest(manifest_path, selection, result, font_sizes, config)
	with manifest_path.open("r", encoding="utf-8") as handle:
		data = json.load(handle)
	assert data["selection"] == selection
	assert data["warnings"] == ["leftSleeveRank: multiple selections; only first shown."]
	assert [entry["id"] for entry in data["placements"]] == ["corporal", "profDriver"]
	assert data["placements"][0]["font_size"] == font_sizes["corporal"]
	assert data["canvas"] == {"width": 1000.0, "height": 1200.0}
