"""
CLI entry points for uniform badge layout rendering.
"""

# Standard Library
import argparse
import pathlib
import tempfile
import time

# local repo modules
import uniform_badges as ub
import uniform_badges.config
import uniform_badges.layout
import uniform_badges.reference
import uniform_badges.render


RenderConfig = ub.config.RenderConfig
Category = ub.reference.Category

CANVAS_WIDTH = ub.config.CANVAS_WIDTH
CANVAS_HEIGHT = ub.config.CANVAS_HEIGHT
DEFAULT_FONT_FAMILY = ub.config.DEFAULT_FONT_FAMILY
DEFAULT_FONT_WEIGHT = ub.config.DEFAULT_FONT_WEIGHT
DEFAULT_PNG_NAME = ub.config.DEFAULT_PNG_NAME
PNG_DPI = ub.config.PNG_DPI


#============================================
def build_render_config(args: argparse.Namespace) -> RenderConfig:
	"""
	Build render config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderConfig.
	"""
	background_path = None
	if args.background:
		background_path = pathlib.Path(args.background)
	return RenderConfig(
		canvas_width=CANVAS_WIDTH,
		canvas_height=CANVAS_HEIGHT,
		show_slots=args.show_slots,
		draw_badges=args.confirm,
		background_path=background_path,
		font_family=args.font_family,
		font_weight=args.font_weight,
		png_dpi=args.png_dpi,
	)


#============================================
def build_parser() -> argparse.ArgumentParser:
	"""
	Build the argument parser.

	Returns:
		ArgumentParser.
	"""
	parser = argparse.ArgumentParser(description="Lay out uniform badges and render the arrangement.")

	select_group = parser.add_argument_group("Selection")
	select_group.add_argument("-r", "--rank", dest="rank", default=None, help="Rank id (left sleeve).")
	select_group.add_argument("-s", "--saf", dest="saf", nargs="*", default=[], help="SAF badge ids (max 3, pyramid).")
	select_group.add_argument("-f", "--foreign", dest="foreign", nargs="*", default=[], help="Foreign badge ids (max 3, pyramid).")
	select_group.add_argument("-m", "--medal", dest="medal", nargs="*", default=[], help="Medal ids (row under right pocket).")
	select_group.add_argument("-p", "--proficiency", dest="proficiency", nargs="*", default=[], help="Proficiency badge ids (right sleeve, vertical).")
	select_group.add_argument("-L", "--list", dest="list_items", action="store_true", help="List available badges by category and exit.")

	data_group = parser.add_argument_group("Reference data")
	data_group.add_argument("--slots", dest="slots_path", default=None, help="Slot table JSON path.")
	data_group.add_argument("--badges", dest="items_path", default=None, help="Badge table JSON path.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("-g", "--png", dest="png_path", default=None, help=f"Output PNG path (e.g. {DEFAULT_PNG_NAME}).")
	output_group.add_argument("-j", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-b", "--background", dest="background", default=None, help="Uniform template image.")
	output_group.add_argument("--png-dpi", dest="png_dpi", type=int, default=PNG_DPI, help="PNG raster resolution.")
	output_group.add_argument("--font-family", dest="font_family", default=DEFAULT_FONT_FAMILY, help="Label font family list.")
	output_group.add_argument("--font-weight", dest="font_weight", type=int, default=DEFAULT_FONT_WEIGHT, help="Label font weight.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-c", "--confirm", dest="confirm", action="store_true", help="Draw the badges.")
	behavior_group.add_argument("-C", "--no-confirm", dest="confirm", action="store_false", help="Draw the template only.")
	behavior_group.add_argument("-k", "--show-slots", dest="show_slots", action="store_true", help="Draw slot outlines.")
	behavior_group.add_argument("-K", "--hide-slots", dest="show_slots", action="store_false", help="Hide slot outlines.")
	behavior_group.add_argument("--strict", dest="strict", action="store_true", help="Reject unknown badge ids.")

	parser.set_defaults(
		confirm=True,
		show_slots=True,
		strict=False,
	)
	return parser


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = build_parser()
	args = parser.parse_args(argv)
	if not args.list_items and args.output_path is None and args.png_path is None and args.manifest_path is None:
		parser.error("one of --output, --png or --manifest is required")
	return args


#============================================
def print_item_listing(reference: ub.reference.ReferenceData) -> None:
	"""
	Print available badge ids grouped by category.

	Args:
		reference: Loaded reference data.
	"""
	for category in Category:
		item_ids = ub.reference.item_ids_by_category(reference.items, category)
		print(f"{category.value}: {len(item_ids)}")
		for item_id in item_ids:
			spec = reference.items[item_id]
			print(f"  {item_id}  {spec.label}  -> {spec.slot_id}")


#============================================
def find_unknown_ids(selected_ids: list[str], reference: ub.reference.ReferenceData) -> list[str]:
	"""
	Find selected ids missing from the badge table.

	Args:
		selected_ids: Selection in order.
		reference: Loaded reference data.

	Returns:
		Unknown ids in selection order.
	"""
	return [item_id for item_id in selected_ids if item_id not in reference.items]


#============================================
def write_png(pdf_path: pathlib.Path, png_path: pathlib.Path, config: RenderConfig) -> None:
	"""
	Rasterize a rendered PDF to PNG and report it.

	Args:
		pdf_path: Rendered PDF path.
		png_path: Output PNG path.
		config: Render configuration.
	"""
	width, height = ub.render.export_png(pdf_path, png_path, config)
	print(f"PNG written: {png_path} ({width}x{height})")


#============================================
def run_pipeline(args: argparse.Namespace) -> ub.layout.LayoutResult | None:
	"""
	Load tables, compute the layout and write the requested outputs.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LayoutResult, or None when only listing.
	"""
	reference = ub.reference.load_reference_data(args.slots_path, args.items_path)
	if args.list_items:
		print_item_listing(reference)
		return None

	print("Uniform badge layout")
	print(f"Slots: {len(reference.slots)}  Badges: {len(reference.items)}")

	selected_ids = ub.layout.build_selection(
		rank=args.rank,
		saf=args.saf,
		foreign=args.foreign,
		medal=args.medal,
		proficiency=args.proficiency,
	)
	unknown = find_unknown_ids(selected_ids, reference)
	if unknown and args.strict:
		raise ValueError(f"Unknown badge ids: {', '.join(unknown)}")
	print(f"Selected: {len(selected_ids)}")

	start_time = time.perf_counter()
	result = ub.layout.compute_layout(selected_ids, reference.slots, reference.items)
	print(f"Placements: {len(result.placements)}")
	for warning in result.warnings:
		print(f"Note: {warning}")

	config = build_render_config(args)
	font_sizes: dict[str, int] = {}
	if args.output_path:
		pdf_path = pathlib.Path(args.output_path)
		font_sizes = ub.render.render_layout_pdf(result, reference.slots, pdf_path, config)
		print(f"PDF written: {pdf_path}")
		if args.png_path:
			write_png(pdf_path, pathlib.Path(args.png_path), config)
	elif args.png_path:
		# PNG only: the intermediate PDF lives in a scratch directory
		with tempfile.TemporaryDirectory() as scratch_dir:
			pdf_path = pathlib.Path(scratch_dir) / "layout.pdf"
			font_sizes = ub.render.render_layout_pdf(result, reference.slots, pdf_path, config)
			write_png(pdf_path, pathlib.Path(args.png_path), config)
	if args.manifest_path:
		manifest_path = pathlib.Path(args.manifest_path)
		ub.render.write_manifest(manifest_path, selected_ids, result, font_sizes, config)
		print(f"Manifest written: {manifest_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")
	return result


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
