"""
Per-slot badge arrangement.
"""

# Standard Library
import dataclasses
import types

# local repo modules
import uniform_badges as ub
import uniform_badges.config
import uniform_badges.reference


Slot = ub.reference.Slot
ItemSpec = ub.reference.ItemSpec
ArrangementRule = ub.reference.ArrangementRule

PYRAMID_MAX_ITEMS = ub.config.PYRAMID_MAX_ITEMS
PYRAMID_TILE_WIDTH = ub.config.PYRAMID_TILE_WIDTH
PYRAMID_TILE_HEIGHT = ub.config.PYRAMID_TILE_HEIGHT
PYRAMID_GAP = ub.config.PYRAMID_GAP
MEDAL_TILE_WIDTH = ub.config.MEDAL_TILE_WIDTH
MEDAL_TILE_MAX_HEIGHT = ub.config.MEDAL_TILE_MAX_HEIGHT
MEDAL_GAP = ub.config.MEDAL_GAP
STACK_TILE_HEIGHT = ub.config.STACK_TILE_HEIGHT
STACK_GAP = ub.config.STACK_GAP


@dataclasses.dataclass(frozen=True)
class Placement:
	item_id: str
	label: str
	slot_id: str
	x: float
	y: float
	width: float
	height: float
	z: float
	color: str
	asset: str | None = None


@dataclasses.dataclass(frozen=True)
class LayoutResult:
	placements: tuple[Placement, ...]
	warnings: tuple[str, ...]


#============================================
def place(item: ItemSpec, slot: Slot, x: float, y: float, width: float, height: float) -> Placement:
	"""
	Build a placement, copying label, color and z from the tables.

	Args:
		item: Resolved item.
		slot: Slot the item lands in.
		x: Left edge.
		y: Top edge.
		width: Tile width.
		height: Tile height.

	Returns:
		Placement.
	"""
	return Placement(
		item_id=item.item_id,
		label=item.label,
		slot_id=slot.slot_id,
		x=x,
		y=y,
		width=width,
		height=height,
		z=slot.z,
		color=item.color,
		asset=item.asset,
	)


def centered_row_start(slot: Slot, count: int, tile_width: float, gap: float) -> float:
	total_width = count * tile_width + (count - 1) * gap
	return slot.x + (slot.width - total_width) / 2.0


#============================================
def arrange_pyramid(slot: Slot, items: list[ItemSpec]) -> tuple[list[Placement], list[str]]:
	"""
	Arrange up to three badges as one over two.

	Args:
		slot: Slot box.
		items: Items in selection order.

	Returns:
		Tuple of (placements, warnings).
	"""
	warnings: list[str] = []
	if len(items) > PYRAMID_MAX_ITEMS:
		warnings.append(f"{slot.slot_id}: allows max {PYRAMID_MAX_ITEMS}; extra selections ignored.")
	kept = items[:PYRAMID_MAX_ITEMS]
	tile_width = min(slot.width, PYRAMID_TILE_WIDTH)
	tile_height = min(slot.height, PYRAMID_TILE_HEIGHT)

	placements: list[Placement] = []
	if len(kept) == 1:
		x = centered_row_start(slot, 1, tile_width, PYRAMID_GAP)
		placements.append(place(kept[0], slot, x, slot.y, tile_width, tile_height))
	elif len(kept) == 2:
		start_x = centered_row_start(slot, 2, tile_width, PYRAMID_GAP)
		for index, item in enumerate(kept):
			x = start_x + index * (tile_width + PYRAMID_GAP)
			placements.append(place(item, slot, x, slot.y, tile_width, tile_height))
	elif len(kept) == 3:
		top_x = centered_row_start(slot, 1, tile_width, PYRAMID_GAP)
		placements.append(place(kept[0], slot, top_x, slot.y, tile_width, tile_height))
		start_x = centered_row_start(slot, 2, tile_width, PYRAMID_GAP)
		lower_y = slot.y + tile_height + PYRAMID_GAP
		for index, item in enumerate(kept[1:]):
			x = start_x + index * (tile_width + PYRAMID_GAP)
			placements.append(place(item, slot, x, lower_y, tile_width, tile_height))
	return (placements, warnings)


#============================================
def arrange_row(slot: Slot, items: list[ItemSpec]) -> tuple[list[Placement], list[str]]:
	"""
	Arrange medals in one centered horizontal row.

	Wide rows are not wrapped and may extend past the slot box.

	Args:
		slot: Slot box.
		items: Items in selection order.

	Returns:
		Tuple of (placements, warnings).
	"""
	tile_height = min(slot.height, MEDAL_TILE_MAX_HEIGHT)
	start_x = centered_row_start(slot, len(items), MEDAL_TILE_WIDTH, MEDAL_GAP)
	placements = []
	for index, item in enumerate(items):
		x = start_x + index * (MEDAL_TILE_WIDTH + MEDAL_GAP)
		placements.append(place(item, slot, x, slot.y, MEDAL_TILE_WIDTH, tile_height))
	return (placements, [])


#============================================
def arrange_stack(slot: Slot, items: list[ItemSpec]) -> tuple[list[Placement], list[str]]:
	"""
	Stack badges downward from the slot's top-left corner.

	Args:
		slot: Slot box.
		items: Items in selection order.

	Returns:
		Tuple of (placements, warnings).
	"""
	placements = []
	for index, item in enumerate(items):
		y = slot.y + index * (STACK_TILE_HEIGHT + STACK_GAP)
		placements.append(place(item, slot, slot.x, y, slot.width, STACK_TILE_HEIGHT))
	return (placements, [])


#============================================
def arrange_single(slot: Slot, items: list[ItemSpec]) -> tuple[list[Placement], list[str]]:
	"""
	Place only the first badge, filling the slot box.

	Args:
		slot: Slot box.
		items: Items in selection order.

	Returns:
		Tuple of (placements, warnings).
	"""
	if not items:
		return ([], [])
	warnings = []
	if len(items) > 1:
		warnings.append(f"{slot.slot_id}: multiple selections; only first shown.")
	placement = place(items[0], slot, slot.x, slot.y, slot.width, slot.height)
	return ([placement], warnings)


ARRANGERS = {
	ArrangementRule.PYRAMID: arrange_pyramid,
	ArrangementRule.ROW: arrange_row,
	ArrangementRule.STACK: arrange_stack,
	ArrangementRule.SINGLE: arrange_single,
}


#============================================
def group_by_slot(
	selected_ids: list[str],
	slots: types.MappingProxyType,
	items: types.MappingProxyType,
) -> dict[str, list[ItemSpec]]:
	"""
	Resolve selected ids and group them by slot.

	Unknown ids and items pointing at unknown slots are skipped.

	Args:
		selected_ids: Item identifiers in selection order.
		slots: Slot table.
		items: Item table.

	Returns:
		Dict of slot id to items, in first-occurrence order.
	"""
	groups: dict[str, list[ItemSpec]] = {}
	for item_id in selected_ids:
		spec = items.get(item_id)
		if spec is None:
			continue
		if spec.slot_id not in slots:
			continue
		groups.setdefault(spec.slot_id, []).append(spec)
	return groups


#============================================
def compute_layout(
	selected_ids: list[str],
	slots: types.MappingProxyType,
	items: types.MappingProxyType,
) -> LayoutResult:
	"""
	Compute badge placements for a selection.

	Args:
		selected_ids: Item identifiers in selection order.
		slots: Slot table.
		items: Item table.

	Returns:
		LayoutResult with placements and warnings.
	"""
	placements: list[Placement] = []
	warnings: list[str] = []
	for slot_id, grouped in group_by_slot(selected_ids, slots, items).items():
		slot = slots[slot_id]
		arranger = ARRANGERS[slot.rule]
		slot_placements, slot_warnings = arranger(slot, grouped)
		placements.extend(slot_placements)
		warnings.extend(slot_warnings)
	return LayoutResult(placements=tuple(placements), warnings=tuple(warnings))


#============================================
def build_selection(
	rank: str | None = None,
	saf: list[str] | None = None,
	foreign: list[str] | None = None,
	medal: list[str] | None = None,
	proficiency: list[str] | None = None,
) -> list[str]:
	"""
	Compose an ordered selection from per-category choices.

	Args:
		rank: Rank id or None.
		saf: Service badge ids.
		foreign: Foreign badge ids.
		medal: Medal ids.
		proficiency: Proficiency badge ids.

	Returns:
		Ordered list of non-empty item ids.
	"""
	ids = [rank or ""]
	for group in (saf, foreign, medal, proficiency):
		ids.extend(group or [])
	return [item_id for item_id in ids if item_id]


def placements_by_z(placements: tuple[Placement, ...]) -> list[Placement]:
	return sorted(placements, key=lambda placement: placement.z)
