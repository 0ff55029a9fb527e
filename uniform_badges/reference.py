"""
Slot and badge reference tables.
"""

# Standard Library
import dataclasses
import enum
import json
import pathlib
import types

# local repo modules
import uniform_badges as ub
import uniform_badges.config


class Category(enum.Enum):
	RANK = "rank"
	SAF = "saf"
	FOREIGN = "foreign"
	MEDAL = "medal"
	PROFICIENCY = "proficiency"


class ArrangementRule(enum.Enum):
	PYRAMID = "pyramid"
	ROW = "row"
	STACK = "stack"
	SINGLE = "single"


@dataclasses.dataclass(frozen=True)
class Slot:
	slot_id: str
	x: float
	y: float
	width: float
	height: float
	z: float
	rule: ArrangementRule = ArrangementRule.SINGLE


@dataclasses.dataclass(frozen=True)
class ItemSpec:
	item_id: str
	label: str
	category: Category
	slot_id: str
	color: str
	asset: str | None = None


@dataclasses.dataclass(frozen=True)
class ReferenceData:
	slots: types.MappingProxyType
	items: types.MappingProxyType


#============================================
def parse_number(entry_id: str, entry: dict, key: str) -> float:
	"""
	Read a numeric geometry field from a table entry.

	Args:
		entry_id: Identifier of the entry, for error messages.
		entry: Raw JSON entry.
		key: Field name.

	Returns:
		Float value.
	"""
	if key not in entry:
		raise ValueError(f"{entry_id}: missing field '{key}'")
	value = entry[key]
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise ValueError(f"{entry_id}: field '{key}' must be a number, got {value!r}")
	return float(value)


#============================================
def require_object(entry_id: str, entry: object) -> None:
	"""
	Reject table entries that are not JSON objects.

	Args:
		entry_id: Identifier of the entry, for error messages.
		entry: Raw JSON entry.
	"""
	if not isinstance(entry, dict):
		raise ValueError(f"{entry_id}: expected an object, got {type(entry).__name__}")


#============================================
def parse_string(entry_id: str, entry: dict, key: str) -> str:
	"""
	Read a string field from a table entry.

	Args:
		entry_id: Identifier of the entry, for error messages.
		entry: Raw JSON entry.
		key: Field name.

	Returns:
		String value.
	"""
	value = entry.get(key)
	if not isinstance(value, str):
		raise ValueError(f"{entry_id}: field '{key}' must be a string, got {value!r}")
	return value


#============================================
def parse_slot(slot_id: str, entry: dict) -> Slot:
	"""
	Parse a raw slot entry.

	Args:
		slot_id: Slot identifier.
		entry: Raw JSON entry with x, y, w, h, z and optional rule.

	Returns:
		Slot.
	"""
	require_object(slot_id, entry)
	rule_value = entry.get("rule", ArrangementRule.SINGLE.value)
	try:
		rule = ArrangementRule(rule_value)
	except ValueError as error:
		raise ValueError(f"{slot_id}: unknown arrangement rule {rule_value!r}") from error
	return Slot(
		slot_id=slot_id,
		x=parse_number(slot_id, entry, "x"),
		y=parse_number(slot_id, entry, "y"),
		width=parse_number(slot_id, entry, "w"),
		height=parse_number(slot_id, entry, "h"),
		z=parse_number(slot_id, entry, "z"),
		rule=rule,
	)


#============================================
def parse_item(item_id: str, entry: dict) -> ItemSpec:
	"""
	Parse a raw badge entry.

	Args:
		item_id: Item identifier.
		entry: Raw JSON entry with label, category, slot, color and optional asset.

	Returns:
		ItemSpec.
	"""
	require_object(item_id, entry)
	for key in ("label", "category", "slot", "color"):
		if key not in entry:
			raise ValueError(f"{item_id}: missing field '{key}'")
	try:
		category = Category(entry["category"])
	except ValueError as error:
		raise ValueError(f"{item_id}: unknown category {entry['category']!r}") from error
	asset = entry.get("asset")
	if asset is not None:
		asset = parse_string(item_id, entry, "asset")
	return ItemSpec(
		item_id=item_id,
		label=parse_string(item_id, entry, "label"),
		category=category,
		slot_id=parse_string(item_id, entry, "slot"),
		color=parse_string(item_id, entry, "color"),
		asset=asset,
	)


#============================================
def load_json(path: pathlib.Path) -> dict:
	"""
	Read a JSON object from disk.

	Args:
		path: JSON file path.

	Returns:
		Parsed dict.
	"""
	with path.open("r", encoding="utf-8") as handle:
		data = json.load(handle)
	if not isinstance(data, dict):
		raise ValueError(f"{path}: expected a JSON object at the top level")
	return data


def build_slot_table(raw: dict) -> types.MappingProxyType:
	slots = {slot_id: parse_slot(slot_id, entry) for slot_id, entry in raw.items()}
	return types.MappingProxyType(slots)


def build_item_table(raw: dict) -> types.MappingProxyType:
	items = {item_id: parse_item(item_id, entry) for item_id, entry in raw.items()}
	return types.MappingProxyType(items)


#============================================
def load_reference_data(
	slots_path: pathlib.Path | None = None,
	items_path: pathlib.Path | None = None,
) -> ReferenceData:
	"""
	Load the slot and badge tables.

	Args:
		slots_path: Slot JSON path, defaults to the bundled table.
		items_path: Badge JSON path, defaults to the bundled table.

	Returns:
		ReferenceData with read-only mappings.
	"""
	if slots_path is None:
		slots_path = ub.config.DEFAULT_SLOTS_PATH
	if items_path is None:
		items_path = ub.config.DEFAULT_ITEMS_PATH
	slots = build_slot_table(load_json(pathlib.Path(slots_path)))
	items = build_item_table(load_json(pathlib.Path(items_path)))
	return ReferenceData(slots=slots, items=items)


#============================================
def item_ids_by_category(items: types.MappingProxyType, category: Category) -> list[str]:
	"""
	List item identifiers of one category in table order.

	Args:
		items: Item table.
		category: Category to filter on.

	Returns:
		Ordered list of item identifiers.
	"""
	return [item_id for item_id, spec in items.items() if spec.category == category]
