"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import json
import pathlib


POINTS_PER_INCH = 72.0

DEFAULT_PAGE_WIDTH_IN = 4.0
DEFAULT_PAGE_HEIGHT_IN = 6.0
FOLD_RATIO = 0.5

# design surface of the visual designer, 4x6 in at 144 px/in
DEFAULT_CANVAS_WIDTH_PX = 576.0
DEFAULT_CANVAS_HEIGHT_PX = 864.0
DESIGN_UNITS = ("in", "px")

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_FONT_SIZE = 12.0
DEFAULT_COLOR = "#000000"

TEXT_AREA_PADDING = 8.0
TEXT_AREA_LINE_EXTRA = 2.0

CHECKBOX_SIZE = 20.0
CHECKBOX_LABEL_OFFSET_X = 25.0
CHECKBOX_LABEL_OFFSET_Y = 15.0
CHECKBOX_LABEL_SIZE = 12.0
CHECKBOX_LINE_WIDTH = 1.0

DASH_LENGTH = 10.0
DASH_GAP = 5.0
DOT_PITCH = 8.0
LINE_STYLES = ("solid", "dashed", "dotted")

TRANSPARENT = "transparent"

PLACEHOLDER_FONT_SIZE = 10.0
PLACEHOLDER_LINE_WIDTH = 0.5
IMAGE_ERROR_LABEL = "Image Error"
NO_IMAGE_LABEL = "No Image"

CUSTOM_FIELDS_KEYS = ("customFields", "custom_fields")
STANDARD_FIELD_SYNONYMS = (
	("firstName", "first_name"),
	("middleName", "middle_name"),
	("lastName", "last_name"),
	("birthDate", "birth_date"),
	("eventName", "event_name"),
	("eventDate", "event_date"),
	("printDate", "print_date"),
	("zip", "zip_code"),
)

TEMPLATE_EXPORT_VERSION = "1.0"
PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10


@dataclasses.dataclass
class BadgeSettings:
	label_size: str
	width_in: float
	height_in: float
	fold_over: bool
	dpi: int
	canvas_width_px: float
	canvas_height_px: float


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


#============================================
def default_settings_data() -> dict:
	"""
	Default printer settings in their on-disk JSON form.

	Returns:
		Settings dictionary.
	"""
	return {
		"printer": {
			"type": "Comer RX106HD",
			"labelSize": "4x6",
			"foldOver": True,
			"width": DEFAULT_PAGE_WIDTH_IN,
			"height": DEFAULT_PAGE_HEIGHT_IN,
			"dpi": 203,
		},
		"designer": {
			"canvasWidth": DEFAULT_CANVAS_WIDTH_PX,
			"canvasHeight": DEFAULT_CANVAS_HEIGHT_PX,
		},
	}


#============================================
def deep_merge(base: dict, override: dict) -> dict:
	"""
	Merge nested dictionaries without mutating either input.

	Args:
		base: Default values.
		override: User values that win on conflict.

	Returns:
		Merged dictionary.
	"""
	result = dict(base)
	for key, value in override.items():
		if isinstance(value, dict) and isinstance(result.get(key), dict):
			result[key] = deep_merge(result[key], value)
		else:
			result[key] = value
	return result


#============================================
def settings_from_data(data: dict) -> BadgeSettings:
	"""
	Build BadgeSettings from a merged settings dictionary.

	Args:
		data: Settings dictionary shaped like default_settings_data().

	Returns:
		BadgeSettings.
	"""
	printer = data["printer"]
	designer = data["designer"]
	settings = BadgeSettings(
		label_size=str(printer["labelSize"]),
		width_in=float(printer["width"]),
		height_in=float(printer["height"]),
		fold_over=bool(printer["foldOver"]),
		dpi=int(printer["dpi"]),
		canvas_width_px=float(designer["canvasWidth"]),
		canvas_height_px=float(designer["canvasHeight"]),
	)
	if settings.width_in <= 0 or settings.height_in <= 0:
		raise ValueError("Printer dimensions must be positive numbers")
	if settings.canvas_width_px <= 0 or settings.canvas_height_px <= 0:
		raise ValueError("Designer canvas dimensions must be positive numbers")
	return settings


#============================================
def load_settings(path: pathlib.Path | None) -> BadgeSettings:
	"""
	Load settings from a JSON file merged over the defaults.

	Args:
		path: Settings JSON path, or None for defaults.

	Returns:
		BadgeSettings.
	"""
	data = default_settings_data()
	if path is None or not path.exists():
		return settings_from_data(data)
	try:
		user_data = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as error:
		raise ValueError(f"Settings file {path} is not valid JSON: {error}") from error
	if not isinstance(user_data, dict):
		raise ValueError(f"Settings file {path} must contain a JSON object")
	return settings_from_data(deep_merge(data, user_data))
