"""
Template and element data model.
"""

# Standard Library
import dataclasses
import typing

# local repo modules
import foldover_badge as fb
import foldover_badge.config


TRANSPARENT = fb.config.TRANSPARENT
DEFAULT_COLOR = fb.config.DEFAULT_COLOR
DEFAULT_FONT_SIZE = fb.config.DEFAULT_FONT_SIZE
DEFAULT_PAGE_WIDTH_IN = fb.config.DEFAULT_PAGE_WIDTH_IN
DEFAULT_PAGE_HEIGHT_IN = fb.config.DEFAULT_PAGE_HEIGHT_IN


@dataclasses.dataclass(frozen=True)
class PageSettings:
	width_in: float = DEFAULT_PAGE_WIDTH_IN
	height_in: float = DEFAULT_PAGE_HEIGHT_IN
	fold_over_enabled: bool = True
	background_image: str | None = None
	design_units: str = "in"
	canvas_width_px: float | None = None
	canvas_height_px: float | None = None


@dataclasses.dataclass(frozen=True)
class ElementBase:
	id: str
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class TextElement(ElementBase):
	kind: typing.ClassVar[str] = "text"
	content: str = ""
	font_size: float = DEFAULT_FONT_SIZE
	bold: bool = False
	color: str = DEFAULT_COLOR
	align: str = "left"


@dataclasses.dataclass(frozen=True)
class TextAreaElement(TextElement):
	kind: typing.ClassVar[str] = "textArea"
	background_color: str = TRANSPARENT
	border_color: str = DEFAULT_COLOR
	border_width: float = 0.0


@dataclasses.dataclass(frozen=True)
class CheckboxElement(ElementBase):
	kind: typing.ClassVar[str] = "checkbox"
	label: str = ""
	checked: bool = False
	color: str = DEFAULT_COLOR


@dataclasses.dataclass(frozen=True)
class ImageElement(ElementBase):
	kind: typing.ClassVar[str] = "image"
	image_data: str = ""
	image_file_name: str | None = None


@dataclasses.dataclass(frozen=True)
class BackgroundImageElement(ImageElement):
	kind: typing.ClassVar[str] = "background-image"


@dataclasses.dataclass(frozen=True)
class LineElement(ElementBase):
	kind: typing.ClassVar[str] = "line"
	thickness: float = 1.0
	style: str = "solid"
	color: str = DEFAULT_COLOR


@dataclasses.dataclass(frozen=True)
class SquareElement(ElementBase):
	kind: typing.ClassVar[str] = "square"
	border_width: float = 1.0
	border_style: str = "solid"
	border_color: str = DEFAULT_COLOR
	fill_color: str = TRANSPARENT


Element = (
	TextElement
	| TextAreaElement
	| CheckboxElement
	| ImageElement
	| BackgroundImageElement
	| LineElement
	| SquareElement
)

ELEMENT_CLASSES: dict[str, type] = {
	cls.kind: cls
	for cls in (
		TextElement,
		TextAreaElement,
		CheckboxElement,
		ImageElement,
		BackgroundImageElement,
		LineElement,
		SquareElement,
	)
}
ELEMENT_KINDS = tuple(ELEMENT_CLASSES)


@dataclasses.dataclass(frozen=True)
class Template:
	name: str
	description: str = ""
	page: PageSettings = dataclasses.field(default_factory=PageSettings)
	elements: tuple = ()


#============================================
def snake_to_camel(name: str) -> str:
	"""
	Convert a snake_case attribute name to its camelCase JSON key.

	Args:
		name: Attribute name.

	Returns:
		camelCase key.
	"""
	head, *rest = name.split("_")
	return head + "".join(part[:1].upper() + part[1:] for part in rest)


#============================================
def element_to_dict(element: Element) -> dict:
	"""
	Convert an element to its JSON dictionary.

	Args:
		element: Element instance.

	Returns:
		Dictionary with a "type" discriminant and camelCase keys.
	"""
	data = {"type": element.kind}
	for field in dataclasses.fields(element):
		value = getattr(element, field.name)
		if value is None:
			continue
		data[snake_to_camel(field.name)] = value
	return data


#============================================
def coerce_field_value(field: dataclasses.Field, value: typing.Any) -> typing.Any:
	# JSON stores whole numbers as ints; geometry and sizes are floats
	if field.type in (float, "float") and isinstance(value, int) and not isinstance(value, bool):
		return float(value)
	return value


#============================================
def element_from_dict(data: dict) -> Element:
	"""
	Build an element from its JSON dictionary.

	Unknown keys are ignored. The dictionary is expected to have passed
	validation already.

	Args:
		data: Element dictionary.

	Returns:
		Element instance.
	"""
	cls = ELEMENT_CLASSES[data["type"]]
	kwargs = {}
	for field in dataclasses.fields(cls):
		key = snake_to_camel(field.name)
		if key in data:
			kwargs[field.name] = coerce_field_value(field, data[key])
	if "id" not in kwargs:
		kwargs["id"] = ""
	kwargs["id"] = str(kwargs["id"])
	return cls(**kwargs)


#============================================
def page_to_dict(page: PageSettings) -> dict:
	data = {}
	for field in dataclasses.fields(page):
		value = getattr(page, field.name)
		if value is None:
			continue
		data[snake_to_camel(field.name)] = value
	return data


#============================================
def page_from_dict(data: dict) -> PageSettings:
	kwargs = {}
	for field in dataclasses.fields(PageSettings):
		key = snake_to_camel(field.name)
		if key in data and data[key] is not None:
			value = data[key]
			if isinstance(value, int) and not isinstance(value, bool) and field.name != "design_units":
				value = float(value)
			kwargs[field.name] = value
	return PageSettings(**kwargs)


#============================================
def template_to_dict(template: Template) -> dict:
	"""
	Convert a template to its JSON dictionary.

	Args:
		template: Template instance.

	Returns:
		Template dictionary.
	"""
	return {
		"name": template.name,
		"description": template.description,
		"page": page_to_dict(template.page),
		"elements": [element_to_dict(element) for element in template.elements],
	}


#============================================
def template_from_dict(data: dict) -> Template:
	"""
	Build a template from a validated JSON dictionary.

	Args:
		data: Template dictionary.

	Returns:
		Template instance.
	"""
	return Template(
		name=str(data.get("name", "")),
		description=str(data.get("description", "") or ""),
		page=page_from_dict(data.get("page") or {}),
		elements=tuple(element_from_dict(item) for item in data["elements"]),
	)


#============================================
def default_template() -> Template:
	"""
	Build the standard 4x6 fold-over "Hello My Name Is" badge.

	Returns:
		Template instance.
	"""
	elements = (
		TextElement(
			id="hello", x=0.5, y=0.5, width=3.0, height=0.6,
			content="Hello, My Name Is", font_size=18.0, bold=True,
			align="center", color="#333333",
		),
		TextElement(
			id="name", x=0.5, y=1.2, width=3.0, height=1.0,
			content="{{firstName}} {{lastName}}", font_size=28.0, bold=True,
			align="center", color="#000000",
		),
		TextElement(
			id="event", x=0.5, y=3.1, width=3.0, height=0.5,
			content="{{eventName}}", font_size=14.0,
			align="center", color="#888888",
		),
		TextElement(
			id="date", x=0.5, y=3.7, width=3.0, height=0.4,
			content="{{eventDate}}", font_size=12.0,
			align="center", color="#888888",
		),
		CheckboxElement(
			id="credential", x=1.5, y=4.5, width=0.3, height=0.3,
			label="Credentialed", color="#28a745",
		),
	)
	return Template(
		name="Hello My Name Is",
		description="Standard 4x6 fold-over name badge template",
		page=PageSettings(),
		elements=elements,
	)
