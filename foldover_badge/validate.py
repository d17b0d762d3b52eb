"""
Template validation.

Validation runs against the JSON form of a template before any drawing so
that an invalid template is rejected as a whole instead of partially
rendered. Every problem found is collected and reported together.
"""

# Standard Library
import dataclasses
import numbers

# local repo modules
import foldover_badge as fb
import foldover_badge.config
import foldover_badge.model


ELEMENT_KINDS = fb.model.ELEMENT_KINDS
DESIGN_UNITS = fb.config.DESIGN_UNITS
LINE_STYLES = fb.config.LINE_STYLES
TEXT_ALIGNMENTS = ("left", "center", "right")
GEOMETRY_FIELDS = ("x", "y", "width", "height")
COLOR_FIELDS = {
	"text": ("color",),
	"textArea": ("color", "backgroundColor", "borderColor"),
	"checkbox": ("color",),
	"line": ("color",),
	"square": ("borderColor", "fillColor"),
}
BOOL_FIELDS = {
	"text": ("bold",),
	"textArea": ("bold",),
	"checkbox": ("checked",),
}


@dataclasses.dataclass(frozen=True)
class ValidationIssue:
	index: int | None
	field: str
	message: str

	def __str__(self) -> str:
		if self.index is None:
			return f"{self.field}: {self.message}"
		return f"element {self.index} {self.field}: {self.message}"


class TemplateValidationError(ValueError):
	"""
	Raised when a template violates a structural invariant.
	"""

	def __init__(self, issues: list[ValidationIssue]):
		self.issues = list(issues)
		summary = "; ".join(str(issue) for issue in self.issues)
		super().__init__(f"Invalid template configuration: {summary}")


#============================================
def is_number(value) -> bool:
	"""
	Check for a real number that is not a bool.
	"""
	return isinstance(value, numbers.Real) and not isinstance(value, bool)


#============================================
def check_page(page) -> list[ValidationIssue]:
	"""
	Check page settings.

	Args:
		page: Page dictionary.

	Returns:
		List of issues.
	"""
	issues: list[ValidationIssue] = []
	if not isinstance(page, dict):
		issues.append(ValidationIssue(None, "page", "must be an object"))
		return issues
	for key in ("widthIn", "heightIn"):
		value = page.get(key)
		if not is_number(value) or value <= 0:
			issues.append(ValidationIssue(None, f"page.{key}", "must be a positive number"))
	if not isinstance(page.get("foldOverEnabled", True), bool):
		issues.append(ValidationIssue(None, "page.foldOverEnabled", "must be true or false"))
	units = page.get("designUnits", "in")
	if units not in DESIGN_UNITS:
		issues.append(ValidationIssue(None, "page.designUnits", f"must be one of {', '.join(DESIGN_UNITS)}"))
	if units == "px":
		for key in ("canvasWidthPx", "canvasHeightPx"):
			value = page.get(key)
			if value is not None and (not is_number(value) or value <= 0):
				issues.append(ValidationIssue(None, f"page.{key}", "must be a positive number"))
	background = page.get("backgroundImage")
	if background is not None and not isinstance(background, str):
		issues.append(ValidationIssue(None, "page.backgroundImage", "must be a data URI string"))
	return issues


#============================================
def check_element(index: int, element) -> list[ValidationIssue]:
	"""
	Check a single element dictionary.

	Args:
		index: Position in the elements array.
		element: Element dictionary.

	Returns:
		List of issues.
	"""
	if not isinstance(element, dict):
		return [ValidationIssue(index, "element", "must be an object")]
	kind = element.get("type")
	if not kind:
		return [ValidationIssue(index, "type", "is required")]
	if kind not in ELEMENT_KINDS:
		return [ValidationIssue(index, "type", f"unknown element type {kind!r}")]

	issues: list[ValidationIssue] = []
	for key in GEOMETRY_FIELDS:
		if not is_number(element.get(key)):
			issues.append(ValidationIssue(index, key, "must be a number"))
	for key in ("width", "height"):
		value = element.get(key)
		if is_number(value) and value < 0:
			issues.append(ValidationIssue(index, key, "must not be negative"))
	for key in COLOR_FIELDS.get(kind, ()):
		value = element.get(key)
		if value is not None and not isinstance(value, str):
			issues.append(ValidationIssue(index, key, "must be a color string"))
	for key in BOOL_FIELDS.get(kind, ()):
		if not isinstance(element.get(key, False), bool):
			issues.append(ValidationIssue(index, key, "must be true or false"))

	if kind in ("text", "textArea"):
		if not isinstance(element.get("content", ""), str):
			issues.append(ValidationIssue(index, "content", "must be a string"))
		font_size = element.get("fontSize", 1)
		if not is_number(font_size) or font_size <= 0:
			issues.append(ValidationIssue(index, "fontSize", "must be a positive number"))
		if element.get("align", "left") not in TEXT_ALIGNMENTS:
			issues.append(ValidationIssue(index, "align", f"must be one of {', '.join(TEXT_ALIGNMENTS)}"))
		if kind == "textArea":
			border_width = element.get("borderWidth", 0)
			if not is_number(border_width) or border_width < 0:
				issues.append(ValidationIssue(index, "borderWidth", "must be a non-negative number"))
	elif kind == "checkbox":
		if not isinstance(element.get("label", ""), str):
			issues.append(ValidationIssue(index, "label", "must be a string"))
	elif kind in ("image", "background-image"):
		image_data = element.get("imageData", "")
		if image_data is not None and not isinstance(image_data, str):
			issues.append(ValidationIssue(index, "imageData", "must be a data URI string"))
		file_name = element.get("imageFileName")
		if file_name is not None and not isinstance(file_name, str):
			issues.append(ValidationIssue(index, "imageFileName", "must be a string"))
	elif kind == "line":
		if element.get("style", "solid") not in LINE_STYLES:
			issues.append(ValidationIssue(index, "style", f"must be one of {', '.join(LINE_STYLES)}"))
		thickness = element.get("thickness", 1)
		if not is_number(thickness) or thickness < 0:
			issues.append(ValidationIssue(index, "thickness", "must be a non-negative number"))
	elif kind == "square":
		if element.get("borderStyle", "solid") not in LINE_STYLES:
			issues.append(ValidationIssue(index, "borderStyle", f"must be one of {', '.join(LINE_STYLES)}"))
		border_width = element.get("borderWidth", 0)
		if not is_number(border_width) or border_width < 0:
			issues.append(ValidationIssue(index, "borderWidth", "must be a non-negative number"))
	return issues


#============================================
def collect_issues(data) -> list[ValidationIssue]:
	"""
	Collect every validation issue in a template dictionary.

	Args:
		data: Template dictionary.

	Returns:
		List of issues, empty when valid.
	"""
	if not isinstance(data, dict):
		return [ValidationIssue(None, "template", "must be an object")]
	issues: list[ValidationIssue] = []
	issues.extend(check_page(data.get("page")))
	elements = data.get("elements")
	if not isinstance(elements, list):
		issues.append(ValidationIssue(None, "elements", "must be an array"))
		return issues
	for index, element in enumerate(elements):
		issues.extend(check_element(index, element))
	return issues


#============================================
def validate_template_data(data) -> None:
	"""
	Raise TemplateValidationError if the template dictionary is invalid.

	Args:
		data: Template dictionary.
	"""
	issues = collect_issues(data)
	if issues:
		raise TemplateValidationError(issues)


#============================================
def validate_template(template: fb.model.Template) -> None:
	"""
	Validate an already-built Template.

	Args:
		template: Template instance.
	"""
	validate_template_data(fb.model.template_to_dict(template))


#============================================
def find_bounds_warnings(template: fb.model.Template) -> list[str]:
	"""
	List elements whose design box extends past the page.

	Overflow is allowed and clipped by the page, so these are informational.

	Args:
		template: Template instance.

	Returns:
		Warning strings.
	"""
	page = template.page
	width_limit = page.width_in
	height_limit = page.height_in
	if page.design_units == "px":
		width_limit = page.canvas_width_px or fb.config.DEFAULT_CANVAS_WIDTH_PX
		height_limit = page.canvas_height_px or fb.config.DEFAULT_CANVAS_HEIGHT_PX
	warnings: list[str] = []
	epsilon = 1e-9
	for index, element in enumerate(template.elements):
		if element.x < 0 or element.y < 0:
			warnings.append(f"element {index} ({element.id}) starts outside the page")
		if element.x + element.width > width_limit + epsilon:
			warnings.append(f"element {index} ({element.id}) overflows the page width")
		if element.y + element.height > height_limit + epsilon:
			warnings.append(f"element {index} ({element.id}) overflows the page height")
	return warnings
