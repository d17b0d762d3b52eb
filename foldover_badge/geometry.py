"""
Design-canvas to page geometry, including the fold-over mirror.

Two unit systems are kept apart here. Templates are authored in design
units: inches, or pixels of the designer canvas. The printed page works in
points (72 per inch) with the origin at the top-left corner.
"""

# Standard Library
import dataclasses

# local repo modules
import foldover_badge as fb
import foldover_badge.config
import foldover_badge.model


POINTS_PER_INCH = fb.config.POINTS_PER_INCH
FOLD_RATIO = fb.config.FOLD_RATIO
DEFAULT_CANVAS_WIDTH_PX = fb.config.DEFAULT_CANVAS_WIDTH_PX
DEFAULT_CANVAS_HEIGHT_PX = fb.config.DEFAULT_CANVAS_HEIGHT_PX
DASH_LENGTH = fb.config.DASH_LENGTH
DASH_GAP = fb.config.DASH_GAP
DOT_PITCH = fb.config.DOT_PITCH

PageSettings = fb.model.PageSettings


@dataclasses.dataclass(frozen=True)
class DesignUnits:
	"""
	Units an element's geometry is authored in.

	For "px", inches_per_px_x and inches_per_px_y are the per-axis scale of
	the designer canvas onto the physical page.
	"""
	name: str
	inches_per_px_x: float = 1.0
	inches_per_px_y: float = 1.0


@dataclasses.dataclass(frozen=True)
class InchBox:
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class PageBox:
	x: float
	y: float
	width: float
	height: float
	mirrored: bool = False

	@property
	def center(self) -> tuple[float, float]:
		return (self.x + self.width / 2.0, self.y + self.height / 2.0)


#============================================
def design_units_for(page: PageSettings) -> DesignUnits:
	"""
	Describe the design units of a page.

	Args:
		page: Page settings.

	Returns:
		DesignUnits.
	"""
	if page.design_units != "px":
		return DesignUnits("in")
	canvas_width = page.canvas_width_px or DEFAULT_CANVAS_WIDTH_PX
	canvas_height = page.canvas_height_px or DEFAULT_CANVAS_HEIGHT_PX
	return DesignUnits(
		"px",
		inches_per_px_x=page.width_in / canvas_width,
		inches_per_px_y=page.height_in / canvas_height,
	)


#============================================
def design_to_inches(x: float, y: float, width: float, height: float, units: DesignUnits) -> InchBox:
	"""
	Convert a design-unit box to inches.

	Args:
		x: Left edge in design units.
		y: Top edge in design units.
		width: Width in design units.
		height: Height in design units.
		units: Design units of the box.

	Returns:
		InchBox.
	"""
	if units.name != "px":
		return InchBox(x, y, width, height)
	return InchBox(
		x * units.inches_per_px_x,
		y * units.inches_per_px_y,
		width * units.inches_per_px_x,
		height * units.inches_per_px_y,
	)


#============================================
def fold_line_in(page: PageSettings) -> float:
	return page.height_in * FOLD_RATIO


#============================================
def is_lower_half(y_in: float, page: PageSettings) -> bool:
	"""
	Classify a box by its top edge.

	A box straddling the fold belongs to the half that holds its top edge.

	Args:
		y_in: Top edge in inches.
		page: Page settings.

	Returns:
		True for the lower physical half.
	"""
	return y_in >= fold_line_in(page)


#============================================
def mirror_y(y_in: float, height_in: float, page_height_in: float) -> float:
	"""
	Reflect a box top edge about the page's horizontal midline.

	Args:
		y_in: Top edge in inches.
		height_in: Box height in inches.
		page_height_in: Page height in inches.

	Returns:
		Reflected top edge in inches.
	"""
	return page_height_in - y_in - height_in


#============================================
def to_page_coordinates(
	element: fb.model.ElementBase,
	page: PageSettings,
	apply_fold: bool = True,
) -> PageBox:
	"""
	Convert an element's design geometry to page points.

	Args:
		element: Template element.
		page: Page settings.
		apply_fold: Apply the fold mirror to lower-half elements. Printing
			always passes True; the designer passes its fold preview toggle.

	Returns:
		PageBox in points, origin top-left.
	"""
	box = design_to_inches(element.x, element.y, element.width, element.height, design_units_for(page))
	y_in = box.y
	mirrored = False
	if apply_fold and page.fold_over_enabled and is_lower_half(box.y, page):
		y_in = mirror_y(box.y, box.height, page.height_in)
		mirrored = True
	return PageBox(
		x=fb.config.inches_to_points(box.x),
		y=fb.config.inches_to_points(y_in),
		width=fb.config.inches_to_points(box.width),
		height=fb.config.inches_to_points(box.height),
		mirrored=mirrored,
	)


#============================================
def page_size_points(page: PageSettings) -> tuple[float, float]:
	return (
		fb.config.inches_to_points(page.width_in),
		fb.config.inches_to_points(page.height_in),
	)


#============================================
def tile_dashes(
	length: float,
	dash: float = DASH_LENGTH,
	gap: float = DASH_GAP,
) -> list[tuple[float, float]]:
	"""
	Tile dash segments along a run, starting with a dash at offset 0.

	The final dash is cut short at the end of the run.

	Args:
		length: Run length in points.
		dash: Dash length.
		gap: Gap length.

	Returns:
		List of (start, end) offsets.
	"""
	segments: list[tuple[float, float]] = []
	if length <= 0 or dash <= 0:
		return segments
	position = 0.0
	while position < length:
		segments.append((position, min(position + dash, length)))
		position += dash + gap
	return segments


#============================================
def tile_dots(length: float, pitch: float = DOT_PITCH) -> list[float]:
	"""
	Tile dot centers along a run, starting at offset 0.

	Args:
		length: Run length in points.
		pitch: Distance between dot centers.

	Returns:
		List of center offsets.
	"""
	if length < 0 or pitch <= 0:
		return []
	count = int(length // pitch) + 1
	return [index * pitch for index in range(count)]


#============================================
def box_edges(box: PageBox) -> list[tuple[tuple[float, float], tuple[float, float]]]:
	"""
	List the four box edges clockwise, each from its own starting corner.

	Args:
		box: Page box.

	Returns:
		List of ((x0, y0), (x1, y1)) edges: top, right, bottom, left.
	"""
	left = box.x
	top = box.y
	right = box.x + box.width
	bottom = box.y + box.height
	return [
		((left, top), (right, top)),
		((right, top), (right, bottom)),
		((right, bottom), (left, bottom)),
		((left, bottom), (left, top)),
	]
