"""
Per-variant element renderers.

Every renderer takes the same arguments: the ReportLab canvas, the element,
its page box (points, origin top-left), the field record and the page
height in points. ReportLab's origin is bottom-left, so each renderer flips
y through pdf_y() at the last moment.
"""

# Standard Library
import dataclasses
import math

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import foldover_badge as fb
import foldover_badge.config
import foldover_badge.fields
import foldover_badge.geometry
import foldover_badge.media
import foldover_badge.model


PageBox = fb.geometry.PageBox
FieldRecord = fb.fields.FieldRecord

DEFAULT_FONT_REGULAR = fb.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = fb.config.DEFAULT_FONT_BOLD
DEFAULT_COLOR = fb.config.DEFAULT_COLOR
TRANSPARENT = fb.config.TRANSPARENT
TEXT_AREA_PADDING = fb.config.TEXT_AREA_PADDING
TEXT_AREA_LINE_EXTRA = fb.config.TEXT_AREA_LINE_EXTRA
CHECKBOX_SIZE = fb.config.CHECKBOX_SIZE
CHECKBOX_LABEL_OFFSET_X = fb.config.CHECKBOX_LABEL_OFFSET_X
CHECKBOX_LABEL_OFFSET_Y = fb.config.CHECKBOX_LABEL_OFFSET_Y
CHECKBOX_LABEL_SIZE = fb.config.CHECKBOX_LABEL_SIZE
CHECKBOX_LINE_WIDTH = fb.config.CHECKBOX_LINE_WIDTH
PLACEHOLDER_FONT_SIZE = fb.config.PLACEHOLDER_FONT_SIZE
PLACEHOLDER_LINE_WIDTH = fb.config.PLACEHOLDER_LINE_WIDTH
IMAGE_ERROR_LABEL = fb.config.IMAGE_ERROR_LABEL
NO_IMAGE_LABEL = fb.config.NO_IMAGE_LABEL
TEXT_LEADING_FACTOR = 1.2


@dataclasses.dataclass(frozen=True)
class PlacedLine:
	text: str
	x: float
	baseline: float
	align: str


#============================================
def pdf_y(page_height: float, top_y: float) -> float:
	"""
	Convert a top-left page y to ReportLab's bottom-left y.
	"""
	return page_height - top_y


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC" or "#ABC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
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
def is_transparent(value: str | None) -> bool:
	return not value or value.strip().lower() in (TRANSPARENT, "none")


#============================================
def map_font_name(bold: bool) -> str:
	"""
	Map the element weight flag to a PDF base font.
	"""
	if bold:
		return DEFAULT_FONT_BOLD
	return DEFAULT_FONT_REGULAR


#============================================
def anchor_x(box_left: float, box_width: float, align: str) -> float:
	"""
	Pick the text anchor x for an alignment.

	Args:
		box_left: Left edge of the text run.
		box_width: Width of the text run.
		align: "left", "center" or "right".

	Returns:
		Anchor x in points.
	"""
	if align == "center":
		return box_left + box_width / 2.0
	if align == "right":
		return box_left + box_width
	return box_left


#============================================
def draw_aligned_string(
	pdf: reportlab.pdfgen.canvas.Canvas,
	line: PlacedLine,
	page_height: float,
) -> None:
	y = pdf_y(page_height, line.baseline)
	if line.align == "center":
		pdf.drawCentredString(line.x, y, line.text)
	elif line.align == "right":
		pdf.drawRightString(line.x, y, line.text)
	else:
		pdf.drawString(line.x, y, line.text)


#============================================
def split_long_word(word: str, font_name: str, font_size: float, max_width: float) -> list[str]:
	"""
	Break a word that is wider than the line into character chunks.

	Raises ValueError when a single glyph does not fit the line at all.

	Args:
		word: Word text.
		font_name: Font name for width calculation.
		font_size: Font size for width calculation.
		max_width: Maximum chunk width in points.

	Returns:
		List of chunks.
	"""
	pieces: list[str] = []
	current = ""
	for char in word:
		if reportlab.pdfbase.pdfmetrics.stringWidth(char, font_name, font_size) > max_width:
			raise ValueError(f"glyph {char!r} at {font_size}pt is wider than the {max_width:.1f}pt line")
		candidate = current + char
		width = reportlab.pdfbase.pdfmetrics.stringWidth(candidate, font_name, font_size)
		if current and width > max_width:
			pieces.append(current)
			current = char
			continue
		current = candidate
	if current:
		pieces.append(current)
	return pieces


#============================================
def wrap_text_lines(
	text: str,
	font_name: str,
	font_size: float,
	max_width: float,
) -> list[str]:
	"""
	Greedy word-wrap text to fit within a max width.

	Explicit newlines start new paragraphs. Words wider than the line on
	their own are split by character.

	Args:
		text: Input text.
		font_name: Font name for width calculation.
		font_size: Font size for width calculation.
		max_width: Maximum line width in points.

	Returns:
		List of lines.
	"""
	if max_width <= 0:
		return []

	def measure(value: str) -> float:
		return reportlab.pdfbase.pdfmetrics.stringWidth(value, font_name, font_size)

	lines: list[str] = []
	for paragraph in text.split("\n"):
		words = paragraph.split()
		if not words:
			lines.append("")
			continue
		current = ""
		for word in words:
			if measure(word) > max_width:
				pieces = split_long_word(word, font_name, font_size, max_width)
				if current:
					lines.append(current)
				lines.extend(pieces[:-1])
				current = pieces[-1]
				continue
			candidate = word if not current else f"{current} {word}"
			if measure(candidate) <= max_width:
				current = candidate
				continue
			lines.append(current)
			current = word
		if current:
			lines.append(current)
	return lines


#============================================
def layout_text(element: fb.model.TextElement, box: PageBox, text: str) -> list[PlacedLine]:
	"""
	Place the lines of a text element.

	The first baseline sits at box.y + font_size, so text hangs just below
	the top edge of its box the way the designer canvas draws it.

	Args:
		element: Text element.
		box: Page box.
		text: Substituted text.

	Returns:
		Placed lines.
	"""
	x = anchor_x(box.x, box.width, element.align)
	leading = element.font_size * TEXT_LEADING_FACTOR
	placed: list[PlacedLine] = []
	for index, line in enumerate(text.split("\n")):
		baseline = box.y + element.font_size + index * leading
		placed.append(PlacedLine(line, x, baseline, element.align))
	return placed


#============================================
def layout_text_area(element: fb.model.TextAreaElement, box: PageBox, text: str) -> list[PlacedLine]:
	"""
	Wrap and place the lines of a text area inside its padded box.

	Args:
		element: Text area element.
		box: Page box.
		text: Substituted text.

	Returns:
		Placed lines.
	"""
	font_name = map_font_name(element.bold)
	inner_left = box.x + TEXT_AREA_PADDING
	inner_width = box.width - 2.0 * TEXT_AREA_PADDING
	lines = wrap_text_lines(text, font_name, element.font_size, inner_width)
	x = anchor_x(inner_left, inner_width, element.align)
	advance = element.font_size + TEXT_AREA_LINE_EXTRA
	first_baseline = box.y + TEXT_AREA_PADDING + element.font_size
	return [
		PlacedLine(line, x, first_baseline + index * advance, element.align)
		for index, line in enumerate(lines)
	]


#============================================
def draw_text_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: fb.model.TextElement,
	box: PageBox,
	record: FieldRecord,
	page_height: float,
) -> None:
	"""
	Draw a single- or multi-line text element.

	Args:
		pdf: ReportLab canvas.
		element: Text element.
		box: Page box.
		record: Field record for placeholders.
		page_height: Page height in points.
	"""
	text = fb.fields.substitute_placeholders(element.content, record)
	pdf.setFont(map_font_name(element.bold), element.font_size)
	color = parse_hex_color(element.color)
	pdf.setFillColorRGB(color[0], color[1], color[2])
	for line in layout_text(element, box, text):
		draw_aligned_string(pdf, line, page_height)


#============================================
def draw_text_area_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: fb.model.TextAreaElement,
	box: PageBox,
	record: FieldRecord,
	page_height: float,
) -> None:
	"""
	Draw a text area: optional fill and border, then wrapped text.

	Args:
		pdf: ReportLab canvas.
		element: Text area element.
		box: Page box.
		record: Field record for placeholders.
		page_height: Page height in points.
	"""
	text = fb.fields.substitute_placeholders(element.content, record)
	# lay out first so a line that cannot fit fails before anything is drawn
	placed = layout_text_area(element, box, text)

	bottom = pdf_y(page_height, box.y + box.height)
	if not is_transparent(element.background_color):
		fill = parse_hex_color(element.background_color)
		pdf.setFillColorRGB(fill[0], fill[1], fill[2])
		pdf.rect(box.x, bottom, box.width, box.height, stroke=0, fill=1)
	if element.border_width > 0 and not is_transparent(element.border_color):
		stroke = parse_hex_color(element.border_color)
		pdf.setStrokeColorRGB(stroke[0], stroke[1], stroke[2])
		pdf.setLineWidth(element.border_width)
		pdf.rect(box.x, bottom, box.width, box.height, stroke=1, fill=0)

	pdf.setFont(map_font_name(element.bold), element.font_size)
	color = parse_hex_color(element.color)
	pdf.setFillColorRGB(color[0], color[1], color[2])
	for line in placed:
		draw_aligned_string(pdf, line, page_height)


#============================================
def draw_checkbox_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: fb.model.CheckboxElement,
	box: PageBox,
	record: FieldRecord,
	page_height: float,
) -> None:
	"""
	Draw a fixed-size checkbox, its check mark and its label.

	Args:
		pdf: ReportLab canvas.
		element: Checkbox element.
		box: Page box, only its top-left corner is used.
		record: Field record for placeholders in the label.
		page_height: Page height in points.
	"""
	x = box.x
	y = box.y
	color = parse_hex_color(element.color)
	pdf.setStrokeColorRGB(color[0], color[1], color[2])
	pdf.setLineWidth(CHECKBOX_LINE_WIDTH)
	pdf.rect(x, pdf_y(page_height, y + CHECKBOX_SIZE), CHECKBOX_SIZE, CHECKBOX_SIZE, stroke=1, fill=0)
	if element.checked:
		pdf.line(x + 5, pdf_y(page_height, y + 10), x + 8, pdf_y(page_height, y + 15))
		pdf.line(x + 8, pdf_y(page_height, y + 15), x + 15, pdf_y(page_height, y + 5))
	label = fb.fields.substitute_placeholders(element.label, record)
	if label:
		pdf.setFont(DEFAULT_FONT_REGULAR, CHECKBOX_LABEL_SIZE)
		text_color = parse_hex_color(DEFAULT_COLOR)
		pdf.setFillColorRGB(text_color[0], text_color[1], text_color[2])
		pdf.drawString(
			x + CHECKBOX_LABEL_OFFSET_X,
			pdf_y(page_height, y + CHECKBOX_LABEL_OFFSET_Y),
			label,
		)


#============================================
def draw_styled_run(
	pdf: reportlab.pdfgen.canvas.Canvas,
	start: tuple[float, float],
	end: tuple[float, float],
	style: str,
	thickness: float,
	color: str,
	page_height: float,
) -> None:
	"""
	Stroke a straight run as solid, dashed or dotted.

	Dash and dot tiling restarts at the start point of every run.

	Args:
		pdf: ReportLab canvas.
		start: Run start (x, y), top-left page space.
		end: Run end (x, y), top-left page space.
		style: "solid", "dashed" or "dotted".
		thickness: Stroke width, also the dot diameter.
		color: Hex color.
		page_height: Page height in points.
	"""
	length = math.hypot(end[0] - start[0], end[1] - start[1])
	if length <= 0 or thickness <= 0:
		return
	unit_x = (end[0] - start[0]) / length
	unit_y = (end[1] - start[1]) / length

	def point_at(offset: float) -> tuple[float, float]:
		return (start[0] + unit_x * offset, pdf_y(page_height, start[1] + unit_y * offset))

	rgb = parse_hex_color(color)
	pdf.setStrokeColorRGB(rgb[0], rgb[1], rgb[2])
	pdf.setFillColorRGB(rgb[0], rgb[1], rgb[2])
	pdf.setLineWidth(thickness)
	if style == "dashed":
		for segment_start, segment_end in fb.geometry.tile_dashes(length):
			x0, y0 = point_at(segment_start)
			x1, y1 = point_at(segment_end)
			pdf.line(x0, y0, x1, y1)
		return
	if style == "dotted":
		for offset in fb.geometry.tile_dots(length):
			center_x, center_y = point_at(offset)
			pdf.circle(center_x, center_y, thickness / 2.0, stroke=0, fill=1)
		return
	x0, y0 = point_at(0.0)
	x1, y1 = point_at(length)
	pdf.line(x0, y0, x1, y1)


#============================================
def draw_line_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: fb.model.LineElement,
	box: PageBox,
	record: FieldRecord,
	page_height: float,
) -> None:
	"""
	Draw a horizontal rule across the box at its vertical midpoint.
	"""
	mid_y = box.y + box.height / 2.0
	draw_styled_run(
		pdf,
		(box.x, mid_y),
		(box.x + box.width, mid_y),
		element.style,
		element.thickness,
		element.color,
		page_height,
	)


#============================================
def draw_square_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: fb.model.SquareElement,
	box: PageBox,
	record: FieldRecord,
	page_height: float,
) -> None:
	"""
	Draw a rectangle with optional fill and a styled border.

	Args:
		pdf: ReportLab canvas.
		element: Square element.
		box: Page box.
		record: Unused.
		page_height: Page height in points.
	"""
	if not is_transparent(element.fill_color):
		fill = parse_hex_color(element.fill_color)
		pdf.setFillColorRGB(fill[0], fill[1], fill[2])
		pdf.rect(box.x, pdf_y(page_height, box.y + box.height), box.width, box.height, stroke=0, fill=1)
	if element.border_width <= 0 or is_transparent(element.border_color):
		return
	if element.border_style == "solid":
		# one closed path so the corners join
		stroke = parse_hex_color(element.border_color)
		pdf.setStrokeColorRGB(stroke[0], stroke[1], stroke[2])
		pdf.setLineWidth(element.border_width)
		pdf.rect(box.x, pdf_y(page_height, box.y + box.height), box.width, box.height, stroke=1, fill=0)
		return
	for start, end in fb.geometry.box_edges(box):
		draw_styled_run(
			pdf,
			start,
			end,
			element.border_style,
			element.border_width,
			element.border_color,
			page_height,
		)


#============================================
def draw_image_placeholder(
	pdf: reportlab.pdfgen.canvas.Canvas,
	box: PageBox,
	label: str,
	page_height: float,
) -> None:
	"""
	Draw a bordered box with a centered label in place of an image.
	"""
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	pdf.setLineWidth(PLACEHOLDER_LINE_WIDTH)
	pdf.rect(box.x, pdf_y(page_height, box.y + box.height), box.width, box.height, stroke=1, fill=0)
	center_x, center_y = box.center
	pdf.setFont(DEFAULT_FONT_REGULAR, PLACEHOLDER_FONT_SIZE)
	pdf.drawCentredString(center_x, pdf_y(page_height, center_y + PLACEHOLDER_FONT_SIZE / 3.0), label)


#============================================
def draw_image_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: fb.model.ImageElement,
	box: PageBox,
	record: FieldRecord,
	page_height: float,
) -> None:
	"""
	Draw an embedded image stretched to its box.

	Undecodable data is replaced by an "Image Error" placeholder and the
	ImageDecodeError is re-raised so the composer can report it.

	Args:
		pdf: ReportLab canvas.
		element: Image or background-image element.
		box: Page box.
		record: Unused.
		page_height: Page height in points.
	"""
	if not element.image_data:
		draw_image_placeholder(pdf, box, NO_IMAGE_LABEL, page_height)
		return
	try:
		image_reader = fb.media.decode_image(element.image_data)
	except fb.media.ImageDecodeError:
		draw_image_placeholder(pdf, box, IMAGE_ERROR_LABEL, page_height)
		raise
	pdf.drawImage(
		image_reader,
		box.x,
		pdf_y(page_height, box.y + box.height),
		width=box.width,
		height=box.height,
		mask="auto",
		preserveAspectRatio=False,
		anchor="sw",
	)


ELEMENT_RENDERERS = {
	"text": draw_text_element,
	"textArea": draw_text_area_element,
	"checkbox": draw_checkbox_element,
	"image": draw_image_element,
	"background-image": draw_image_element,
	"line": draw_line_element,
	"square": draw_square_element,
}
