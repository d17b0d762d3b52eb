"""
Page composition: template plus field record to a finished badge PDF.
"""

# Standard Library
import dataclasses
import io
import json
import pathlib

# PIP3 modules
import pypdf
import reportlab.pdfgen.canvas

# local repo modules
import foldover_badge as fb
import foldover_badge.config
import foldover_badge.elements
import foldover_badge.fields
import foldover_badge.geometry
import foldover_badge.media
import foldover_badge.model
import foldover_badge.validate


Template = fb.model.Template
FieldRecord = fb.fields.FieldRecord
ELEMENT_RENDERERS = fb.elements.ELEMENT_RENDERERS
PROGRESS_BAR_WIDTH = fb.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = fb.config.PROGRESS_UPDATE_EVERY
BACKGROUND_KIND = "page.backgroundImage"


@dataclasses.dataclass(frozen=True)
class ElementError:
	index: int | None
	element_id: str
	kind: str
	message: str

	def __str__(self) -> str:
		where = "page background" if self.index is None else f"element {self.index} ({self.kind} {self.element_id!r})"
		return f"{where}: {self.message}"


@dataclasses.dataclass
class PageArtifact:
	pdf_bytes: bytes
	preview: dict
	errors: list[ElementError]
	width_pt: float
	height_pt: float


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def coerce_template(template: Template | dict) -> Template:
	"""
	Validate a template given as an object or as its JSON dictionary.

	Args:
		template: Template or template dictionary.

	Returns:
		Validated Template.
	"""
	if isinstance(template, Template):
		fb.validate.validate_template(template)
		return template
	fb.validate.validate_template_data(template)
	return fb.model.template_from_dict(template)


#============================================
def summarize_element(element: fb.model.Element, page: fb.model.PageSettings, record: FieldRecord) -> dict:
	"""
	Build the lightweight preview entry for one element.

	Args:
		element: Template element.
		page: Page settings.
		record: Field record.

	Returns:
		Preview dictionary.
	"""
	box = fb.geometry.to_page_coordinates(element, page)
	summary = {"type": element.kind, "id": element.id, "mirrored": box.mirrored}
	if element.kind in ("text", "textArea"):
		summary["resolvedContent"] = fb.fields.substitute_placeholders(element.content, record)
		summary["unresolvedFields"] = fb.fields.find_placeholders(summary["resolvedContent"])
	elif element.kind == "checkbox":
		summary["label"] = fb.fields.substitute_placeholders(element.label, record)
		summary["unresolvedFields"] = fb.fields.find_placeholders(summary["label"])
		summary["checked"] = element.checked
	elif element.kind in ("image", "background-image"):
		summary["imageFileName"] = element.image_file_name
		summary["hasImage"] = bool(element.image_data)
	elif element.kind == "line":
		summary["style"] = element.style
		summary["thickness"] = element.thickness
	elif element.kind == "square":
		summary["borderStyle"] = element.border_style
		summary["fillColor"] = element.fill_color
	return summary


#============================================
def build_preview(template: Template | dict, record: FieldRecord) -> dict:
	"""
	Build a structural preview without drawing anything.

	Args:
		template: Template or template dictionary.
		record: Field record.

	Returns:
		Preview dictionary.
	"""
	template = coerce_template(template)
	page = template.page
	return {
		"name": template.name,
		"width": page.width_in,
		"height": page.height_in,
		"foldOver": page.fold_over_enabled,
		"elements": [summarize_element(element, page, record) for element in template.elements],
	}


#============================================
def draw_background(
	pdf: reportlab.pdfgen.canvas.Canvas,
	uri: str,
	width: float,
	height: float,
) -> pypdf.PageObject | None:
	"""
	Draw a raster page background full-bleed.

	A PDF background cannot be drawn through ReportLab; it is decoded and
	returned for underlay after the canvas is saved.

	Args:
		pdf: ReportLab canvas.
		uri: Background data URI.
		width: Page width in points.
		height: Page height in points.

	Returns:
		PDF page to underlay, or None.
	"""
	if fb.media.is_pdf_uri(uri):
		return fb.media.decode_pdf_page(uri)
	image_reader = fb.media.decode_image(uri)
	pdf.drawImage(image_reader, 0, 0, width=width, height=height, mask="auto", preserveAspectRatio=False)
	return None


#============================================
def underlay_pdf_page(
	overlay_bytes: bytes,
	background: pypdf.PageObject,
	width: float,
	height: float,
) -> bytes:
	"""
	Put a PDF page under the rendered badge, scaled full-bleed.

	Args:
		overlay_bytes: Rendered badge PDF.
		background: Background page.
		width: Page width in points.
		height: Page height in points.

	Returns:
		Merged single-page PDF bytes.
	"""
	box = background.mediabox
	scale_x = width / float(box.width)
	scale_y = height / float(box.height)
	transform = pypdf.Transformation().translate(-float(box.left), -float(box.bottom)).scale(scale_x, scale_y)
	page = pypdf.PageObject.create_blank_page(width=width, height=height)
	page.merge_transformed_page(background, transform)
	overlay = pypdf.PdfReader(io.BytesIO(overlay_bytes)).pages[0]
	page.merge_page(overlay)
	writer = pypdf.PdfWriter()
	writer.add_page(page)
	buffer = io.BytesIO()
	writer.write(buffer)
	return buffer.getvalue()


#============================================
def draw_element(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: fb.model.Element,
	box: fb.geometry.PageBox,
	record: FieldRecord,
	page_height: float,
) -> None:
	"""
	Draw one element, turned 180 degrees inside its box when mirrored.

	Args:
		pdf: ReportLab canvas.
		element: Template element.
		box: Page box.
		record: Field record.
		page_height: Page height in points.
	"""
	renderer = ELEMENT_RENDERERS[element.kind]
	pdf.saveState()
	try:
		if box.mirrored:
			center_x, center_y = box.center
			pivot_y = fb.elements.pdf_y(page_height, center_y)
			pdf.translate(center_x, pivot_y)
			pdf.rotate(180)
			pdf.translate(-center_x, -pivot_y)
		renderer(pdf, element, box, record, page_height)
	finally:
		pdf.restoreState()


#============================================
def render(template: Template | dict, record: FieldRecord, verbose: bool = False) -> PageArtifact:
	"""
	Render one badge page.

	The template is validated before any drawing. Each element is drawn in
	list order; a failing element is recorded and skipped so the rest of
	the page still renders.

	Args:
		template: Template or template dictionary.
		record: Field record.
		verbose: Print element failures as they happen.

	Returns:
		PageArtifact.
	"""
	template = coerce_template(template)
	page = template.page
	width, height = fb.geometry.page_size_points(page)
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(width, height))
	pdf.setTitle(template.name)
	errors: list[ElementError] = []

	background_page = None
	if page.background_image:
		try:
			background_page = draw_background(pdf, page.background_image, width, height)
		except fb.media.ImageDecodeError as error:
			errors.append(ElementError(None, "", BACKGROUND_KIND, str(error)))

	for index, element in enumerate(template.elements):
		box = fb.geometry.to_page_coordinates(element, page, apply_fold=True)
		try:
			draw_element(pdf, element, box, record, height)
		except Exception as error:
			errors.append(ElementError(index, element.id, element.kind, f"{type(error).__name__}: {error}"))

	pdf.showPage()
	pdf.save()
	pdf_bytes = buffer.getvalue()
	if background_page is not None:
		pdf_bytes = underlay_pdf_page(pdf_bytes, background_page, width, height)

	if verbose:
		for error in errors:
			print(f"Render warning: {error}")

	return PageArtifact(
		pdf_bytes=pdf_bytes,
		preview=build_preview(template, record),
		errors=errors,
		width_pt=width,
		height_pt=height,
	)


#============================================
def render_batch(
	template: Template | dict,
	records: list[FieldRecord],
	verbose: bool = False,
) -> tuple[bytes, list[PageArtifact]]:
	"""
	Render one page per record and merge them into one PDF.

	Args:
		template: Template or template dictionary.
		records: Field records, one badge each.
		verbose: Print progress and element failures.

	Returns:
		Tuple of (merged PDF bytes, per-record artifacts).
	"""
	template = coerce_template(template)
	writer = pypdf.PdfWriter()
	artifacts: list[PageArtifact] = []
	total = len(records)
	if verbose and total > 0:
		print_progress("Badges", 0, total)
	for index, record in enumerate(records, start=1):
		artifact = render(template, record)
		artifacts.append(artifact)
		reader = pypdf.PdfReader(io.BytesIO(artifact.pdf_bytes))
		writer.add_page(reader.pages[0])
		if verbose and (index % PROGRESS_UPDATE_EVERY == 0 or index == total):
			print_progress("Badges", index, total)
	if verbose and total > 0:
		print()
		for index, artifact in enumerate(artifacts):
			for error in artifact.errors:
				print(f"Record {index}: {error}")
	buffer = io.BytesIO()
	writer.write(buffer)
	return (buffer.getvalue(), artifacts)


#============================================
def write_preview(preview_path: pathlib.Path, preview: dict | list) -> None:
	"""
	Write a preview JSON file.

	Args:
		preview_path: Output path.
		preview: Preview dictionary, or a list of them for a batch.
	"""
	with preview_path.open("w", encoding="utf-8") as handle:
		json.dump(preview, handle, indent=2, sort_keys=True)
