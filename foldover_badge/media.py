"""
Data URI decoding for embedded images and PDF backgrounds.
"""

# Standard Library
import base64
import binascii
import dataclasses
import io
import urllib.parse

# PIP3 modules
import PIL.Image
import pypdf
import pypdf.errors
import reportlab.lib.utils


# MIME subtype -> Pillow codec
IMAGE_CODECS = {
	"png": "PNG",
	"jpeg": "JPEG",
	"jpg": "JPEG",
	"pjpeg": "JPEG",
	"gif": "GIF",
	"bmp": "BMP",
	"x-ms-bmp": "BMP",
	"webp": "WEBP",
	"tiff": "TIFF",
}
PDF_MIME_TYPE = "application/pdf"
LEGACY_IMAGE_MIME_TYPE = "image/png"


class ImageDecodeError(ValueError):
	"""
	Raised when embedded image data cannot be decoded.
	"""


@dataclasses.dataclass(frozen=True)
class DataUri:
	mime_type: str
	data: bytes

	@property
	def subtype(self) -> str:
		return self.mime_type.partition("/")[2]


#============================================
def parse_data_uri(uri: str) -> DataUri:
	"""
	Parse a data URI into its MIME type and payload.

	A bare base64 payload without the "data:" header is read as PNG, the
	way older templates stored uploaded images.

	Args:
		uri: String like "data:image/png;base64,....".

	Returns:
		DataUri.
	"""
	if not isinstance(uri, str):
		raise ImageDecodeError("not a data URI")
	if not uri.startswith("data:"):
		try:
			data = base64.b64decode("".join(uri.split()), validate=True)
		except (binascii.Error, ValueError) as error:
			raise ImageDecodeError(f"not a data URI or base64 payload: {error}") from error
		if not data:
			raise ImageDecodeError("image payload is empty")
		return DataUri(mime_type=LEGACY_IMAGE_MIME_TYPE, data=data)
	header, separator, payload = uri[5:].partition(",")
	if not separator:
		raise ImageDecodeError("data URI has no payload")
	params = header.split(";")
	mime_type = (params[0] or "text/plain").strip().lower()
	if "base64" in (param.strip().lower() for param in params[1:]):
		try:
			data = base64.b64decode(payload.strip(), validate=True)
		except (binascii.Error, ValueError) as error:
			raise ImageDecodeError(f"invalid base64 payload: {error}") from error
	else:
		data = urllib.parse.unquote_to_bytes(payload)
	if not data:
		raise ImageDecodeError("data URI payload is empty")
	return DataUri(mime_type=mime_type, data=data)


#============================================
def is_pdf_uri(uri: str | None) -> bool:
	"""
	Check whether a data URI declares a PDF payload.
	"""
	if not uri or not uri.startswith("data:"):
		return False
	return uri[5:].split(",", 1)[0].split(";", 1)[0].strip().lower() == PDF_MIME_TYPE


#============================================
def decode_image(uri: str) -> reportlab.lib.utils.ImageReader:
	"""
	Decode an image data URI with the codec its MIME subtype names.

	Args:
		uri: Image data URI.

	Returns:
		ReportLab ImageReader.
	"""
	parsed = parse_data_uri(uri)
	if not parsed.mime_type.startswith("image/"):
		raise ImageDecodeError(f"unsupported MIME type {parsed.mime_type}")
	codec = IMAGE_CODECS.get(parsed.subtype)
	if codec is None:
		raise ImageDecodeError(f"unsupported image type {parsed.subtype}")
	try:
		image = PIL.Image.open(io.BytesIO(parsed.data), formats=[codec])
		image.load()
	except (OSError, ValueError, SyntaxError) as error:
		raise ImageDecodeError(f"cannot decode {parsed.subtype} image: {error}") from error
	if image.mode in ("P", "PA", "LA"):
		image = image.convert("RGBA")
	return reportlab.lib.utils.ImageReader(image)


#============================================
def decode_pdf_page(uri: str) -> pypdf.PageObject:
	"""
	Decode the first page of a PDF data URI.

	Args:
		uri: PDF data URI.

	Returns:
		pypdf page object.
	"""
	parsed = parse_data_uri(uri)
	if parsed.mime_type != PDF_MIME_TYPE:
		raise ImageDecodeError(f"expected {PDF_MIME_TYPE}, got {parsed.mime_type}")
	try:
		reader = pypdf.PdfReader(io.BytesIO(parsed.data))
		page_count = len(reader.pages)
	except (pypdf.errors.PyPdfError, OSError, ValueError) as error:
		raise ImageDecodeError(f"cannot read PDF background: {error}") from error
	if page_count == 0:
		raise ImageDecodeError("PDF background has no pages")
	return reader.pages[0]
