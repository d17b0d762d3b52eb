import pytest

import foldover_badge.media


#============================================
def test_parse_data_uri(png_data_uri: str) -> None:
	"""
	Verify the MIME type and payload are split out.
	"""
	parsed = foldover_badge.media.parse_data_uri(png_data_uri)
	assert parsed.mime_type == "image/png"
	assert parsed.subtype == "png"
	assert parsed.data.startswith(b"\x89PNG")


#============================================
def test_bare_base64_is_read_as_png(png_data_uri: str) -> None:
	"""
	Verify a payload stored without the data URI header still decodes.
	"""
	bare = png_data_uri.split(",", 1)[1]
	parsed = foldover_badge.media.parse_data_uri(bare)
	assert parsed.mime_type == "image/png"
	reader = foldover_badge.media.decode_image(bare)
	assert reader.getSize() == (16, 16)


#============================================
def test_bad_payloads_raise_decode_errors(jpeg_data_uri: str) -> None:
	"""
	Verify malformed or mislabelled data is reported as a decode error.
	"""
	for value in ("not base64 at all!", "data:image/png;base64,", "data:image/png;base64,!!!"):
		with pytest.raises(foldover_badge.media.ImageDecodeError):
			foldover_badge.media.parse_data_uri(value)
	# JPEG bytes labelled as PNG do not decode
	mislabelled = jpeg_data_uri.replace("image/jpeg", "image/png")
	with pytest.raises(foldover_badge.media.ImageDecodeError):
		foldover_badge.media.decode_image(mislabelled)


#============================================
def test_pdf_uri_detection(pdf_data_uri: str, png_data_uri: str) -> None:
	"""
	Verify PDF payloads are told apart from images.
	"""
	assert foldover_badge.media.is_pdf_uri(pdf_data_uri)
	assert not foldover_badge.media.is_pdf_uri(png_data_uri)
	assert not foldover_badge.media.is_pdf_uri(None)
	page = foldover_badge.media.decode_pdf_page(pdf_data_uri)
	assert float(page.mediabox.width) == pytest.approx(612.0)
