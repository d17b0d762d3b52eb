"""
Pytest configuration for local imports and shared badge fixtures.
"""

# Standard Library
import base64
import io
import os
import sys

# PIP3 modules
import PIL.Image
import pytest
import reportlab.pdfgen.canvas

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def _to_data_uri(mime_type: str, data: bytes) -> str:
	encoded = base64.b64encode(data).decode("ascii")
	return f"data:{mime_type};base64,{encoded}"


#============================================
@pytest.fixture
def png_data_uri() -> str:
	"""
	Small solid red PNG as a data URI.
	"""
	image = PIL.Image.new("RGB", (16, 16), (255, 0, 0))
	buffer = io.BytesIO()
	image.save(buffer, format="PNG")
	return _to_data_uri("image/png", buffer.getvalue())


#============================================
@pytest.fixture
def jpeg_data_uri() -> str:
	"""
	Small solid blue JPEG as a data URI.
	"""
	image = PIL.Image.new("RGB", (16, 16), (0, 0, 255))
	buffer = io.BytesIO()
	image.save(buffer, format="JPEG")
	return _to_data_uri("image/jpeg", buffer.getvalue())


#============================================
@pytest.fixture
def pdf_data_uri() -> str:
	"""
	One-page letter PDF carrying the text "Background Mark".
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=(612, 792))
	pdf.setFont("Helvetica", 24)
	pdf.drawString(72, 700, "Background Mark")
	pdf.showPage()
	pdf.save()
	return _to_data_uri("application/pdf", buffer.getvalue())
