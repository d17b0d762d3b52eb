import datetime
import json
import pathlib

import pytest

import foldover_badge.model
import foldover_badge.template_io
import foldover_badge.validate


TemplateValidationError = foldover_badge.validate.TemplateValidationError


#============================================
def _template_data(elements: list) -> dict:
	return {
		"name": "Test Badge",
		"description": "",
		"page": {"widthIn": 4, "heightIn": 6, "foldOverEnabled": True},
		"elements": elements,
	}


#============================================
def test_validation_reports_index_and_field() -> None:
	"""
	Verify each issue names the offending element and field.
	"""
	data = _template_data([
		{"type": "text", "x": 0, "y": 0, "width": 1, "height": 1, "content": "ok"},
		{"type": "hologram", "x": 0, "y": 0, "width": 1, "height": 1},
		{"type": "square", "x": "left", "y": 0, "width": -1, "height": 1},
	])
	with pytest.raises(TemplateValidationError) as excinfo:
		foldover_badge.validate.validate_template_data(data)
	issues = excinfo.value.issues
	found = {(issue.index, issue.field) for issue in issues}
	assert (1, "type") in found
	assert (2, "x") in found
	assert (2, "width") in found
	assert all(issue.index != 0 for issue in issues)
	assert str(excinfo.value).startswith("Invalid template configuration: ")


#============================================
def test_validation_error_is_value_error() -> None:
	"""
	Verify callers can catch validation failures as ValueError.
	"""
	data = _template_data([{"x": 0, "y": 0, "width": 1, "height": 1}])
	with pytest.raises(ValueError):
		foldover_badge.validate.validate_template_data(data)


#============================================
def test_validation_rejects_bad_page_and_elements() -> None:
	"""
	Verify page dimensions and the elements array are checked.
	"""
	data = {"name": "x", "page": {"widthIn": 0, "heightIn": 6}, "elements": {}}
	issues = foldover_badge.validate.collect_issues(data)
	fields = [issue.field for issue in issues]
	assert "page.widthIn" in fields
	assert "elements" in fields


#============================================
def test_validation_checks_variant_fields() -> None:
	"""
	Verify variant-specific fields are checked.
	"""
	data = _template_data([
		{"type": "text", "x": 0, "y": 0, "width": 1, "height": 1, "fontSize": 0},
		{"type": "line", "x": 0, "y": 0, "width": 1, "height": 1, "style": "wavy"},
		{"type": "checkbox", "x": 0, "y": 0, "width": 1, "height": 1, "label": 5, "checked": "yes"},
		{"type": "text", "x": 0, "y": 0, "width": 1, "height": 1, "color": 123, "bold": 1},
		{"type": "textArea", "x": 0, "y": 0, "width": 1, "height": 1, "borderWidth": "2", "backgroundColor": ["#fff"], "borderColor": 0},
		{"type": "square", "x": 0, "y": 0, "width": 1, "height": 1, "fillColor": 255, "borderColor": {}},
		{"type": "image", "x": 0, "y": 0, "width": 1, "height": 1, "imageFileName": 3},
	])
	found = {(issue.index, issue.field) for issue in foldover_badge.validate.collect_issues(data)}
	assert found == {
		(0, "fontSize"),
		(1, "style"),
		(2, "label"),
		(2, "checked"),
		(3, "color"),
		(3, "bold"),
		(4, "borderWidth"),
		(4, "backgroundColor"),
		(4, "borderColor"),
		(5, "fillColor"),
		(5, "borderColor"),
		(6, "imageFileName"),
	}


#============================================
def test_validation_checks_page_flags() -> None:
	"""
	Verify the fold-over flag must be a boolean.
	"""
	data = _template_data([])
	data["page"]["foldOverEnabled"] = "yes"
	fields = [issue.field for issue in foldover_badge.validate.collect_issues(data)]
	assert fields == ["page.foldOverEnabled"]


#============================================
def test_round_trip_keeps_every_variant(png_data_uri: str) -> None:
	"""
	Verify dictionary conversion keeps all fields, including image data.
	"""
	data = _template_data([
		{"type": "text", "id": "a", "x": 0.5, "y": 0.5, "width": 3, "height": 0.5, "content": "{{firstName}}", "fontSize": 20, "bold": True, "align": "center"},
		{"type": "textArea", "id": "b", "x": 0.5, "y": 1.5, "width": 3, "height": 1, "content": "notes", "backgroundColor": "#eeeeee", "borderWidth": 1},
		{"type": "checkbox", "id": "c", "x": 0.5, "y": 2.5, "width": 0.3, "height": 0.3, "label": "VIP", "checked": True},
		{"type": "image", "id": "d", "x": 0.5, "y": 3.5, "width": 1, "height": 1, "imageData": png_data_uri, "imageFileName": "logo.png"},
		{"type": "background-image", "id": "e", "x": 0, "y": 0, "width": 4, "height": 3, "imageData": png_data_uri},
		{"type": "line", "id": "f", "x": 0.5, "y": 5, "width": 3, "height": 0.1, "style": "dashed", "thickness": 2},
		{"type": "square", "id": "g", "x": 0.5, "y": 5.2, "width": 3, "height": 0.5, "borderStyle": "dotted", "fillColor": "#ff0000"},
	])
	template = foldover_badge.template_io.import_template(data)
	assert [element.kind for element in template.elements] == [
		"text", "textArea", "checkbox", "image", "background-image", "line", "square",
	]
	assert template.elements[0].font_size == 20.0
	assert isinstance(template.elements[0].font_size, float)
	assert template.elements[3].image_data == png_data_uri

	text = foldover_badge.template_io.serialize_template(template)
	assert foldover_badge.template_io.deserialize_template(text) == template


#============================================
def test_element_from_dict_ignores_unknown_keys() -> None:
	"""
	Verify designer-only keys are dropped.
	"""
	element = foldover_badge.model.element_from_dict(
		{"type": "text", "id": 7, "x": 1, "y": 2, "width": 3, "height": 4, "zIndex": 9}
	)
	assert element.id == "7"
	assert element.x == 1.0
	assert element.content == ""


#============================================
def test_export_and_import() -> None:
	"""
	Verify export adds the wrapper and import strips it.
	"""
	template = foldover_badge.model.default_template()
	stamp = datetime.datetime(2026, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)
	exported = foldover_badge.template_io.export_template(template, stamp)
	assert exported["version"] == "1.0"
	assert exported["exportedAt"] == "2026-01-02T03:04:05+00:00"

	exported["id"] = "abc123"
	exported["name"] = "  Hello My Name Is  "
	imported = foldover_badge.template_io.import_template(exported)
	assert imported == template

	filename = foldover_badge.template_io.export_filename(template, stamp)
	assert filename == "Hello_My_Name_Is_2026-01-02_03-04-05.json"


#============================================
def test_import_requires_name() -> None:
	"""
	Verify a blank name is rejected.
	"""
	data = _template_data([])
	data["name"] = "   "
	with pytest.raises(TemplateValidationError):
		foldover_badge.template_io.import_template(data)


#============================================
def test_load_template_file(tmp_path: pathlib.Path) -> None:
	"""
	Verify templates load from JSON files.
	"""
	path = tmp_path / "badge.json"
	path.write_text(json.dumps(_template_data([
		{"type": "text", "x": 0, "y": 0, "width": 1, "height": 1, "content": "hi"},
	])), encoding="utf-8")
	template = foldover_badge.template_io.load_template(path)
	assert template.name == "Test Badge"
	assert template.page.width_in == 4.0
	assert template.elements[0].content == "hi"


#============================================
def test_duplicate_template() -> None:
	"""
	Verify duplicates get a copy suffix and keep their elements.
	"""
	template = foldover_badge.model.default_template()
	copy = foldover_badge.template_io.duplicate_template(template)
	assert copy.name == "Hello My Name Is (Copy)"
	assert copy.elements == template.elements
	renamed = foldover_badge.template_io.duplicate_template(template, name="Staff", description="")
	assert renamed.name == "Staff"
	assert renamed.description == ""


#============================================
def test_default_template_is_valid() -> None:
	"""
	Verify the built-in template passes validation.
	"""
	template = foldover_badge.model.default_template()
	foldover_badge.validate.validate_template(template)
	assert template.page.width_in == 4.0
	assert template.page.fold_over_enabled
	assert [element.id for element in template.elements] == ["hello", "name", "event", "date", "credential"]


#============================================
def test_bounds_warnings_are_informational() -> None:
	"""
	Verify overflowing elements are reported but still valid.
	"""
	data = _template_data([
		{"type": "text", "id": "wide", "x": 3.5, "y": 0, "width": 2, "height": 1},
		{"type": "text", "id": "fits", "x": 0, "y": 0, "width": 4, "height": 6},
	])
	template = foldover_badge.template_io.import_template(data)
	warnings = foldover_badge.validate.find_bounds_warnings(template)
	assert len(warnings) == 1
	assert "wide" in warnings[0]
