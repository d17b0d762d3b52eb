"""
Template JSON persistence, export and import.
"""

# Standard Library
import dataclasses
import datetime
import json
import pathlib

# local repo modules
import foldover_badge as fb
import foldover_badge.config
import foldover_badge.model
import foldover_badge.validate


Template = fb.model.Template
TEMPLATE_EXPORT_VERSION = fb.config.TEMPLATE_EXPORT_VERSION
EXPORT_ONLY_KEYS = ("version", "exportedAt", "id")


#============================================
def serialize_template(template: Template) -> str:
	"""
	Serialize a template to JSON text.

	Args:
		template: Template instance.

	Returns:
		JSON string.
	"""
	return json.dumps(fb.model.template_to_dict(template), indent=2)


#============================================
def deserialize_template(text: str) -> Template:
	"""
	Parse and validate template JSON text.

	Args:
		text: JSON string.

	Returns:
		Template instance.
	"""
	data = json.loads(text)
	fb.validate.validate_template_data(data)
	return fb.model.template_from_dict(data)


#============================================
def load_template(path: pathlib.Path) -> Template:
	"""
	Load a template or template export file.

	Args:
		path: JSON file path.

	Returns:
		Template instance.
	"""
	data = json.loads(path.read_text(encoding="utf-8"))
	return import_template(data)


#============================================
def export_template(template: Template, exported_at: datetime.datetime | None = None) -> dict:
	"""
	Wrap a template for file export.

	Args:
		template: Template instance.
		exported_at: Export timestamp, defaults to now (UTC).

	Returns:
		Export dictionary.
	"""
	if exported_at is None:
		exported_at = datetime.datetime.now(datetime.timezone.utc)
	data = fb.model.template_to_dict(template)
	data["version"] = TEMPLATE_EXPORT_VERSION
	data["exportedAt"] = exported_at.isoformat()
	return data


#============================================
def export_filename(template: Template, exported_at: datetime.datetime) -> str:
	"""
	Build the download filename for an exported template.
	"""
	safe_name = "".join(char if char.isalnum() else "_" for char in template.name)
	stamp = exported_at.strftime("%Y-%m-%d_%H-%M-%S")
	return f"{safe_name}_{stamp}.json"


#============================================
def import_template(data: dict) -> Template:
	"""
	Build a template from exported or stored JSON data.

	Export wrapper keys and any stored id are dropped, the name and
	description are trimmed, and the result is validated.

	Args:
		data: Template dictionary.

	Returns:
		Template instance.
	"""
	if not isinstance(data, dict):
		raise fb.validate.TemplateValidationError(
			[fb.validate.ValidationIssue(None, "template", "must be an object")]
		)
	cleaned = {key: value for key, value in data.items() if key not in EXPORT_ONLY_KEYS}
	name = cleaned.get("name")
	if not isinstance(name, str) or not name.strip():
		raise fb.validate.TemplateValidationError(
			[fb.validate.ValidationIssue(None, "name", "is required")]
		)
	cleaned["name"] = name.strip()
	cleaned["description"] = str(cleaned.get("description") or "").strip()
	fb.validate.validate_template_data(cleaned)
	return fb.model.template_from_dict(cleaned)


#============================================
def duplicate_template(template: Template, name: str | None = None, description: str | None = None) -> Template:
	"""
	Copy a template under a new name.

	Args:
		template: Source template.
		name: New name, defaults to "<name> (Copy)".
		description: New description, defaults to the source description.

	Returns:
		New Template instance.
	"""
	return dataclasses.replace(
		template,
		name=name or f"{template.name} (Copy)",
		description=description if description is not None else template.description,
	)
