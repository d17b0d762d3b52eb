"""
CLI entry points for badge rendering.
"""

# Standard Library
import argparse
import dataclasses
import datetime
import json
import pathlib
import sys
import time

# local repo modules
import foldover_badge as fb
import foldover_badge.compose
import foldover_badge.config
import foldover_badge.model
import foldover_badge.template_io
import foldover_badge.validate


BadgeSettings = fb.config.BadgeSettings
Template = fb.model.Template


#============================================
def page_from_settings(settings: BadgeSettings) -> fb.model.PageSettings:
	"""
	Build page settings from printer settings.

	Args:
		settings: Loaded BadgeSettings.

	Returns:
		PageSettings.
	"""
	return fb.model.PageSettings(
		width_in=settings.width_in,
		height_in=settings.height_in,
		fold_over_enabled=settings.fold_over,
		canvas_width_px=settings.canvas_width_px,
		canvas_height_px=settings.canvas_height_px,
	)


#============================================
def build_template(args: argparse.Namespace, settings: BadgeSettings) -> Template:
	"""
	Load the template named on the command line.

	Args:
		args: Parsed argparse namespace.
		settings: Loaded BadgeSettings.

	Returns:
		Template.
	"""
	if args.default_template:
		template = fb.model.default_template()
		return dataclasses.replace(template, page=page_from_settings(settings))
	return fb.template_io.load_template(pathlib.Path(args.template_path))


#============================================
def load_records(record_path: str | None) -> list[dict]:
	"""
	Load field records from a JSON file.

	Args:
		record_path: JSON file holding one object or a list of objects.

	Returns:
		List of records; a single empty record when no file is given.
	"""
	if record_path is None:
		return [{}]
	data = json.loads(pathlib.Path(record_path).read_text(encoding="utf-8"))
	if isinstance(data, dict):
		return [data]
	if isinstance(data, list) and all(isinstance(item, dict) for item in data):
		return data
	raise ValueError(f"Record file {record_path} must hold an object or a list of objects")


#============================================
def collect_unresolved_fields(artifacts: list[fb.compose.PageArtifact]) -> list[str]:
	"""
	List placeholder names left unresolved on any badge, in first-seen order.

	Args:
		artifacts: Rendered page artifacts.

	Returns:
		Unique field names.
	"""
	names: list[str] = []
	for artifact in artifacts:
		for entry in artifact.preview["elements"]:
			for name in entry.get("unresolvedFields", []):
				if name not in names:
					names.append(name)
	return names


#============================================
def write_export(template: Template, export_dir: pathlib.Path) -> pathlib.Path:
	"""
	Write a versioned template export file.

	Args:
		template: Template to export.
		export_dir: Output directory, created if missing.

	Returns:
		Path of the written file.
	"""
	exported_at = datetime.datetime.now(datetime.timezone.utc)
	export_dir.mkdir(parents=True, exist_ok=True)
	export_path = export_dir / fb.template_io.export_filename(template, exported_at)
	data = fb.template_io.export_template(template, exported_at)
	with export_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2)
	return export_path


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render fold-over name badges to PDF.")
	parser.add_argument("template_path", nargs="?", default=None, help="Template JSON file.")

	input_group = parser.add_argument_group("Input")
	input_group.add_argument("-r", "--record", dest="record_path", default=None, help="Record JSON (object or list of objects).")
	input_group.add_argument("-s", "--settings", dest="settings_path", default=None, help="Printer settings JSON.")
	input_group.add_argument(
		"-d",
		"--default-template",
		dest="default_template",
		action="store_true",
		help="Use the built-in Hello My Name Is template.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-p", "--preview", dest="preview_path", default=None, help="Output preview JSON path.")
	output_group.add_argument(
		"-e",
		"--export-dir",
		dest="export_dir",
		default=None,
		help="Also write a versioned template export into this directory.",
	)

	parser.set_defaults(default_template=False)

	args = parser.parse_args()
	if args.template_path is None and not args.default_template:
		parser.error("a template path is required unless --default-template is given")
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Render badges for every record and write the outputs.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Fold-over badge renderer")
	print(f"Output PDF: {args.output_path}")
	if args.preview_path:
		print(f"Preview: {args.preview_path}")

	start_time = time.perf_counter()
	settings_path = pathlib.Path(args.settings_path) if args.settings_path else None
	settings = fb.config.load_settings(settings_path)
	print(f"Printer: {settings.label_size} label at {settings.dpi} dpi")
	template = build_template(args, settings)
	records = load_records(args.record_path)
	print(f"Template: {template.name}")
	print(f"Page: {template.page.width_in}x{template.page.height_in} in, fold over: {template.page.fold_over_enabled}")
	print(f"Records: {len(records)}")

	for warning in fb.validate.find_bounds_warnings(template):
		print(f"Warning: {warning}")

	render_start = time.perf_counter()
	pdf_bytes, artifacts = fb.compose.render_batch(template, records, verbose=True)
	render_end = time.perf_counter()

	output_path = pathlib.Path(args.output_path)
	output_path.write_bytes(pdf_bytes)
	error_count = sum(len(artifact.errors) for artifact in artifacts)
	print(f"Pages written: {len(artifacts)}")
	print(f"Element errors: {error_count}")
	unresolved = collect_unresolved_fields(artifacts)
	if unresolved:
		print(f"Unresolved fields: {', '.join(unresolved)}")

	if args.preview_path:
		previews = [artifact.preview for artifact in artifacts]
		preview = previews[0] if len(previews) == 1 else previews
		fb.compose.write_preview(pathlib.Path(args.preview_path), preview)
		print(f"Preview written: {args.preview_path}")

	if args.export_dir:
		export_path = write_export(template, pathlib.Path(args.export_dir))
		print(f"Template exported: {export_path}")

	total_time = time.perf_counter() - start_time
	print(
		"Timing: render={:.2f}s total={:.2f}s".format(
			render_end - render_start,
			total_time,
		)
	)


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	try:
		run_pipeline(args)
	except fb.validate.TemplateValidationError as error:
		print(f"Template rejected: {len(error.issues)} issue(s)")
		for issue in error.issues:
			print(f"  {issue}")
		sys.exit(1)
	except ValueError as error:
		print(f"Error: {error}")
		sys.exit(1)
