"""
Placeholder field resolution against contact field records.

Imported contact data does not reliably use the names that templates use
for placeholders, so a name is looked up through an ordered chain of
strategies. The first strategy that returns a value wins.
"""

# Standard Library
import json
import re
import typing

# local repo modules
import foldover_badge as fb
import foldover_badge.config


CUSTOM_FIELDS_KEYS = fb.config.CUSTOM_FIELDS_KEYS
STANDARD_FIELD_SYNONYMS = fb.config.STANDARD_FIELD_SYNONYMS

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")
NON_ALNUM_PATTERN = re.compile(r"[^0-9a-z]")

FieldRecord = typing.Mapping[str, typing.Any]
Strategy = typing.Callable[[str, FieldRecord], "str | None"]


#============================================
def value_to_text(value: typing.Any) -> str | None:
	"""
	Convert a record value to display text.

	Args:
		value: Raw record value.

	Returns:
		Text, or None for a missing value.
	"""
	if value is None:
		return None
	if isinstance(value, str):
		return value
	if isinstance(value, bool):
		return "true" if value else "false"
	return str(value)


#============================================
def normalize_field_name(name: str) -> str:
	"""
	Lower-case a field name and strip everything but letters and digits.

	Args:
		name: Field name.

	Returns:
		Normalized name.
	"""
	return NON_ALNUM_PATTERN.sub("", name.lower())


#============================================
def custom_fields_of(record: FieldRecord) -> dict:
	"""
	Extract the nested custom-fields map from a record.

	The contact store keeps custom fields as a JSON object string, newer
	callers pass a mapping. Anything unreadable counts as empty.

	Args:
		record: Field record.

	Returns:
		Custom fields dictionary.
	"""
	for key in CUSTOM_FIELDS_KEYS:
		raw = record.get(key)
		if raw is None:
			continue
		if isinstance(raw, typing.Mapping):
			return dict(raw)
		if isinstance(raw, str):
			try:
				parsed = json.loads(raw)
			except json.JSONDecodeError:
				continue
			if isinstance(parsed, dict):
				return parsed
	return {}


#============================================
def resolve_exact(field_name: str, record: FieldRecord) -> str | None:
	if field_name in CUSTOM_FIELDS_KEYS:
		return None
	return value_to_text(record.get(field_name))


#============================================
def resolve_synonym(field_name: str, record: FieldRecord) -> str | None:
	for left, right in STANDARD_FIELD_SYNONYMS:
		if field_name == left:
			other = right
		elif field_name == right:
			other = left
		else:
			continue
		value = value_to_text(record.get(other))
		if value is not None:
			return value
	return None


#============================================
def resolve_custom_field(field_name: str, record: FieldRecord) -> str | None:
	custom_fields = custom_fields_of(record)
	if not custom_fields:
		return None
	value = value_to_text(custom_fields.get(field_name))
	if value is not None:
		return value
	# legacy CSV imports stored upper-cased headers
	return value_to_text(custom_fields.get(field_name.upper()))


#============================================
def resolve_normalized(field_name: str, record: FieldRecord) -> str | None:
	target = normalize_field_name(field_name)
	if not target:
		return None
	for key, raw in record.items():
		if key in CUSTOM_FIELDS_KEYS:
			continue
		if normalize_field_name(str(key)) == target:
			value = value_to_text(raw)
			if value is not None:
				return value
	for key, raw in custom_fields_of(record).items():
		if normalize_field_name(str(key)) == target:
			value = value_to_text(raw)
			if value is not None:
				return value
	return None


RESOLVER_STRATEGIES: tuple[Strategy, ...] = (
	resolve_exact,
	resolve_synonym,
	resolve_custom_field,
	resolve_normalized,
)


#============================================
def resolve(field_name: str, record: FieldRecord) -> str | None:
	"""
	Resolve a placeholder name against a field record.

	Args:
		field_name: Placeholder name without braces.
		record: Field record.

	Returns:
		Resolved text, or None when no strategy matches.
	"""
	for strategy in RESOLVER_STRATEGIES:
		value = strategy(field_name, record)
		if value is not None:
			return value
	return None


#============================================
def substitute_placeholders(text: str, record: FieldRecord) -> str:
	"""
	Replace {{fieldName}} tokens in text.

	Unresolved tokens are kept verbatim so unmapped fields stay visible.

	Args:
		text: Text with placeholders.
		record: Field record.

	Returns:
		Substituted text.
	"""
	if not text or "{{" not in text:
		return text

	def replacer(match: re.Match) -> str:
		value = resolve(match.group(1), record)
		if value is None:
			return match.group(0)
		return value

	return PLACEHOLDER_PATTERN.sub(replacer, text)


#============================================
def find_placeholders(text: str) -> list[str]:
	"""
	List placeholder names in text, in order of appearance.
	"""
	return [match.group(1) for match in PLACEHOLDER_PATTERN.finditer(text or "")]
