# Declarative argument schemas and the validation pass over argument bags

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from .errors import InvalidArguments

STRING = "string"
NUMBER = "number"


@dataclass(frozen=True)
class ArgumentSpec:
	"""One field of an operation's argument schema."""
	name: str
	type: str
	description: str
	required: bool = False
	minimum: Optional[float] = None
	maximum: Optional[float] = None
	default: Any = None

	def json_schema(self) -> Dict[str, Any]:
		schema: Dict[str, Any] = {"type": self.type, "description": self.description}
		if self.minimum is not None:
			schema["minimum"] = self.minimum
		if self.maximum is not None:
			schema["maximum"] = self.maximum
		if self.default is not None:
			schema["default"] = self.default
		return schema


def _is_absent(value: Any) -> bool:
	return value is None or (isinstance(value, str) and value == "")


def _type_matches(spec: ArgumentSpec, value: Any) -> bool:
	if spec.type == STRING:
		return isinstance(value, str)
	if spec.type == NUMBER:
		# bool is an int subclass but never a valid number argument
		if not isinstance(value, (int, float)) or isinstance(value, bool):
			return False
		# NaN slips past both bound comparisons
		return isinstance(value, int) or math.isfinite(value)
	return False


def _join_names(names: Sequence[str]) -> str:
	if len(names) == 1:
		return names[0]
	return ", ".join(names[:-1]) + " and " + names[-1]


def check_arguments(specs: Sequence[ArgumentSpec], args: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
	"""Validate an argument bag against a schema.

	Returns only the declared fields that are present. Unknown fields are
	dropped. Raises InvalidArguments naming the offending field(s).
	"""
	args = args or {}
	if not isinstance(args, Mapping):
		raise InvalidArguments(f"Arguments must be an object, got {type(args).__name__}")

	missing = [spec.name for spec in specs if spec.required and _is_absent(args.get(spec.name))]
	if missing:
		verb = "is" if len(missing) == 1 else "are"
		raise InvalidArguments(f"{_join_names(missing)} {verb} required", fields=missing)

	values: Dict[str, Any] = {}
	for spec in specs:
		value = args.get(spec.name)
		if value is None:
			continue
		if not _type_matches(spec, value):
			raise InvalidArguments(
				f"{spec.name} must be a {spec.type}, got {type(value).__name__}",
				fields=[spec.name],
			)
		if spec.minimum is not None and value < spec.minimum:
			raise InvalidArguments(
				f"{spec.name} must be >= {spec.minimum:g}, got {value}",
				fields=[spec.name],
			)
		if spec.maximum is not None and value > spec.maximum:
			raise InvalidArguments(
				f"{spec.name} must be <= {spec.maximum:g}, got {value}",
				fields=[spec.name],
			)
		values[spec.name] = value
	return values
