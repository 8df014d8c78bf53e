from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List


class ValueKind(Enum):
	INTEGER = "INTEGER"
	FLOAT = "FLOAT"
	STRING = "STRING"
	BOOLEAN = "BOOLEAN"
	NULL = "NULL"
	HTML = "HTML"
	BLOCK = "BLOCK"
	ERROR = "ERROR"

	def __str__(self) -> str:
		return self.value


@dataclass
class Value:
	"""Base class of the evaluator's runtime values.

	str(value) is the rendered form that ends up in the output HTML.
	"""
	kind = ValueKind.NULL

	def __str__(self) -> str:
		return ""

@dataclass
class Integer(Value):
	value: int
	kind = ValueKind.INTEGER

	def __str__(self) -> str:
		return str(self.value)

@dataclass
class Float(Value):
	value: float
	kind = ValueKind.FLOAT

	def __str__(self) -> str:
		return str(self.value)

@dataclass
class String(Value):
	value: str
	kind = ValueKind.STRING

	def __str__(self) -> str:
		return self.value

@dataclass
class Boolean(Value):
	value: bool
	kind = ValueKind.BOOLEAN

	def __str__(self) -> str:
		return "true" if self.value else "false"

@dataclass
class Null(Value):
	kind = ValueKind.NULL

	def __str__(self) -> str:
		return ""

@dataclass
class Html(Value):
	"""A rendered markup fragment."""
	value: str
	kind = ValueKind.HTML

	def __str__(self) -> str:
		return self.value

@dataclass
class Block(Value):
	"""The evaluated statements of a block, rendered by concatenation."""
	values: List[Value] = field(default_factory=list) # type: ignore
	kind = ValueKind.BLOCK

	def __str__(self) -> str:
		return "".join(str(v) for v in self.values)

@dataclass
class Error(Value):
	message: str
	kind = ValueKind.ERROR

	def __str__(self) -> str:
		return self.message


def is_error(value: Value) -> bool:
	return isinstance(value, Error)

def is_truthy(value: Value) -> bool:
	"""`0`, `0.0`, `""`, `false` and `null` are falsy, everything else is truthy."""
	if isinstance(value, Null):
		return False
	if isinstance(value, (Integer, Float, String, Boolean)):
		return bool(value.value)
	return True

def to_value(obj: Any) -> Value:
	"""Convert a plain Python value supplied by the caller into a runtime value.

	Raises:
		TypeError: If `obj` is not None, bool, int, float, str or a Value.
	"""
	if isinstance(obj, Value):
		return obj
	if obj is None:
		return Null()
	# bool first, it is a subclass of int
	if isinstance(obj, bool):
		return Boolean(obj)
	if isinstance(obj, int):
		return Integer(obj)
	if isinstance(obj, float):
		return Float(obj)
	if isinstance(obj, str):
		return String(obj)
	raise TypeError(f"unsupported value type: {type(obj).__name__}")
