from typing import Any, Dict, Iterator, Mapping, Optional

from .values import Value, to_value


class Environment:
	"""Variable bindings for one evaluation.

	The evaluator writes into the environment as well as reading it: a loop
	rebinds `index` on every iteration, replacing whatever was bound before.
	Use a separate Environment for each concurrent render.
	"""

	def __init__(self, store: Optional[Dict[str, Value]] = None):
		self._store: Dict[str, Value] = store if store is not None else {}

	@classmethod
	def from_dict(cls, params: Mapping[str, Any]) -> "Environment":
		"""Build an environment from plain Python values.

		Raises:
			TypeError: If a value cannot be represented in a template.
		"""
		store: Dict[str, Value] = {}
		for (name, obj) in params.items():
			try:
				store[name] = to_value(obj)
			except TypeError as e:
				raise TypeError(f"variable {name!r}: {e}") from e
		return cls(store)

	def get(self, name: str) -> Optional[Value]:
		return self._store.get(name)

	def set(self, name: str, value: Value) -> Value:
		self._store[name] = value
		return value

	def __contains__(self, name: object) -> bool:
		return name in self._store

	def __getitem__(self, name: str) -> Value:
		return self._store[name]

	def __iter__(self) -> Iterator[str]:
		return iter(self._store)

	def __len__(self) -> int:
		return len(self._store)

	def __repr__(self) -> str:
		return f"{self.__class__.__name__}({self._store!r})"
