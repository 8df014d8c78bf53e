import logging
from typing import Any, List, Mapping, Optional, Union

from .environment import Environment
from .evaluator import evaluate
from .nodes import Program
from .parser import ParseError, TemplateOptions, parse
from .values import Error, Value


log = logging.getLogger(__name__)


class TemplateSyntaxError(SyntaxError):
	"""Raised when a template has one or more syntax errors."""
	def __init__(self, text: str, errors: List[ParseError]):
		lines = [f"{len(errors)} syntax error(s) in template:"]
		for e in errors:
			lines.append(f"{e}{e.pointer(text)}")
		super().__init__("\n".join(lines))
		self.errors = errors

class RenderError(Exception):
	"""Raised when evaluation of a template produces an Error value."""
	def __init__(self, error: Error):
		super().__init__(error.message)
		self.error = error


class Template(str):
	"""A template string that can be parsed and rendered.

	Example:
		>>> Template("<p>{{ $name }}</p>").apply_template({"name": "Ann"})
		'<p>Ann</p>'
	"""
	options: TemplateOptions

	def __new__(cls, value: str, options: Optional[TemplateOptions] = None):
		obj = super().__new__(cls, value)
		object.__setattr__(obj, "options", options or TemplateOptions())
		return obj

	def parse(self) -> Program:
		"""Parse the template.

		Raises:
			TemplateSyntaxError: If the template has syntax errors.
		"""
		(program, errors) = parse(str(self), self.options)
		if errors:
			raise TemplateSyntaxError(str(self), errors)
		return program

	def evaluate(self, env: Environment) -> Value:
		"""Render against `env`, returning an Html or Error value.

		Raises:
			TemplateSyntaxError: If the template has syntax errors.
		"""
		program = self.parse()
		result = evaluate(program, env)
		if isinstance(result, Error):
			log.debug("template evaluation failed: %s", result.message)
		return result

	def apply_template(self, params: Union[Mapping[str, Any], Environment, None] = None) -> str:
		"""Render with `params` and return the HTML.

		`params` is either an Environment or a mapping of plain Python values.

		Raises:
			TemplateSyntaxError: If the template has syntax errors.
			RenderError: If evaluation fails.
			TypeError: If a parameter value cannot be used in a template.
		"""
		if isinstance(params, Environment):
			env = params
		else:
			env = Environment.from_dict(params or {})

		log.debug("rendering template (%d chars, %d variables)", len(self), len(env))
		result = self.evaluate(env)
		if isinstance(result, Error):
			raise RenderError(result)
		return str(result)


def render(
		text: str,
		params: Union[Mapping[str, Any], Environment, None] = None,
		options: Optional[TemplateOptions] = None
) -> str:
	"""Render `text` with `params`. See `Template.apply_template`."""
	return Template(text, options).apply_template(params)
