from enum import Enum
from typing import Dict


class TokenKind(Enum):
	LEFT_BRACES = "{{"
	RIGHT_BRACES = "}}"
	HTML = "HTML"
	VARIABLE = "VARIABLE"
	IDENTIFIER = "IDENTIFIER"
	INTEGER = "INTEGER"
	FLOAT = "FLOAT"
	STRING = "STRING"

	# keywords
	IF = "if"
	ELSE = "else"
	END = "end"
	LOOP = "loop"
	TRUE = "true"
	FALSE = "false"
	NULL = "null"

	# operators and punctuation
	MINUS = "-"
	PLUS = "+"
	ASTERISK = "*"
	SLASH = "/"
	PERCENT = "%"
	PERIOD = "."
	BANG = "!"
	COMMA = ","
	QUESTION = "?"
	COLON = ":"

	ILLEGAL = "ILLEGAL"
	EOF = "EOF"


KEYWORDS: Dict[str, TokenKind] = {
	"if": TokenKind.IF,
	"else": TokenKind.ELSE,
	"end": TokenKind.END,
	"loop": TokenKind.LOOP,
	"true": TokenKind.TRUE,
	"false": TokenKind.FALSE,
	"null": TokenKind.NULL,
}

SINGLE_CHAR_TOKENS: Dict[str, TokenKind] = {
	"-": TokenKind.MINUS,
	",": TokenKind.COMMA,
	"?": TokenKind.QUESTION,
	":": TokenKind.COLON,
	"!": TokenKind.BANG,
	"+": TokenKind.PLUS,
	"*": TokenKind.ASTERISK,
	"/": TokenKind.SLASH,
	"%": TokenKind.PERCENT,
	".": TokenKind.PERIOD,
}


def lookup_identifier(ident: str) -> TokenKind:
	"""Return the keyword kind for `ident`, or IDENTIFIER."""
	return KEYWORDS.get(ident, TokenKind.IDENTIFIER)


# A lexical token that is also its own literal text.
# Inherits from `str` so it compares and prints like the matched substring.
class Token(str):
	"""A lexical token that behaves like a string but stores its kind and source position.

	The string value is the token literal: the raw HTML text, the variable
	name without `$`, the unescaped string contents, and so on.
	"""
	kind: TokenKind
	line: int
	column: int

	def __new__(cls, kind: TokenKind, literal: str, line: int = 0, column: int = 0):
		"""Create a new Token instance.

		Args:
			kind: The token kind.
			literal: The literal text of the token.
			line: The line number where the token starts (1-based).
			column: The column number where the token starts (1-based).
		"""
		obj = super().__new__(cls, literal)
		# Tokens are immutable, so metadata is attached once here
		object.__setattr__(obj, "kind", kind)
		object.__setattr__(obj, "line", line)
		object.__setattr__(obj, "column", column)
		return obj

	@property
	def literal(self) -> str:
		return super().__str__()

	def __repr__(self):
		"""Return a developer-friendly representation including kind and position."""
		kind = self.__getattribute__("kind")
		line = self.__getattribute__("line")
		column = self.__getattribute__("column")
		return f"<{self.__class__.__name__} {kind.name} {super().__repr__()} @ {line}:{column}>"

	def __str__(self):
		return super().__str__()

	def describe(self) -> str:
		"""Short human-readable form used in error messages."""
		kind = self.__getattribute__("kind")
		if kind is TokenKind.EOF:
			return "end of input"
		if kind is TokenKind.HTML:
			return "HTML"
		return f"{kind.name} {super().__repr__()}"
