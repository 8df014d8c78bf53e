import re
from enum import Enum
from typing import Iterator

from .tokens import Token, TokenKind, SINGLE_CHAR_TOKENS, lookup_identifier


_WHITESPACE = re.compile(r"[ \t\r\n]*")
_IDENTIFIER = re.compile(r"[_a-zA-Z][_a-zA-Z0-9]*")
_NUMBER = re.compile(r"[0-9][0-9.]*")

_OPEN = "{{"
_CLOSE = "}}"


class LexerMode(Enum):
	HTML = "html"
	CODE = "code"


class Lexer:
	"""Stateful scanner turning a template string into tokens, one at a time.

	The lexer starts in HTML mode, where everything up to the next `{{` is a
	single HTML token. `{{` switches to code mode, where whitespace is skipped
	and expression tokens are produced until `}}` switches back.

	Scanning never fails: unexpected input becomes an ILLEGAL token so the
	parser can report it with its position.
	"""

	def __init__(self, text: str):
		self._text = text
		self._pos = 0
		self._line = 1
		self._line_start = 0
		self._mode = LexerMode.HTML

	@property
	def mode(self) -> LexerMode:
		return self._mode

	def __iter__(self) -> Iterator[Token]:
		"""Yield tokens up to and including EOF."""
		while True:
			tok = self.next_token()
			yield tok
			if tok.kind is TokenKind.EOF:
				return

	def next_token(self) -> Token:
		if self._mode is LexerMode.CODE:
			self._skip_whitespace()

		if self._pos >= len(self._text):
			return self._make(TokenKind.EOF, "", self._pos)

		if self._text.startswith(_OPEN, self._pos):
			self._mode = LexerMode.CODE
			return self._consume(TokenKind.LEFT_BRACES, _OPEN, 2)

		if self._mode is LexerMode.HTML:
			return self._read_html()

		if self._text.startswith(_CLOSE, self._pos):
			self._mode = LexerMode.HTML
			return self._consume(TokenKind.RIGHT_BRACES, _CLOSE, 2)

		return self._read_code()

	def _read_code(self) -> Token:
		char = self._text[self._pos]

		if char in SINGLE_CHAR_TOKENS:
			return self._consume(SINGLE_CHAR_TOKENS[char], char, 1)

		if char == "$":
			m = _IDENTIFIER.match(self._text, self._pos + 1)
			if m:
				return self._consume(TokenKind.VARIABLE, m.group(), len(m.group()) + 1)

		if char in ("'", '"'):
			return self._read_string(char)

		m = _IDENTIFIER.match(self._text, self._pos)
		if m:
			ident = m.group()
			return self._consume(lookup_identifier(ident), ident, len(ident))

		m = _NUMBER.match(self._text, self._pos)
		if m:
			num = m.group()
			dots = num.count(".")
			if dots > 1:
				kind = TokenKind.ILLEGAL
			elif dots == 1:
				kind = TokenKind.FLOAT
			else:
				kind = TokenKind.INTEGER
			return self._consume(kind, num, len(num))

		return self._consume(TokenKind.ILLEGAL, char, 1)

	def _read_html(self) -> Token:
		end = self._text.find(_OPEN, self._pos)
		if end == -1:
			end = len(self._text)
		html = self._text[self._pos:end]
		return self._consume(TokenKind.HTML, html, len(html))

	def _read_string(self, quote: str) -> Token:
		# Only a backslash before the matching quote is an escape
		parts = []
		i = self._pos + 1
		while i < len(self._text):
			char = self._text[i]
			if char == "\\" and self._text.startswith(quote, i + 1):
				parts.append(quote)
				i += 2
				continue
			if char == quote:
				return self._consume(TokenKind.STRING, "".join(parts), i + 1 - self._pos)
			parts.append(char)
			i += 1

		# Unterminated string
		raw = self._text[self._pos:]
		return self._consume(TokenKind.ILLEGAL, raw, len(raw))

	def _skip_whitespace(self) -> None:
		m = _WHITESPACE.match(self._text, self._pos)
		if m:
			self._advance(m.end() - self._pos)

	def _make(self, kind: TokenKind, literal: str, pos: int) -> Token:
		return Token(kind, literal, self._line, pos - self._line_start + 1)

	def _consume(self, kind: TokenKind, literal: str, width: int) -> Token:
		tok = self._make(kind, literal, self._pos)
		self._advance(width)
		return tok

	def _advance(self, width: int) -> None:
		start = self._pos
		self._pos += width
		# Keep line/column tracking in sync with the consumed text
		newlines = self._text.count("\n", start, self._pos)
		if newlines:
			self._line += newlines
			self._line_start = self._text.rfind("\n", start, self._pos) + 1


def tokenize(text: str) -> Iterator[Token]:
	"""Generate every token of `text`, ending with EOF.

	Example:
		>>> [t.kind.name for t in tokenize("<p>{{ $name }}</p>")]
		['HTML', 'LEFT_BRACES', 'VARIABLE', 'RIGHT_BRACES', 'HTML', 'EOF']
	"""
	return iter(Lexer(text))
