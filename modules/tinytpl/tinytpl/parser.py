import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from .lexer import Lexer
from .nodes import (
	BlockStatement, BooleanLiteral, Expression, ExpressionStatement, FloatLiteral,
	HtmlStatement, IfStatement, InfixExpression, IntegerLiteral, LoopStatement,
	NullLiteral, PrefixExpression, Program, Statement, StringLiteral,
	TernaryExpression, VariableExpression,
)
from .tokens import Token, TokenKind


log = logging.getLogger(__name__)


@dataclass
class TemplateOptions:
	"""Parsing and rendering options.

	Attributes:
		trim_blocks: Strip leading whitespace from the HTML that directly
			follows an `if`, `else`, `loop` or `end` tag, dropping it when
			nothing is left.
	"""
	trim_blocks: bool = False


def _error_message(text: str, tok: Optional[Token], message: str) -> str:
	if tok is None:
		return message

	lines = text.splitlines()
	line_content = lines[tok.line - 1] if 1 <= tok.line <= len(lines) else ""
	pointer_line = " " * (tok.column - 1) + "^" + message
	return f"\n{line_content}\n{pointer_line}"


class ParseError(SyntaxError):
	def __init__(self, tok: Optional[Token], message: str):
		where = f"{tok.line}:{tok.column}" if tok is not None else "?"
		super().__init__(f"{where} - {message}")
		self.token = tok
		self.message = message

	def pointer(self, text: str) -> str:
		"""Return the offending source line with a caret under the token."""
		return _error_message(text, self.token, self.message)


class Precedence(IntEnum):
	LOWEST = 1
	TERNARY = 2
	SUM = 3
	PRODUCT = 4
	PREFIX = 5


_PRECEDENCES: Dict[TokenKind, Precedence] = {
	TokenKind.QUESTION: Precedence.TERNARY,
	TokenKind.PERIOD: Precedence.SUM,
	TokenKind.PLUS: Precedence.SUM,
	TokenKind.MINUS: Precedence.SUM,
	TokenKind.ASTERISK: Precedence.PRODUCT,
	TokenKind.SLASH: Precedence.PRODUCT,
	TokenKind.PERCENT: Precedence.PRODUCT,
}

_NO_TERMINATORS: FrozenSet[TokenKind] = frozenset()
_IF_TERMINATORS = frozenset({TokenKind.ELSE, TokenKind.END})
_END_TERMINATOR = frozenset({TokenKind.END})


class Parser:
	"""Recursive descent parser producing a Program from a Lexer.

	Syntax errors do not stop the parse: each one is recorded in `errors`,
	the rest of the offending `{{ ... }}` region is skipped, and parsing
	goes on with the next statement.

	Statement methods leave the current token on the first token after the
	statement. Expression methods leave it on the last token of the
	expression.
	"""

	def __init__(self, lexer: Lexer, options: Optional[TemplateOptions] = None):
		self._lexer = lexer
		self._options = options or TemplateOptions()
		self.errors: List[ParseError] = []
		self._trim_next_html = False

		self._prefix_fns: Dict[TokenKind, Callable[[], Expression]] = {
			TokenKind.VARIABLE: self._parse_variable,
			TokenKind.INTEGER: self._parse_integer,
			TokenKind.FLOAT: self._parse_float,
			TokenKind.STRING: self._parse_string,
			TokenKind.TRUE: self._parse_boolean,
			TokenKind.FALSE: self._parse_boolean,
			TokenKind.NULL: self._parse_null,
			TokenKind.MINUS: self._parse_prefix,
			TokenKind.BANG: self._parse_prefix,
		}
		self._infix_fns: Dict[TokenKind, Callable[[Expression], Expression]] = {
			TokenKind.PERIOD: self._parse_infix,
			TokenKind.PLUS: self._parse_infix,
			TokenKind.MINUS: self._parse_infix,
			TokenKind.ASTERISK: self._parse_infix,
			TokenKind.SLASH: self._parse_infix,
			TokenKind.PERCENT: self._parse_infix,
			TokenKind.QUESTION: self._parse_ternary,
		}

		self._cur = lexer.next_token()
		self._peek = lexer.next_token()

	def parse_program(self) -> Program:
		try:
			program = Program(statements=self._parse_statements(_NO_TERMINATORS))
		except RecursionError:
			# the partial tree is unusable, so the whole template fails
			self.errors.append(self._error(self._cur, "template is nested too deeply"))
			program = Program()
		if self.errors:
			log.debug("template parsed with %d error(s)", len(self.errors))
		return program

	# -----------------------
	# Token helpers
	# -----------------------

	def _next(self) -> None:
		self._cur = self._peek
		self._peek = self._lexer.next_token()

	def _cur_is(self, kind: TokenKind) -> bool:
		return self._cur.kind is kind

	def _peek_is(self, kind: TokenKind) -> bool:
		return self._peek.kind is kind

	def _expect_peek(self, kind: TokenKind, what: str) -> None:
		if not self._peek_is(kind):
			raise self._error(self._peek, f"expected {what}, got {self._peek.describe()}")
		self._next()

	def _error(self, tok: Token, message: str) -> ParseError:
		e = ParseError(tok, message)
		log.debug("parse error: %s", e)
		return e

	def _synchronize(self) -> None:
		# Skip to just past the end of the current {{ ... }} region
		while not self._cur_is(TokenKind.EOF):
			if self._cur_is(TokenKind.RIGHT_BRACES):
				self._next()
				return
			self._next()

	def _finish_tag(self) -> None:
		"""Step over the `}}` closing a block tag."""
		self._next()
		if self._options.trim_blocks:
			self._trim_next_html = True

	# -----------------------
	# Statements
	# -----------------------

	def _parse_statements(self, terminators: FrozenSet[TokenKind]) -> List[Statement]:
		statements: List[Statement] = []
		while not self._cur_is(TokenKind.EOF):
			if self._cur_is(TokenKind.LEFT_BRACES) and self._peek.kind in terminators:
				break
			try:
				stmt = self._parse_statement()
				if stmt is not None:
					statements.append(stmt)
			except ParseError as e:
				self.errors.append(e)
				self._synchronize()
		return statements

	def _parse_statement(self) -> Optional[Statement]:
		trim = self._trim_next_html
		self._trim_next_html = False

		if self._cur_is(TokenKind.HTML):
			tok = self._cur
			self._next()
			value = str(tok).lstrip() if trim else str(tok)
			if not value:
				return None
			return HtmlStatement(token=tok, value=value)

		if not self._cur_is(TokenKind.LEFT_BRACES):
			raise self._error(self._cur, f"unexpected {self._cur.describe()}")

		open_tok = self._cur
		self._next()

		if self._cur_is(TokenKind.IF):
			return self._parse_if(open_tok)
		if self._cur_is(TokenKind.LOOP):
			return self._parse_loop(open_tok)
		if self._cur_is(TokenKind.ELSE) or self._cur_is(TokenKind.END):
			raise self._error(self._cur, f"unexpected '{self._cur}' outside of a block")

		expression = self._parse_expression(Precedence.LOWEST)
		self._expect_peek(TokenKind.RIGHT_BRACES, "'}}'")
		self._next()
		return ExpressionStatement(token=open_tok, expression=expression)

	def _parse_block(self, terminators: FrozenSet[TokenKind], opener: Token) -> BlockStatement:
		tok = self._cur
		statements = self._parse_statements(terminators)
		if self._cur_is(TokenKind.EOF):
			raise self._error(opener, "missing '{{ end }}' for block opened here")
		return BlockStatement(token=tok, statements=statements)

	def _parse_if(self, open_tok: Token) -> IfStatement:
		if_tok = self._cur
		self._next()
		condition = self._parse_expression(Precedence.LOWEST)
		self._expect_peek(TokenKind.RIGHT_BRACES, "'}}' after if condition")
		self._finish_tag()

		consequence = self._parse_block(_IF_TERMINATORS, if_tok)
		alternative = None

		# current token is the '{{' of the terminating tag
		if self._peek_is(TokenKind.ELSE):
			self._next()
			self._expect_peek(TokenKind.RIGHT_BRACES, "'}}' after else")
			self._finish_tag()
			alternative = self._parse_block(_END_TERMINATOR, if_tok)

		self._parse_end()
		return IfStatement(
			token=open_tok,
			condition=condition,
			consequence=consequence,
			alternative=alternative,
		)

	def _parse_loop(self, open_tok: Token) -> LoopStatement:
		loop_tok = self._cur
		self._next()
		start = self._parse_loop_bound()
		self._expect_peek(TokenKind.COMMA, "',' between loop bounds")
		self._next()
		stop = self._parse_loop_bound()
		self._expect_peek(TokenKind.RIGHT_BRACES, "'}}' after loop bounds")
		self._finish_tag()

		body = self._parse_block(_END_TERMINATOR, loop_tok)
		self._parse_end()
		return LoopStatement(token=open_tok, start=start, stop=stop, body=body)

	def _parse_loop_bound(self) -> Expression:
		if self._cur_is(TokenKind.VARIABLE):
			return self._parse_variable()
		if self._cur_is(TokenKind.INTEGER):
			return self._parse_integer()
		raise self._error(self._cur, f"expected variable or integer as loop bound, got {self._cur.describe()}")

	def _parse_end(self) -> None:
		# current token is '{{', peek is END
		self._next()
		self._expect_peek(TokenKind.RIGHT_BRACES, "'}}' after end")
		self._finish_tag()

	# -----------------------
	# Expressions
	# -----------------------

	def _peek_precedence(self) -> Precedence:
		return _PRECEDENCES.get(self._peek.kind, Precedence.LOWEST)

	def _parse_expression(self, precedence: Precedence) -> Expression:
		prefix = self._prefix_fns.get(self._cur.kind)
		if prefix is None:
			if self._cur_is(TokenKind.ILLEGAL):
				raise self._error(self._cur, f"illegal token '{self._cur}'")
			raise self._error(self._cur, f"expected expression, got {self._cur.describe()}")
		left = prefix()

		while not self._peek_is(TokenKind.RIGHT_BRACES) and precedence < self._peek_precedence():
			infix = self._infix_fns[self._peek.kind]
			self._next()
			left = infix(left)

		return left

	def _parse_variable(self) -> Expression:
		return VariableExpression(token=self._cur, name=str(self._cur))

	def _parse_integer(self) -> Expression:
		return IntegerLiteral(token=self._cur, value=int(str(self._cur)))

	def _parse_float(self) -> Expression:
		return FloatLiteral(token=self._cur, value=float(str(self._cur)))

	def _parse_string(self) -> Expression:
		return StringLiteral(token=self._cur, value=str(self._cur))

	def _parse_boolean(self) -> Expression:
		return BooleanLiteral(token=self._cur, value=self._cur_is(TokenKind.TRUE))

	def _parse_null(self) -> Expression:
		return NullLiteral(token=self._cur)

	def _parse_prefix(self) -> Expression:
		tok = self._cur
		self._next()
		right = self._parse_expression(Precedence.PREFIX)
		return PrefixExpression(token=tok, operator=str(tok), right=right)

	def _parse_infix(self, left: Expression) -> Expression:
		tok = self._cur
		precedence = _PRECEDENCES[tok.kind]
		self._next()
		right = self._parse_expression(precedence)
		return InfixExpression(token=tok, left=left, operator=str(tok), right=right)

	def _parse_ternary(self, condition: Expression) -> Expression:
		tok = self._cur
		self._next()
		consequence = self._parse_expression(Precedence.LOWEST)
		self._expect_peek(TokenKind.COLON, "':' in ternary expression")
		self._next()
		# LOWEST keeps `a ? b : c ? d : e` right-associative
		alternative = self._parse_expression(Precedence.LOWEST)
		return TernaryExpression(
			token=tok,
			condition=condition,
			consequence=consequence,
			alternative=alternative,
		)


def parse(text: str, options: Optional[TemplateOptions] = None) -> Tuple[Program, List[ParseError]]:
	"""Parse `text`, returning the program and the syntax errors found.

	The program must not be evaluated when the error list is not empty.
	"""
	parser = Parser(Lexer(text), options)
	program = parser.parse_program()
	return (program, parser.errors)
