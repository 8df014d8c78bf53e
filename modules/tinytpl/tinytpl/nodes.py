from dataclasses import dataclass, field
from typing import List, Optional

from .tokens import Token


# Every node keeps the token it was built from, and str(node) gives back
# normalized template source that parses to the same tree.

@dataclass(frozen=True)
class Node:
	def token_literal(self) -> str:
		token = getattr(self, "token", None)
		return str(token) if token is not None else ""


@dataclass(frozen=True)
class Statement(Node): pass

@dataclass(frozen=True)
class Expression(Node): pass


@dataclass(frozen=True)
class Program(Node):
	statements: List[Statement] = field(default_factory=list) # type: ignore

	def __str__(self) -> str:
		return "".join(str(stmt) for stmt in self.statements)


# -----------------------
# Statements
# -----------------------

@dataclass(frozen=True)
class HtmlStatement(Statement):
	token: Token
	value: str

	def __str__(self) -> str:
		return self.value

@dataclass(frozen=True)
class ExpressionStatement(Statement):
	token: Token
	expression: Expression

	def __str__(self) -> str:
		return f"{{{{ {self.expression} }}}}"

@dataclass(frozen=True)
class BlockStatement(Statement):
	token: Token
	statements: List[Statement] = field(default_factory=list) # type: ignore

	def __str__(self) -> str:
		return "".join(str(stmt) for stmt in self.statements)

@dataclass(frozen=True)
class IfStatement(Statement):
	token: Token
	condition: Expression
	consequence: BlockStatement
	alternative: Optional[BlockStatement] = None

	def __str__(self) -> str:
		out = f"{{{{ if {self.condition} }}}}{self.consequence}"
		if self.alternative is not None:
			out += f"{{{{ else }}}}{self.alternative}"
		return out + "{{ end }}"

@dataclass(frozen=True)
class LoopStatement(Statement):
	"""`{{ loop start, stop }} body {{ end }}`, iterating start..stop inclusive."""
	token: Token
	start: Expression
	stop: Expression
	body: BlockStatement

	def __str__(self) -> str:
		return f"{{{{ loop {self.start}, {self.stop} }}}}{self.body}{{{{ end }}}}"


# -----------------------
# Expressions
# -----------------------

@dataclass(frozen=True)
class IntegerLiteral(Expression):
	token: Token
	value: int

	def __str__(self) -> str:
		return str(self.token)

@dataclass(frozen=True)
class FloatLiteral(Expression):
	token: Token
	value: float

	def __str__(self) -> str:
		return str(self.token)

@dataclass(frozen=True)
class StringLiteral(Expression):
	token: Token
	value: str

	def __str__(self) -> str:
		escaped = self.value.replace("'", "\\'")
		return f"'{escaped}'"

@dataclass(frozen=True)
class BooleanLiteral(Expression):
	token: Token
	value: bool

	def __str__(self) -> str:
		return "true" if self.value else "false"

@dataclass(frozen=True)
class NullLiteral(Expression):
	token: Token

	def __str__(self) -> str:
		return "null"

@dataclass(frozen=True)
class VariableExpression(Expression):
	token: Token
	name: str

	def __str__(self) -> str:
		return f"${self.name}"

@dataclass(frozen=True)
class PrefixExpression(Expression):
	token: Token
	operator: str
	right: Expression

	def __str__(self) -> str:
		return f"{self.operator}{self.right}"

@dataclass(frozen=True)
class InfixExpression(Expression):
	token: Token
	left: Expression
	operator: str
	right: Expression

	def __str__(self) -> str:
		return f"{self.left} {self.operator} {self.right}"

@dataclass(frozen=True)
class TernaryExpression(Expression):
	token: Token
	condition: Expression
	consequence: Expression
	alternative: Expression

	def __str__(self) -> str:
		return f"{self.condition} ? {self.consequence} : {self.alternative}"
