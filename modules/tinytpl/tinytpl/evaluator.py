import math
from typing import List, Optional

from .environment import Environment
from .nodes import (
	BlockStatement, BooleanLiteral, Expression, ExpressionStatement, FloatLiteral,
	HtmlStatement, IfStatement, InfixExpression, IntegerLiteral, LoopStatement,
	Node, NullLiteral, PrefixExpression, Program, Statement, StringLiteral,
	TernaryExpression, VariableExpression,
)
from .values import (
	Block, Boolean, Error, Float, Html, Integer, Null, String, Value,
	is_error, is_truthy,
)


LOOP_INDEX = "index"


def evaluate(node: Node, env: Environment) -> Value:
	"""Evaluate `node` against `env`.

	Runtime failures come back as an Error value, never as an exception.
	Evaluating a Program yields an Html value or the first Error met.

	Raises:
		RuntimeError: If `node` is of an unknown type.
	"""
	if isinstance(node, Program):
		return _eval_program(node, env)
	elif isinstance(node, HtmlStatement):
		return Html(node.value)
	elif isinstance(node, ExpressionStatement):
		return evaluate(node.expression, env)
	elif isinstance(node, BlockStatement):
		return _eval_block(node, env)
	elif isinstance(node, IfStatement):
		return _eval_conditional(node.condition, node.consequence, node.alternative, env)
	elif isinstance(node, LoopStatement):
		return _eval_loop(node, env)
	elif isinstance(node, IntegerLiteral):
		return Integer(node.value)
	elif isinstance(node, FloatLiteral):
		return Float(node.value)
	elif isinstance(node, StringLiteral):
		return String(node.value)
	elif isinstance(node, BooleanLiteral):
		return Boolean(node.value)
	elif isinstance(node, NullLiteral):
		return Null()
	elif isinstance(node, VariableExpression):
		return _eval_variable(node, env)
	elif isinstance(node, PrefixExpression):
		right = evaluate(node.right, env)
		if is_error(right):
			return right
		return _eval_prefix(node.operator, right)
	elif isinstance(node, InfixExpression):
		# right before left: its error is the one reported
		right = evaluate(node.right, env)
		if is_error(right):
			return right
		left = evaluate(node.left, env)
		if is_error(left):
			return left
		return _eval_infix(node.operator, left, right)
	elif isinstance(node, TernaryExpression):
		return _eval_conditional(node.condition, node.consequence, node.alternative, env)
	else:
		raise RuntimeError(f"unknown node type: {type(node)}")


def _eval_statements(statements: List[Statement], env: Environment) -> List[Value] | Error:
	values: List[Value] = []
	for stmt in statements:
		value = evaluate(stmt, env)
		if isinstance(value, Error):
			return value
		values.append(value)
	return values

def _eval_program(program: Program, env: Environment) -> Value:
	values = _eval_statements(program.statements, env)
	if isinstance(values, Error):
		return values
	return Html("".join(str(v) for v in values))

def _eval_block(block: BlockStatement, env: Environment) -> Value:
	values = _eval_statements(block.statements, env)
	if isinstance(values, Error):
		return values
	return Block(values)

def _eval_conditional(
		condition: Expression,
		consequence: Node,
		alternative: Optional[Node],
		env: Environment
) -> Value:
	cond = evaluate(condition, env)
	if is_error(cond):
		return cond
	if is_truthy(cond):
		return evaluate(consequence, env)
	if alternative is not None:
		return evaluate(alternative, env)
	return Html("")

def _eval_loop(node: LoopStatement, env: Environment) -> Value:
	start = evaluate(node.start, env)
	if is_error(start):
		return start
	if not isinstance(start, Integer):
		return Error(f"loop 'from' bound must be INTEGER, got {start.kind}")

	stop = evaluate(node.stop, env)
	if is_error(stop):
		return stop
	if not isinstance(stop, Integer):
		return Error(f"loop 'to' bound must be INTEGER, got {stop.kind}")

	out: List[str] = []
	for i in range(start.value, stop.value + 1):
		env.set(LOOP_INDEX, Integer(i))
		body = evaluate(node.body, env)
		if is_error(body):
			return body
		out.append(str(body))
	return Html("".join(out))

def _eval_variable(node: VariableExpression, env: Environment) -> Value:
	value = env.get(node.name)
	if value is None:
		return Error(f"undefined variable: ${node.name}")
	return value

def _eval_prefix(operator: str, right: Value) -> Value:
	if operator == "!":
		return Boolean(not is_truthy(right))
	if operator == "-":
		if isinstance(right, Integer):
			return Integer(-right.value)
		if isinstance(right, Float):
			return Float(-right.value)
	return Error(f"unknown operator: {operator}{right.kind}")

def _eval_infix(operator: str, left: Value, right: Value) -> Value:
	if operator == ".":
		return String(str(left) + str(right))

	for operand in (left, right):
		if not isinstance(operand, (Integer, Float)):
			return Error(f"unsupported operand type for {operator}: {operand.kind}")

	if operator == "%":
		for operand in (left, right):
			if isinstance(operand, Float) and not math.isfinite(operand.value):
				return Error(f"modulo of a non-finite number: {operand}")
		return _modulo(int(left.value), int(right.value))

	both_int = isinstance(left, Integer) and isinstance(right, Integer)
	a = left.value
	b = right.value

	try:
		if operator == "+":
			result = a + b
		elif operator == "-":
			result = a - b
		elif operator == "*":
			result = a * b
		elif operator == "/":
			if b == 0:
				return Error("division by zero")
			if both_int and a % b == 0:
				return Integer(a // b)
			return Float(a / b)
		else:
			return Error(f"unknown operator: {left.kind} {operator} {right.kind}")
	except OverflowError:
		# huge Integer mixed with a Float, or an inexact huge division
		return Error(f"numeric result out of range for {operator}")

	return Integer(result) if both_int else Float(result)

def _modulo(a: int, b: int) -> Value:
	# operands already truncated toward zero; result takes the dividend's sign
	if b == 0:
		return Error("modulo by zero")
	r = abs(a) % abs(b)
	return Integer(-r if a < 0 else r)
