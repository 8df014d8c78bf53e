from .tokens import *
from .lexer import *
from .nodes import *
from .parser import *
from .values import *
from .environment import *
from .evaluator import *
from .template import *


__all__ = [
	"Token", "TokenKind",
	"Lexer", "LexerMode", "tokenize",
	"Node", "Statement", "Expression", "Program",
	"HtmlStatement", "ExpressionStatement", "BlockStatement", "IfStatement", "LoopStatement",
	"IntegerLiteral", "FloatLiteral", "StringLiteral", "BooleanLiteral", "NullLiteral",
	"VariableExpression", "PrefixExpression", "InfixExpression", "TernaryExpression",
	"Parser", "ParseError", "TemplateOptions", "parse",
	"Value", "ValueKind", "Integer", "Float", "String", "Boolean", "Null", "Html", "Block", "Error",
	"is_error", "is_truthy", "to_value",
	"Environment",
	"evaluate",
	"Template", "TemplateSyntaxError", "RenderError", "render",
]
