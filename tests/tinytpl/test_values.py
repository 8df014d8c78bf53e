import pytest

from tinytpl import *


def test_to_value_conversions():
	assert to_value(3) == Integer(3)
	assert to_value(2.5) == Float(2.5)
	assert to_value("s") == String("s")
	assert to_value(True) == Boolean(True)
	assert to_value(None) == Null()
	# already a value
	assert to_value(Html("<b>")) == Html("<b>")


def test_to_value_rejects_other_types():
	with pytest.raises(TypeError):
		to_value({"a": 1})


def test_kinds():
	assert Integer(1).kind is ValueKind.INTEGER
	assert Block([]).kind is ValueKind.BLOCK
	assert Error("x").kind is ValueKind.ERROR
	assert str(ValueKind.FLOAT) == "FLOAT"


def test_string_forms():
	assert str(Integer(-4)) == "-4"
	assert str(Float(3.5)) == "3.5"
	assert str(Boolean(False)) == "false"
	assert str(Null()) == ""
	assert str(Block([Html("<i>"), Integer(1), String("x"), Null()])) == "<i>1x"


@pytest.mark.parametrize(("value", "truthy"), [
	(Integer(0), False),
	(Float(0.0), False),
	(String(""), False),
	(Boolean(False), False),
	(Null(), False),
	(Integer(2), True),
	(String(" "), True),
	(Boolean(True), True),
	(Html(""), True),
	(Block([]), True),
])
def test_truthiness(value, truthy):
	assert is_truthy(value) is truthy


def test_environment():
	env = Environment.from_dict({"a": 1, "b": "x"})
	assert "a" in env
	assert len(env) == 2
	assert env["b"] == String("x")
	assert env.get("zzz") is None
	env.set("c", Null())
	assert sorted(env) == ["a", "b", "c"]
