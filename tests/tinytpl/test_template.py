import logging

import pytest

from tinytpl import *


def test_render_plain_html():
	assert render("<p>no tags</p>") == "<p>no tags</p>"


def test_render_with_params():
	text = '<ul class="links">{{ loop 1, $n }}<li>{{ $label . $index }}</li>{{ end }}</ul>'
	assert render(text, {"n": 2, "label": "Link "}) == (
		'<ul class="links"><li>Link 1</li><li>Link 2</li></ul>'
	)


def test_template_is_a_string():
	tpl = Template("{{ $a }}")
	assert tpl == "{{ $a }}"
	assert isinstance(tpl, str)
	assert tpl.options == TemplateOptions()


def test_apply_template_accepts_environment():
	env = Environment.from_dict({"a": 1})
	assert Template("{{ loop $a, 2 }}{{ $index }}{{ end }}").apply_template(env) == "12"
	assert env.get("index") == Integer(2)


def test_evaluate_returns_value():
	tpl = Template("{{ $x }}")
	assert tpl.evaluate(Environment.from_dict({"x": 7})) == Html("7")
	assert tpl.evaluate(Environment()) == Error("undefined variable: $x")


def test_syntax_errors_raise_template_syntax_error():
	text = "<p>{{ 1.2.3 }}</p>\n{{ end }}"
	with pytest.raises(TemplateSyntaxError) as e:
		render(text, {})
	assert len(e.value.errors) == 2
	msg = str(e.value)
	assert "2 syntax error(s)" in msg
	assert "^illegal token '1.2.3'" in msg
	assert isinstance(e.value, SyntaxError)


def test_runtime_error_raises_render_error():
	with pytest.raises(RenderError) as e:
		render("<p>{{ $who }}</p>")
	assert str(e.value) == "undefined variable: $who"
	assert e.value.error == Error("undefined variable: $who")


def test_unsupported_param_type_raises_type_error():
	with pytest.raises(TypeError) as e:
		render("{{ $items }}", {"items": [1, 2]})
	assert "'items'" in str(e.value)
	assert "list" in str(e.value)


def test_trim_blocks_option():
	text = "<ul>\n{{ loop 1, 2 }}\n  <li>{{ $index }}</li>\n{{ end }}\n</ul>"
	assert render(text, {}, TemplateOptions(trim_blocks=True)) == "<ul>\n<li>1</li>\n<li>2</li>\n</ul>"
	assert render(text) == "<ul>\n\n  <li>1</li>\n\n  <li>2</li>\n\n</ul>"


def test_render_logs_at_debug(caplog):
	with caplog.at_level(logging.DEBUG, logger="tinytpl"):
		with pytest.raises(RenderError):
			render("{{ $nope }}")
	assert any("evaluation failed" in r.getMessage() for r in caplog.records)


def test_concurrent_renders_use_separate_environments():
	tpl = Template("{{ loop 1, $n }}{{ $index }}{{ end }}")
	env_a = Environment.from_dict({"n": 2})
	env_b = Environment.from_dict({"n": 3})
	assert tpl.apply_template(env_a) == "12"
	assert tpl.apply_template(env_b) == "123"
	assert env_a.get("index") == Integer(2)
	assert env_b.get("index") == Integer(3)
