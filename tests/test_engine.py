"""Tests for the Jinja2 rendering engine."""

from __future__ import annotations

import pytest

from hookexec.rendering.engine import (
    TemplateRenderingError,
    compile_template,
    normalize_source,
    render_template,
)


def test_substitutes_values() -> None:
    assert render_template("id={{ id }}", {"id": "42"}) == "id=42"


def test_accepts_dotted_references() -> None:
    out = render_template("/echo/{{ .id }}?q={{ .q | urlencode }}", {"id": "7", "q": "a b"})
    assert out == "/echo/7?q=a%20b"


def test_dotted_reference_with_whitespace_control() -> None:
    assert render_template("x {{- .name }}", {"name": "y"}) == "xy"


def test_normalize_leaves_other_dots_alone() -> None:
    assert normalize_source("v1.2 {{ name.upper() }}") == "v1.2 {{ name.upper() }}"


def test_urlencode_filter_escapes_reserved_characters() -> None:
    assert render_template("{{ v | urlencode }}", {"v": "a&b=c d"}) == "a%26b%3Dc%20d"


def test_missing_key_renders_empty_when_lenient() -> None:
    assert render_template("[{{ missing }}]", {}, strict=False) == "[]"


def test_missing_key_through_filter_renders_empty_when_lenient() -> None:
    assert render_template("[{{ missing | urlencode }}]", {}) == "[]"


def test_missing_key_raises_when_strict() -> None:
    with pytest.raises(TemplateRenderingError, match="missing"):
        render_template("{{ missing }}", {}, strict=True)


def test_syntax_error_raises() -> None:
    with pytest.raises(TemplateRenderingError) as excinfo:
        render_template("{{ unclosed ", {"unclosed": "x"})
    assert excinfo.value.__cause__ is not None


def test_values_are_not_escaped() -> None:
    assert render_template("{{ v }}", {"v": "<b>&</b>"}) == "<b>&</b>"


def test_trailing_newline_is_kept() -> None:
    assert render_template("{{ v }}\n", {"v": "x"}) == "x\n"


def test_compiled_templates_are_cached_per_strictness() -> None:
    assert compile_template("{{ a }}", True) is compile_template("{{ a }}", True)
    assert compile_template("{{ a }}", True) is not compile_template("{{ a }}", False)
