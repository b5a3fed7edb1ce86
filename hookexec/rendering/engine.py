"""Template rendering engine."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from functools import lru_cache

from jinja2 import Environment, StrictUndefined, Template, TemplateError, Undefined

logger = logging.getLogger(__name__)

Renderer = Callable[[str, Mapping[str, str], bool], str]
"""Render a template source against string values; raise TemplateRenderingError on failure."""

# "{{ .name }}" and "{{- .name | f }}" style references
_DOTTED_REFERENCE = re.compile(r"(\{\{-?\s*)\.(?=[A-Za-z_])")


class TemplateRenderingError(ValueError):
    """Raised when a template cannot be compiled or rendered."""


def _build_environment(strict: bool) -> Environment:
    return Environment(
        undefined=StrictUndefined if strict else Undefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


_ENVIRONMENTS = {
    True: _build_environment(strict=True),
    False: _build_environment(strict=False),
}


def normalize_source(source: str) -> str:
    """Strip the leading dot from dotted references.

    Args:
        source: Template source, possibly using "{{ .key }}" references

    Returns:
        Equivalent Jinja2 source using "{{ key }}" references
    """
    return _DOTTED_REFERENCE.sub(r"\1", source)


@lru_cache(maxsize=512)
def compile_template(source: str, strict: bool = False) -> Template:
    """Compile a template source string.

    Args:
        source: Template source
        strict: Use StrictUndefined so missing keys raise

    Returns:
        Compiled Jinja2 template
    """
    logger.debug("Compiling template (strict=%s): %r", strict, source)
    return _ENVIRONMENTS[strict].from_string(normalize_source(source))


def render_template(source: str, data: Mapping[str, str], strict: bool = False) -> str:
    """Render a template source against a key-value mapping.

    Args:
        source: Template source
        data: Template values, exposed as top-level names
        strict: Raise when the template references a missing key; otherwise
            missing keys render as the empty string

    Returns:
        Rendered text

    Raises:
        TemplateRenderingError: If the template is invalid or fails to render
    """
    try:
        return compile_template(source, strict).render(dict(data))
    except TemplateError as exc:
        raise TemplateRenderingError(exc.message or type(exc).__name__) from exc
