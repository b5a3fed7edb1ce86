"""Render a hook configuration into a transport-ready request."""

from __future__ import annotations

import logging

from ..core.errors import RenderError, RenderSection
from ..core.models import HookConfig, RenderedRequest, TemplateData
from ..rendering.engine import Renderer, TemplateRenderingError, render_template

logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = "Content-Type"


def _render_field(
    renderer: Renderer,
    section: RenderSection,
    field: str,
    source: str,
    data: TemplateData,
    strict: bool,
) -> str:
    try:
        return renderer(source, data, strict)
    except TemplateRenderingError as exc:
        raise RenderError(section, field, source, str(exc)) from exc


def default_method(body: str) -> str:
    """Pick the method used when none is configured."""
    return "POST" if body else "GET"


def build_request(
    config: HookConfig,
    data: TemplateData,
    *,
    renderer: Renderer = render_template,
) -> RenderedRequest:
    """Render every templated part of a hook into a request.

    Headers render in sorted name order. When config.content_type is set it
    replaces any rendered Content-Type header, whatever its casing.

    Args:
        config: Hook configuration
        data: Template values; copied, never mutated
        renderer: Rendering capability

    Returns:
        Rendered request

    Raises:
        RenderError: If any part fails to render, tagged with that part
    """
    values = dict(data)
    strict = config.strict_templates

    url = _render_field(renderer, "url", "url", config.url, values, strict)

    method = ""
    if config.method:
        method = _render_field(renderer, "method", "method", config.method, values, strict)

    headers: dict[str, str] = {}
    for name in sorted(config.headers):
        headers[name] = _render_field(
            renderer, "header", name, config.headers[name], values, strict
        )

    body = ""
    if config.body:
        body = _render_field(renderer, "body", "body", config.body, values, strict)

    method = method.strip().upper() or default_method(body)

    if config.content_type:
        headers = {
            name: value
            for name, value in headers.items()
            if name.lower() != CONTENT_TYPE_HEADER.lower()
        }
        headers[CONTENT_TYPE_HEADER] = config.content_type

    logger.debug("Rendered request: %s %s", method, url)
    return RenderedRequest(
        method=method,
        url=url,
        headers=headers,
        body=body.encode("utf-8"),
    )
