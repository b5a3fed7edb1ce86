"""Hookexec - templated webhook executor.

Renders URL, method, header and body templates with Jinja2 and sends the
resulting request with httpx.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.errors import (
    ConfigError,
    ErrorKind,
    HookError,
    RenderError,
    ResponseReadError,
    TransportError,
)
from .core.models import HookConfig, HookResponse, RenderedRequest, TemplateData
from .executor import HookExecutor, new_hook_executor
from .rendering.engine import Renderer, TemplateRenderingError, render_template
from .request.builder import build_request

__all__ = [
    "ConfigError",
    "ErrorKind",
    "HookConfig",
    "HookError",
    "HookExecutor",
    "HookResponse",
    "RenderError",
    "RenderedRequest",
    "Renderer",
    "ResponseReadError",
    "TemplateData",
    "TemplateRenderingError",
    "TransportError",
    "build_request",
    "new_hook_executor",
    "render_template",
]
