"""Error taxonomy for webhook construction and execution."""

from __future__ import annotations

from enum import StrEnum, unique
from typing import ClassVar, Literal

RenderSection = Literal["url", "method", "header", "body"]


@unique
class ErrorKind(StrEnum):
    """Which stage of a webhook call failed."""

    CONFIG = "config"
    RENDER = "render"
    TRANSPORT = "transport"
    IO = "io"


class HookError(Exception):
    """Base class for every error raised by hookexec."""

    kind: ClassVar[ErrorKind]


class ConfigError(HookError):
    """Raised when an executor cannot be constructed from its configuration."""

    kind = ErrorKind.CONFIG


class RenderError(HookError):
    """Raised when one templated part of the request fails to render.

    Attributes:
        section: Part of the request that failed ("url", "method", "header", "body")
        field: "url", "method", "body", or the header name for header failures
        template: The literal template source that failed
    """

    kind = ErrorKind.RENDER

    def __init__(self, section: RenderSection, field: str, template: str, reason: str) -> None:
        self.section = section
        self.field = field
        self.template = template
        self.reason = reason
        super().__init__(f"render {_describe(section, field)}: {reason}")


def _describe(section: RenderSection, field: str) -> str:
    if section == "url":
        return "URL"
    if section == "header":
        return f"header {field!r}"
    return section


class TransportError(HookError):
    """Raised when the request could not be completed over the network."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, method: str, url: str, reason: str) -> None:
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url}: {reason}")


class ResponseReadError(HookError):
    """Raised when a response arrived but its body could not be read."""

    kind = ErrorKind.IO

    def __init__(self, method: str, url: str, status_code: int, reason: str) -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"read response body of {method} {url} (status {status_code}): {reason}")
