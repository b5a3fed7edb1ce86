"""Domain models for webhook configuration and rendered requests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

TemplateData = Mapping[str, str]


class HookConfig(BaseModel):
    """How to build and send one webhook request."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    url: str = Field(default="", description="URL template")
    method: str = Field(
        default="",
        description="Method template; empty selects POST with a body, else GET",
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Header name to value template"
    )
    content_type: str = Field(
        default="",
        alias="contentType",
        description="Content-Type applied after header rendering",
    )
    body: str = Field(default="", description="Body template")
    strict_templates: bool = Field(
        default=False,
        alias="strictTemplates",
        description="Treat references to missing keys as render errors",
    )
    timeout: str = Field(
        default="",
        description="Client timeout duration; ignored when a client is injected",
    )
    insecure_skip_verify: bool = Field(
        default=False,
        alias="insecureSkipVerify",
        description="Skip TLS verification; ignored when a client is injected",
    )

    @field_validator("timeout", mode="before")
    @classmethod
    def _timeout_as_text(cls, value: Any) -> Any:
        # bare numbers from YAML/JSON are seconds
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


@dataclass(frozen=True)
class RenderedRequest:
    """A fully rendered request, ready to hand to the transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class HookResponse(NamedTuple):
    """Response of a webhook call with its body already read."""

    response: httpx.Response
    body: bytes
