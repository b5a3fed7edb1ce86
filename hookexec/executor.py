"""Execute templated webhook calls over httpx."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from .core.durations import parse_duration
from .core.errors import ConfigError, ResponseReadError, TransportError
from .core.models import HookConfig, HookResponse, RenderedRequest, TemplateData
from .rendering.engine import Renderer, render_template
from .request.builder import build_request

logger = logging.getLogger(__name__)


def _coerce_config(config: HookConfig | Mapping[str, Any]) -> HookConfig:
    if isinstance(config, HookConfig):
        return config
    try:
        return HookConfig.model_validate(config)
    except ValidationError as exc:
        raise ConfigError(f"Invalid hook configuration: {exc}") from exc


def client_timeout(config: HookConfig) -> float | None:
    """Parse the configured timeout into seconds, None for no timeout.

    Raises:
        ConfigError: If the configured timeout cannot be parsed
    """
    try:
        return parse_duration(config.timeout)
    except ValueError as exc:
        raise ConfigError(f"Invalid timeout {config.timeout!r}: {exc}") from exc


def build_client(config: HookConfig) -> httpx.AsyncClient:
    """Create the client used when none is injected.

    Raises:
        ConfigError: If the configured timeout cannot be parsed
    """
    timeout = client_timeout(config)

    if config.insecure_skip_verify:
        logger.debug("TLS certificate verification disabled")

    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        verify=not config.insecure_skip_verify,
    )


class HookExecutor:
    """Renders a hook configuration per call and sends the request.

    The client is fixed for the executor's lifetime. An injected client must
    be safe for concurrent use; httpx.AsyncClient is, within one event loop.
    Only a client the executor created itself is closed by aclose().

    default_timeout bounds each whole exchange, body read included, when a
    call passes no timeout of its own.
    """

    def __init__(
        self,
        config: HookConfig,
        client: httpx.AsyncClient,
        *,
        owns_client: bool = False,
        default_timeout: float | None = None,
        renderer: Renderer = render_template,
    ) -> None:
        self._config = config
        self._client = client
        self._owns_client = owns_client
        self._default_timeout = default_timeout
        self._renderer = renderer

    @property
    def config(self) -> HookConfig:
        return self._config

    def render(self, data: TemplateData | None = None) -> RenderedRequest:
        """Render the request for *data* without sending it."""
        return build_request(self._config, data or {}, renderer=self._renderer)

    async def execute(
        self,
        data: TemplateData | None = None,
        *,
        timeout: float | None = None,
    ) -> HookResponse:
        """Render the templates against *data* and perform the request.

        Args:
            data: Template values for this call
            timeout: Deadline in seconds for the whole exchange, sending and
                reading the body; defaults to the executor's default_timeout

        Returns:
            The response and its fully read body

        Raises:
            RenderError: If a template fails; nothing is sent
            TransportError: If no response was received
            ResponseReadError: If the response body could not be read
        """
        rendered = self.render(data)
        method, url = rendered.method, rendered.url

        try:
            request = self._client.build_request(
                method,
                url,
                headers=rendered.headers,
                content=rendered.body or None,
            )
        except (httpx.InvalidURL, ValueError) as exc:
            raise TransportError(method, url, str(exc)) from exc

        if timeout is None:
            timeout = self._default_timeout
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        try:
            async with asyncio.timeout_at(deadline):
                response = await self._client.send(request, stream=True)
        except TimeoutError as exc:
            raise TransportError(method, url, f"deadline of {timeout}s exceeded") from exc
        except httpx.HTTPError as exc:
            raise TransportError(method, url, str(exc) or type(exc).__name__) from exc

        try:
            async with asyncio.timeout_at(deadline):
                body = await response.aread()
        except TimeoutError as exc:
            raise ResponseReadError(
                method, url, response.status_code, f"deadline of {timeout}s exceeded"
            ) from exc
        except httpx.HTTPError as exc:
            raise ResponseReadError(
                method, url, response.status_code, str(exc) or type(exc).__name__
            ) from exc
        finally:
            await response.aclose()

        logger.info("%s %s -> %d (%d bytes)", method, url, response.status_code, len(body))
        return HookResponse(response, body)

    async def aclose(self) -> None:
        """Close the client if this executor created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HookExecutor:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def new_hook_executor(
    config: HookConfig | Mapping[str, Any],
    client: httpx.AsyncClient | None = None,
    *,
    renderer: Renderer = render_template,
) -> HookExecutor:
    """Construct a HookExecutor.

    When *client* is given it is used for every call and the config's timeout
    and insecure_skip_verify are ignored. Otherwise a client is built from
    those two fields.

    Args:
        config: Hook configuration, or a mapping validated into one
        client: Optional client to send requests with
        renderer: Rendering capability

    Returns:
        Executor bound to the config and client

    Raises:
        ConfigError: If the configuration is invalid
    """
    hook_config = _coerce_config(config)
    if client is not None:
        return HookExecutor(hook_config, client, renderer=renderer)
    return HookExecutor(
        hook_config,
        build_client(hook_config),
        owns_client=True,
        default_timeout=client_timeout(hook_config),
        renderer=renderer,
    )
