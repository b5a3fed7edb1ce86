"""Main CLI application."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..core.errors import ConfigError, ErrorKind, HookError
from ..core.models import HookConfig, HookResponse
from ..executor import new_hook_executor
from ..request.builder import build_request
from ..settings import Settings
from .parsers import collect_env_values, load_hook_config, parse_assignment

logger = logging.getLogger(__name__)

EXIT_CODES = {
    ErrorKind.CONFIG: 1,
    ErrorKind.RENDER: 2,
    ErrorKind.TRANSPORT: 3,
    ErrorKind.IO: 4,
}

app = typer.Typer(
    name="hookexec",
    help="Render templated webhook requests and send them.",
    no_args_is_help=True,
)

ConfigArgument = Annotated[
    Path,
    typer.Argument(help="Hook configuration file (YAML or JSON).", metavar="CONFIG"),
]
ValuesOption = Annotated[
    list[str],
    typer.Option(
        "--set",
        help="Template value (format: KEY=VALUE). Repeatable.",
        metavar="KEY=VALUE",
    ),
]
EnvPrefixOption = Annotated[
    str,
    typer.Option(
        "--from-env",
        help="Use environment variables starting with PREFIX as template values.",
        metavar="PREFIX",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging."),
]


def _load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        raise _fail(ConfigError(f"Invalid HOOKEXEC_ settings: {e}")) from e


def _configure_logging(verbose: bool, settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="[%(levelname)s] %(message)s",
    )


def _collect_values(assignments: list[str], env_prefix: str) -> dict[str, str]:
    values = collect_env_values(env_prefix) if env_prefix else {}
    # explicit --set wins over the environment
    values.update(parse_assignment(item) for item in assignments)
    return values


def _load(config_path: Path, settings: Settings) -> HookConfig:
    config = load_hook_config(config_path)
    if not config.timeout and settings.default_timeout:
        config = config.model_copy(update={"timeout": settings.default_timeout})
    return config


def _fail(error: HookError) -> typer.Exit:
    typer.echo(f"error ({error.kind}): {error}", err=True)
    return typer.Exit(code=EXIT_CODES[error.kind])


async def _send(config: HookConfig, values: dict[str, str]) -> HookResponse:
    async with new_hook_executor(config) as executor:
        return await executor.execute(values)


@app.command()
def render(
    config_path: ConfigArgument,
    assignments: ValuesOption = [],
    env_prefix: EnvPrefixOption = "",
    verbose: VerboseOption = False,
) -> None:
    """Print the rendered request without sending it."""
    settings = _load_settings()
    _configure_logging(verbose, settings)

    try:
        config = _load(config_path, settings)
        values = _collect_values(assignments, env_prefix)
        rendered = build_request(config, values)
    except HookError as e:
        raise _fail(e) from e

    typer.echo(f"{rendered.method} {rendered.url}")
    for name, value in rendered.headers.items():
        typer.echo(f"{name}: {value}")
    if rendered.body:
        typer.echo("")
        typer.echo(rendered.body.decode("utf-8"))


@app.command()
def run(
    config_path: ConfigArgument,
    assignments: ValuesOption = [],
    env_prefix: EnvPrefixOption = "",
    verbose: VerboseOption = False,
) -> None:
    """Render the request, send it and print the response."""
    settings = _load_settings()
    _configure_logging(verbose, settings)

    try:
        config = _load(config_path, settings)
        values = _collect_values(assignments, env_prefix)
        response, body = asyncio.run(_send(config, values))
    except HookError as e:
        raise _fail(e) from e

    logger.debug("Response headers: %s", dict(response.headers))
    typer.echo(f"{response.status_code} {response.reason_phrase}", err=True)
    typer.echo(body, nl=False)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
