"""Root CLI group for abstract-bridge with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from abstract_bridge import __version__
from abstract_bridge.commands import register_commands
from abstract_bridge.commands._context import AppContext, emit
from abstract_bridge.config.settings import BridgeSettings
from abstract_bridge.domain.errors import ConfigurationError
from abstract_bridge.services.result import failure


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="abstract-bridge")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging of each invocation.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--token", default=None, help="Access token (default: $ABSTRACT_TOKEN).")
@click.option("--api-url", default=None, help="API endpoint (default: $ABSTRACT_API_URL).")
@click.option("--cli-path", default=None, help="abstract-cli search path, os.pathsep separated.")
@click.option(
    "--cwd",
    default=None,
    type=click.Path(file_okay=False, exists=True, path_type=Path),
    help="Working directory for abstract-cli.",
)
@click.option(
    "--timeout",
    default=None,
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds before an invocation is terminated.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    token: str | None,
    api_url: str | None,
    cli_path: str | None,
    cwd: Path | None,
    timeout: float | None,
) -> None:
    """abstract-bridge — query Abstract projects through abstract-cli."""
    ctx.ensure_object(dict)
    try:
        settings = BridgeSettings.from_cli(
            config_path=config_path,
            cwd=cwd,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
            token=token,
            api_url=api_url,
            cli_path=cli_path,
        )
    except ConfigurationError as exc:
        emit(failure("config", exc), json_output=json_output)
        return
    if timeout is not None:
        invocation = settings.invocation.model_copy(update={"timeout": timeout})
        settings = settings.model_copy(update={"invocation": invocation})
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
