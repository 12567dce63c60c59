# -*- coding: utf-8 -*-
"""
Command-line interface of the launcher.

Running it without a subcommand is the same as `start`.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click

from common.logging_config import resolve_log_level, setup_logging

from .bootstrap import run_bootstrap
from .config_loader import CONFIG_FILE_DEFAULT, load_app_settings, reload_with_env_file
from .config_models import AppSettings
from .exceptions import StackError
from .health_poller import poll_services
from .migration_probe import probe_migration_status
from .report import print_banner, print_summary
from .stack_controller import follow_logs, restart_stack, stop_stack

LOGGER_NAME = "archon_launcher"


def _resolve_settings(
    ctx: click.Context, extra_overrides: Optional[Dict[str, Any]] = None
) -> AppSettings:
    """Load settings, reading the environment file if it already exists."""
    overrides = dict(ctx.obj["cli_overrides"])
    overrides.update(
        {key: value for key, value in (extra_overrides or {}).items() if value is not None}
    )
    ctx.obj["cli_overrides"] = overrides
    logger = ctx.obj["logger"]
    settings = load_app_settings(
        cli_overrides=overrides,
        config_file_path=ctx.obj["config_file"],
        current_logger=logger,
    )
    return reload_with_env_file(
        settings,
        cli_overrides=overrides,
        config_file_path=ctx.obj["config_file"],
        current_logger=logger,
    )


@click.group(invoke_without_command=True)
@click.option(
    "--compose-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Docker Compose file of the full stack [default: docker-compose.full.yml].",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Environment file shared with the stack [default: .env].",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILE_DEFAULT,
    show_default=True,
    help="Optional YAML file with launcher settings.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.pass_context
def cli(ctx, compose_file, env_file, config_file, verbose):
    """
    Start and check the local Archon + Supabase Docker stack.
    """
    ctx.ensure_object(dict)
    log_level = logging.DEBUG if verbose else resolve_log_level()
    setup_logging(log_level=log_level)
    ctx.obj.update(
        {
            "cli_overrides": {"compose_file": compose_file, "env_file": env_file},
            "config_file": config_file,
            "logger": logging.getLogger(LOGGER_NAME),
            "log_level": log_level,
        }
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(start)


@cli.command()
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=None,
    help="Health checks per service before giving up [default: 60].",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds between health checks [default: 2].",
)
@click.option("--no-build", is_flag=True, help="Start without rebuilding images.")
@click.option(
    "--skip-fetch", is_flag=True, help="Do not download missing Supabase config files."
)
@click.pass_context
def start(ctx, max_attempts=None, interval=None, no_build=False, skip_fetch=False):
    """
    Tear down, rebuild and start the stack, then wait for it.
    """
    settings = _resolve_settings(
        ctx, {"health_max_attempts": max_attempts, "health_interval": interval}
    )
    setup_logging(
        log_level=ctx.obj["log_level"],
        log_prefix=settings.log_prefix,
        symbols=settings.symbols,
    )
    print_banner()
    try:
        exit_code = run_bootstrap(
            settings,
            ctx.obj["logger"],
            cli_overrides=ctx.obj["cli_overrides"],
            config_file_path=ctx.obj["config_file"],
            skip_fetch=skip_fetch,
            build=not no_build,
        )
    except KeyboardInterrupt:
        ctx.obj["logger"].warning("Interrupted. Containers already started keep running.")
        ctx.exit(130)
    ctx.exit(exit_code)


@cli.command()
@click.pass_context
def stop(ctx):
    """
    Stop and remove the stack's containers.
    """
    settings = _resolve_settings(ctx)
    if not stop_stack(settings, ctx.obj["logger"]):
        ctx.obj["logger"].warning("docker compose down reported an error.")
        ctx.exit(1)


@cli.command()
@click.option("--no-build", is_flag=True, help="Start without rebuilding images.")
@click.pass_context
def restart(ctx, no_build):
    """
    Tear down and start the stack again, without waiting for it.
    """
    settings = _resolve_settings(ctx)
    try:
        restart_stack(settings, ctx.obj["logger"], build=not no_build)
    except StackError as e:
        ctx.obj["logger"].error(str(e))
        ctx.exit(1)


@cli.command()
@click.option("--no-follow", is_flag=True, help="Print the logs and exit.")
@click.pass_context
def logs(ctx, no_follow):
    """
    Show the stack's logs.
    """
    settings = _resolve_settings(ctx)
    try:
        ctx.exit(follow_logs(settings, ctx.obj["logger"], follow=not no_follow))
    except FileNotFoundError:
        ctx.exit(1)
    except KeyboardInterrupt:
        ctx.exit(130)


@cli.command()
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Health checks per service.",
)
@click.pass_context
def status(ctx, max_attempts):
    """
    Check the running stack without changing it.

    Exits 1 when a service does not answer or the migration is missing.
    """
    settings = _resolve_settings(ctx, {"health_max_attempts": max_attempts})
    logger = ctx.obj["logger"]
    results = poll_services(settings, logger)
    migration = probe_migration_status(settings, logger)
    healthy = all(result.ready for result in results) and migration.configured
    if healthy:
        print_summary(settings)
    ctx.exit(0 if healthy else 1)


@cli.command(name="config")
@click.pass_context
def config_command(ctx):
    """
    Print the effective configuration.
    """
    settings = _resolve_settings(ctx)
    key_display = "[SET]" if settings.service_role_key else "[NOT SET - migration probe will fail]"

    click.echo("Effective configuration (CLI > YAML > ENV > .env > defaults):\n")
    click.echo(f"  Compose file:              {settings.compose_file}")
    click.echo(f"  Environment file:          {settings.env_file}")
    click.echo(f"  Environment template:      {settings.env_template_file}")
    click.echo(f"  Migration script:          {settings.migration_file}")
    click.echo(f"  Container runtime:         {settings.container_runtime_command}")
    click.echo(f"  Support files base URL:    {settings.supabase_config_base_url}")
    click.echo(f"  Health checks:             {settings.health_max_attempts} x {settings.health_interval}s")
    click.echo("")
    click.echo(f"  ARCHON_UI_PORT:            {settings.archon_ui_port}")
    click.echo(f"  ARCHON_SERVER_PORT:        {settings.archon_server_port}")
    click.echo(f"  ARCHON_MCP_PORT:           {settings.archon_mcp_port}")
    click.echo(f"  SUPABASE_API_PORT:         {settings.supabase_api_port}")
    click.echo(f"  SUPABASE_STUDIO_PORT:      {settings.supabase_studio_port}")
    click.echo(f"  SUPABASE_DB_PORT:          {settings.supabase_db_port}")
    click.echo(f"  SERVICE_ROLE_KEY:          {key_display}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
