# launcher/report.py
# -*- coding: utf-8 -*-
"""
Operator-facing boxes printed by the launcher: the start banner, the manual
migration instructions and the summary of running services.
"""

from typing import List, Optional, Tuple

import click

from .config_models import AppSettings

BOX_WIDTH = 60


def _box_line(text: str = "", width: int = BOX_WIDTH) -> str:
    return f"║  {text}".ljust(width + 1) + "║"


def _rule(left: str, right: str, width: int = BOX_WIDTH) -> str:
    return left + "═" * width + right


def render_box(
    title: str,
    lines: List[str],
    width: int = BOX_WIDTH,
    centre_title: bool = True,
) -> List[str]:
    """Render a double-line box; `lines` go below a divider when given."""
    title_text = title.center(width) if centre_title else f"  {title}".ljust(width)
    rendered = [_rule("╔", "╗", width), f"║{title_text}║"]
    if lines:
        rendered.append(_rule("╠", "╣", width))
        rendered.extend(_box_line(line, width) for line in lines)
    rendered.append(_rule("╚", "╝", width))
    return rendered


def _echo_box(box: List[str], fg: str) -> None:
    for line in box:
        click.secho(line, fg=fg)


def print_banner(title: str = "Archon Full Local Setup (Detached)") -> None:
    _echo_box(render_box(title, [], width=44), fg="blue")
    click.echo()


def migration_instructions(app_settings: AppSettings) -> List[str]:
    return [
        f"1. Open Supabase Studio: http://localhost:{app_settings.supabase_studio_port}",
        "2. Go to SQL Editor (left sidebar)",
        f"3. Copy contents of: {app_settings.migration_file.as_posix()}",
        "4. Paste and click 'Run'",
    ]


def print_migration_instructions(app_settings: AppSettings) -> None:
    """Print the manual migration steps."""
    click.echo()
    _echo_box(
        render_box(
            "ACTION REQUIRED: Run database migration",
            migration_instructions(app_settings),
            centre_title=False,
        ),
        fg="yellow",
    )


def service_urls(app_settings: AppSettings) -> List[Tuple[str, str]]:
    """(label, address) of every service the stack exposes."""
    return [
        ("Archon UI", f"http://localhost:{app_settings.archon_ui_port}"),
        ("Archon API", f"http://localhost:{app_settings.archon_server_port}"),
        ("Archon MCP", f"http://localhost:{app_settings.archon_mcp_port}"),
        ("Supabase API", f"http://localhost:{app_settings.supabase_api_port}"),
        ("Supabase Studio", f"http://localhost:{app_settings.supabase_studio_port}"),
        ("PostgreSQL", f"localhost:{app_settings.supabase_db_port}"),
    ]


def management_commands(app_settings: AppSettings) -> List[Tuple[str, str]]:
    base = " ".join(app_settings.compose_base_command())
    return [
        ("Stop", f"{base} down"),
        ("Logs", f"{base} logs -f"),
    ]


def summary_lines(app_settings: AppSettings) -> List[str]:
    lines = [f"{label + ':':<18}{address}" for label, address in service_urls(app_settings)]
    lines.append("")
    lines.extend(f"{label + ':':<9}{command}" for label, command in management_commands(app_settings))
    return lines


def print_summary(
    app_settings: AppSettings,
    title: Optional[str] = "Services Running",
) -> None:
    """Print where every service listens and how to stop or follow the stack."""
    click.echo()
    _echo_box(render_box(title, summary_lines(app_settings)), fg="green")
