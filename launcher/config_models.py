# launcher/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

Port numbers and the service-role key keep the variable names the stack's
`.env` file uses (ARCHON_UI_PORT, SUPABASE_API_PORT, SERVICE_ROLE_KEY, ...).
Launcher-only settings read from LAUNCHER_* variables, so they never collide
with variables docker compose itself understands, such as COMPOSE_FILE.
"""

from pathlib import Path
from typing import Dict, List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by .env/env/YAML/CLI) ---
COMPOSE_FILE_DEFAULT: str = "docker-compose.full.yml"
ENV_FILE_DEFAULT: str = ".env"
ENV_TEMPLATE_FILE_DEFAULT: str = ".env.example"
MIGRATION_FILE_DEFAULT: str = "migration/complete_setup.sql"
CONTAINER_RUNTIME_COMMAND_DEFAULT: str = "docker"

SUPABASE_CONFIG_BASE_URL_DEFAULT: str = (
    "https://raw.githubusercontent.com/supabase/supabase/master/docker"
)
REQUIRED_FILES_DEFAULT: List[str] = [
    "volumes/db/roles.sql",
    "volumes/db/jwt.sql",
    "volumes/db/webhooks.sql",
    "volumes/db/realtime.sql",
    "volumes/db/_supabase.sql",
    "volumes/db/logs.sql",
    "volumes/db/pooler.sql",
    "volumes/api/kong.yml",
]

ARCHON_UI_PORT_DEFAULT: int = 13737
ARCHON_SERVER_PORT_DEFAULT: int = 18181
ARCHON_MCP_PORT_DEFAULT: int = 18051
SUPABASE_API_PORT_DEFAULT: int = 18000
SUPABASE_STUDIO_PORT_DEFAULT: int = 18323
SUPABASE_DB_PORT_DEFAULT: int = 15432

HEALTH_MAX_ATTEMPTS_DEFAULT: int = 60
HEALTH_INTERVAL_SECONDS_DEFAULT: float = 2.0
HEALTH_REQUEST_TIMEOUT_DEFAULT: float = 5.0
DOWNLOAD_TIMEOUT_DEFAULT: float = 60.0

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅", "error": "❌", "warning": "⚠️", "info": "ℹ️",
    "step": "➡️", "gear": "⚙️", "package": "📦", "rocket": "🚀",
    "sparkles": "✨", "critical": "🔥", "debug": "🐛",
}


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="LAUNCHER_",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        env_ignore_empty=True,
    )

    compose_file: Path = Field(default=Path(COMPOSE_FILE_DEFAULT),
                               description="Docker Compose file defining the full stack.")
    env_file: Path = Field(default=Path(ENV_FILE_DEFAULT),
                           description="Environment file read by the stack and by the launcher.")
    env_template_file: Path = Field(default=Path(ENV_TEMPLATE_FILE_DEFAULT),
                                    description="Template copied to env_file when it is missing.")
    migration_file: Path = Field(default=Path(MIGRATION_FILE_DEFAULT),
                                 description="SQL script the operator runs when the schema is missing.")
    container_runtime_command: str = Field(default=CONTAINER_RUNTIME_COMMAND_DEFAULT,
                                           description="Container runtime CLI (e.g., docker, podman).")

    supabase_config_base_url: str = Field(default=SUPABASE_CONFIG_BASE_URL_DEFAULT,
                                          description="Base URL the missing Supabase support files are fetched from.")
    required_files: List[str] = Field(default_factory=lambda: list(REQUIRED_FILES_DEFAULT),
                                      description="Support files (relative paths) the stack mounts.")
    download_timeout: float = Field(default=DOWNLOAD_TIMEOUT_DEFAULT, gt=0,
                                    description="Timeout in seconds for each support-file download.")

    archon_ui_port: int = Field(default=ARCHON_UI_PORT_DEFAULT, ge=1, le=65535,
                                validation_alias=AliasChoices("archon_ui_port", "ARCHON_UI_PORT"))
    archon_server_port: int = Field(default=ARCHON_SERVER_PORT_DEFAULT, ge=1, le=65535,
                                    validation_alias=AliasChoices("archon_server_port", "ARCHON_SERVER_PORT"))
    archon_mcp_port: int = Field(default=ARCHON_MCP_PORT_DEFAULT, ge=1, le=65535,
                                 validation_alias=AliasChoices("archon_mcp_port", "ARCHON_MCP_PORT"))
    supabase_api_port: int = Field(default=SUPABASE_API_PORT_DEFAULT, ge=1, le=65535,
                                   validation_alias=AliasChoices("supabase_api_port", "SUPABASE_API_PORT"))
    supabase_studio_port: int = Field(default=SUPABASE_STUDIO_PORT_DEFAULT, ge=1, le=65535,
                                      validation_alias=AliasChoices("supabase_studio_port", "SUPABASE_STUDIO_PORT"))
    supabase_db_port: int = Field(default=SUPABASE_DB_PORT_DEFAULT, ge=1, le=65535,
                                  validation_alias=AliasChoices("supabase_db_port", "SUPABASE_DB_PORT"))
    service_role_key: str = Field(default="", exclude=True,
                                  validation_alias=AliasChoices("service_role_key", "SERVICE_ROLE_KEY"),
                                  description="Supabase service-role key used by the migration probe.")

    health_max_attempts: int = Field(default=HEALTH_MAX_ATTEMPTS_DEFAULT, ge=1,
                                     description="Maximum reachability checks per service.")
    health_interval: float = Field(default=HEALTH_INTERVAL_SECONDS_DEFAULT, ge=0,
                                   description="Seconds to sleep between reachability checks.")
    health_request_timeout: float = Field(default=HEALTH_REQUEST_TIMEOUT_DEFAULT, gt=0,
                                          description="Timeout in seconds for a single health or probe request.")

    log_prefix: str = Field(default="", description="Prefix for console log lines.")

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    def compose_base_command(self) -> List[str]:
        """The `docker compose -f <file>` prefix shared by every compose call."""
        return [self.container_runtime_command, "compose", "-f", str(self.compose_file)]
