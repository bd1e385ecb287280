"""Configuration for the REST server."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the workflow REST API.

    The server keeps one editing session per app instance; the session starts
    from the saved workflow at ``workflow_tree_path`` (or a fresh tree) and
    ``POST /api/workflow/save`` writes back to the same file.
    """

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    workflow_tree_path: Path = Field(
        default=Path("workflow/tree.json"),
        validation_alias="WORKFLOW_TREE_PATH",
        description="Saved workflow loaded at startup and written on save",
    )
    workflow_id_prefix: str = Field(default="node-", validation_alias="WORKFLOW_ID_PREFIX")

    # Dev-friendly CORS (Vite). Override via WORKFLOW_CORS_ORIGINS=...
    cors_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="WORKFLOW_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", extra="ignore", populate_by_name=True
    )

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
