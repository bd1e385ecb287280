"""Configuration for the workflow builder CLI.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EditorSettings(BaseSettings):
    """Settings for the workflow editor.

    Environment variables:
    - LOG_LEVEL              (optional)
    - WORKFLOW_HISTORY_PATH  (optional)
    - WORKFLOW_TREE_PATH     (optional)
    - WORKFLOW_ID_PREFIX     (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `EditorSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    workflow_history_path: Path = Field(
        default=Path("workflow/history.json"),
        validation_alias="WORKFLOW_HISTORY_PATH",
        description="Where the edit history (past/present/future) is persisted between commands",
    )

    workflow_tree_path: Path = Field(
        default=Path("workflow/tree.json"),
        validation_alias="WORKFLOW_TREE_PATH",
        description="Where the current workflow is saved/exported",
    )

    workflow_id_prefix: str = Field(
        default="node-",
        validation_alias="WORKFLOW_ID_PREFIX",
        description="Prefix for generated node ids",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level
