"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from workflow_builder.config import EditorSettings
from workflow_builder.server.config import ServerSettings


def test_editor_settings_defaults(clean_env: Path) -> None:
    settings = EditorSettings()

    assert settings.log_level == "INFO"
    assert settings.workflow_history_path == Path("workflow/history.json")
    assert settings.workflow_tree_path == Path("workflow/tree.json")
    assert settings.workflow_id_prefix == "node-"


def test_editor_settings_load_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "LOG_LEVEL=debug",
                "WORKFLOW_HISTORY_PATH=state/h.json",
                "WORKFLOW_ID_PREFIX=step-",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = EditorSettings()

    assert settings.log_level == "DEBUG"
    assert settings.workflow_history_path == Path("state/h.json")
    assert settings.workflow_id_prefix == "step-"


def test_editor_settings_reject_unknown_log_level(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        EditorSettings()


def test_server_settings_cors_parsing(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WORKFLOW_CORS_ORIGINS", " http://a.test , ,http://b.test")
    settings = ServerSettings()
    assert settings.parsed_cors_origins() == ["http://a.test", "http://b.test"]


def test_server_settings_accept_field_names(clean_env: Path) -> None:
    settings = ServerSettings(workflow_tree_path=clean_env / "t.json")
    assert settings.workflow_tree_path == clean_env / "t.json"
