"""Unit tests for settings loading."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from cre_workflow_toolkit.config import ToolkitSettings


def test_settings_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    settings = ToolkitSettings()

    assert settings.cre_binary == "cre"
    assert settings.docs_url == "https://docs.chain.link/cre/llms-full-ts.txt"
    assert settings.docs_output_path == Path(tempfile.gettempdir()) / "cre-docs-full.txt"
    assert settings.simulate_default_target == "staging-settings"
    assert settings.simulate_inject_target is True
    assert settings.log_level == "WARNING"


def test_settings_loads_from_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "CRE_CLI_BINARY=/opt/cre/bin/cre",
                "CRE_SIMULATE_TARGET=production-settings",
                "CRE_SIMULATE_INJECT_TARGET=false",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ToolkitSettings()

    assert settings.cre_binary == "/opt/cre/bin/cre"
    assert settings.simulate_default_target == "production-settings"
    assert settings.simulate_inject_target is False
    assert settings.log_level == "DEBUG"


def test_environment_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CRE_DOCS_OUTPUT", str(tmp_path / "docs.txt"))
    monkeypatch.setenv("CRE_DOCS_TIMEOUT_SECONDS", "2.5")

    settings = ToolkitSettings(_env_file=None)

    assert settings.docs_output_path == tmp_path / "docs.txt"
    assert settings.docs_timeout_seconds == 2.5


def test_non_positive_timeout_is_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CRE_VERSION_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        ToolkitSettings(_env_file=None)


def test_log_level_is_normalised(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")

    settings = ToolkitSettings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "text"


@pytest.mark.parametrize(("name", "value"), [("LOG_LEVEL", "verbose"), ("LOG_FORMAT", "xml")])
def test_unknown_logging_options_are_rejected(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        ToolkitSettings(_env_file=None)
