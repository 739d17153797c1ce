"""Test configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

_SETTINGS_ENV_VARS = (
    "CRE_CLI_BINARY",
    "CRE_DOCS_URL",
    "CRE_DOCS_OUTPUT",
    "CRE_DOCS_TIMEOUT_SECONDS",
    "CRE_VERSION_TIMEOUT_SECONDS",
    "CRE_SIMULATE_TARGET",
    "CRE_SIMULATE_INJECT_TARGET",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings-dependent tests."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workflow_dir(tmp_path: Path) -> Path:
    """Provide an empty workflow directory."""
    path = tmp_path / "my-workflow"
    path.mkdir()
    return path


@pytest.fixture
def write_file(workflow_dir: Path) -> Callable[[str, str], Path]:
    """Write a file relative to the workflow directory, creating parents."""

    def _write(relative: str, content: str = "") -> Path:
        path = workflow_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
