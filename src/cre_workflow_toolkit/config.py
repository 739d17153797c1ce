"""Configuration for the workflow toolkit.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Every value has a working default, so the toolkit runs without any
configuration at all. CLI flags override these per invocation.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DOCS_URL = "https://docs.chain.link/cre/llms-full-ts.txt"
DEFAULT_SIMULATE_TARGET = "staging-settings"


def _default_docs_output() -> Path:
    return Path(tempfile.gettempdir()) / "cre-docs-full.txt"


class ToolkitSettings(BaseSettings):
    """Settings for the toolkit CLI.

    Environment variables:
    - CRE_CLI_BINARY               (optional)
    - CRE_DOCS_URL                 (optional)
    - CRE_DOCS_OUTPUT              (optional)
    - CRE_DOCS_TIMEOUT_SECONDS     (optional)
    - CRE_VERSION_TIMEOUT_SECONDS  (optional)
    - CRE_SIMULATE_TARGET          (optional)
    - CRE_SIMULATE_INJECT_TARGET   (optional)
    - LOG_LEVEL                    (optional)
    - LOG_FORMAT                   (optional)

    Notes:
        Tests can skip the `.env` file via `ToolkitSettings(_env_file=None)`.
    """

    cre_binary: str = Field(
        default="cre",
        validation_alias="CRE_CLI_BINARY",
        description="Name or path of the CRE command-line tool",
    )

    docs_url: str = Field(
        default=DEFAULT_DOCS_URL,
        validation_alias="CRE_DOCS_URL",
        description="URL of the full CRE documentation bundle",
    )
    docs_output_path: Path = Field(
        default_factory=_default_docs_output,
        validation_alias="CRE_DOCS_OUTPUT",
        description="Where the fetched documentation is written",
    )
    docs_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        validation_alias="CRE_DOCS_TIMEOUT_SECONDS",
        description="Timeout for the documentation download",
    )

    version_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        validation_alias="CRE_VERSION_TIMEOUT_SECONDS",
        description="Timeout for `cre --version`",
    )

    simulate_default_target: str = Field(
        default=DEFAULT_SIMULATE_TARGET,
        validation_alias="CRE_SIMULATE_TARGET",
        description="Target settings passed to `cre workflow simulate` when none is given",
    )
    simulate_inject_target: bool = Field(
        default=True,
        validation_alias="CRE_SIMULATE_INJECT_TARGET",
        description=(
            "If true, `--target <simulate_default_target>` is added to simulation "
            "arguments that do not already carry a --target flag."
        ),
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        validation_alias="LOG_FORMAT",
        description="Log record format on stderr: JSON lines or plain text",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value: object) -> str:
        level = str(value).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalise_log_format(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value
