"""Thin wrapper around the external `cre` command-line tool.

The toolkit never talks to the CRE platform itself; everything goes through
the installed binary. Keeping subprocess calls here keeps them out of CLI code
and lets tests substitute the runner.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from cre_workflow_toolkit.results import ToolResult

logger = logging.getLogger(__name__)

INSTALL_URL = "https://cre.chain.link"
INSTALL_DOCS_URL = "https://docs.chain.link/cre"
UNKNOWN_VERSION = "unknown"

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


class CliStatus(ToolResult):
    """Installation status of the CRE CLI."""

    installed: bool
    version: str | None = None
    location: str | None = None
    error: str | None = None
    install_instructions: str | None = None

    @classmethod
    def missing(cls) -> CliStatus:
        return cls(
            installed=False,
            error=f"CRE CLI not found. Install from {INSTALL_URL}",
            install_instructions=f"Visit {INSTALL_DOCS_URL} to install the CRE CLI",
        )


class CreCliNotFoundError(RuntimeError):
    """Raised when an operation needs the CRE CLI and it is not on PATH."""

    def __init__(self, binary: str) -> None:
        super().__init__(f"CRE CLI not found on PATH: {binary}")
        self.binary = binary


class CreCli:
    """Small wrapper around the `cre` binary for the operations we need."""

    def __init__(
        self,
        *,
        binary: str = "cre",
        version_timeout_seconds: float = 15.0,
        runner: Runner | None = None,
    ) -> None:
        if not binary:
            raise ValueError("CRE CLI binary name is required")

        self._binary = binary
        self._version_timeout_seconds = version_timeout_seconds
        self._runner: Runner = runner or subprocess.run

    @property
    def binary(self) -> str:
        return self._binary

    def locate(self) -> str | None:
        """Return the resolved executable path, or None when not installed."""

        return shutil.which(self._binary)

    def version(self, executable: str) -> str:
        """Return the self-reported version of `executable`."""

        try:
            completed = self._runner(
                [executable, "--version"],
                capture_output=True,
                text=True,
                timeout=self._version_timeout_seconds,
                check=False,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.warning(
                "CRE CLI version check failed", extra={"binary": executable, "error": str(e)}
            )
            return UNKNOWN_VERSION

        if completed.returncode != 0:
            logger.warning(
                "CRE CLI version check exited non-zero",
                extra={"binary": executable, "returncode": completed.returncode},
            )
            return UNKNOWN_VERSION

        return (completed.stdout or "").strip() or UNKNOWN_VERSION

    def status(self) -> CliStatus:
        """Report whether the CLI is installed, and its version and location if so."""

        location = self.locate()
        if location is None:
            logger.info("CRE CLI not found", extra={"binary": self._binary})
            return CliStatus.missing()

        return CliStatus(installed=True, version=self.version(location), location=location)

    def simulate(self, *, workflow_dir: Path, args: Sequence[str]) -> int:
        """Run `cre workflow simulate .` inside `workflow_dir`.

        Output is not captured, so it streams straight to the caller's terminal.

        Returns:
            The exit code of the CRE CLI, unchanged.
        """

        executable = self.locate()
        if executable is None:
            raise CreCliNotFoundError(self._binary)

        command = [executable, "workflow", "simulate", ".", *args]
        logger.debug("Running CRE simulation", extra={"command": command, "cwd": str(workflow_dir)})

        completed = self._runner(command, cwd=workflow_dir, check=False)
        return completed.returncode
