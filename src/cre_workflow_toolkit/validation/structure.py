"""Workflow directory structure validation.

Only file presence is checked; contents are never read. A missing workflow
metadata file or entry point is an error, other missing files are warnings.
Validation failures are reported in the result, never as a command failure.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field

from cre_workflow_toolkit.results import ToolResult

logger = logging.getLogger(__name__)

WORKFLOW_METADATA = "workflow.yaml"
ENTRY_POINTS: tuple[str, ...] = ("src/index.ts", "index.ts")
PACKAGE_MANIFEST = "package.json"
TS_CONFIG = "tsconfig.json"
CONFIG_DIR = "config"
CONFIG_FILE = "config/config.json"


class StructureReport(ToolResult):
    """Outcome of a structure validation run."""

    valid: bool
    path: str
    found_files: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def validate_workflow_structure(path: str | Path = ".") -> StructureReport:
    """Check a workflow directory for the files the CRE CLI expects."""

    root = Path(path)
    found: list[str] = []
    errors: list[str] = []
    warnings: list[str] = []

    if (root / WORKFLOW_METADATA).is_file():
        found.append(WORKFLOW_METADATA)
    else:
        errors.append(f"Missing {WORKFLOW_METADATA}")

    entry = next((e for e in ENTRY_POINTS if (root / e).is_file()), None)
    if entry is not None:
        found.append(entry)
    else:
        errors.append("Missing TypeScript entry point (src/index.ts or index.ts)")

    if (root / PACKAGE_MANIFEST).is_file():
        found.append(PACKAGE_MANIFEST)
    else:
        warnings.append("Missing package.json - may need npm init")

    if (root / TS_CONFIG).is_file():
        found.append(TS_CONFIG)
    else:
        warnings.append("Missing tsconfig.json - TypeScript config recommended")

    if (root / CONFIG_DIR).is_dir():
        found.append(f"{CONFIG_DIR}/")
        if (root / CONFIG_FILE).is_file():
            found.append(CONFIG_FILE)
        else:
            warnings.append("config/ exists but no config.json found")

    if errors:
        logger.info("Workflow structure invalid", extra={"path": str(path), "errors": errors})

    return StructureReport(
        valid=not errors,
        path=str(path),
        found_files=found,
        errors=errors,
        warnings=warnings,
    )
