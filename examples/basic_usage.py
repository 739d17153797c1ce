#!/usr/bin/env python3
"""Programmatic workflow check example.

This demonstrates using the toolkit components directly:

* load settings from `.env`
* validate a workflow directory's layout
* run the heuristic limit analysis
* report whether the CRE CLI is available for simulation
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from cre_workflow_toolkit.analysis.limits import analyze_limits
from cre_workflow_toolkit.config import ToolkitSettings
from cre_workflow_toolkit.cre.client import CreCli
from cre_workflow_toolkit.logging import configure_logging
from cre_workflow_toolkit.validation.structure import validate_workflow_structure


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check a CRE workflow (programmatic example).")
    parser.add_argument("path", nargs="?", default=".", help="Workflow directory")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ToolkitSettings()
    configure_logging(settings.log_level, settings.log_format)

    structure = validate_workflow_structure(args.path)
    for error in structure.errors:
        print(f"error: {error}")
    for warning in structure.warnings:
        print(f"warning: {warning}")

    limits = analyze_limits(args.path)
    for warning in limits.warnings:
        print(f"limit: {warning}")
    for note in limits.info:
        print(f"note: {note}")

    status = CreCli(binary=settings.cre_binary).status()
    if status.installed:
        print(f"CRE CLI {status.version} at {status.location}; run `cre-toolkit simulate {args.path}`")
    else:
        print(status.install_instructions)

    return 0 if structure.valid else 1


if __name__ == "__main__":
    raise SystemExit(main())
