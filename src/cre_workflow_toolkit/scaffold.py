"""Catalog of bundled workflow templates and scaffolding from them.

Templates are example application code for the CRE TypeScript SDK. They are
copied verbatim; nothing here compiles or checks them.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from cre_workflow_toolkit.results import ToolResult

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "cre_workflow_toolkit.templates"
SCAFFOLD_ENTRY_POINT = Path("src") / "index.ts"


@dataclass(frozen=True, slots=True)
class TemplateInfo:
    """A bundled template."""

    name: str
    trigger: str
    description: str

    @property
    def filename(self) -> str:
        return f"{self.name}.ts"

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["filename"] = self.filename
        return payload


class TemplateSummary(BaseModel):
    name: str
    trigger: str
    description: str
    filename: str


class TemplateListResult(ToolResult):
    """The bundled template catalog."""

    templates: list[TemplateSummary]

    @classmethod
    def from_catalog(cls, templates: list[TemplateInfo]) -> TemplateListResult:
        return cls(templates=[TemplateSummary(**t.to_dict()) for t in templates])


class ScaffoldResult(ToolResult):
    """A template written into a workflow directory."""

    template: str
    file: str


TEMPLATES: tuple[TemplateInfo, ...] = (
    TemplateInfo("workflow-http", "http", "HTTP webhook handler with request validation"),
    TemplateInfo("workflow-cron", "cron", "Scheduled task on a cron trigger"),
    TemplateInfo("workflow-evm-log", "evm-log", "Reacts to smart contract events"),
    TemplateInfo("workflow-get-request", "cron", "GET request to an external API with consensus"),
    TemplateInfo("workflow-post-request", "cron", "POST request to an external API with consensus"),
    TemplateInfo("workflow-using-secret", "cron", "Reads several secrets from secrets.yaml"),
    TemplateInfo(
        "optimize-multiple-http-calls",
        "cron",
        "Batches several HTTP calls inside one node-mode request",
    ),
)


class UnknownTemplateError(KeyError):
    """Raised when a template name is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        known = ", ".join(t.name for t in TEMPLATES)
        return f"Unknown template: {self.name!r} (available: {known})"


def list_templates() -> list[TemplateInfo]:
    return list(TEMPLATES)


def get_template(name: str) -> TemplateInfo:
    # Accept "workflow-cron.ts" as well as "workflow-cron".
    key = name.removesuffix(".ts")
    for template in TEMPLATES:
        if template.name == key:
            return template
    raise UnknownTemplateError(name)


def read_template(name: str) -> str:
    """Return the TypeScript source of a bundled template."""

    template = get_template(name)
    return resources.files(TEMPLATE_PACKAGE).joinpath(template.filename).read_text(
        encoding="utf-8"
    )


def scaffold_template(name: str, destination: Path, *, force: bool = False) -> Path:
    """Write a template as the entry point of a workflow directory.

    Returns:
        The path of the written entry point.

    Raises:
        UnknownTemplateError: if `name` is not a bundled template.
        FileExistsError: if the entry point exists and `force` is false.
    """

    source = read_template(name)
    target = destination / SCAFFOLD_ENTRY_POINT
    if target.exists() and not force:
        raise FileExistsError(f"Entry point already exists: {target}")

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(source, encoding="utf-8")
    logger.info("Scaffolded workflow template", extra={"template": name, "path": str(target)})
    return target
