"""Workflow directory validation."""

from cre_workflow_toolkit.validation.structure import StructureReport, validate_workflow_structure

__all__ = ["StructureReport", "validate_workflow_structure"]
