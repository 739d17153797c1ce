"""CRE workflow toolkit.

Local helpers for authoring CRE workflows:
- structure validation and heuristic quota analysis of workflow sources
- a wrapper around the `cre` CLI for install checks and simulation
- documentation download, chain selectors and bundled TypeScript templates
"""

__version__ = "0.1.0"

from cre_workflow_toolkit.config import ToolkitSettings

__all__ = ["__version__", "ToolkitSettings"]
