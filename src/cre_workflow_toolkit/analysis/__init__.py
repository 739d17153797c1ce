"""Static analysis of workflow sources."""

from cre_workflow_toolkit.analysis.limits import (
    LIMIT_RULES,
    LimitReport,
    LimitRule,
    analyze_limits,
    discover_source_files,
)

__all__ = [
    "LIMIT_RULES",
    "LimitReport",
    "LimitRule",
    "analyze_limits",
    "discover_source_files",
]
