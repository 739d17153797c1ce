"""Heuristic quota analysis for workflow sources.

The analyzer never parses TypeScript. It counts source lines matching a small
set of indicator patterns and compares each count against the platform's
per-execution quotas. A match inside a comment or a string literal counts the
same as a real call site, so the output is advisory only.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field

from cre_workflow_toolkit.results import ToolResult

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".ts"
EXCLUDED_DIR_NAMES = frozenset({"node_modules"})
NO_FILES_MESSAGE = "No TypeScript files found"


@dataclass(frozen=True, slots=True)
class LimitRule:
    """One indicator category and how its count is reported.

    A count above `warn_above` produces `warning`; otherwise a non-zero count
    produces `info` when the rule has one. Either template may be None.
    """

    category: str
    pattern: re.Pattern[str]
    warn_above: int | None
    warning: str | None
    info: str | None

    def count(self, lines: Iterable[str]) -> int:
        return sum(1 for line in lines if self.pattern.search(line))

    def classify(self, count: int) -> tuple[str | None, str | None]:
        """Return `(warning, info)` messages for a count; at most one is set."""

        if self.warn_above is not None and count > self.warn_above and self.warning:
            return self.warning.format(count=count), None
        if count > 0 and self.info:
            return None, self.info.format(count=count)
        return None, None


LIMIT_RULES: tuple[LimitRule, ...] = (
    LimitRule(
        category="http",
        pattern=re.compile(r"httpClient|\.fetch|HTTPClient"),
        warn_above=5,
        warning="Found {count} potential HTTP call sites - limit is 5 per execution",
        info="Found {count} HTTP call site(s) - limit is 5 per execution",
    ),
    LimitRule(
        category="evm_read",
        pattern=re.compile(r"evmClient|\.read|EVMClient|readContract"),
        warn_above=10,
        warning="Found {count} potential EVM read sites - limit is 10 per execution",
        info="Found {count} EVM operation site(s) - limit is 10 reads per execution",
    ),
    LimitRule(
        category="json",
        pattern=re.compile(r"JSON\.parse|JSON\.stringify"),
        warn_above=10,
        warning="Heavy JSON operations ({count} sites) - watch memory usage (100MB limit)",
        info=None,
    ),
    LimitRule(
        category="loop",
        pattern=re.compile(r"while\s*\(|for\s*\("),
        warn_above=5,
        warning="Found {count} loop constructs - ensure they complete within 5 minute timeout",
        info=None,
    ),
    LimitRule(
        category="log",
        pattern=re.compile(r"console\.log|console\.error"),
        warn_above=20,
        warning="Found {count} console log calls - log lines are limited per execution",
        info=None,
    ),
    LimitRule(
        category="secret",
        pattern=re.compile(r"getSecret|runtime\.getSecret"),
        warn_above=None,
        warning=None,
        info="Uses {count} secret(s) - max 100 secrets per account",
    ),
)


class LimitReport(ToolResult):
    """Outcome of a single limit analysis run."""

    path: str
    warnings: list[str] = Field(default_factory=list)
    info: list[str] = Field(default_factory=list)
    files_analyzed: int = Field(default=0)
    counts: dict[str, int] = Field(default_factory=dict, exclude=True)


def discover_source_files(root: Path) -> list[Path]:
    """Return workflow source files under `root` in a stable order.

    Dependency directories are skipped. A missing root yields no files.
    """

    if root.is_file():
        return [root] if root.suffix == SOURCE_SUFFIX else []
    if not root.is_dir():
        return []

    candidates = [
        p
        for p in root.rglob(f"*{SOURCE_SUFFIX}")
        if p.is_file() and not EXCLUDED_DIR_NAMES.intersection(p.relative_to(root).parts)
    ]
    return sorted(candidates)


def _read_lines(path: Path) -> list[str]:
    # Lines end at "\n" only; form feeds, lone "\r" and Unicode separators stay inside a line.
    return path.read_bytes().decode("utf-8", errors="replace").split("\n")


def analyze_limits(path: str | Path = ".") -> LimitReport:
    """Scan a workflow directory for likely quota violations."""

    display_path = str(path)
    files = discover_source_files(Path(path))
    if not files:
        logger.info("No source files to analyze", extra={"path": display_path})
        return LimitReport(path=display_path, info=[NO_FILES_MESSAGE])

    lines: list[str] = []
    for file in files:
        try:
            lines.extend(_read_lines(file))
        except OSError as e:
            logger.warning(
                "Skipping unreadable source file", extra={"file": str(file), "error": str(e)}
            )

    report = LimitReport(path=display_path, files_analyzed=len(files))
    for rule in LIMIT_RULES:
        count = rule.count(lines)
        report.counts[rule.category] = count

        warning, info = rule.classify(count)
        if warning:
            report.warnings.append(warning)
        if info:
            report.info.append(info)

    logger.debug(
        "Limit analysis complete",
        extra={"path": display_path, "files": len(files), "counts": report.counts},
    )
    return report
