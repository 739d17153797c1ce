"""Simulation wrapper around `cre workflow simulate`.

The wrapper only checks preconditions, fills in a default `--target` and
passes the CLI's exit code through unchanged. It imposes no timeout of its own.
"""

from __future__ import annotations

import logging
import shlex
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from cre_workflow_toolkit.cre.client import CreCli
from cre_workflow_toolkit.results import Failure

logger = logging.getLogger(__name__)

TARGET_FLAG = "--target"
SEPARATOR = "---"


@dataclass(frozen=True, slots=True)
class SimulationPlan:
    """A validated simulation invocation."""

    workflow_path: str
    workflow_dir: Path
    args: tuple[str, ...]

    @property
    def display_command(self) -> str:
        parts = ["cre", "workflow", "simulate", self.workflow_path, *self.args]
        return shlex.join(parts)


def has_target_flag(args: Sequence[str]) -> bool:
    return any(a == TARGET_FLAG or a.startswith(f"{TARGET_FLAG}=") for a in args)


def build_simulate_args(
    extra_args: Sequence[str],
    *,
    default_target: str,
    inject_default_target: bool = True,
) -> list[str]:
    """Return the arguments forwarded to the CLI.

    A target already present in `extra_args` is kept as-is.
    """

    args = list(extra_args)
    if inject_default_target and default_target and not has_target_flag(args):
        return [TARGET_FLAG, default_target, *args]
    return args


def prepare_simulation(
    workflow_path: str,
    extra_args: Sequence[str],
    *,
    cli: CreCli,
    default_target: str,
    inject_default_target: bool = True,
) -> SimulationPlan | Failure:
    """Check preconditions and build the simulation invocation."""

    if cli.locate() is None:
        return Failure(
            error="CRE CLI not installed. Run cre-toolkit check-cli for installation instructions"
        )

    workflow_dir = Path(workflow_path)
    if not workflow_dir.is_dir():
        return Failure(error=f"Workflow path not found: {workflow_path}")

    args = build_simulate_args(
        extra_args,
        default_target=default_target,
        inject_default_target=inject_default_target,
    )
    return SimulationPlan(workflow_path=workflow_path, workflow_dir=workflow_dir, args=tuple(args))


def run_simulation(plan: SimulationPlan, *, cli: CreCli, stream: TextIO | None = None) -> int:
    """Run a prepared simulation and return the CLI's exit code."""

    out = stream if stream is not None else sys.stdout

    print(f"Running: {plan.display_command}", file=out)
    print(SEPARATOR, file=out)
    # The child process writes to the inherited stdout directly.
    out.flush()

    exit_code = cli.simulate(workflow_dir=plan.workflow_dir, args=plan.args)

    print(SEPARATOR, file=out)
    if exit_code == 0:
        print("Simulation completed successfully", file=out)
    else:
        print(f"Simulation failed with exit code: {exit_code}", file=out)
        logger.info(
            "Simulation failed",
            extra={"workflow_path": plan.workflow_path, "exit_code": exit_code},
        )
    return exit_code
