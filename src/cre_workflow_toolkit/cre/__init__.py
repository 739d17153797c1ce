"""Integration with the external CRE command-line tool."""

from cre_workflow_toolkit.cre.client import CliStatus, CreCli, CreCliNotFoundError
from cre_workflow_toolkit.cre.simulate import (
    SimulationPlan,
    build_simulate_args,
    prepare_simulation,
    run_simulation,
)

__all__ = [
    "CliStatus",
    "CreCli",
    "CreCliNotFoundError",
    "SimulationPlan",
    "build_simulate_args",
    "prepare_simulation",
    "run_simulation",
]
