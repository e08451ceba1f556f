"""Engine systems: plain functions over a Population."""

from walletsim.systems.exchange import RoundOutcome, run_round
from walletsim.systems.solvency import eligible_indices, reconcile_debt_toggle

__all__ = [
    "RoundOutcome",
    "run_round",
    "eligible_indices",
    "reconcile_debt_toggle",
]
