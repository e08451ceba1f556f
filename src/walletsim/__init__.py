"""
walletsim - Random-Exchange Wealth Concentration Simulator
==========================================================

walletsim simulates a population of agents trading fixed units of money
through repeated random pairwise meetings. Every meeting is fair - a coin
decides who pays - yet wealth concentrates relentlessly: the Gini
coefficient climbs and, when debt is not allowed, agents drop out one by
one until a handful of wallets hold everything.

Quick Start
-----------
>>> import walletsim as ws
>>> sim = ws.Simulation.init(seed=42)
>>> sim.run(500)
>>> print(f"Gini after {sim.round} rounds: {sim.stats().gini:.3f}")

Custom configuration via kwargs or YAML:

>>> sim = ws.Simulation.init(agent_count=200, allow_debt=True, seed=7)
>>> sim = ws.Simulation.init(config="my_config.yml", seed=7)

Live control (what a UI would call):

>>> sim.update_settings(transactions_per_round=200)
>>> sim.set_tick_interval_ms(20)
>>> sim.play(max_rounds=100, on_tick=lambda snap: None)
>>> sim.reset()

Key Concepts
------------
**Round**
  One tick of the controller: a fixed number of exchange attempts.

**Attempt**
  Two random agents meet, a coin picks the payer, and the payment happens
  only if that payer can afford it. Otherwise the attempt is void.

**Solvency**
  Without debt, an agent whose balance reaches zero is retired for good
  (until debt is switched on). The run halts once fewer than two agents
  can still trade.

**Deterministic RNG**
  Fixed seed ensures reproducible runs.

Public API
----------
Simulation
    Controller: settings, population, round loop and control operations.
Settings
    Immutable exchange rules and population parameters.
Population, Agent, create_population
    The agent store and its read-only record view.
run_round, reconcile_debt_toggle
    Engine systems, usable without the controller.
stats
    Gini, histogram, leaderboard and friends.
make_rng, Rng
    Random number generator helpers.
logging
    Custom logging with a DEEP_DEBUG level.
"""

from __future__ import annotations

__version__: str = "0.1.0"

from typing import TypeAlias

import numpy as np

Rng: TypeAlias = np.random.Generator

# ============================================================================
# User-facing utilities (must be before Simulation import)
# ============================================================================
from . import logging  # noqa: E402 (circular‑safe)


def make_rng(seed: int | None = None) -> Rng:
    """Create a new random number generator.

    Under the hood, this uses NumPy's `default_rng`.

    Parameters
    ----------
    seed : int | None
        Seed for reproducibility. If `None`, uses a random seed.

    Returns
    -------
    Rng
        A NumPy random number generator (np.random.Generator).

    Examples
    --------
    >>> import walletsim as ws
    >>> sim = ws.Simulation.init(seed=ws.make_rng(42))
    """
    return np.random.default_rng(seed)


# ============================================================================
# Core simulation (imports after dependencies)
# ============================================================================
from . import stats  # noqa: E402
from .config import Settings  # noqa: E402
from .population import Agent, Population, create_population  # noqa: E402
from .results import SimulationResults  # noqa: E402
from .simulation import RunState, Simulation, SimulationSnapshot  # noqa: E402
from .systems import RoundOutcome, reconcile_debt_toggle, run_round  # noqa: E402

__all__ = [
    "Simulation",
    "SimulationSnapshot",
    "SimulationResults",
    "RunState",
    "__version__",
    # State
    "Agent",
    "Population",
    "Settings",
    "create_population",
    # Systems
    "RoundOutcome",
    "run_round",
    "reconcile_debt_toggle",
    # Utilities
    "Rng",
    "make_rng",
    "stats",
    "logging",
]
