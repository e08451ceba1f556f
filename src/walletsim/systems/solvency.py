# src/walletsim/systems/solvency.py
"""
Solvency rules shared by the exchange engine and the controller.

* ``eligible_indices``     who may still trade this round
* ``reconcile_debt_toggle`` one-shot pass when ``allow_debt`` flips
"""

from __future__ import annotations

import numpy as np

from walletsim.logging import getLogger
from walletsim.population import Population
from walletsim.typing import Idx1D

log = getLogger(__name__)


def eligible_indices(pop: Population, *, allow_debt: bool) -> Idx1D:
    """
    Indices of agents that may still take part in an exchange.

    With debt every agent is eligible; without it only active agents that
    still hold a positive balance are.
    """
    if allow_debt:
        return np.arange(pop.size, dtype=np.intp)
    return np.flatnonzero(pop.active & (pop.balance > 0))


def reconcile_debt_toggle(pop: Population, *, allow_debt: bool) -> Population:
    """
    Re-derive every ``active`` flag after the debt rule changed.

    Turning debt **on** revives everybody (balances untouched). Turning it
    **off** retires every agent whose balance is ``<= 0``; the others keep
    their current flag.

    Returns a new population; *pop* is left as it was.
    """
    out = pop.copy()

    if allow_debt:
        revived = int((~out.active).sum())
        out.active[:] = True
        log.info(f"Debt allowed: {revived} agent(s) revived.")
        return out

    broke = out.balance <= 0
    newly_out = int((broke & out.active).sum())
    out.active[broke] = False
    log.info(f"Debt disallowed: {newly_out} agent(s) with balance <= 0 retired.")
    return out
