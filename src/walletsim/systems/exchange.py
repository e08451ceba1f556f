# src/walletsim/systems/exchange.py
"""
Transaction engine: one round of random pairwise exchanges.

A round is a fixed budget of *attempts*. Each attempt meets two agents
drawn from the whole population, flips a fair coin for the direction of
payment and moves ``transaction_amount`` units if the chosen payer can
afford it. A void attempt still consumes budget; it is never retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from walletsim import logging
from walletsim.config import Settings
from walletsim.population import Population
from walletsim.systems.solvency import eligible_indices

log = logging.getLogger(__name__)

__all__ = ["RoundOutcome", "run_round"]


@dataclass(slots=True, frozen=True)
class RoundOutcome:
    """
    What happened during one call to :func:`run_round`.

    Attributes
    ----------
    halted : bool
        True when fewer than two agents were eligible: no attempt was made
        and the run should stop.
    attempts : int
        Attempts executed (``transactions_per_round``, or 0 when halted).
    transfers : int
        Attempts that moved money.
    """

    halted: bool
    attempts: int
    transfers: int

    @property
    def void_attempts(self) -> int:
        """Attempts that left the population unchanged."""
        return self.attempts - self.transfers


def run_round(
    pop: Population,
    settings: Settings,
    rng: Any,
) -> tuple[Population, RoundOutcome]:
    """
    Execute exactly ``settings.transactions_per_round`` exchange attempts.

    Parameters
    ----------
    pop : Population
        Current population. Not modified.
    settings : Settings
        Exchange rules for this round.
    rng : numpy.random.Generator
        Source of the pair draws (``integers``) and coin flips (``random``).

    Returns
    -------
    (Population, RoundOutcome)
        The population after the round (always a new object) and a summary.

    Notes
    -----
    Per attempt:

    1. two indices are drawn uniformly from the full population;
    2. the same index twice is void;
    3. without debt, meeting an inactive agent is void;
    4. ``payable(X) = allow_debt or X.balance >= amount``; if neither side
       is payable the attempt is void;
    5. a coin picks the payer (``u > 0.5``: first pays second);
    6. if that payer cannot pay the attempt is void - the other side does
       *not* pay instead;
    7. after a transfer both peaks are raised and, without debt, any side
       left with ``balance <= 0`` is retired.
    """
    allow_debt = settings.allow_debt
    amount = settings.transaction_amount
    n = pop.size

    if eligible_indices(pop, allow_debt=allow_debt).size < 2:
        log.info("Fewer than 2 eligible agents left. Halting.")
        return pop.copy(), RoundOutcome(halted=True, attempts=0, transfers=0)

    out = pop.copy()
    balance = out.balance
    active = out.active
    peak = out.peak_balance
    n_tx = out.transaction_count

    n_attempts = settings.transactions_per_round
    pairs = rng.integers(0, n, size=(n_attempts, 2))
    flips = rng.random(n_attempts)

    deep = log.isEnabledFor(logging.DEEP_DEBUG)
    transfers = 0

    for t in range(n_attempts):
        a = int(pairs[t, 0])
        b = int(pairs[t, 1])

        if a == b:
            continue

        if not allow_debt and not (active[a] and active[b]):
            continue

        a_can_pay = allow_debt or balance[a] >= amount
        b_can_pay = allow_debt or balance[b] >= amount
        if not (a_can_pay or b_can_pay):
            continue

        if flips[t] > 0.5:
            payer, payee, can_pay = a, b, a_can_pay
        else:
            payer, payee, can_pay = b, a, b_can_pay

        if not can_pay:
            if deep:
                log.deep(f"  attempt {t}: agent idx {payer} cannot pay, void")
            continue

        balance[payer] -= amount
        balance[payee] += amount
        n_tx[payer] += 1
        n_tx[payee] += 1
        transfers += 1

        for idx in (payer, payee):
            if balance[idx] > peak[idx]:
                peak[idx] = balance[idx]
            if not allow_debt and balance[idx] <= 0:
                active[idx] = False

        if deep:
            log.deep(
                f"  attempt {t}: idx {payer} -> idx {payee} ({amount}), "
                f"balances now {int(balance[payer])} / {int(balance[payee])}"
            )

    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            f"  Round: {transfers}/{n_attempts} transfers, "
            f"{n_attempts - transfers} void"
        )

    return out, RoundOutcome(halted=False, attempts=n_attempts, transfers=transfers)
