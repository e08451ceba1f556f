# src/walletsim/population.py
"""
Agent store: the population of wallets and its immutable record view.

State is kept struct-of-arrays style: one NumPy array per agent field, array
index ``i`` holding agent ``id = i + 1``. The exchange engine works on a
*copy* of the arrays and hands back a new :class:`Population`, so a
population object seen by a reader is never changed under its feet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from walletsim.typing import Bool1D, Int1D

__all__ = ["Agent", "Population", "create_population"]


@dataclass(slots=True, frozen=True)
class Agent:
    """
    Read-only record of one agent, as handed to renderers and leaderboards.

    Parameters
    ----------
    id : int
        1-based identifier, stable for the lifetime of the population.
    balance : int
        Current wealth. Negative only when debt is allowed.
    active : bool
        False once the agent went broke in a no-debt economy.
    peak_balance : int
        Highest balance ever held.
    transaction_count : int
        Number of successful transfers the agent took part in.
    """

    id: int
    balance: int
    active: bool
    peak_balance: int
    transaction_count: int


@dataclass(slots=True)
class Population:
    """
    Pure *state* container for all agents of one run.

    Attributes
    ----------
    id : Int1D
        Agent identifiers (``1..n``).
    balance : Int1D
        Current balances.
    active : Bool1D
        Activity flags.
    peak_balance : Int1D
        Running maxima of ``balance``.
    transaction_count : Int1D
        Successful transfers per agent.
    """

    id: Int1D
    balance: Int1D
    active: Bool1D
    peak_balance: Int1D
    transaction_count: Int1D

    def __len__(self) -> int:
        return int(self.balance.size)

    @property
    def size(self) -> int:
        """Number of agents."""
        return int(self.balance.size)

    def copy(self) -> Population:
        """Deep copy of every column."""
        return Population(
            id=self.id.copy(),
            balance=self.balance.copy(),
            active=self.active.copy(),
            peak_balance=self.peak_balance.copy(),
            transaction_count=self.transaction_count.copy(),
        )

    def agent(self, idx: int) -> Agent:
        """Record view of the agent stored at array index *idx*."""
        return Agent(
            id=int(self.id[idx]),
            balance=int(self.balance[idx]),
            active=bool(self.active[idx]),
            peak_balance=int(self.peak_balance[idx]),
            transaction_count=int(self.transaction_count[idx]),
        )

    def agents(self) -> tuple[Agent, ...]:
        """All agents as records, in population order."""
        return tuple(self)

    def __iter__(self) -> Iterator[Agent]:
        for idx in range(self.size):
            yield self.agent(idx)

    def total_wealth(self) -> int:
        """Sum of all balances (debt counted as negative)."""
        return int(self.balance.sum())


def create_population(count: int, initial_balance: int) -> Population:
    """
    Build a fresh population of *count* identical agents.

    Every agent starts with ``balance = peak_balance = initial_balance``,
    ``active = True`` and no transactions. Ids run from 1 to *count*.

    Parameters
    ----------
    count : int
        Number of agents (``0`` yields an empty population).
    initial_balance : int
        Starting balance of every agent.

    Returns
    -------
    Population
        The new population.

    Examples
    --------
    >>> pop = create_population(3, 10)
    >>> pop.id.tolist(), pop.balance.tolist()
    ([1, 2, 3], [10, 10, 10])
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    balance = np.full(count, fill_value=initial_balance, dtype=np.int64)
    return Population(
        id=np.arange(1, count + 1, dtype=np.int64),
        balance=balance,
        active=np.ones(count, dtype=np.bool_),
        peak_balance=balance.copy(),
        transaction_count=np.zeros(count, dtype=np.int64),
    )
