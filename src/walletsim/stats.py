# src/walletsim/stats.py
"""
Statistics aggregator: read-only views derived from a population.

Every function here is pure. Calling them never touches simulation state,
so renderers may call them as often as they like; ``Simulation.stats()`` is
the usual entry point.

Functions
---------
gini            inequality of the zero-clamped balance distribution
insolvent_count agents in debt (debt mode) or retired (no-debt mode)
histogram       evenly spaced buckets over the eligible balances
top_agents      leaderboard, richest first
compute_stats   everything above bundled into a PopulationStats
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from walletsim.helpers import bucket_width, select_top_k_indices_stable
from walletsim.population import Agent, Population
from walletsim.typing import Int1D

__all__ = [
    "Bucket",
    "PopulationStats",
    "gini",
    "insolvent_count",
    "active_count",
    "max_balance",
    "min_balance",
    "histogram",
    "top_agents",
    "compute_stats",
]


@dataclass(slots=True, frozen=True)
class Bucket:
    """One histogram bar: balances in ``[lower, lower + width)``."""

    lower: int
    width: int
    count: int

    @property
    def upper(self) -> int:
        """Largest integer balance the bucket covers (inclusive)."""
        return self.lower + self.width - 1

    @property
    def label(self) -> str:
        return f"{self.lower}-{self.upper}"


@dataclass(slots=True, frozen=True)
class PopulationStats:
    """
    Derived view of one population snapshot.

    Attributes
    ----------
    gini : float
        Gini coefficient in ``[0, 1]``.
    insolvent : int
        Agents in debt (debt mode) or retired (no-debt mode).
    active : int
        Agents whose ``active`` flag is set.
    max_balance : int
        Richest balance, floored at 0.
    min_balance : int
        Poorest balance (0 for an empty population).
    total_wealth : int
        Sum of all balances.
    total_transactions : int
        Successful transfers so far (each one involves two agents).
    histogram : tuple[Bucket, ...]
        Wealth distribution of the eligible agents.
    leaderboard : tuple[Agent, ...]
        Richest agents, richest first.
    """

    gini: float
    insolvent: int
    active: int
    max_balance: int
    min_balance: int
    total_wealth: int
    total_transactions: int
    histogram: tuple[Bucket, ...]
    leaderboard: tuple[Agent, ...]


def gini(balances: Int1D) -> float:
    """
    Gini coefficient of *balances* with debt clamped to zero.

    Balances are clamped with ``max(0, b)``, sorted ascending and ranked
    ``1..n``; then ``G = 2 * sum(rank * b) / (n * sum(b)) - (n + 1) / n``.
    An empty population or a zero total yields ``0.0``.

    Examples
    --------
    >>> gini(np.array([5, 5, 5, 5]))
    0.0
    >>> round(gini(np.array([0, 0, 0, 10])), 2)
    0.75
    """
    clamped = np.sort(np.maximum(np.asarray(balances, dtype=np.int64), 0))
    n = clamped.size
    total = int(clamped.sum())
    if n == 0 or total == 0:
        return 0.0
    ranks = np.arange(1, n + 1, dtype=np.int64)
    weighted = int((ranks * clamped).sum())
    return (2.0 * weighted) / (n * total) - (n + 1) / n


def insolvent_count(pop: Population, *, allow_debt: bool) -> int:
    """Agents with ``balance < 0`` under debt, inactive agents otherwise."""
    if allow_debt:
        return int((pop.balance < 0).sum())
    return int((~pop.active).sum())


def active_count(pop: Population) -> int:
    return int(pop.active.sum())


def max_balance(pop: Population) -> int:
    """Richest balance, never below 0."""
    if pop.size == 0:
        return 0
    return max(int(pop.balance.max()), 0)


def min_balance(pop: Population) -> int:
    if pop.size == 0:
        return 0
    return int(pop.balance.min())


def _histogram_values(pop: Population, allow_debt: bool) -> Int1D:
    if allow_debt:
        return pop.balance
    return pop.balance[pop.active]


def histogram(pop: Population, *, allow_debt: bool) -> tuple[Bucket, ...]:
    """
    Bucket the eligible balances (active agents, or everyone under debt).

    The width comes from :func:`walletsim.helpers.bucket_width`. The first
    bucket starts at the largest multiple of the width ``<=`` the minimum
    balance, and buckets follow each other until one covers the maximum.
    Empty buckets in between are kept so the spacing stays uniform, and
    anything at or above the last lower bound lands in the last bucket.

    Returns an empty tuple when there is nothing to count.
    """
    values = _histogram_values(pop, allow_debt)
    if values.size == 0:
        return ()

    lo = int(values.min())
    hi = int(values.max())
    width = bucket_width(lo, hi)
    start = (lo // width) * width
    n_buckets = (hi - start) // width + 1

    slots = (values.astype(np.int64) - start) // width
    np.minimum(slots, n_buckets - 1, out=slots)
    counts = np.bincount(slots, minlength=n_buckets)

    return tuple(
        Bucket(lower=start + i * width, width=width, count=int(counts[i]))
        for i in range(n_buckets)
    )


def top_agents(pop: Population, n: int = 3) -> tuple[Agent, ...]:
    """The *n* richest agents, richest first; ties keep population order."""
    return tuple(pop.agent(int(i)) for i in select_top_k_indices_stable(pop.balance, n))


def compute_stats(
    pop: Population, *, allow_debt: bool, top_n: int = 3
) -> PopulationStats:
    """Bundle every statistic for one snapshot."""
    return PopulationStats(
        gini=gini(pop.balance),
        insolvent=insolvent_count(pop, allow_debt=allow_debt),
        active=active_count(pop),
        max_balance=max_balance(pop),
        min_balance=min_balance(pop),
        total_wealth=pop.total_wealth(),
        total_transactions=int(pop.transaction_count.sum()) // 2,
        histogram=histogram(pop, allow_debt=allow_debt),
        leaderboard=top_agents(pop, top_n),
    )
