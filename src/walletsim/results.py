"""
Simulation results container for walletsim.

This module provides the SimulationResults class returned by
``Simulation.run(..., collect=True)``: per-round time series of the
statistics aggregator plus the final balances.

Note: pandas is an optional dependency. It is only required for
``to_dataframe``. Install with: pip install walletsim[pandas]
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from walletsim import stats

if TYPE_CHECKING:  # pragma: no cover
    from pandas import DataFrame

    from walletsim.simulation import Simulation
    from walletsim.systems.exchange import RoundOutcome


def _import_pandas() -> Any:
    """Lazily import pandas with helpful error message if not installed."""
    try:
        import pandas as pd

        return pd
    except ImportError:  # pragma: no cover
        raise ImportError(
            "pandas is required for DataFrame export. "
            "Install it with: pip install pandas"
        ) from None


class _StatsCollector:
    """
    Internal helper that records one row of statistics per executed round.

    Used by Simulation.run() when ``collect=True``.
    """

    METRICS = (
        "round",
        "gini",
        "insolvent",
        "active",
        "max_balance",
        "min_balance",
        "total_wealth",
        "transfers",
    )

    def __init__(self) -> None:
        self.series: dict[str, list[float]] = defaultdict(list)

    def capture(self, sim: Simulation, outcome: RoundOutcome) -> None:
        """Append the statistics of *sim* right after a round."""
        pop = sim.population
        allow_debt = sim.settings.allow_debt
        row = {
            "round": sim.round,
            "gini": stats.gini(pop.balance),
            "insolvent": stats.insolvent_count(pop, allow_debt=allow_debt),
            "active": stats.active_count(pop),
            "max_balance": stats.max_balance(pop),
            "min_balance": stats.min_balance(pop),
            "total_wealth": pop.total_wealth(),
            "transfers": outcome.transfers,
        }
        for key in self.METRICS:
            self.series[key].append(row[key])

    def finalize(self, sim: Simulation) -> SimulationResults:
        data = {
            key: np.asarray(
                self.series.get(key, []),
                dtype=np.float64 if key == "gini" else np.int64,
            )
            for key in self.METRICS
        }
        return SimulationResults(
            series=data,
            final_balances=sim.population.balance.copy(),
            metadata={
                "n_rounds": len(data["round"]),
                "halted": sim.halted,
                "settings": sim.settings,
                "seed": sim.seed,
            },
        )


@dataclass
class SimulationResults:
    """
    Per-round statistics of a ``Simulation.run`` call.

    Attributes
    ----------
    series : dict[str, NDArray]
        One array per metric, aligned by round.
    final_balances : NDArray
        Balances after the last executed round.
    metadata : dict
        Run information (number of rounds, halted flag, settings, seed).

    Examples
    --------
    >>> sim = Simulation.init(seed=42)
    >>> results = sim.run(200, collect=True)
    >>> results.get_array("gini")[-1]  # doctest: +SKIP
    0.41
    >>> df = results.to_dataframe()  # requires pandas
    """

    series: dict[str, NDArray[Any]] = field(default_factory=dict)
    final_balances: NDArray[np.int64] = field(
        default_factory=lambda: np.empty(0, np.int64)
    )
    metadata: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return int(self.metadata.get("n_rounds", 0))

    def get_array(self, name: str) -> NDArray[Any]:
        """
        Time series of one metric.

        Raises
        ------
        KeyError
            If *name* is not a collected metric.
        """
        if name not in self.series:
            raise KeyError(
                f"Metric '{name}' not found. Available: {sorted(self.series)}"
            )
        return self.series[name]

    def to_dataframe(self) -> DataFrame:
        """All time series as a DataFrame indexed by round."""
        pd = _import_pandas()
        df = pd.DataFrame({k: v for k, v in self.series.items() if k != "round"})
        df.index = pd.Index(self.series.get("round", []), name="round")
        return df

    def summary(self) -> dict[str, Any]:
        """Metrics of the last collected round (empty if none ran)."""
        if len(self) == 0:
            return {}
        return {key: arr[-1].item() for key, arr in self.series.items()}

    def __repr__(self) -> str:
        return (
            f"SimulationResults(n_rounds={len(self)}, "
            f"halted={self.metadata.get('halted', False)}, "
            f"metrics={list(self.series)})"
        )
