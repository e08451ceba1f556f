# src/walletsim/simulation.py
from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

# noinspection PyPackageRequirements
import yaml

# noinspection PyPackageRequirements
from numpy.random import Generator, default_rng

from walletsim import logging
from walletsim.config import Settings, SettingsValidator
from walletsim.population import Agent, Population, create_population
from walletsim.results import SimulationResults, _StatsCollector
from walletsim.stats import PopulationStats, compute_stats
from walletsim.systems.exchange import RoundOutcome, run_round
from walletsim.systems.solvency import reconcile_debt_toggle

__all__ = ["RunState", "Simulation", "SimulationSnapshot"]

log = logging.getLogger(__name__)


# helpers
# ---------------------------------------------------------------------------
def _read_yaml(obj: str | Path | Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a plain dict – {} if *obj* is None."""
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    p = Path(obj)
    with p.open("rt", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"config root must be mapping, got {type(data)!r}")
    return dict(data)


def _package_defaults() -> Dict[str, Any]:
    """Load walletsim/defaults.yml"""
    txt = resources.files("walletsim").joinpath("defaults.yml").read_text()
    return yaml.safe_load(txt) or {}


class RunState(Enum):
    """Play state of the controller."""

    RUNNING = "running"
    PAUSED = "paused"


@dataclass(slots=True, frozen=True)
class SimulationSnapshot:
    """Read-only picture of the controller between two ticks."""

    agents: tuple[Agent, ...]
    round: int
    settings: Settings
    state: RunState
    tick_interval_ms: int


# Simulation
# ---------------------------------------------------------------------
@dataclass(slots=True)
class Simulation:
    """
    Controller owning the settings, the population and the round counter.

    All mutation goes through the control methods (``start``, ``pause``,
    ``reset``, ``update_settings``, ``set_tick_interval_ms``) and the
    round loop (``step``, ``run``, ``play``). Readers use ``snapshot()`` and
    ``stats()``.

    One tick → one call to ``step`` → one round of the exchange engine.
    """

    # core state
    rng: Generator
    population: Population

    # configuration
    settings: Settings
    tick_interval_ms: int
    seed: int | None

    # run state
    round: int
    state: RunState
    halted: bool = False

    # Constructor
    # ---------------------------------------------------------------------
    @classmethod
    def init(
        cls,
        config: str | Path | Mapping[str, Any] | None = None,
        **overrides: Any,  # anything here wins last
    ) -> "Simulation":
        """
        Build a Simulation with a freshly created population.

        Order of precedence (later overrides earlier):

            1. package defaults  (walletsim/defaults.yml)
            2. *config*  (Path / str / Mapping / None)
            3. explicit keyword arguments (**overrides)

        Raises
        ------
        ValueError
            If the merged configuration is invalid.
        """
        # 1 + 2 + 3 → one merged dict
        cfg_dict: Dict[str, Any] = _package_defaults()
        cfg_dict.update(_read_yaml(config))
        cfg_dict.update(overrides)

        SettingsValidator.validate_config(cfg_dict)

        # Random-seed handling
        seed_val = cfg_dict.pop("seed", None)
        rng: Generator = (
            seed_val if isinstance(seed_val, Generator) else default_rng(seed_val)
        )

        if "logging" in cfg_dict:
            logging.configure(cfg_dict.pop("logging"))

        settings = Settings(**{k: cfg_dict[k] for k in Settings.field_names()})

        log.info(
            f"Simulation initialised: {settings.agent_count} agents x "
            f"{settings.initial_balance}, {settings.transactions_per_round} "
            f"tx/round, amount={settings.transaction_amount}, "
            f"debt={'on' if settings.allow_debt else 'off'}"
        )

        return cls(
            rng=rng,
            population=create_population(
                settings.agent_count, settings.initial_balance
            ),
            settings=settings,
            tick_interval_ms=int(cfg_dict["tick_interval_ms"]),
            seed=seed_val if isinstance(seed_val, int) else None,
            round=0,
            state=RunState.PAUSED,
        )

    # control operations
    # ---------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    def start(self) -> None:
        """Resume scheduling ticks."""
        if not self.is_running:
            log.info(f"Run started at round {self.round}.")
        self.state = RunState.RUNNING

    def pause(self) -> None:
        """Stop scheduling ticks; state stays visible as it is."""
        if self.is_running:
            log.info(f"Run paused at round {self.round}.")
        self.state = RunState.PAUSED

    def reset(self) -> None:
        """
        Replace the population with a fresh one built from the current
        settings, clear the round counter and pause.
        """
        self.population = create_population(
            self.settings.agent_count, self.settings.initial_balance
        )
        self.round = 0
        self.halted = False
        self.state = RunState.PAUSED
        log.info(
            f"Population reset: {self.settings.agent_count} agents x "
            f"{self.settings.initial_balance}"
        )

    def update_settings(self, **changes: Any) -> Settings:
        """
        Merge *changes* into the current settings.

        Only the given fields change. ``agent_count`` and ``initial_balance``
        apply on the next ``reset()``. Flipping ``allow_debt`` reconciles
        every agent's ``active`` flag right away.

        Returns
        -------
        Settings
            The settings now in force.

        Raises
        ------
        ValueError
            If a name is not a setting or the merged settings are invalid.
            The previous settings stay in force.
        """
        unknown = sorted(set(changes) - set(Settings.field_names()))
        if unknown:
            raise ValueError(
                f"Unknown setting(s) {unknown}. "
                f"Valid settings: {list(Settings.field_names())}"
            )

        merged = asdict(self.settings)
        merged.update(changes)
        SettingsValidator.validate_config(merged, changed=changes)

        old = self.settings
        new = Settings(**merged)
        self.settings = new

        if new.allow_debt != old.allow_debt:
            self.population = reconcile_debt_toggle(
                self.population, allow_debt=new.allow_debt
            )

        if log.isEnabledFor(logging.DEBUG):
            diff = {k: v for k, v in changes.items() if getattr(old, k) != v}
            log.debug(f"  Settings updated: {diff}")

        return new

    def set_tick_interval_ms(self, interval_ms: int) -> None:
        """
        Set the delay between two ticks of ``play``.

        Raises
        ------
        ValueError
            If *interval_ms* is not an int in ``10..1000``.
        """
        SettingsValidator.validate_config({"tick_interval_ms": interval_ms})
        self.tick_interval_ms = interval_ms

    # round loop
    # ---------------------------------------------------------------------
    def step(self) -> RoundOutcome:
        """
        Execute one round (one tick).

        Every tick advances the round counter by exactly one. A round with
        fewer than two eligible agents makes no attempt; it still counts,
        and the run pauses with ``halted`` set.
        """
        self.population, outcome = run_round(self.population, self.settings, self.rng)
        self.round += 1

        if outcome.halted:
            self.halted = True
            log.info(f"SIMULATION HALTED at round {self.round}")
            self.pause()
            return outcome

        self.halted = False

        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                f"Round {self.round}: {outcome.transfers} transfers, "
                f"{outcome.void_attempts} void"
            )

        return outcome

    def run(
        self, n_rounds: int, collect: bool = False
    ) -> SimulationResults | None:
        """
        Advance the simulation *n_rounds* rounds, stopping early on halt.

        Parameters
        ----------
        n_rounds : int
            Maximum number of rounds to execute.
        collect : bool, default False
            When True, record per-round statistics and return them.

        Returns
        -------
        SimulationResults or None
        """
        collector = _StatsCollector() if collect else None

        for _ in range(int(n_rounds)):
            outcome = self.step()
            if collector is not None:
                collector.capture(self, outcome)
            if outcome.halted:
                break

        return collector.finalize(self) if collector is not None else None

    def play(
        self,
        max_rounds: int | None = None,
        *,
        sleep: Callable[[float], Any] = time.sleep,
        on_tick: Callable[[SimulationSnapshot], Any] | None = None,
    ) -> int:
        """
        Run the recurring timer: tick, wait ``tick_interval_ms``, repeat.

        Ticks never overlap - each one completes before the next is
        scheduled. The loop ends when the run is paused (by ``on_tick``,
        by a halt, or once *max_rounds* rounds were executed).

        Parameters
        ----------
        max_rounds : int, optional
            Pause after this many executed rounds.
        sleep : callable
            Waits the given number of seconds between ticks.
        on_tick : callable, optional
            Receives a snapshot after every tick.

        Returns
        -------
        int
            Number of ticks executed, a halting tick included. Always
            equal to how far ``round`` advanced.
        """
        self.start()
        executed = 0

        while self.is_running:
            if max_rounds is not None and executed >= max_rounds:
                self.pause()
                break

            self.step()
            executed += 1

            if on_tick is not None:
                on_tick(self.snapshot())

            if self.is_running:
                sleep(self.tick_interval_ms / 1000.0)

        return executed

    # read-only views
    # ---------------------------------------------------------------------
    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            agents=self.population.agents(),
            round=self.round,
            settings=self.settings,
            state=self.state,
            tick_interval_ms=self.tick_interval_ms,
        )

    def stats(self, top_n: int = 3) -> PopulationStats:
        """Derived statistics of the current population."""
        return compute_stats(
            self.population, allow_debt=self.settings.allow_debt, top_n=top_n
        )
