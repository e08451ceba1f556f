"""Command‑line runner for walletsim."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Sequence

from walletsim.simulation import Simulation


def _cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Run a headless random-exchange wealth simulation."
    )
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--agents", type=int, default=None, help="Number of agents")
    p.add_argument(
        "--initial-balance", type=int, default=None, help="Starting balance"
    )
    p.add_argument(
        "--tx-per-round", type=int, default=None, help="Exchange attempts per round"
    )
    p.add_argument("--amount", type=int, default=None, help="Units per transfer")
    p.add_argument(
        "--allow-debt", action="store_true", default=None, help="Allow debt"
    )
    p.add_argument("--rounds", type=int, default=1000, help="Rounds to run")
    p.add_argument("--seed", type=int, default=42, help="RNG seed")
    p.add_argument("--top", type=int, default=3, help="Leaderboard size")
    return p.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    mapping = {
        "agent_count": args.agents,
        "initial_balance": args.initial_balance,
        "transactions_per_round": args.tx_per_round,
        "transaction_amount": args.amount,
        "allow_debt": args.allow_debt,
        "seed": args.seed,
    }
    return {k: v for k, v in mapping.items() if v is not None}


def main(argv: Sequence[str] | None = None) -> None:
    args = _cli(argv)

    log = logging.getLogger(__name__)

    sim = Simulation.init(config=args.config, **_overrides(args))
    sim.run(args.rounds)

    st = sim.stats(top_n=args.top)
    label = "in debt" if sim.settings.allow_debt else "bankrupt"
    log.info(
        f"Round {sim.round}{' (halted)' if sim.halted else ''}: "
        f"gini={st.gini:.3f}, {label}={st.insolvent}, "
        f"richest={st.max_balance}, poorest={st.min_balance}, "
        f"transfers={st.total_transactions}"
    )
    for rank, agent in enumerate(st.leaderboard, start=1):
        log.info(f"  #{rank} agent {agent.id}: {agent.balance}")
    for bucket in st.histogram:
        log.info(f"  {bucket.label:>12} | {'#' * bucket.count}")


if __name__ == "__main__":
    main()
