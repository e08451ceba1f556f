"""
Settings dataclass for simulation parameters.

This module defines the Settings dataclass, which groups the exchange rules
and population parameters in one immutable object. Settings instances are
created by Simulation.init() after merging defaults, user config, and kwargs,
and are *replaced* (never mutated) by Simulation.update_settings().

Design Notes
------------
- Immutable (frozen=True): a round always sees one consistent configuration
- Memory-efficient (slots=True)
- Plain data container - validation happens in SettingsValidator

See Also
--------
SettingsValidator : Centralized validation for configuration parameters
walletsim.simulation.Simulation.update_settings : Partial updates
"""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(slots=True, frozen=True)
class Settings:
    """
    Immutable configuration of one wealth-exchange economy.

    Parameters
    ----------
    agent_count : int
        Population size (positive). Takes effect on the next reset.
    initial_balance : int
        Starting balance of every agent. Takes effect on the next reset.
    transactions_per_round : int
        Number of exchange attempts executed per round (positive).
    allow_debt : bool
        Whether balances may go negative. When False, agents whose balance
        reaches zero drop out of the economy for good.
    transaction_amount : int
        Units moved by one successful transfer (positive).

    Examples
    --------
    >>> from walletsim.config import Settings
    >>> cfg = Settings(
    ...     agent_count=100,
    ...     initial_balance=50,
    ...     transactions_per_round=50,
    ...     allow_debt=False,
    ...     transaction_amount=1,
    ... )
    >>> cfg.agent_count
    100

    Settings is immutable:

    >>> cfg.allow_debt = True  # doctest: +SKIP
    FrozenInstanceError: cannot assign to field 'allow_debt'
    """

    # Population parameters (applied on reset)
    agent_count: int
    initial_balance: int

    # Exchange rules (applied on the next round)
    transactions_per_round: int
    allow_debt: bool
    transaction_amount: int

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of all settings fields, in declaration order."""
        return tuple(f.name for f in fields(cls))
