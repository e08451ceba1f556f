"""Centralized configuration validation for walletsim."""

from __future__ import annotations

import warnings
from typing import Any, Collection

from numpy.random import Generator

from walletsim.config.schema import Settings


class SettingsValidator:
    """
    Centralized validation for simulation configuration.

    Validation happens at Simulation.init() and again on every
    Simulation.update_settings() call, always on the *merged* configuration,
    so a rejected update never leaves the controller half-configured:

    - Type correctness
    - Valid parameter ranges
    - Relationship constraints between parameters (warnings only)
    - Clear error messages with actionable feedback
    """

    # Valid log levels for logging configuration
    VALID_LOG_LEVELS = {"DEEP_DEBUG", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    # Keys that are not Settings fields but still belong to a configuration
    CONTROLLER_KEYS = ("tick_interval_ms", "seed", "logging")

    # Timer bounds, in milliseconds
    MIN_TICK_INTERVAL_MS = 10
    MAX_TICK_INTERVAL_MS = 1000

    @staticmethod
    def validate_config(
        cfg: dict[str, Any], changed: Collection[str] | None = None
    ) -> None:
        """
        Validate all configuration parameters.

        Parameters
        ----------
        cfg : dict
            Configuration dictionary to validate.
        changed : collection of str, optional
            Keys that were just updated in *cfg*. Relationship warnings only
            fire when one of their keys is among them. None means all keys.

        Raises
        ------
        ValueError
            If any validation check fails.
        """
        SettingsValidator._validate_keys(cfg)
        SettingsValidator._validate_types(cfg)
        SettingsValidator._validate_ranges(cfg)
        SettingsValidator._validate_relationships(cfg, changed)

        if "logging" in cfg:
            SettingsValidator._validate_logging(cfg["logging"])

    @staticmethod
    def _validate_keys(cfg: dict[str, Any]) -> None:
        """Reject parameter names that no component understands."""
        known = set(Settings.field_names()) | set(SettingsValidator.CONTROLLER_KEYS)
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ValueError(
                f"Unknown config parameter(s) {unknown}. "
                f"Valid parameters: {sorted(known)}"
            )

    @staticmethod
    def _validate_types(cfg: dict[str, Any]) -> None:
        """
        Ensure correct types for configuration parameters.

        Raises
        ------
        ValueError
            If any parameter has incorrect type.
        """
        int_params = [
            "agent_count",
            "initial_balance",
            "transactions_per_round",
            "transaction_amount",
            "tick_interval_ms",
        ]

        # bool is an int subclass, so it is rejected explicitly
        for key in int_params:
            if key not in cfg:
                continue
            val = cfg[key]
            if isinstance(val, bool) or not isinstance(val, int):
                raise ValueError(
                    f"Config parameter '{key}' must be int, got {type(val).__name__}"
                )

        if "allow_debt" in cfg and not isinstance(cfg["allow_debt"], bool):
            raise ValueError(
                f"Config parameter 'allow_debt' must be bool, "
                f"got {type(cfg['allow_debt']).__name__}"
            )

        if "seed" in cfg:
            val = cfg["seed"]
            if val is not None and (
                isinstance(val, bool) or not isinstance(val, (int, Generator))
            ):
                raise ValueError(
                    f"Config parameter 'seed' must be int, Generator or None, "
                    f"got {type(val).__name__}"
                )

    @staticmethod
    def _validate_ranges(cfg: dict[str, Any]) -> None:
        """
        Ensure parameters are in valid ranges.

        Raises
        ------
        ValueError
            If any parameter is out of valid range.
        """
        # (min_val, max_val); None means unbounded
        constraints = {
            "agent_count": (1, None),
            "transactions_per_round": (1, None),
            "transaction_amount": (1, None),
            "tick_interval_ms": (
                SettingsValidator.MIN_TICK_INTERVAL_MS,
                SettingsValidator.MAX_TICK_INTERVAL_MS,
            ),
            "seed": (0, None),
        }

        for key, (min_val, max_val) in constraints.items():
            if key not in cfg:
                continue

            val = cfg[key]

            if val is None or isinstance(val, Generator):
                continue

            if min_val is not None and val < min_val:
                raise ValueError(
                    f"Config parameter '{key}' must be >= {min_val}, got {val}"
                )

            if max_val is not None and val > max_val:
                raise ValueError(
                    f"Config parameter '{key}' must be <= {max_val}, got {val}"
                )

    @staticmethod
    def _validate_relationships(
        cfg: dict[str, Any], changed: Collection[str] | None = None
    ) -> None:
        """Warn about legal configurations that make for a dull economy."""

        def touched(*keys: str) -> bool:
            return changed is None or any(k in changed for k in keys)

        agent_count = cfg.get("agent_count", 2)
        if agent_count < 2 and touched("agent_count"):
            warnings.warn(
                f"agent_count ({agent_count}) < 2. "
                "No exchange can ever take place; every run halts immediately.",
                UserWarning,
                stacklevel=3,
            )

        allow_debt = cfg.get("allow_debt", False)
        initial_balance = cfg.get("initial_balance")
        amount = cfg.get("transaction_amount")

        if (
            not allow_debt
            and initial_balance is not None
            and amount is not None
            and 0 < initial_balance < amount
            and touched("allow_debt", "initial_balance", "transaction_amount")
        ):
            warnings.warn(
                f"transaction_amount ({amount}) > initial_balance "
                f"({initial_balance}) without debt. Nobody can ever pay, "
                "so every attempt will be void.",
                UserWarning,
                stacklevel=3,
            )

    @staticmethod
    def _validate_logging(log_config: dict[str, Any]) -> None:
        """
        Validate logging configuration.

        Parameters
        ----------
        log_config : dict
            Logging configuration dictionary with keys:
            - default_level: str (e.g., 'INFO', 'DEBUG')
            - modules: dict[str, str] (per-module overrides)

        Raises
        ------
        ValueError
            If logging configuration is invalid.
        """
        if not isinstance(log_config, dict):
            raise ValueError(
                f"Logging config must be dict, got {type(log_config).__name__}"
            )

        if "default_level" in log_config:
            level = log_config["default_level"]
            if not isinstance(level, str):
                raise ValueError(
                    f"Logging default_level must be str, got {type(level).__name__}"
                )

            if level.upper() not in SettingsValidator.VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}'. "
                    f"Must be one of {SettingsValidator.VALID_LOG_LEVELS}"
                )

        if "modules" in log_config:
            modules = log_config["modules"]
            if not isinstance(modules, dict):
                raise ValueError(
                    f"Logging modules must be dict, got {type(modules).__name__}"
                )

            for module_name, level in modules.items():
                if not isinstance(level, str):
                    raise ValueError(
                        f"Log level for module '{module_name}' must be str, "
                        f"got {type(level).__name__}"
                    )

                if level.upper() not in SettingsValidator.VALID_LOG_LEVELS:
                    raise ValueError(
                        f"Invalid log level '{level}' for module '{module_name}'. "
                        f"Must be one of {SettingsValidator.VALID_LOG_LEVELS}"
                    )
