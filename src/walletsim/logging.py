"""
Custom logging configuration for walletsim.

Extends Python's standard logging with a custom DEEP_DEBUG level (5)
for per-attempt tracing of the exchange loop. Provides WalletLogger class
with per-module log level configuration support.

Log Levels
----------
- CRITICAL (50): Critical errors
- ERROR (40): Errors
- WARNING (30): Warnings
- INFO (20): Informational messages (default)
- DEBUG (10): Per-round debug messages
- DEEP_DEBUG (5): Per-attempt messages (very verbose)

Examples
--------
>>> from walletsim import logging
>>> logger = logging.getLogger("walletsim.systems.exchange")
>>> logger.info("Round executing")
>>> logger.deep("Attempt 17: 3 -> 42")

Configure per-module log levels:

>>> import walletsim as ws
>>> log_config = {"default_level": "INFO", "modules": {"exchange": "DEBUG"}}
>>> sim = ws.Simulation.init(logging=log_config)

See Also
--------
walletsim.config.SettingsValidator : Validates the logging configuration
"""

import logging
from typing import Any

(CRITICAL, ERROR, WARNING, INFO, DEBUG) = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)
DEEP_DEBUG = 5
logging.addLevelName(DEEP_DEBUG, "DEEP")

LEVELS: dict[str, int] = {
    "DEEP_DEBUG": DEEP_DEBUG,
    "DEBUG": DEBUG,
    "INFO": INFO,
    "WARNING": WARNING,
    "ERROR": ERROR,
    "CRITICAL": CRITICAL,
}


class WalletLogger(logging.Logger):
    """
    Custom logger with DEEP_DEBUG level support.

    Examples
    --------
    >>> logger = WalletLogger("test")
    >>> logger.setLevel(5)  # DEEP_DEBUG
    >>> logger.deep("Very verbose message")
    """

    def deep(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log message at DEEP_DEBUG level (5)."""
        if self.isEnabledFor(DEEP_DEBUG):
            self._log(DEEP_DEBUG, msg, args, **kwargs)


# Make the logging module hand out our subclass from now on
logging.setLoggerClass(WalletLogger)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)


def getLogger(name: str | None = None) -> WalletLogger:
    """
    Get a WalletLogger instance.

    Convenience wrapper around logging.getLogger() that returns
    a WalletLogger instance with DEEP_DEBUG support.

    Parameters
    ----------
    name : str, optional
        Logger name. If None, returns root logger.

    Returns
    -------
    WalletLogger
        Logger instance with deep() method.
    """
    return logging.getLogger(name)  # type: ignore[return-value]


def configure(log_config: dict[str, Any]) -> None:
    """
    Apply a ``{"default_level": ..., "modules": {...}}`` mapping.

    ``default_level`` is set on the ``walletsim`` logger. Each entry of
    ``modules`` sets the level of ``walletsim.systems.<name>`` when that
    is an engine system, otherwise of ``walletsim.<name>``.
    """
    default_level = log_config.get("default_level", "INFO").upper()
    logging.getLogger("walletsim").setLevel(LEVELS[default_level])

    for module, level in log_config.get("modules", {}).items():
        if module in _SYSTEM_MODULES:
            logger_name = f"walletsim.systems.{module}"
        else:
            logger_name = f"walletsim.{module}"
        logging.getLogger(logger_name).setLevel(LEVELS[level.upper()])


_SYSTEM_MODULES = frozenset({"exchange", "solvency"})
