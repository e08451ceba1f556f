"""Tests for the walletsim logging helpers."""

import logging as std_logging

import pytest

from walletsim import logging
from walletsim.simulation import Simulation


@pytest.fixture
def restore_module_levels():
    names = [
        "walletsim.systems.exchange",
        "walletsim.systems.solvency",
        "walletsim.simulation",
    ]
    yield names
    for name in names:
        std_logging.getLogger(name).setLevel(std_logging.NOTSET)


def test_deep_level_registered() -> None:
    assert logging.DEEP_DEBUG == 5
    assert std_logging.getLevelName(5) == "DEEP"
    assert logging.LEVELS["DEEP_DEBUG"] == 5


def test_get_logger_returns_wallet_logger() -> None:
    log = logging.getLogger("walletsim.test_logger_class")
    assert isinstance(log, logging.WalletLogger)
    assert hasattr(log, "deep")


def test_deep_emits_only_when_enabled(caplog) -> None:
    log = logging.getLogger("walletsim.test_deep")

    caplog.set_level(logging.DEBUG, logger="walletsim.test_deep")
    log.deep("hidden")
    assert "hidden" not in caplog.text

    caplog.set_level(logging.DEEP_DEBUG, logger="walletsim.test_deep")
    log.deep("shown %d", 7)
    assert "shown 7" in caplog.text
    assert caplog.records[-1].levelname == "DEEP"


def test_configure_sets_default_and_module_levels(restore_module_levels) -> None:
    logging.configure(
        {
            "default_level": "warning",
            "modules": {"exchange": "DEEP_DEBUG", "simulation": "DEBUG"},
        }
    )

    assert std_logging.getLogger("walletsim").level == logging.WARNING
    assert std_logging.getLogger("walletsim.systems.exchange").level == 5
    assert std_logging.getLogger("walletsim.simulation").level == logging.DEBUG


def test_configure_defaults_to_info() -> None:
    logging.configure({})
    assert std_logging.getLogger("walletsim").level == logging.INFO


def test_init_applies_logging_config(restore_module_levels) -> None:
    Simulation.init(
        agent_count=4,
        logging={"default_level": "ERROR", "modules": {"solvency": "DEBUG"}},
    )
    assert std_logging.getLogger("walletsim").level == logging.ERROR
    assert std_logging.getLogger("walletsim.systems.solvency").level == logging.DEBUG


def test_init_rejects_bad_logging_config() -> None:
    with pytest.raises(ValueError, match="Invalid log level"):
        Simulation.init(logging={"default_level": "CHATTY"})


def test_exchange_traces_attempts_at_deep_level(caplog) -> None:
    sim = Simulation.init(
        agent_count=4, initial_balance=5, transactions_per_round=10, seed=2
    )
    caplog.set_level(logging.DEEP_DEBUG, logger="walletsim")

    sim.step()

    assert any(r.levelno == logging.DEEP_DEBUG for r in caplog.records)
    assert any("transfers" in r.getMessage() for r in caplog.records)
