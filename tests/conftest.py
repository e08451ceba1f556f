"""Pytest configuration and fixtures for walletsim tests."""

import os

import pytest

from walletsim import logging
from walletsim.simulation import Simulation


@pytest.fixture
def tiny_sim() -> Simulation:
    """A small deterministic simulation for fast integration tests."""
    return Simulation.init(
        agent_count=10,
        initial_balance=10,
        transactions_per_round=20,
        allow_debt=False,
        transaction_amount=1,
        seed=123,
    )


@pytest.fixture(autouse=True)
def mute_walletsim_logs(caplog):
    # DEBUG on the coverage run so every logging branch executes,
    # ERROR everywhere else for faster tests
    if os.environ.get("COVERAGE_RUN") == "true":
        level = logging.DEBUG
    else:
        level = logging.ERROR

    caplog.set_level(level, logger="walletsim")
    logging.getLogger("walletsim").setLevel(level)
