# tests/helpers/__init__.py

from tests.helpers.factories import mock_population, mock_settings
from tests.helpers.fixed_rng import FixedRNG, pairs_rng

__all__ = ["FixedRNG", "pairs_rng", "mock_population", "mock_settings"]
