# tests/__init__.py

from tests.helpers.factories import mock_population, mock_settings
from tests.helpers.invariants import assert_basic_invariants

__all__ = [
    "mock_population",
    "mock_settings",
    "assert_basic_invariants",
]
