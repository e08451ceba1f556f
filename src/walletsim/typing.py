"""
Type aliases for walletsim.

Agent state lives in one NumPy array per field (see
:class:`walletsim.population.Population`); these aliases name the array
flavours used across the engine.
"""

from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

Int1D: TypeAlias = NDArray[np.int64]
Bool1D: TypeAlias = NDArray[np.bool_]
Idx1D: TypeAlias = NDArray[np.intp]

__all__ = [
    "Int1D",
    "Bool1D",
    "Idx1D",
]
