# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "gridpath" can be imported without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gridpath.core.grid import build_grid, create_grid, toggle_wall  # noqa: E402


@pytest.fixture
def board():
    """The default 20x40 board: start (10, 5), end (10, 35), no walls."""
    return build_grid()


@pytest.fixture
def small_board():
    return create_grid(5, 5, (0, 0), (4, 4))


@pytest.fixture
def walled_in_end():
    """10x10 board whose end (5, 5) is boxed in by a closed wall ring."""
    g = create_grid(10, 10, (1, 1), (5, 5))
    for r in range(4, 7):
        for c in range(4, 7):
            if (r, c) != (5, 5):
                toggle_wall(g, r, c)
    return g
