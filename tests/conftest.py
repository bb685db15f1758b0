import os
import sys

import pytest


# Ensure repo root is on sys.path so tests can import the local `models` and
# `pricing` packages regardless of pytest's import mode / rootdir heuristics.
_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)


@pytest.fixture
def market():
    """Market inputs of the default command-line run."""
    return {"s0": 100.0, "r": 0.055, "q": 0.03, "t": 1.0}
