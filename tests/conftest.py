import sys
from pathlib import Path
from random import SystemRandom

import pytest

# Make the package importable when the tests run from a plain checkout.
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


class CountingRandom(SystemRandom):
    """SystemRandom that records how many draws were made."""

    def __init__(self):
        super().__init__()
        self.calls = 0

    def randrange(self, *args, **kwargs):
        self.calls += 1
        return super().randrange(*args, **kwargs)


@pytest.fixture
def counting_rng():
    return CountingRandom()


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history.json"
