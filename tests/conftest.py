from __future__ import annotations

import pytest

from lexicon import Dictionary, load_dictionary
from strategy import Strategy


class FixedStrategy(Strategy):
    """Plays a scripted list of words, repeating the last one."""

    def __init__(self, dictionary, script):
        super().__init__(dictionary)
        self._script = list(script)
        self.calls = 0

    @property
    def name(self) -> str:
        return "Fixed"

    def guess(self, history):
        self.calls += 1
        return self._script[min(len(history), len(self._script) - 1)]


@pytest.fixture(scope="session")
def dictionary() -> Dictionary:
    return load_dictionary()


@pytest.fixture
def toy_dictionary() -> Dictionary:
    return Dictionary({"abcde": 1, "abcdf": 1, "xyzzy": 2, "aacde": 3})


@pytest.fixture
def fixed():
    return FixedStrategy
