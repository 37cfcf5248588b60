"""Abstract base class for Wordle strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from lexicon import Dictionary
from wordle_env import Guess


class Strategy(ABC):
    """Interface that every guessing strategy must implement.

    A strategy is built for exactly one game: the referee creates a fresh
    instance per answer, so private scratch state (cached pools, tables)
    never leaks between games.

    Parameters
    ----------
    dictionary : Dictionary
        The shared, read-only word list.  Every guess must come from it.
    """

    def __init__(self, dictionary: Dictionary) -> None:
        self._dictionary = dictionary

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable strategy name (used in reports)."""
        ...

    @classmethod
    def precompute(cls, dictionary: Dictionary, **options: Any) -> dict[str, Any]:
        """Return constructor keyword arguments derived from *dictionary* alone.

        Called once per batch with the variant's constructor *options*;
        the result is passed to every fresh instance.  Use this for work
        that does not depend on any game, e.g. the opening guess.  The
        default implementation returns ``{}``.
        """
        return {}

    @abstractmethod
    def guess(self, history: list[Guess]) -> str:
        """Return the next guess given the history of (guess, pattern) pairs.

        Must be deterministic for identical history.  Raise
        ``EmptyCandidatePool`` when no dictionary word fits the history.
        """
        ...
