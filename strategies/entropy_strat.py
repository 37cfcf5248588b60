"""Entropy strategy: maximise expected information gain per guess.

The opening guess only depends on the dictionary, so it can be computed
once per batch (see ``precompute``) and handed to every game.  Every
later guess rebuilds the candidate pool from the full dictionary and the
whole history, then asks the ``GuessSelector`` for the best word.
"""

from __future__ import annotations

from typing import Any

from lexicon import Dictionary
from selector import GuessSelector
from strategy import Strategy
from wordle_env import EmptyCandidatePool, Guess, filter_candidates


class EntropyStrategy(Strategy):
    """Select the guess that maximises Shannon entropy of the feedback partition.

    Parameters
    ----------
    dictionary : Dictionary
        Shared word list and frequency prior.
    guess_from : ``"pool"`` or ``"dictionary"``
        Where candidate guesses are drawn from (see ``GuessSelector``).
    reuse_buffers : bool
        Buffer mode of the selector.  Does not change any guess.
    workers : int or None
        Processes used by the selector for large pools.
    opening : str or None
        Precomputed first guess.  Must equal what the selector would
        return for the full dictionary; computed lazily when None.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        guess_from: str = "pool",
        reuse_buffers: bool = False,
        workers: int | None = 1,
        opening: str | None = None,
    ) -> None:
        super().__init__(dictionary)
        self._selector = GuessSelector(
            guess_from=guess_from,
            reuse_buffers=reuse_buffers,
            workers=workers,
        )
        self._opening = opening
        self._pool: list[str] = list(dictionary.words)

    @property
    def name(self) -> str:
        suffix = ""
        if self._selector.guess_from == "dictionary":
            suffix += "-Wide"
        if self._selector.reuse_buffers:
            suffix += "-Reuse"
        return "Entropy" + suffix

    @property
    def pool(self) -> list[str]:
        """Candidates consistent with the history seen by the last ``guess``."""
        return list(self._pool)

    @classmethod
    def precompute(
        cls,
        dictionary: Dictionary,
        guess_from: str = "pool",
        workers: int | None = None,
        **_: Any,
    ) -> dict[str, Any]:
        selector = GuessSelector(guess_from=guess_from, reuse_buffers=True, workers=workers)
        return {"opening": selector.select(dictionary.words, dictionary)}

    def guess(self, history: list[Guess]) -> str:
        if not history and self._opening is not None:
            return self._opening

        candidates = list(self._dictionary.words)
        for g, pat in history:
            candidates = filter_candidates(candidates, g, pat)
        self._pool = candidates

        if not candidates:
            raise EmptyCandidatePool(
                f"no dictionary word is consistent with {len(history)} guess(es): "
                + ", ".join(g for g, _ in history)
            )
        return self._selector.select(candidates, self._dictionary)
