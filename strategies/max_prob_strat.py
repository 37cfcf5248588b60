"""Max-probability strategy: always guess the most frequent remaining candidate."""

from __future__ import annotations

from lexicon import Dictionary
from strategy import Strategy
from wordle_env import EmptyCandidatePool, Guess, filter_candidates


class MaxProbStrategy(Strategy):
    """Always guess the most frequent remaining candidate.

    Ties between equally frequent words go to the alphabetically first.
    A cheap baseline for comparing the entropy strategies against.
    """

    def __init__(self, dictionary: Dictionary) -> None:
        super().__init__(dictionary)
        # Pre-sort by descending frequency, then alphabetically for ties
        self._candidates = sorted(
            dictionary.words, key=lambda w: (-dictionary[w], w)
        )

    @property
    def name(self) -> str:
        return "MaxProb"

    def guess(self, history: list[Guess]) -> str:
        candidates = self._candidates
        for g, pat in history:
            candidates = filter_candidates(candidates, g, pat)
        if not candidates:
            raise EmptyCandidatePool("no dictionary word fits the feedback so far")
        # Already sorted by frequency
        return candidates[0]
