"""Entropy-based guess selection.

For every candidate guess the remaining pool is partitioned by the
feedback pattern the guess would receive, each word weighted by its
dictionary frequency.  The Shannon entropy of that distribution is the
expected information (in bits) gained by playing the guess; the selector
returns the guess with the highest entropy.

Two buffer modes compute the exact same numbers:
  - fresh:  a new partition mapping per candidate guess
  - reuse:  one 243-slot accumulator list shared across the inner loop

Both sum the bucket masses in ascending order of mass, so a guess's
entropy depends only on the masses of its partition, never on which
patterns hold them.  Guesses with equal partitions therefore tie exactly,
and the two modes return bit-identical scores and selections.
"""

from __future__ import annotations

import math
import os
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from typing import Sequence

from lexicon import Dictionary
from wordle_env import PATTERN_COUNT, EmptyCandidatePool, encode_pattern, feedback

GUESS_FROM = ("pool", "dictionary")

# Below this many feedback evaluations a process pool costs more than it saves
_PARALLEL_MIN_WORK = 200_000
_MIN_CHUNK = 50


# ------------------------------------------------------------------
# Scoring kernels (module-level for pickling)
# ------------------------------------------------------------------

def _entropy(masses: list[float], total: float) -> float:
    """Entropy of bucket *masses*, which must already be sorted ascending.

    Summing in mass order makes the result depend only on the multiset of
    masses, so equal partitions always score the same float.
    """
    ent = 0.0
    for v in masses:
        p = v / total
        if p > 0:
            ent -= p * math.log2(p)
    return ent


def _entropy_fresh(
    guesses: Sequence[str],
    pool: Sequence[str],
    weights: Sequence[float],
    total: float,
) -> list[float]:
    out = []
    for g in guesses:
        partition: dict[int, float] = defaultdict(float)
        for w, wt in zip(pool, weights):
            partition[encode_pattern(feedback(w, g))] += wt
        out.append(_entropy(sorted(partition.values()), total))
    return out


def _entropy_reuse(
    guesses: Sequence[str],
    pool: Sequence[str],
    weights: Sequence[float],
    total: float,
) -> list[float]:
    buckets = [0.0] * PATTERN_COUNT
    masses: list[float] = []
    out = []
    for g in guesses:
        for w, wt in zip(pool, weights):
            buckets[encode_pattern(feedback(w, g))] += wt

        masses.clear()
        for i in range(PATTERN_COUNT):
            v = buckets[i]
            if v:
                buckets[i] = 0.0
                masses.append(v)
        masses.sort()
        out.append(_entropy(masses, total))
    return out


def _score_chunk(args) -> list[float]:
    """Worker: entropies for a chunk of guesses."""
    chunk, pool, weights, total, reuse = args
    kernel = _entropy_reuse if reuse else _entropy_fresh
    return kernel(chunk, pool, weights, total)


# ------------------------------------------------------------------
# Selector
# ------------------------------------------------------------------

class GuessSelector:
    """Pick the guess with maximum expected information gain.

    Parameters
    ----------
    guess_from : ``"pool"`` or ``"dictionary"``
        ``pool`` only considers words that could still be the answer.
        ``dictionary`` considers every dictionary word, which can split
        the pool better early on; a word outside the pool only wins when
        its entropy is strictly higher than every pool word's.
    reuse_buffers : bool
        Reuse one fixed accumulator across candidate guesses instead of
        allocating a partition per guess.  Same results, fewer allocations.
    workers : int or None
        Processes used to score candidate guesses.  ``1`` scores inline,
        ``None`` uses every CPU core.  Small workloads always run inline.
    """

    def __init__(
        self,
        guess_from: str = "pool",
        reuse_buffers: bool = False,
        workers: int | None = 1,
    ) -> None:
        if guess_from not in GUESS_FROM:
            raise ValueError(f"guess_from must be 'pool' or 'dictionary', got {guess_from!r}")
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.guess_from = guess_from
        self.reuse_buffers = reuse_buffers
        self.workers = workers or os.cpu_count() or 1

    def __repr__(self) -> str:
        return (f"GuessSelector(guess_from={self.guess_from!r}, "
                f"reuse_buffers={self.reuse_buffers}, workers={self.workers})")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def entropy(self, guess: str, pool: Sequence[str], dictionary: Dictionary) -> float:
        """Expected information (bits) from playing *guess* against *pool*."""
        if not pool:
            raise EmptyCandidatePool("cannot score a guess against an empty pool")
        weights = [float(dictionary[w]) for w in pool]
        return self._kernel([guess], pool, weights, sum(weights))[0]

    def scores(self, pool: Sequence[str], dictionary: Dictionary) -> dict[str, float]:
        """Entropy of every candidate guess against *pool*."""
        if not pool:
            raise EmptyCandidatePool("no candidate is consistent with the feedback")
        pool = list(pool)
        guesses = pool if self.guess_from == "pool" else list(dictionary.words)
        weights = [float(dictionary[w]) for w in pool]
        total = sum(weights)

        if self.workers > 1 and len(guesses) * len(pool) >= _PARALLEL_MIN_WORK:
            values = self._score_parallel(guesses, pool, weights, total)
        else:
            values = self._kernel(guesses, pool, weights, total)
        return dict(zip(guesses, values))

    def select(self, pool: Sequence[str], dictionary: Dictionary) -> str:
        """Return the best guess for *pool*.

        Ties go to a word that is still in the pool, then to the
        alphabetically first word.

        Raises
        ------
        EmptyCandidatePool
            If *pool* is empty.
        """
        if not pool:
            raise EmptyCandidatePool("no candidate is consistent with the feedback")
        # Any pool word splits one or two candidates completely
        if len(pool) <= 2:
            return min(pool)

        scores = self.scores(pool, dictionary)
        pool_set = set(pool)
        return min(scores, key=lambda g: (-scores[g], g not in pool_set, g))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _kernel(self, guesses, pool, weights, total) -> list[float]:
        kernel = _entropy_reuse if self.reuse_buffers else _entropy_fresh
        return kernel(guesses, pool, weights, total)

    def _score_parallel(self, guesses, pool, weights, total) -> list[float]:
        chunk_size = max(_MIN_CHUNK, len(guesses) // (self.workers * 4))
        chunks = [guesses[i:i + chunk_size]
                  for i in range(0, len(guesses), chunk_size)]
        args = [(ch, pool, weights, total, self.reuse_buffers) for ch in chunks]

        values: list[float] = []
        with ProcessPoolExecutor(max_workers=self.workers) as executor:
            # map() keeps chunk order, so values line up with guesses
            for part in executor.map(_score_chunk, args):
                values.extend(part)
        return values
