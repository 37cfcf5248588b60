"""Wordle environment: feedback scoring, candidate filtering and the game loop."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Iterable, Iterator, NamedTuple

if TYPE_CHECKING:
    from lexicon import Dictionary
    from strategy import Strategy


WORD_LENGTH = 5
MAX_ATTEMPTS = 31
PATTERN_COUNT = 3 ** WORD_LENGTH


class Correctness(IntEnum):
    """Feedback for a single letter of a guess.

    The integer values keep the 2/1/0 encoding used throughout the
    project, so plain ``tuple[int, ...]`` patterns compare equal.
    """

    CORRECT = 2    # right letter, right position
    MISPLACED = 1  # letter in the answer, other position
    WRONG = 0      # absent, or every occurrence already consumed


class EmptyCandidatePool(RuntimeError):
    """No word in the dictionary is consistent with the feedback so far."""


def feedback(answer: str, guess: str) -> tuple[Correctness, ...]:
    """Return the feedback pattern for *guess* played against *answer*.

    Exact matches are marked first. The remaining guess letters are then
    scanned left to right, each consuming the leftmost unconsumed answer
    position holding the same letter.
    """
    if len(answer) != WORD_LENGTH or len(guess) != WORD_LENGTH:
        raise ValueError(
            f"answer and guess must have {WORD_LENGTH} letters, "
            f"got {answer!r} and {guess!r}"
        )

    pat = [Correctness.WRONG] * WORD_LENGTH
    used = [False] * WORD_LENGTH

    # Pass 1 – exact matches
    for i, (a, g) in enumerate(zip(answer, guess)):
        if a == g:
            pat[i] = Correctness.CORRECT
            used[i] = True

    # Pass 2 – leftmost unconsumed occurrence
    for i, g in enumerate(guess):
        if pat[i] is Correctness.CORRECT:
            continue
        for j, a in enumerate(answer):
            if a == g and not used[j]:
                used[j] = True
                pat[i] = Correctness.MISPLACED
                break

    return tuple(pat)


def patterns() -> Iterator[tuple[Correctness, ...]]:
    """Yield all 243 feedback patterns in a fixed order."""
    slots = (Correctness.CORRECT, Correctness.MISPLACED, Correctness.WRONG)
    return itertools.product(slots, repeat=WORD_LENGTH)


def matches(word: str, guess: str, pattern: tuple[int, ...]) -> bool:
    """True if *word* as the answer would have produced *pattern* for *guess*."""
    return feedback(word, guess) == tuple(pattern)


def encode_pattern(pattern: Iterable[int]) -> int:
    """Encode a feedback pattern as a base-3 integer in ``range(PATTERN_COUNT)``."""
    val = 0
    for i, c in enumerate(pattern):
        val += c * (3 ** i)
    return val


def decode_pattern(index: int) -> tuple[Correctness, ...]:
    if not 0 <= index < PATTERN_COUNT:
        raise ValueError(f"pattern index out of range: {index}")
    slots = []
    for _ in range(WORD_LENGTH):
        index, c = divmod(index, 3)
        slots.append(Correctness(c))
    return tuple(slots)


def render_pattern(pattern: Iterable[int]) -> str:
    return "".join(
        {2: "\U0001f7e9", 1: "\U0001f7e8", 0: "⬛"}[c] for c in pattern
    )


def filter_candidates(
    candidates: Iterable[str],
    guess: str,
    pattern: tuple[int, ...],
) -> list[str]:
    """Keep only candidates consistent with the observed *pattern*."""
    pattern = tuple(pattern)
    return [w for w in candidates if feedback(w, guess) == pattern]


class Guess(NamedTuple):
    """A played word together with the feedback it received."""

    word: str
    pattern: tuple[Correctness, ...]

    def matches(self, word: str) -> bool:
        return matches(word, self.word, self.pattern)


# ------------------------------------------------------------------
# Game loop
# ------------------------------------------------------------------

class GameStatus(Enum):
    WON = "won"
    LOST = "lost"
    CONTRACT_VIOLATION = "contract_violation"
    NO_CANDIDATES = "no_candidates"


@dataclass(frozen=True)
class GameOutcome:
    """Terminal state of one game.

    Attributes
    ----------
    status : GameStatus
        How the game ended.
    rounds : int or None
        1-based round at which the answer was guessed (``WON`` only).
    history : tuple[Guess, ...]
        Every scored guess, in order. The winning guess is not included.
    detail : str or None
        Human-readable reason for ``CONTRACT_VIOLATION`` / ``NO_CANDIDATES``.
    """

    status: GameStatus
    rounds: int | None = None
    history: tuple[Guess, ...] = field(default=(), repr=False)
    detail: str | None = None

    @property
    def solved(self) -> bool:
        return self.status is GameStatus.WON

    @property
    def num_guesses(self) -> int:
        """Guesses spent: the winning round, or every scored guess otherwise."""
        if self.rounds is not None:
            return self.rounds
        return len(self.history)


class Wordle:
    """Referee for single games against a shared, read-only dictionary.

    Parameters
    ----------
    dictionary : Dictionary
        Valid guesses. Guesses outside it are contract violations.
    max_attempts : int
        Guesses allowed before the game is lost.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self._dictionary = dictionary
        self._max_attempts = max_attempts

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def play(self, answer: str, strategy: Strategy) -> GameOutcome:
        """Play one game of *strategy* against *answer*.

        The strategy must be a fresh instance; it only ever sees the
        history of scored guesses.
        """
        if len(answer) != WORD_LENGTH or not (answer.isascii() and answer.isalpha() and answer.islower()):
            raise ValueError(f"answer must be {WORD_LENGTH} lowercase letters, got {answer!r}")

        history: list[Guess] = []
        for round_no in range(1, self._max_attempts + 1):
            try:
                word = strategy.guess(list(history))
            except EmptyCandidatePool as exc:
                return GameOutcome(
                    GameStatus.NO_CANDIDATES,
                    history=tuple(history),
                    detail=str(exc) or "no consistent candidate left",
                )
            except Exception as exc:
                # A crashing strategy forfeits this game, not the batch
                return GameOutcome(
                    GameStatus.CONTRACT_VIOLATION,
                    history=tuple(history),
                    detail=f"strategy raised {type(exc).__name__}: {exc}",
                )

            if word == answer:
                return GameOutcome(GameStatus.WON, rounds=round_no, history=tuple(history))

            if not isinstance(word, str) or word not in self._dictionary:
                return GameOutcome(
                    GameStatus.CONTRACT_VIOLATION,
                    history=tuple(history),
                    detail=f"guess {word!r} is not in the dictionary",
                )

            history.append(Guess(word, feedback(answer, word)))

        return GameOutcome(GameStatus.LOST, history=tuple(history))
