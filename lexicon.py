"""Word-list loading utilities.

Two plain-text formats are read:
  - Dictionary: ``<word> <frequency>`` per line (all valid guesses)
  - Answers:    one word per line (the secrets used for batch runs)

Frequencies are the prior weights of the entropy selector.  A frequency
of 0 means "observed but rare" and is stored as 1, so no word is ever
impossible.

The bundled ``data/dictionary.txt`` is a fixture word list with a
uniform count of 1 for every word, not measured corpus frequencies.
Pass a real ``<word> <count>`` file to weight guesses by usage.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from pathlib import Path

from wordle_env import WORD_LENGTH


_DIR = Path(__file__).resolve().parent
DEFAULT_DICTIONARY = _DIR / "data" / "dictionary.txt"
DEFAULT_ANSWERS = _DIR / "data" / "answers.txt"

_WORD_RE = re.compile(rf"^[a-z]{{{WORD_LENGTH}}}$")
_ENTRY_RE = re.compile(rf"^([a-z]{{{WORD_LENGTH}}}) (\d+)$")


class MalformedInput(ValueError):
    """A dictionary or answer-list line could not be parsed."""


# ------------------------------------------------------------------
# Dictionary
# ------------------------------------------------------------------

class Dictionary(Mapping):
    """Immutable mapping of word -> positive frequency.

    Build it once and share it by reference; nothing mutates it after
    construction, so games and worker processes only ever read it.
    """

    __slots__ = ("_counts", "_words", "_total")

    def __init__(self, counts: Mapping[str, int]) -> None:
        checked: dict[str, int] = {}
        for w, c in counts.items():
            if not _WORD_RE.match(w):
                raise MalformedInput(f"not a {WORD_LENGTH}-letter lowercase word: {w!r}")
            if c < 0:
                raise MalformedInput(f"negative frequency for {w!r}: {c}")
            checked[w] = max(int(c), 1)
        self._counts = checked
        self._words = tuple(sorted(checked))
        self._total = sum(checked.values())

    def __getitem__(self, word: str) -> int:
        return self._counts[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._counts

    def __repr__(self) -> str:
        return f"Dictionary({len(self)} words)"

    @property
    def words(self) -> tuple[str, ...]:
        """All words in alphabetical order."""
        return self._words

    @property
    def total(self) -> int:
        """Sum of all frequencies."""
        return self._total

    def frequency(self, word: str) -> int:
        return self._counts[word]

    def probability(self, word: str) -> float:
        return self._counts[word] / self._total


# ------------------------------------------------------------------
# Loading
# ------------------------------------------------------------------

def _read_lines(path: Path) -> Iterator[tuple[int, str]]:
    if not path.exists():
        raise FileNotFoundError(f"Word list not found: {path}")
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        if not line.strip():
            continue
        yield lineno, line


def parse_dictionary(lines: Iterator[tuple[int, str]], source: str = "<input>") -> Dictionary:
    """Build a Dictionary from numbered ``<word> <frequency>`` lines."""
    counts: dict[str, int] = {}
    for lineno, line in lines:
        m = _ENTRY_RE.match(line)
        if m is None:
            raise MalformedInput(
                f"{source}:{lineno}: expected '<word> <frequency>' with a "
                f"{WORD_LENGTH}-letter lowercase word, got {line!r}"
            )
        word, count = m.group(1), int(m.group(2))
        if word in counts:
            raise MalformedInput(f"{source}:{lineno}: duplicate word {word!r}")
        counts[word] = count
    if not counts:
        raise MalformedInput(f"{source}: no words found")
    return Dictionary(counts)


def load_dictionary(path: str | Path | None = None) -> Dictionary:
    """Load the dictionary file.

    Parameters
    ----------
    path : str, Path or None
        File with one ``<word> <frequency>`` entry per line.  None falls
        back to ``data/dictionary.txt``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    MalformedInput
        On the first line that does not parse.
    """
    src = Path(path) if path is not None else DEFAULT_DICTIONARY
    return parse_dictionary(_read_lines(src), source=str(src))


def load_answers(path: str | Path | None = None) -> list[str]:
    """Load the answer list (one word per line), keeping file order.

    Answers are not required to be in the dictionary.
    """
    src = Path(path) if path is not None else DEFAULT_ANSWERS
    answers: list[str] = []
    for lineno, line in _read_lines(src):
        w = line.strip()
        if not _WORD_RE.match(w):
            raise MalformedInput(
                f"{src}:{lineno}: expected a {WORD_LENGTH}-letter lowercase word, got {line!r}"
            )
        answers.append(w)
    if not answers:
        raise MalformedInput(f"{src}: no answers found")
    return answers
