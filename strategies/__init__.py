"""Registry of the built-in strategies.

Strategies are selected by name from an explicit table; each entry is a
Strategy subclass plus the constructor options that define the variant.

  entropy         entropy over the candidate pool, fresh buffers
  entropy-reuse   same guesses, reusing one accumulator
  entropy-wide    entropy over every dictionary word, reusing buffers
  maxprob         most frequent remaining candidate
"""

from __future__ import annotations

from typing import Any

from lexicon import Dictionary
from strategy import Strategy

from strategies.entropy_strat import EntropyStrategy
from strategies.max_prob_strat import MaxProbStrategy

STRATEGIES: dict[str, tuple[type[Strategy], dict[str, Any]]] = {
    "entropy": (EntropyStrategy, {"guess_from": "pool", "reuse_buffers": False}),
    "entropy-reuse": (EntropyStrategy, {"guess_from": "pool", "reuse_buffers": True}),
    "entropy-wide": (EntropyStrategy, {"guess_from": "dictionary", "reuse_buffers": True}),
    "maxprob": (MaxProbStrategy, {}),
}

DEFAULT_STRATEGY = "entropy"


def available_strategies() -> list[str]:
    return sorted(STRATEGIES)


def _lookup(name: str) -> tuple[type[Strategy], dict[str, Any]]:
    try:
        return STRATEGIES[name.lower()]
    except KeyError:
        raise KeyError(
            f"unknown strategy {name!r}; available: {', '.join(available_strategies())}"
        ) from None


def precompute_strategy(name: str, dictionary: Dictionary, **overrides: Any) -> dict[str, Any]:
    """Run the strategy's once-per-batch precomputation for *dictionary*."""
    cls, options = _lookup(name)
    return cls.precompute(dictionary, **{**options, **overrides})


def create_strategy(name: str, dictionary: Dictionary, **overrides: Any) -> Strategy:
    """Build a fresh strategy instance for one game.

    *overrides* are merged over the registry options, e.g. ``workers=4``
    or the ``opening`` returned by ``precompute_strategy``.
    """
    cls, options = _lookup(name)
    return cls(dictionary, **{**options, **overrides})
