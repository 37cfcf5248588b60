from __future__ import annotations

import pytest

from strategies import (
    available_strategies,
    create_strategy,
    precompute_strategy,
)
from strategies.entropy_strat import EntropyStrategy
from strategies.max_prob_strat import MaxProbStrategy
from wordle_env import EmptyCandidatePool, GameStatus, Guess, Wordle, feedback

ANSWERS = ["right", "storm", "eerie", "sheep", "kayak"]


@pytest.fixture(scope="module")
def opening(dictionary):
    return precompute_strategy("entropy", dictionary, workers=1)["opening"]


def test_registry_names():
    assert available_strategies() == ["entropy", "entropy-reuse", "entropy-wide", "maxprob"]


def test_unknown_strategy(dictionary):
    with pytest.raises(KeyError, match="available"):
        create_strategy("oracle", dictionary)


def test_create_strategy_builds_configured_variant(dictionary):
    s = create_strategy("entropy-wide", dictionary, opening="about")
    assert isinstance(s, EntropyStrategy)
    assert s.name == "Entropy-Wide-Reuse"
    assert create_strategy("ENTROPY", dictionary).name == "Entropy"
    assert isinstance(create_strategy("maxprob", dictionary), MaxProbStrategy)


def test_precompute_opening_matches_live_first_guess(dictionary, opening):
    live = EntropyStrategy(dictionary, reuse_buffers=True).guess([])
    assert live == opening
    assert opening in dictionary


def test_maxprob_has_no_precomputation(dictionary):
    assert precompute_strategy("maxprob", dictionary, workers=1) == {}


@pytest.mark.parametrize("name", ["entropy", "entropy-reuse", "maxprob"])
def test_strategies_solve_answers(dictionary, opening, name):
    game = Wordle(dictionary)
    extra = {} if name == "maxprob" else {"opening": opening}
    for answer in ANSWERS:
        outcome = game.play(answer, create_strategy(name, dictionary, **extra))
        assert outcome.status is GameStatus.WON, (name, answer, outcome)


def test_buffer_variants_play_identical_games(dictionary, opening):
    game = Wordle(dictionary)
    for answer in ANSWERS:
        a = game.play(answer, create_strategy("entropy", dictionary, opening=opening))
        b = game.play(answer, create_strategy("entropy-reuse", dictionary, opening=opening))
        assert a.history == b.history
        assert a.rounds == b.rounds


def test_entropy_guess_is_deterministic(dictionary, opening):
    history = [Guess(opening, feedback("storm", opening))]
    first = EntropyStrategy(dictionary, opening=opening).guess(list(history))
    second = EntropyStrategy(dictionary, opening=opening).guess(list(history))
    assert first == second


def test_entropy_pool_tracks_history(dictionary, opening):
    strat = EntropyStrategy(dictionary, opening=opening)
    history = [Guess(opening, feedback("storm", opening))]
    strat.guess(history)
    assert "storm" in strat.pool
    assert all(feedback(w, opening) == history[0].pattern for w in strat.pool)


def test_entropy_reports_empty_pool(dictionary):
    strat = EntropyStrategy(dictionary, opening="right")
    # no dictionary word can be "right" and also fully disjoint from it
    history = [Guess("right", feedback("right", "right")), Guess("wrong", feedback("xxxxx", "wrong"))]
    with pytest.raises(EmptyCandidatePool):
        strat.guess(history)


def test_answer_outside_dictionary_ends_with_no_candidates(dictionary, opening):
    outcome = Wordle(dictionary).play("qqqqq", create_strategy("entropy", dictionary, opening=opening))
    assert outcome.status is GameStatus.NO_CANDIDATES


def test_maxprob_picks_most_frequent(toy_dictionary):
    strat = MaxProbStrategy(toy_dictionary)
    assert strat.guess([]) == "aacde"
    history = [Guess("aacde", feedback("xyzzy", "aacde"))]
    assert strat.guess(history) == "xyzzy"
