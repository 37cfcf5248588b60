#!/usr/bin/env python3
"""Play a strategy against every answer in the answer list and report.

Features:
  - Selects a built-in strategy by name (see ``--list``).
  - Runs games in parallel worker processes sharing one read-only dictionary.
  - Reports rounds per game, contract violations and empty pools separately.
  - Outputs summary table, CSV, JSON and an optional histogram.
"""

from __future__ import annotations

import argparse
import csv
import json
import os
import statistics
import sys
import time as _time_mod
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from lexicon import Dictionary, MalformedInput, load_answers, load_dictionary
from strategies import (
    DEFAULT_STRATEGY,
    available_strategies,
    create_strategy,
    precompute_strategy,
)
from wordle_env import MAX_ATTEMPTS, GameStatus, Wordle, feedback, render_pattern

RESULTS_DIR = Path(__file__).resolve().parent / "results"


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass
class GameResult:
    strategy: str
    answer: str
    status: str
    num_guesses: int
    guesses: list[str] = field(default_factory=list)
    detail: str | None = None

    @property
    def solved(self) -> bool:
        return self.status == GameStatus.WON.value


@dataclass
class BatchResults:
    games: list[GameResult] = field(default_factory=list)

    def by_status(self, status: GameStatus) -> list[GameResult]:
        return [g for g in self.games if g.status == status.value]

    def summary(self) -> dict[str, Any]:
        n = len(self.games)
        won = self.by_status(GameStatus.WON)
        rounds = sorted(g.num_guesses for g in won)
        dist: dict[str, int] = {}
        for g in self.games:
            key = str(g.num_guesses) if g.solved else g.status
            dist[key] = dist.get(key, 0) + 1
        return {
            "games_played": n,
            "games_solved": len(won),
            "lost": len(self.by_status(GameStatus.LOST)),
            "contract_violations": len(self.by_status(GameStatus.CONTRACT_VIOLATION)),
            "no_candidates": len(self.by_status(GameStatus.NO_CANDIDATES)),
            "solve_rate": round(len(won) / n, 4) if n else 0,
            "mean_guesses": round(statistics.mean(rounds), 3) if rounds else 0,
            "median_guesses": statistics.median(rounds) if rounds else 0,
            "max_guesses": max(rounds) if rounds else 0,
            "guess_distribution": dist,
        }

    def to_csv(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["strategy", "answer", "status", "num_guesses"])
            for g in self.games:
                writer.writerow([g.strategy, g.answer, g.status, g.num_guesses])

    def to_json(self, path: str | Path, config: dict[str, Any] | None = None) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "timestamp": datetime.now().isoformat(),
            "config": config or {},
            "summary": self.summary(),
            "games": [asdict(g) for g in self.games],
        }
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def print_summary(self) -> None:
        s = self.summary()
        name = self.games[0].strategy if self.games else "-"
        print(f"\n{'Strategy':<22} {'Games':>6} {'Solved':>7} {'Rate':>6} "
              f"{'Mean':>6} {'Median':>7} {'Max':>5} {'Viol':>5} {'Empty':>6}")
        print("-" * 78)
        print(f"{name:<22} {s['games_played']:>6} {s['games_solved']:>6}  "
              f"{s['solve_rate'] * 100:>5.1f}% {s['mean_guesses']:>6.2f} "
              f"{s['median_guesses']:>7.1f} {s['max_guesses']:>5} "
              f"{s['contract_violations']:>5} {s['no_candidates']:>6}")
        print()

    def plot_histogram(self, path: str | Path | None = None) -> None:
        try:
            import matplotlib
            matplotlib.use("Agg")
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not installed — skipping plot", file=sys.stderr)
            return

        rounds = [g.num_guesses for g in self.games if g.solved]
        if not rounds:
            return
        name = self.games[0].strategy

        fig, ax = plt.subplots(figsize=(6, 4))
        ax.hist(rounds, bins=list(range(1, max(rounds) + 2)), edgecolor="black", align="left")
        ax.set_title(f"{name} — guess distribution")
        ax.set_xlabel("Guesses")
        ax.set_ylabel("Count")
        fig.tight_layout()

        dest = Path(path) if path else RESULTS_DIR / f"batch_{name.lower()}.png"
        dest.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(dest, dpi=150)
        plt.close(fig)
        print(f"Histogram saved to {dest}")


# ------------------------------------------------------------------
# Game execution (also runs in child processes)
# ------------------------------------------------------------------

def play_games(
    strategy_name: str,
    dictionary: Dictionary,
    answers: list[str],
    strategy_options: dict[str, Any] | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> list[GameResult]:
    """Play one game per answer, each with a fresh strategy instance."""
    options = strategy_options or {}
    game = Wordle(dictionary, max_attempts=max_attempts)
    results: list[GameResult] = []
    for answer in answers:
        strat = create_strategy(strategy_name, dictionary, **options)
        outcome = game.play(answer, strat)
        guesses = [g.word for g in outcome.history]
        if outcome.solved:
            guesses.append(answer)
        results.append(GameResult(
            strategy=strat.name,
            answer=answer,
            status=outcome.status.value,
            num_guesses=outcome.num_guesses,
            guesses=guesses,
            detail=outcome.detail,
        ))
    return results


def _chunks(items: list[str], n: int) -> list[list[str]]:
    size = max(1, -(-len(items) // n))
    return [items[i:i + size] for i in range(0, len(items), size)]


def run_batch(
    strategy_name: str,
    dictionary: Dictionary,
    answers: list[str],
    num_games: int | None = None,
    max_workers: int | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> BatchResults:
    """Play *strategy_name* against the first *num_games* answers.

    Parameters
    ----------
    max_workers : int or None
        Worker processes; ``1`` plays every game in this process and
        ``None`` uses up to the number of CPU cores.
    """
    if num_games is not None:
        if num_games < 0:
            raise ValueError(f"num_games must not be negative, got {num_games}")
        answers = answers[:num_games]
    if not answers:
        return BatchResults()
    if max_workers is None:
        max_workers = os.cpu_count() or 4
    max_workers = max(1, min(max_workers, len(answers)))

    options = precompute_strategy(strategy_name, dictionary, workers=max_workers)

    if max_workers == 1:
        return BatchResults(play_games(strategy_name, dictionary, answers, options, max_attempts))

    chunks = _chunks(answers, max_workers)
    by_chunk: dict[int, list[GameResult]] = {}
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(play_games, strategy_name, dictionary, chunk, options, max_attempts): i
            for i, chunk in enumerate(chunks)
        }
        for fut in as_completed(futures):
            i = futures[fut]
            by_chunk[i] = fut.result()
            done = sum(len(r) for r in by_chunk.values())
            print(f"\r  [{done}/{len(answers)}] games played", end="", flush=True)
    print()

    results = BatchResults()
    for i in range(len(chunks)):
        results.games.extend(by_chunk[i])
    return results


def describe(result: GameResult) -> str:
    if result.solved:
        return f"{result.answer}: {result.num_guesses}"
    if result.status == GameStatus.LOST.value:
        return f"{result.answer}: no solution found"
    return f"{result.answer}: {result.status.upper()} ({result.detail})"


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Play a guessing strategy against the answer list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  wordle-bench                                   # entropy strategy, all answers
  wordle-bench --strategy entropy-wide -n 20     # first 20 answers
  wordle-bench --strategy maxprob --verbose      # per-game guesses
  wordle-bench --dictionary words.txt --answers answers.txt --workers 1
""",
    )
    parser.add_argument("--strategy", "-s", type=str, default=DEFAULT_STRATEGY,
                        help=f"Strategy name (default: {DEFAULT_STRATEGY})")
    parser.add_argument("--num-games", "-n", type=int, default=None,
                        help="Only play the first N answers")
    parser.add_argument("--dictionary", type=str, default=None,
                        help="Dictionary file ('<word> <frequency>' per line)")
    parser.add_argument("--answers", type=str, default=None,
                        help="Answer list (one word per line)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel worker processes (default: all cores)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print every game with its guesses")
    parser.add_argument("--csv", type=str, default=None, help="Save results CSV path")
    parser.add_argument("--json", type=str, default=None, help="Save results JSON path")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram path")
    parser.add_argument("--list", action="store_true", help="List strategies and exit")
    args = parser.parse_args(argv)

    if args.list:
        for name in available_strategies():
            print(name)
        return 0
    if args.strategy.lower() not in available_strategies():
        print(f"Strategy '{args.strategy}' not found. "
              f"Available: {available_strategies()}", file=sys.stderr)
        return 1

    try:
        dictionary = load_dictionary(args.dictionary)
        answers = load_answers(args.answers)
    except (FileNotFoundError, MalformedInput) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Dictionary: {len(dictionary)} words | answers: {len(answers)}")
    print(f"Strategy: {args.strategy}", flush=True)

    t0 = _time_mod.time()
    results = run_batch(
        args.strategy,
        dictionary,
        answers,
        num_games=args.num_games,
        max_workers=args.workers,
    )
    elapsed = _time_mod.time() - t0

    for g in results.games:
        if args.verbose:
            print(describe(g))
            for word in g.guesses:
                if word == g.answer:
                    break
                print(f"    {word}  {render_pattern(feedback(g.answer, word))}")
        elif not g.solved:
            print(describe(g), file=sys.stderr)

    results.print_summary()
    print(f"Elapsed: {elapsed:.1f}s")

    if args.csv:
        results.to_csv(args.csv)
        print(f"CSV saved to {args.csv}")
    if args.json:
        results.to_json(args.json, config={
            "strategy": args.strategy,
            "num_games": args.num_games,
            "dictionary": args.dictionary,
            "answers": args.answers,
            "max_attempts": MAX_ATTEMPTS,
        })
        print(f"JSON saved to {args.json}")
    if args.plot:
        results.plot_histogram(args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
