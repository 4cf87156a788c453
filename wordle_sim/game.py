"""
game.py

Plays simulated games: pick a guess, score it against the secret, reduce the
candidate pool, repeat until the secret is found. Runs that loop once per
secret and aggregates the outcomes.

States of a single game:

    INIT -> GUESSING -> SOLVED     secret found within the guess budget
                     -> EXHAUSTED  secret found after the budget, or the
                                   per-game time budget ran out

A game that goes past the budget keeps playing until the secret is found so
guesses_taken always reports the real number of guesses; it just does not
count as a win.
"""

from collections import Counter
from dataclasses import dataclass, field
import enum
import multiprocessing as mp
import time

import numpy as np

from wordle_sim.entropy import best_guess
from wordle_sim.errors import InvariantError
from wordle_sim.patterns import ALL_CORRECT, score_code
from wordle_sim.reduce import reduce_pool
from wordle_sim.words import make_word, word_str


MAX_GUESSES = 6
DEFAULT_OPENER = "tares"
STRATEGIES = ("entropy", "random")


_WORKER_STATE = {}


class GameState(enum.Enum):
    INIT = "init"
    GUESSING = "guessing"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class GameResult:
    secret: bytes
    solved: bool
    guesses_taken: int
    duration: float
    guesses: tuple = ()
    state: GameState = GameState.SOLVED
    timed_out: bool = False


@dataclass(frozen=True)
class SimulationSummary:
    total: int
    wins: int
    average_guesses: float
    win_rate: float
    average_time: float
    total_time: float
    distribution: dict = field(default_factory=dict)
    failed_words: list = field(default_factory=list)


def _word(value):
    if value is None or isinstance(value, bytes):
        return value
    return make_word(value)


def random_guess(pool, rng):
    """Uniformly random word from the pool, drawn from the given generator."""
    words = list(pool)
    if not words:
        raise InvariantError("cannot pick a guess from an empty pool")
    return words[int(rng.integers(len(words)))]


def simulate_game(
    pool,
    secret,
    opening_guess=None,
    max_guesses=MAX_GUESSES,
    cache=None,
    guesses=None,
    strategy="entropy",
    rng=None,
    time_budget=None,
):
    """
    Play one game against secret, starting from the full candidate pool.

    Turn 1 plays opening_guess when one is given. Every other guess comes
    from the strategy: the highest-entropy guess ("entropy") or a uniformly
    random pool word drawn from rng ("random").

    Returns a GameResult; solved is True iff the secret was found within
    max_guesses guesses.
    """
    secret = _word(secret)
    opening_guess = _word(opening_guess)

    if strategy not in STRATEGIES:
        raise ValueError(f"unknown strategy: {strategy!r}")
    if strategy == "random" and rng is None:
        raise ValueError("the random strategy needs an explicit rng")
    if secret not in pool:
        raise InvariantError(f"secret {word_str(secret)!r} is not in the candidate pool")

    start = time.perf_counter()
    state = GameState.INIT
    played = []
    timed_out = False

    while state in (GameState.INIT, GameState.GUESSING):
        state = GameState.GUESSING

        if not played and opening_guess is not None:
            guess = opening_guess
        elif strategy == "random":
            guess = random_guess(pool, rng)
        else:
            guess = best_guess(pool, cache=cache, guesses=guesses)

        observed = score_code(guess, secret)
        played.append(guess)

        if observed == ALL_CORRECT:
            state = GameState.SOLVED if len(played) <= max_guesses else GameState.EXHAUSTED
            break

        reduced = reduce_pool(pool, guess, observed, cache)
        if secret not in reduced:
            raise InvariantError(
                f"reducing by {word_str(guess)!r} dropped the secret {word_str(secret)!r}"
            )
        if len(reduced) == len(pool) and guess in pool:
            raise InvariantError(
                f"guess {word_str(guess)!r} did not narrow a pool of {len(pool)} words"
            )
        pool = reduced

        if time_budget is not None and time.perf_counter() - start > time_budget:
            state = GameState.EXHAUSTED
            timed_out = True

    return GameResult(
        secret=secret,
        solved=state is GameState.SOLVED,
        guesses_taken=len(played),
        duration=time.perf_counter() - start,
        guesses=tuple(played),
        state=state,
        timed_out=timed_out,
    )


def _play_slot(slot, secret, pool, options):
    options = dict(options)
    seed = options.pop("seed")
    if options["strategy"] == "random":
        options["rng"] = np.random.default_rng([seed, slot])
    return simulate_game(pool, secret, **options)


def _init_worker(pool, options):
    _WORKER_STATE["pool"] = pool
    _WORKER_STATE["options"] = options


def _worker_game(task):
    slot, secret = task
    return slot, _play_slot(slot, secret, _WORKER_STATE["pool"], _WORKER_STATE["options"])


def run_simulation(
    secrets,
    pool,
    opening_guess=None,
    max_guesses=MAX_GUESSES,
    cache=None,
    guesses=None,
    strategy="entropy",
    seed=None,
    time_budget=None,
    workers=1,
    progress=None,
):
    """
    Simulate one game per secret and return the results in secret order.

    With the entropy strategy and no opening guess, the opener is computed
    once from the full pool, since it does not depend on the secret. The
    random strategy seeds each game from (seed, secret position), so results
    do not depend on the number of workers. ``progress`` is called with the
    number of finished games and the latest GameResult.
    """
    secrets = [_word(s) for s in secrets]
    opening_guess = _word(opening_guess)

    if strategy == "entropy" and opening_guess is None and secrets:
        opening_guess = best_guess(pool, cache=cache, guesses=guesses)
    if seed is None:
        seed = int(np.random.SeedSequence().entropy)

    options = {
        "opening_guess": opening_guess,
        "max_guesses": max_guesses,
        "cache": cache,
        "guesses": guesses,
        "strategy": strategy,
        "time_budget": time_budget,
        "seed": seed,
    }

    results = [None] * len(secrets)
    worker_count = max(1, int(workers or 1))

    if worker_count == 1:
        for slot, secret in enumerate(secrets):
            results[slot] = _play_slot(slot, secret, pool, options)
            if progress is not None:
                progress(slot + 1, results[slot])
        return results

    start_methods = mp.get_all_start_methods()
    start_method = "fork" if "fork" in start_methods else "spawn"
    ctx = mp.get_context(start_method)
    tasks = list(enumerate(secrets))

    with ctx.Pool(
        processes=worker_count,
        initializer=_init_worker,
        initargs=(pool, options),
    ) as worker_pool:
        for done, (slot, result) in enumerate(
            worker_pool.imap_unordered(_worker_game, tasks, chunksize=1), start=1
        ):
            results[slot] = result
            if progress is not None:
                progress(done, result)

    return results


def summarize(results) -> SimulationSummary:
    total = len(results)
    if total == 0:
        return SimulationSummary(0, 0, 0.0, 0.0, 0.0, 0.0)

    wins = sum(1 for r in results if r.solved)
    total_time = sum(r.duration for r in results)
    distribution = Counter(r.guesses_taken for r in results)

    return SimulationSummary(
        total=total,
        wins=wins,
        average_guesses=sum(r.guesses_taken for r in results) / total,
        win_rate=wins / total,
        average_time=total_time / total,
        total_time=total_time,
        distribution=dict(sorted(distribution.items())),
        failed_words=[word_str(r.secret) for r in results if not r.solved],
    )


def format_summary(summary: SimulationSummary, max_failed=20) -> str:
    """Plain-text run report."""
    lines = [
        f"Games played: {summary.total}",
        f"Average score: {summary.average_guesses:.2f}",
        f"Win rate: {100.0 * summary.win_rate:.2f}",
        f"Average time: {1000.0 * summary.average_time:.2f} ms",
        f"Total time: {1000.0 * summary.total_time:.0f} ms",
    ]
    if summary.distribution:
        lines.append("Distribution:")
        for n, count in summary.distribution.items():
            pct = 100.0 * count / summary.total
            bar = "#" * int(pct / 2)
            lines.append(f"  {n}: {count:5d} ({pct:5.2f}%) {bar}")
    if summary.failed_words:
        shown = summary.failed_words[:max_failed]
        more = len(summary.failed_words) - len(shown)
        suffix = f" (+{more} more)" if more > 0 else ""
        lines.append(f"Failed words: {', '.join(shown)}{suffix}")
    return "\n".join(lines)
