"""
simulate.py

Unified CLI for simulating the entropy solver over every possible secret.

Plays one game per word in the possible-words list and prints the run
summary: average score, win rate, average and total time.

Optional:
-opener WORD: fixed first guess (default: tares); "auto" computes the
  highest-entropy opener from the full pool once.
-strategy random: random baseline instead of entropy, seeded with -seed.
-wide: draw guesses from the whole dictionary (needs the score cache)
  instead of the shrinking candidate pool.
-no-cache: score everything directly instead of using the score cache.
-workers N: simulate games in N worker processes.
"""

import argparse
import time

from tqdm import tqdm

from wordle_sim.errors import WordleSimError
from wordle_sim.game import (
    DEFAULT_OPENER,
    MAX_GUESSES,
    STRATEGIES,
    format_summary,
    run_simulation,
    summarize,
)
from wordle_sim.patterns import CACHE_PATH, format_pattern, load_or_build_cache, score_code
from wordle_sim.words import (
    DICTIONARY_PATH,
    POSSIBLE_WORDS_PATH,
    load_words,
    make_word,
    word_str,
)


def _cache_progress(total):
    # The bar only appears if the cache actually has to be built.
    bars = []

    def update(done):
        if not bars:
            bars.append(tqdm(total=total, desc="Score cache", unit="row"))
        bars[0].update(done - bars[0].n)
        if done == total:
            bars[0].close()

    return update


def print_game(result):
    secret = result.secret
    status = "solved" if result.solved else "lost"
    if result.timed_out:
        status = "timed out"
    steps = " -> ".join(
        f"{word_str(g)} {format_pattern(score_code(g, secret))}" for g in result.guesses
    )
    tqdm.write(f"{word_str(secret)}: {status} in {result.guesses_taken} | {steps}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Simulate the entropy solver against every possible secret word."
    )
    parser.add_argument(
        "-answers",
        type=str,
        default=str(POSSIBLE_WORDS_PATH),
        help="Possible secret words, one per line.",
    )
    parser.add_argument(
        "-dictionary",
        type=str,
        default=str(DICTIONARY_PATH),
        help="Allowed words with usage counts ('word count' per line).",
    )
    parser.add_argument(
        "-unweighted",
        action="store_true",
        help="Read -dictionary as a plain word list with weight 1 per word.",
    )
    parser.add_argument(
        "-cache",
        type=str,
        default=str(CACHE_PATH),
        help="Score cache file (built and saved when missing or stale).",
    )
    parser.add_argument(
        "-no-cache",
        action="store_true",
        help="Do not load or build the score cache.",
    )
    parser.add_argument(
        "-opener",
        type=str,
        default=DEFAULT_OPENER,
        help=f"Fixed first guess, or 'auto' (default: {DEFAULT_OPENER}).",
    )
    parser.add_argument(
        "-max-guesses",
        type=int,
        default=MAX_GUESSES,
        help=f"Guess budget for a win (default: {MAX_GUESSES}).",
    )
    parser.add_argument(
        "-strategy",
        choices=STRATEGIES,
        default="entropy",
        help="Guess selection strategy (default: entropy).",
    )
    parser.add_argument(
        "-seed",
        type=int,
        default=None,
        help="Seed for the random strategy.",
    )
    parser.add_argument(
        "-wide",
        action="store_true",
        help="Draw guesses from the whole dictionary instead of the candidate pool.",
    )
    parser.add_argument(
        "-limit",
        type=int,
        default=None,
        help="Only simulate the first N possible words.",
    )
    parser.add_argument(
        "-workers",
        type=int,
        default=1,
        help="Worker processes for the simulation (default: 1).",
    )
    parser.add_argument(
        "-time-budget",
        type=float,
        default=None,
        help="Wall-clock seconds allowed per game before it counts as lost.",
    )
    parser.add_argument(
        "-progress",
        choices=("bar", "off"),
        default="bar",
        help="Progress output style (default: bar).",
    )
    parser.add_argument(
        "-verbose",
        action="store_true",
        help="Print every game's guesses and feedback.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        secrets, pool = load_words(args.answers, args.dictionary, weighted=not args.unweighted)
        opener = None if args.opener == "auto" else make_word(args.opener)
    except WordleSimError as exc:
        raise SystemExit(str(exc)) from exc

    if args.limit is not None:
        secrets = secrets[: args.limit]
    if args.wide and args.no_cache:
        raise SystemExit("-wide needs the score cache; drop -no-cache.")

    print(f"Loaded {len(secrets)} possible words and {len(pool)} dictionary words.")

    cache = None
    if not args.no_cache:
        vocabulary = list(pool)
        progress = _cache_progress(len(vocabulary)) if args.progress == "bar" else None
        cache = load_or_build_cache(vocabulary, args.cache, progress=progress)
    guesses = cache.words if args.wide else None

    if opener is None and args.strategy == "entropy":
        print("Computing best opening guess...")

    bar = None
    if args.progress == "bar":
        bar = tqdm(total=len(secrets), desc="Games", unit="game")

    def on_game(done, result):
        if bar is not None:
            bar.update(1)
        if args.verbose:
            print_game(result)

    print("Running simulations!")
    start = time.perf_counter()
    try:
        results = run_simulation(
            secrets,
            pool,
            opening_guess=opener,
            max_guesses=args.max_guesses,
            cache=cache,
            guesses=guesses,
            strategy=args.strategy,
            seed=args.seed,
            time_budget=args.time_budget,
            workers=args.workers,
            progress=on_game,
        )
    except WordleSimError as exc:
        raise SystemExit(str(exc)) from exc
    finally:
        if bar is not None:
            bar.close()
    elapsed = time.perf_counter() - start

    if args.strategy == "entropy" and results:
        print(f"Opening guess: {word_str(results[0].guesses[0])}")
    print(format_summary(summarize(results)))
    print(f"Wall-clock time: {elapsed:.1f} s")


if __name__ == "__main__":
    main()
