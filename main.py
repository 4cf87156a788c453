"""
main.py

Computes the entropy of every opening guess over the full dictionary and
prints the best ones. The opener does not depend on the secret, so this is
the value the simulator precomputes once per run.
"""

import argparse

from wordle_sim.entropy import rank_guesses
from wordle_sim.errors import WordleSimError
from wordle_sim.patterns import CACHE_PATH, load_or_build_cache
from wordle_sim.words import DICTIONARY_PATH, load_weighted_word_list, word_str


TOP_SINGLE = 20


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rank opening guesses by entropy.")
    parser.add_argument("-dictionary", type=str, default=str(DICTIONARY_PATH))
    parser.add_argument("-cache", type=str, default=str(CACHE_PATH))
    parser.add_argument("-top", type=int, default=TOP_SINGLE)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        pool = load_weighted_word_list(args.dictionary)
    except WordleSimError as exc:
        raise SystemExit(str(exc)) from exc

    cache = load_or_build_cache(list(pool), args.cache)

    print("Computing single-guess entropies...")
    ranked = rank_guesses(pool, cache=cache, top=args.top)

    print("\nTop opening guesses:")
    for word, h in ranked:
        print(f"{word_str(word)}: {h:.4f} bits")


if __name__ == "__main__":
    main()
