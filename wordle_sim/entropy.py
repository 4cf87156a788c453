"""
entropy.py

Contains entropy calculations used to rank candidate guesses.

A guess splits the weighted candidate pool into up to 243 buckets, one per
feedback pattern. Its entropy is the expected information (in bits) the
feedback reveals about the secret.
"""

import numpy as np

from wordle_sim.errors import InvariantError
from wordle_sim.patterns import N_PATTERNS, iter_pattern_rows


def entropy_from_counts(counts):
    """Compute Shannon entropy from bucket counts."""
    total = counts.sum()
    if total <= 0:
        raise InvariantError("entropy of a pool with zero total weight")
    probs = counts[counts > 0] / total
    return float(-np.sum(probs * np.log2(probs))) + 0.0


def _pool_arrays(pool):
    words = list(pool)
    if not words:
        raise InvariantError("candidate pool is empty")
    weights = np.fromiter(pool.values(), dtype=np.float64, count=len(words))
    if weights.sum() <= 0:
        # Only count-0 words left: every remaining word is equally likely.
        weights = np.ones(len(words), dtype=np.float64)
    return words, weights


def _histogram(codes, weights):
    return np.bincount(codes, weights=weights, minlength=N_PATTERNS)


def pattern_histogram(candidate, pool, cache=None):
    """Pool weight falling into each of the 243 feedback patterns."""
    words, weights = _pool_arrays(pool)
    for _, codes in iter_pattern_rows([candidate], words, cache):
        return _histogram(codes, weights)


def entropy(candidate, pool, cache=None) -> float:
    """Entropy (bits) of guessing candidate against the weighted pool."""
    return entropy_from_counts(pattern_histogram(candidate, pool, cache))


def iter_entropies(pool, guesses=None, cache=None):
    """
    Yield (guess, entropy) for each guess in order.

    Guesses default to the pool's own words.
    """
    words, weights = _pool_arrays(pool)
    if guesses is None:
        guesses = words
    for guess, codes in iter_pattern_rows(guesses, words, cache):
        yield guess, entropy_from_counts(_histogram(codes, weights))


def best_guess(pool, cache=None, guesses=None):
    """
    Guess with the highest entropy over the pool.

    Candidates are tried in order and only a strictly better entropy replaces
    the current best, so ties go to the first one seen, except that a pool
    word beats an equal-entropy word from outside the pool. A pool holding a
    single word is returned as-is.
    """
    if len(pool) == 1:
        return next(iter(pool))

    best_word = None
    best_entropy = -1.0
    best_in_pool = False
    for guess, h in iter_entropies(pool, guesses, cache):
        in_pool = guess in pool
        if h > best_entropy or (h == best_entropy and in_pool and not best_in_pool):
            best_entropy = h
            best_word = guess
            best_in_pool = in_pool

    if best_word is None:
        raise InvariantError("no guesses to choose from")
    if best_entropy <= 0.0 and not best_in_pool:
        # No guess tells the pool apart; a pool word at least may be the secret.
        return next(iter(pool))
    return best_word


def rank_guesses(pool, guesses=None, cache=None, top=None):
    """(word, entropy) pairs sorted by descending entropy, ties kept in order."""
    ranked = list(iter_entropies(pool, guesses, cache))
    if not ranked:
        return []
    entropies = np.array([h for _, h in ranked])
    order = np.argsort(-entropies, kind="stable")
    if top is not None:
        order = order[:top]
    return [ranked[i] for i in order]
