"""
reduce.py

Narrows a candidate pool to the words consistent with observed feedback.
"""

import numpy as np

from wordle_sim.patterns import encode_pattern, pattern_codes, score_code


def _as_code(pattern) -> int:
    if isinstance(pattern, (int, np.integer)):
        return int(pattern)
    return encode_pattern(pattern)


def reduce_pool(pool, guess, observed, cache=None):
    """
    New pool with exactly the (word, weight) pairs for which scoring guess
    against word gives the observed pattern. The input pool is not modified.

    ``observed`` is either a tuple of marks or its integer code.
    """
    if not pool:
        return {}
    observed = _as_code(observed)
    words = list(pool)
    keep = pattern_codes(guess, words, cache) == observed
    return {word: pool[word] for word, k in zip(words, keep) if k}


def is_consistent(word, history) -> bool:
    """True if word could be the secret given (guess, pattern) observations."""
    return all(score_code(guess, word) == _as_code(p) for guess, p in history)
