import math

import numpy as np
import pytest

from wordle_sim.entropy import (
    best_guess,
    entropy,
    entropy_from_counts,
    pattern_histogram,
    rank_guesses,
)
from wordle_sim.errors import InvariantError
from wordle_sim.patterns import ScoreCache
from wordle_sim.words import make_word


def test_entropy_from_counts():
    assert entropy_from_counts(np.array([1, 1, 0, 2])) == pytest.approx(1.5)
    assert entropy_from_counts(np.array([0, 7, 0])) == 0.0


def test_every_bucket_distinct(five_pool):
    # "apple" splits the five words into five different patterns.
    assert entropy(b"apple", five_pool) == pytest.approx(math.log2(5))


def test_weighted_entropy():
    pool = {b"apple": 1, b"bravo": 1, b"doubt": 2}
    assert entropy(b"apple", pool) == pytest.approx(1.5)


def test_useless_guess_has_zero_entropy():
    pool = {b"apple": 3, b"eagle": 1}
    assert entropy(make_word("fuzzy"), pool) == 0.0


def test_entropy_is_non_negative(five_pool, five_words):
    for candidate in five_words + [make_word("fuzzy"), make_word("tares")]:
        assert entropy(candidate, five_pool) >= 0.0


def test_histogram_sums_to_pool_weight():
    pool = {b"apple": 4, b"bravo": 1, b"crane": 2}
    hist = pattern_histogram(b"crane", pool)
    assert hist.shape == (243,)
    assert hist.sum() == pytest.approx(7)
    assert hist[242] == pytest.approx(2)


def test_empty_pool_is_an_invariant_error():
    with pytest.raises(InvariantError):
        entropy(b"apple", {})


def test_all_zero_weights_rank_uniformly():
    zero = {b"apple": 0, b"bravo": 0}
    assert entropy(b"apple", zero) == pytest.approx(1.0)
    assert entropy(b"apple", zero) == entropy(b"apple", {b"apple": 1, b"bravo": 1})


def test_pool_word_wins_a_tie_against_an_outsider():
    pool = {b"apple": 1, b"bravo": 1}
    # crane and apple both split the two words apart.
    assert best_guess(pool, guesses=[b"crane", b"apple"]) == b"apple"


def test_useless_outsiders_fall_back_to_a_pool_word():
    pool = {b"bills": 0, b"fills": 3}
    assert best_guess(pool, guesses=[make_word("crane")]) == b"bills"


def test_single_word_pool_is_returned():
    assert best_guess({b"crane": 5}) == b"crane"


def test_ties_keep_first_seen():
    assert best_guess({b"apple": 1, b"bravo": 1}) == b"apple"
    assert best_guess({b"bravo": 1, b"apple": 1}) == b"bravo"


def test_best_guess_with_and_without_cache(five_pool, five_words):
    cache = ScoreCache.build(five_words)
    assert best_guess(five_pool) == best_guess(five_pool, cache=cache) == b"apple"


def test_best_guess_from_wider_vocabulary(five_pool):
    guesses = [make_word("fuzzy"), b"doubt", b"apple"]
    # doubt shares no letter with apple, crane or eagle, so apple wins.
    assert best_guess(five_pool, guesses=guesses) == b"apple"


def test_rank_guesses(five_pool):
    ranked = rank_guesses(five_pool, guesses=[make_word("fuzzy"), b"apple", b"doubt"])
    words = [w for w, _ in ranked]
    entropies = [h for _, h in ranked]
    assert words[0] == b"apple"
    assert words[-1] == b"fuzzy"
    assert entropies == sorted(entropies, reverse=True)
    assert len(rank_guesses(five_pool, top=2)) == 2
