from wordle_sim.patterns import ScoreCache, score, score_code
from wordle_sim.reduce import is_consistent, reduce_pool
from wordle_sim.words import make_word


def test_keeps_only_consistent_words(five_pool):
    observed = score(b"apple", b"crane")
    assert reduce_pool(five_pool, b"apple", observed) == {b"crane": 1}


def test_tuple_and_code_agree(five_pool):
    observed = score(b"doubt", b"eagle")
    by_marks = reduce_pool(five_pool, b"doubt", observed)
    by_code = reduce_pool(five_pool, b"doubt", score_code(b"doubt", b"eagle"))
    assert by_marks == by_code == {b"apple": 1, b"crane": 1, b"eagle": 1}


def test_input_pool_is_not_modified(five_pool):
    before = dict(five_pool)
    reduced = reduce_pool(five_pool, b"doubt", score(b"doubt", b"apple"))
    assert five_pool == before
    assert reduced is not five_pool


def test_weights_are_carried_over():
    pool = {b"apple": 7, b"crane": 3, b"eagle": 11}
    reduced = reduce_pool(pool, make_word("fuzzy"), score("fuzzy", "apple"))
    assert reduced == pool


def test_idempotent_and_monotonic(five_pool, five_words):
    for guess in five_words:
        for secret in five_words:
            observed = score(guess, secret)
            once = reduce_pool(five_pool, guess, observed)
            twice = reduce_pool(once, guess, observed)
            assert once == twice
            assert len(once) <= len(five_pool)
            assert secret in once


def test_cache_gives_same_result(five_pool, five_words):
    cache = ScoreCache.build(five_words)
    for guess in five_words + [make_word("tares")]:
        for secret in five_words:
            observed = score_code(guess, secret)
            assert reduce_pool(five_pool, guess, observed, cache) == reduce_pool(
                five_pool, guess, observed
            )


def test_empty_pool():
    assert reduce_pool({}, b"apple", 0) == {}


def test_is_consistent():
    history = [(b"apple", score("apple", "crane")), (b"doubt", score("doubt", "crane"))]
    assert is_consistent(b"crane", history)
    assert not is_consistent(b"eagle", history)
    assert is_consistent(b"eagle", [])
