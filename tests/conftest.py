import pytest

from wordle_sim.words import make_word, uniform_pool


FIVE_WORDS = ["apple", "bravo", "crane", "doubt", "eagle"]


@pytest.fixture
def five_words():
    return [make_word(w) for w in FIVE_WORDS]


@pytest.fixture
def five_pool(five_words):
    return uniform_pool(five_words)


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "possible_words.txt"
    path.write_text("\n".join(FIVE_WORDS) + "\n")
    return path


@pytest.fixture
def weighted_file(tmp_path):
    path = tmp_path / "dictionary.txt"
    path.write_text("apple 120\nbravo 15\ncrane 40\ndoubt 75\neagle 30\ntares 5\n")
    return path
