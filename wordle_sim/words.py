"""
words.py

Handles loading and organizing the word lists.
No numpy here, just clean text handling.

Words are stored as 5-byte ``bytes`` objects (lowercase ASCII). A candidate
pool is a plain dict mapping each word to its non-negative weight; dict
insertion order is the iteration order used everywhere else.
"""

from pathlib import Path

from wordle_sim.errors import WordListError


WORD_LENGTH = 5

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
POSSIBLE_WORDS_PATH = DATA_DIR / "possible_words.txt"
DICTIONARY_PATH = DATA_DIR / "dictionary.txt"


def make_word(text) -> bytes:
    """Normalize a string to a 5-letter lowercase word, or raise WordListError."""
    if isinstance(text, bytes):
        text = text.decode("ascii", errors="replace")
    word = text.strip().lower()
    if len(word) != WORD_LENGTH:
        raise WordListError(f"expected a {WORD_LENGTH}-letter word, got {text!r}")
    if not (word.isascii() and word.isalpha()):
        raise WordListError(f"word must contain only letters a-z: {text!r}")
    return word.encode("ascii")


def word_str(word: bytes) -> str:
    return word.decode("ascii")


def _open_lines(path):
    try:
        with open(path, "rb") as f:
            raw_lines = f.read().splitlines()
    except OSError as exc:
        raise WordListError(f"cannot read word list {path}: {exc}") from exc

    lines = []
    for lineno, raw in enumerate(raw_lines, start=1):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise WordListError(f"{path}:{lineno}: line is not valid UTF-8: {exc}") from exc
    return lines


def load_word_list(path) -> list[bytes]:
    """Load a newline-separated word list into a Python list."""
    words = []
    for lineno, line in enumerate(_open_lines(path), start=1):
        if not line.strip():
            continue
        try:
            words.append(make_word(line))
        except WordListError as exc:
            raise WordListError(f"{path}:{lineno}: {exc}") from exc
    return words


def load_weighted_word_list(path) -> dict[bytes, int]:
    """
    Load a ``word count`` list into a candidate pool.

    Each non-blank line must hold exactly two whitespace-separated fields:
    a 5-letter word and a non-negative integer usage count. A word listed
    more than once accumulates its counts.
    """
    pool = {}
    for lineno, line in enumerate(_open_lines(path), start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 2:
            raise WordListError(
                f"{path}:{lineno}: expected 'word count', got {line.strip()!r}"
            )
        text, count_text = fields
        try:
            word = make_word(text)
        except WordListError as exc:
            raise WordListError(f"{path}:{lineno}: {exc}") from exc
        try:
            count = int(count_text)
        except ValueError as exc:
            raise WordListError(
                f"{path}:{lineno}: count is not an integer: {count_text!r}"
            ) from exc
        if count < 0:
            raise WordListError(f"{path}:{lineno}: count must be non-negative: {count}")
        pool[word] = pool.get(word, 0) + count
    return pool


def uniform_pool(words) -> dict[bytes, int]:
    """Pool with weight 1 for every word, keeping first-seen order."""
    return {word: 1 for word in words}


def load_words(answers_path=POSSIBLE_WORDS_PATH, dictionary_path=DICTIONARY_PATH,
               weighted=True):
    """
    Returns:
        secrets: list of possible secret words
        pool: weighted candidate pool built from the dictionary
    """
    secrets = load_word_list(answers_path)
    if weighted:
        pool = load_weighted_word_list(dictionary_path)
    else:
        pool = uniform_pool(load_word_list(dictionary_path))
    return secrets, pool
