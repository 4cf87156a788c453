"""
patterns.py

Scores guesses against secrets and stores the precomputed score matrix.

Each feedback pattern is encoded as an integer 0..242 in base-3, position 0
being the least significant digit:

    0 = absent
    1 = present
    2 = correct

The score cache is a square matrix of shape (n_words, n_words) over one
ordered vocabulary, so cache[i, j] is the pattern of vocabulary[i] guessed
against secret vocabulary[j]. It is built once per word list and saved to
disk together with a fingerprint of the vocabulary it was built from.
"""

from collections import Counter
import hashlib
from pathlib import Path
import zipfile

import numpy as np
from numba import njit

from wordle_sim.errors import CacheError
from wordle_sim.words import DATA_DIR, WORD_LENGTH


ABSENT = 0
PRESENT = 1
CORRECT = 2

N_PATTERNS = 3**WORD_LENGTH
ALL_CORRECT = N_PATTERNS - 1

CACHE_PATH = DATA_DIR / "score_cache.npz"

_MARK_CHARS = {ABSENT: ".", PRESENT: "y", CORRECT: "G"}


def score(guess, secret) -> tuple:
    """
    Feedback marks for a (guess, secret) pair.

    Duplicate letters follow the standard rules:

    1. First mark correct letters (right letter, right position).
       Each one consumes one instance of that letter from the secret.

    2. Then mark present letters only while unused instances of that
       letter remain in the secret; everything else is absent.
    """
    marks = [ABSENT] * WORD_LENGTH
    counts = Counter(secret)

    for i in range(WORD_LENGTH):
        if guess[i] == secret[i]:
            marks[i] = CORRECT
            counts[guess[i]] -= 1

    for i in range(WORD_LENGTH):
        if marks[i] == ABSENT and counts[guess[i]] > 0:
            marks[i] = PRESENT
            counts[guess[i]] -= 1

    return tuple(marks)


def encode_pattern(marks) -> int:
    code = 0
    for mark in reversed(marks):
        code = code * 3 + mark
    return code


def decode_pattern(code: int) -> tuple:
    if not 0 <= code < N_PATTERNS:
        raise ValueError(f"pattern code out of range: {code}")
    marks = []
    for _ in range(WORD_LENGTH):
        code, mark = divmod(code, 3)
        marks.append(mark)
    return tuple(marks)


def format_pattern(pattern) -> str:
    """Render a pattern (marks or code) as e.g. 'Gy..G'."""
    if not isinstance(pattern, tuple):
        pattern = decode_pattern(int(pattern))
    return "".join(_MARK_CHARS[mark] for mark in pattern)


def score_code(guess, secret) -> int:
    return encode_pattern(score(guess, secret))


def word_array(words) -> np.ndarray:
    """Stack 5-byte words into a (n, 5) uint8 array."""
    return np.frombuffer(b"".join(words), dtype=np.uint8).reshape(-1, WORD_LENGTH)


@njit(cache=True)
def _score_row(guess, secrets, out):
    # Same two passes as score(), over one guess and many secrets.
    counts = np.zeros(256, dtype=np.int32)
    marks = np.zeros(WORD_LENGTH, dtype=np.uint8)

    for j in range(secrets.shape[0]):
        for k in range(WORD_LENGTH):
            counts[guess[k]] = 0
            counts[secrets[j, k]] = 0
        for k in range(WORD_LENGTH):
            counts[secrets[j, k]] += 1
            marks[k] = 0

        for k in range(WORD_LENGTH):
            if guess[k] == secrets[j, k]:
                marks[k] = 2
                counts[guess[k]] -= 1

        for k in range(WORD_LENGTH):
            if marks[k] == 0 and counts[guess[k]] > 0:
                marks[k] = 1
                counts[guess[k]] -= 1

        code = 0
        power = 1
        for k in range(WORD_LENGTH):
            code += marks[k] * power
            power *= 3
        out[j] = code


def iter_pattern_rows(guesses, secrets, cache=None):
    """
    Yield (guess, codes) pairs where codes[j] is the pattern of guess
    against secrets[j].

    Rows come from the cache when it holds the guess and every secret, and
    are scored directly otherwise.
    """
    secret_idx = cache.indices(secrets) if cache is not None else None
    secret_chars = None

    for guess in guesses:
        guess_idx = cache.index.get(guess) if secret_idx is not None else None
        if guess_idx is not None:
            yield guess, cache.matrix[guess_idx, secret_idx]
            continue

        if secret_chars is None:
            secret_chars = word_array(secrets)
        codes = np.empty(len(secret_chars), dtype=np.uint8)
        _score_row(word_array([guess])[0], secret_chars, codes)
        yield guess, codes


def pattern_codes(guess, secrets, cache=None) -> np.ndarray:
    """Patterns of one guess against every word in secrets, as uint8 codes."""
    for _, codes in iter_pattern_rows([guess], secrets, cache):
        return codes


def vocabulary_fingerprint(words) -> str:
    digest = hashlib.sha256()
    digest.update(str(len(words)).encode("ascii"))
    for word in words:
        digest.update(word)
    return digest.hexdigest()


class ScoreCache:
    """Immutable guess x secret pattern matrix over one ordered vocabulary."""

    def __init__(self, words, matrix):
        words = list(words)
        matrix = np.asarray(matrix, dtype=np.uint8)
        if matrix.shape != (len(words), len(words)):
            raise CacheError(
                f"score matrix shape {matrix.shape} does not match "
                f"vocabulary size {len(words)}"
            )
        matrix.flags.writeable = False

        self.words = words
        self.matrix = matrix
        self.index = {word: i for i, word in enumerate(words)}
        self.fingerprint = vocabulary_fingerprint(words)

    def __len__(self):
        return len(self.words)

    @classmethod
    def build(cls, vocabulary, progress=None):
        """
        Compute the full pattern matrix from scratch.

        This is the most expensive step, O(n^2) pattern evaluations, but it
        only needs to be done once per word list. ``progress`` is called with
        the number of completed rows after each row.
        """
        words = list(vocabulary)
        chars = word_array(words)
        matrix = np.zeros((len(words), len(words)), dtype=np.uint8)

        for i in range(len(words)):
            _score_row(chars[i], chars, matrix[i])
            if progress is not None:
                progress(i + 1)

        return cls(words, matrix)

    def lookup(self, guess_index: int, secret_index: int) -> int:
        return int(self.matrix[guess_index, secret_index])

    def index_of(self, word) -> int:
        try:
            return self.index[word]
        except KeyError as exc:
            raise KeyError(f"word not in cache vocabulary: {word!r}") from exc

    def indices(self, words):
        """Vocabulary indices of words, or None if any word is missing."""
        idx = np.empty(len(words), dtype=np.intp)
        for n, word in enumerate(words):
            i = self.index.get(word)
            if i is None:
                return None
            idx[n] = i
        return idx

    def matches(self, vocabulary) -> bool:
        words = list(vocabulary)
        return len(words) == len(self.words) and (
            vocabulary_fingerprint(words) == self.fingerprint
        )

    def save(self, path=CACHE_PATH):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            np.savez(
                f,
                matrix=self.matrix,
                dimension=np.int64(len(self.words)),
                words=np.array(self.words, dtype=f"S{WORD_LENGTH}"),
                fingerprint=np.array(self.fingerprint),
            )

    @classmethod
    def load(cls, path=CACHE_PATH):
        """
        Read a saved cache. Raises CacheError if the payload is unreadable or
        internally inconsistent; FileNotFoundError if there is no file.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)

        try:
            with np.load(path, allow_pickle=False) as data:
                matrix = np.array(data["matrix"])
                dimension = int(data["dimension"])
                words = [bytes(w) for w in data["words"]]
                fingerprint = str(data["fingerprint"])
        except (OSError, ValueError, KeyError, EOFError, zipfile.BadZipFile) as exc:
            raise CacheError(f"cannot read score cache {path}: {exc}") from exc

        if matrix.ndim != 2 or matrix.shape != (dimension, dimension):
            raise CacheError(
                f"score cache {path} has shape {matrix.shape}, expected "
                f"({dimension}, {dimension})"
            )
        if len(words) != dimension:
            raise CacheError(
                f"score cache {path} stores {len(words)} words for dimension {dimension}"
            )

        cache = cls(words, matrix)
        if cache.fingerprint != fingerprint:
            raise CacheError(f"score cache {path} fingerprint does not match its words")
        return cache


def load_or_build_cache(vocabulary, path=CACHE_PATH, progress=None) -> ScoreCache:
    """
    Load a previously built score cache if it matches the current vocabulary.

    If the file is missing, unreadable, or was built from a different word
    list (size or fingerprint differ), it is rebuilt and saved.
    """
    vocabulary = list(vocabulary)

    try:
        cache = ScoreCache.load(path)
    except FileNotFoundError:
        print("No score cache found. Building.")
    except CacheError as exc:
        print(f"{exc}. Rebuilding.")
    else:
        if cache.matches(vocabulary):
            print("Loaded compatible score cache from disk.")
            return cache
        print("Score cache was built from a different word list. Rebuilding.")

    print(f"Building score cache ({len(vocabulary)} x {len(vocabulary)})...")
    cache = ScoreCache.build(vocabulary, progress=progress)
    cache.save(path)
    print("Score cache saved to disk.")
    return cache
