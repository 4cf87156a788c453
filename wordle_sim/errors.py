"""
errors.py

Exception types shared by the loaders, the score cache and the solver loop.

Load errors are fatal and abort a run before any game is played. Cache errors
are raised by the cache loader and handled by rebuilding the cache. Invariant
errors mean the solver reached a state that consistent scoring cannot produce.
"""


class WordleSimError(Exception):
    """Base class for all errors raised by wordle_sim."""


class WordListError(WordleSimError, ValueError):
    """A word list file is missing or contains a malformed line."""


class CacheError(WordleSimError):
    """A persisted score cache cannot be read or does not fit the vocabulary."""


class InvariantError(WordleSimError, RuntimeError):
    """Internal consistency violation, e.g. an empty or zero-weight pool."""
