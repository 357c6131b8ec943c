"""
Substitution matrices used as similarity functions for the aligner.

A matrix is just a callable (a, b) -> int; the aligner never looks
inside it, so any function with that shape works in its place.
"""

from __future__ import annotations
from typing import Dict, Iterable, Mapping, Tuple

import numpy as np

from .errors import UnknownSymbolError


AMINO_ACIDS = "ARNDCQEGHILKMFPSTWYVB"


class SubstitutionMatrix:
    """
    Square integer scoring table over an alphabet of symbols.

    Parameters:
    -----------
    alphabet : iterable
        Symbols, in row/column order. Duplicates are not allowed.
    scores : array-like
        len(alphabet) x len(alphabet) integer scores.
    name : str
        Label used in error messages and repr.
    """

    def __init__(self, alphabet: Iterable, scores, name: str = "custom"):
        self.alphabet = tuple(alphabet)
        self.name = name
        self.scores = np.asarray(scores, dtype=np.int64)

        k = len(self.alphabet)
        if len(set(self.alphabet)) != k:
            raise ValueError(f"{name}: alphabet contains duplicate symbols")
        if self.scores.shape != (k, k):
            raise ValueError(
                f"{name}: expected a {k}x{k} score table, got shape {self.scores.shape}"
            )
        self._index = {sym: i for i, sym in enumerate(self.alphabet)}

    @classmethod
    def from_dict(cls, table: Mapping[Tuple, int], name: str = "custom") -> "SubstitutionMatrix":
        """Build from a {(a, b): score} mapping (both orders needed unless symmetric)."""
        alphabet = []
        for a, b in table:
            for sym in (a, b):
                if sym not in alphabet:
                    alphabet.append(sym)
        k = len(alphabet)
        scores = np.zeros((k, k), dtype=np.int64)
        for i, a in enumerate(alphabet):
            for j, b in enumerate(alphabet):
                if (a, b) in table:
                    scores[i, j] = table[(a, b)]
                elif (b, a) in table:
                    scores[i, j] = table[(b, a)]
                else:
                    raise ValueError(f"{name}: no score for pair ({a!r}, {b!r})")
        return cls(alphabet, scores, name=name)

    def __call__(self, a, b) -> int:
        try:
            return int(self.scores[self._index[a], self._index[b]])
        except KeyError:
            missing = a if a not in self._index else b
            raise UnknownSymbolError(missing, self.name) from None

    def __contains__(self, symbol) -> bool:
        return symbol in self._index

    def __len__(self) -> int:
        return len(self.alphabet)

    def __repr__(self) -> str:
        return f"SubstitutionMatrix(name={self.name!r}, alphabet={''.join(map(str, self.alphabet))!r})"

    def is_symmetric(self) -> bool:
        return bool(np.array_equal(self.scores, self.scores.T))

    def max_abs_score(self) -> int:
        return int(np.abs(self.scores).max()) if self.scores.size else 0


def make_match_matrix(alphabet: Iterable, match_score: int, mismatch_score: int,
                      name: str = "match/mismatch") -> SubstitutionMatrix:
    """
    Matrix with match_score on the diagonal and mismatch_score elsewhere.

    >>> dna = make_match_matrix("ACGT", 1, -1)
    >>> dna("A", "A"), dna("A", "C")
    (1, -1)
    """
    alphabet = tuple(alphabet)
    k = len(alphabet)
    scores = np.full((k, k), mismatch_score, dtype=np.int64)
    np.fill_diagonal(scores, match_score)
    return SubstitutionMatrix(alphabet, scores, name=name)


# BLOSUM50, rows/columns in AMINO_ACIDS order (B = N or D)
BLOSUM50 = SubstitutionMatrix(AMINO_ACIDS, [
    [  5,  -2,  -1,  -2,  -1,  -1,  -1,   0,  -2,  -1,  -2,  -1,  -1,  -3,  -1,   1,   0,  -3,  -2,   0,  -2],  # A
    [ -2,   7,  -1,  -2,  -4,   1,   0,  -3,   0,  -4,  -3,   3,  -2,  -3,  -3,  -1,  -1,  -3,  -1,  -3,  -1],  # R
    [ -1,  -1,   7,   2,  -2,   0,   0,   0,   1,  -3,  -4,   0,  -2,  -4,  -2,   1,   0,  -4,  -2,  -3,   4],  # N
    [ -2,  -2,   2,   8,  -4,   0,   2,  -1,  -1,  -4,  -4,  -1,  -4,  -5,  -1,   0,  -1,  -5,  -3,  -4,   5],  # D
    [ -1,  -4,  -2,  -4,  13,  -3,  -3,  -3,  -3,  -2,  -2,  -3,  -2,  -2,  -4,  -1,  -1,  -5,  -3,  -1,  -3],  # C
    [ -1,   1,   0,   0,  -3,   7,   2,  -2,   1,  -3,  -2,   2,   0,  -4,  -1,   0,  -1,  -1,  -1,  -3,   0],  # Q
    [ -1,   0,   0,   2,  -3,   2,   6,  -3,   0,  -4,  -3,   1,  -2,  -3,  -1,  -1,  -1,  -3,  -2,  -3,   1],  # E
    [  0,  -3,   0,  -1,  -3,  -2,  -3,   8,  -2,  -4,  -4,  -2,  -3,  -4,  -2,   0,  -2,  -3,  -3,  -4,  -1],  # G
    [ -2,   0,   1,  -1,  -3,   1,   0,  -2,  10,  -4,  -3,   0,  -1,  -1,  -2,  -1,  -2,  -3,   2,  -4,   0],  # H
    [ -1,  -4,  -3,  -4,  -2,  -3,  -4,  -4,  -4,   5,   2,  -3,   2,   0,  -3,  -3,  -1,  -3,  -1,   4,  -4],  # I
    [ -2,  -3,  -4,  -4,  -2,  -2,  -3,  -4,  -3,   2,   5,  -3,   3,   1,  -4,  -3,  -1,  -2,  -1,   1,  -4],  # L
    [ -1,   3,   0,  -1,  -3,   2,   1,  -2,   0,  -3,  -3,   6,  -2,  -4,  -1,   0,  -1,  -3,  -2,  -3,   0],  # K
    [ -1,  -2,  -2,  -4,  -2,   0,  -2,  -3,  -1,   2,   3,  -2,   7,   0,  -3,  -2,  -1,  -1,   0,   1,  -3],  # M
    [ -3,  -3,  -4,  -5,  -2,  -4,  -3,  -4,  -1,   0,   1,  -4,   0,   8,  -4,  -3,  -2,   1,   4,  -1,  -4],  # F
    [ -1,  -3,  -2,  -1,  -4,  -1,  -1,  -2,  -2,  -3,  -4,  -1,  -3,  -4,  10,  -1,  -1,  -4,  -3,  -3,  -2],  # P
    [  1,  -1,   1,   0,  -1,   0,  -1,   0,  -1,  -3,  -3,   0,  -2,  -3,  -1,   5,   2,  -4,  -2,  -2,   0],  # S
    [  0,  -1,   0,  -1,  -1,  -1,  -1,  -2,  -2,  -1,  -1,  -1,  -1,  -2,  -1,   2,   5,  -3,  -2,   0,   0],  # T
    [ -3,  -3,  -4,  -5,  -5,  -1,  -3,  -3,  -3,  -3,  -2,  -3,  -1,   1,  -4,  -4,  -3,  15,   2,  -3,  -5],  # W
    [ -2,  -1,  -2,  -3,  -3,  -1,  -2,  -3,   2,  -1,  -1,  -2,   0,   4,  -3,  -2,  -2,   2,   8,  -1,  -3],  # Y
    [  0,  -3,  -3,  -4,  -1,  -3,  -3,  -4,  -4,   4,   1,  -3,   1,  -1,  -3,  -2,   0,  -3,  -1,   5,  -4],  # V
    [ -2,  -1,   4,   5,  -3,   0,   1,  -1,   0,  -4,  -4,   0,  -3,  -4,  -2,   0,   0,  -5,  -3,  -4,   5],  # B
], name="BLOSUM50")


_REGISTRY: Dict[str, SubstitutionMatrix] = {
    "BLOSUM50": BLOSUM50,
}


def get_substitution_matrix(name: str) -> SubstitutionMatrix:
    """Look up a built-in matrix by (case-insensitive) name."""
    try:
        return _REGISTRY[name.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown substitution matrix {name!r}; available: {', '.join(sorted(_REGISTRY))}"
        ) from None


def available_matrices() -> Tuple[str, ...]:
    return tuple(sorted(_REGISTRY))
