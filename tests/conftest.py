"""Shared fixtures for the NWAlign test-suite."""

import itertools

import numpy as np
import pytest

from NWAlign.seq_alignment import BLOSUM50, make_match_matrix


@pytest.fixture
def blosum50():
    return BLOSUM50


@pytest.fixture
def dna_matrix():
    """+1 match / -1 mismatch over ACGT."""
    return make_match_matrix("ACGT", 1, -1, name="dna")


@pytest.fixture
def golden():
    """PAWHEAE vs HEAGAWGHEE under BLOSUM50 with a gap penalty of -8."""
    return {
        "first": list("PAWHEAE"),
        "second": list("HEAGAWGHEE"),
        "gap_penalty": -8,
        "row_a": "--P-AW-HEAE",
        "row_b": "HEAGAWGHE-E",
        "score": 1,
        "matrix": np.array([
            [  0,  -8, -16, -24, -32, -40, -48, -56, -64, -72, -80],
            [ -8,  -2,  -9, -17, -25, -33, -41, -49, -57, -65, -73],
            [-16, -10,  -3,  -4, -12, -20, -28, -36, -44, -52, -60],
            [-24, -18, -11,  -6,  -7, -15,  -5, -13, -21, -29, -37],
            [-32, -14, -18, -13,  -8,  -9, -13,  -7,  -3, -11, -19],
            [-40, -22,  -8, -16, -16,  -9, -12, -15,  -7,   3,  -5],
            [-48, -30, -16,  -3, -11, -11, -12, -12, -15,  -5,   2],
            [-56, -38, -24, -11,  -6, -12, -14, -15, -12,  -9,   1],
        ], dtype=np.int64),
    }


@pytest.fixture
def random_pairs():
    """Seeded DNA pairs of length 0..12, including empty sequences."""
    np.random.seed(42)
    pairs = [("", ""), ("", "ACG"), ("TTA", "")]
    for _ in range(40):
        n, m = np.random.randint(0, 13, size=2)
        first = "".join(np.random.choice(list("ACGT"), size=n))
        second = "".join(np.random.choice(list("ACGT"), size=m))
        pairs.append((first, second))
    return pairs


def enumerate_alignments(first, second):
    """Every global alignment of two (short) sequences, gaps as None."""
    if not first and not second:
        yield [], []
        return
    if first and second:
        for a, b in enumerate_alignments(first[1:], second[1:]):
            yield [first[0]] + a, [second[0]] + b
    if first:
        for a, b in enumerate_alignments(first[1:], second):
            yield [first[0]] + a, [None] + b
    if second:
        for a, b in enumerate_alignments(first, second[1:]):
            yield [None] + a, [second[0]] + b


@pytest.fixture
def all_alignments():
    return enumerate_alignments


@pytest.fixture
def tiny_pairs():
    """All pairs of DNA strings up to length 3 drawn from a small pool."""
    pool = ["", "A", "G", "AC", "GT", "AAG", "CTA", "GGC"]
    return list(itertools.product(pool, repeat=2))
