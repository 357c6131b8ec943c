"""
Pairwise Global Sequence Alignment
Needleman-Wunsch with a linear gap penalty and a caller-supplied similarity
"""

from __future__ import annotations

import asyncio
import logging
import numbers
import os
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import (Callable, Iterable, Iterator, List, Optional, Sequence,
                    Tuple, TypeVar, Union)

import numpy as np

from .errors import ScoreOverflowError, SimilarityError, TracebackError
from .formatting import format_alignment, format_row
from .substitution import SubstitutionMatrix, get_substitution_matrix

logger = logging.getLogger(__name__)

T = TypeVar("T")
SimilarityFunction = Callable[[T, T], int]
AlignedRow = List[Optional[T]]

DEFAULT_GAP_PENALTY = -8

_INT64_MAX = int(np.iinfo(np.int64).max)

DIAGONAL, UP, LEFT = "diag", "up", "left"


# =========================
# Input checks
# =========================

def _check_gap_penalty(gap_penalty, warn: bool = True) -> int:
    if isinstance(gap_penalty, bool) or not isinstance(gap_penalty, numbers.Integral):
        raise TypeError(f"gap_penalty must be an integer, got {gap_penalty!r}")
    gap_penalty = int(gap_penalty)
    if warn and gap_penalty > 0:
        warnings.warn(
            f"Positive gap penalty ({gap_penalty}) rewards every gap column",
            UserWarning,
            stacklevel=3,
        )
    return gap_penalty


def _score(similarity: SimilarityFunction, a, b) -> int:
    value = similarity(a, b)
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise SimilarityError(a, b, value)
    value = int(value)
    if abs(value) > _INT64_MAX // 2:
        raise ScoreOverflowError(abs(value))
    return value


def _check_overflow(gap_penalty: int, max_similarity: int, n: int, m: int) -> None:
    # the running-maximum fill briefly holds values up to twice this bound
    bound = abs(gap_penalty) * max(n, m) + (n + m) * max_similarity
    if 2 * bound > _INT64_MAX:
        raise ScoreOverflowError(bound, n, m)


# =========================
# Matrix construction & fill
# =========================

def _similarity_row(a, second: Sequence, similarity: SimilarityFunction) -> np.ndarray:
    return np.fromiter(
        (_score(similarity, a, b) for b in second),
        dtype=np.int64,
        count=len(second),
    )


def _iter_rows(
    first: Sequence,
    second: Sequence,
    similarity: SimilarityFunction,
    gap_penalty: int,
) -> Iterator[np.ndarray]:
    """
    Yield the rows of the score matrix, row 0 first.

    Only the previous row is kept, so callers that need the final score
    alone run in O(len(second)) memory.
    """
    n, m = len(first), len(second)
    _check_overflow(gap_penalty, 0, n, m)

    # offsets[j] == gap_penalty * j, which is also row 0
    offsets = gap_penalty * np.arange(m + 1, dtype=np.int64)
    row = offsets.copy()
    yield row

    max_similarity = 0
    for i in range(1, n + 1):
        sims = _similarity_row(first[i - 1], second, similarity)
        if m:
            max_similarity = max(max_similarity, int(np.abs(sims).max()))
            _check_overflow(gap_penalty, max_similarity, n, m)

        best = np.empty_like(row)
        best[0] = gap_penalty * i
        # diagonal vs. up; the left neighbour is folded in below
        np.maximum(row[:-1] + sims, row[1:] + gap_penalty, out=best[1:])
        # row[j] = max(best[j], row[j-1] + gap) == gap*j + max_{k<=j}(best[k] - gap*k)
        row = np.maximum.accumulate(best - offsets) + offsets
        yield row


def _score_matrix(first, second, similarity, gap_penalty: int) -> np.ndarray:
    n, m = len(first), len(second)
    matrix = np.empty((n + 1, m + 1), dtype=np.int64)
    for i, row in enumerate(_iter_rows(first, second, similarity, gap_penalty)):
        matrix[i] = row
    logger.debug("Filled %d x %d score matrix, optimum %d", n + 1, m + 1, matrix[n, m])
    return matrix


def _final_score(first, second, similarity, gap_penalty: int) -> int:
    row = None
    for row in _iter_rows(first, second, similarity, gap_penalty):
        pass
    return int(row[-1])


def score_matrix(
    first: Sequence[T],
    second: Sequence[T],
    similarity: SimilarityFunction,
    gap_penalty: int,
) -> np.ndarray:
    """
    Build and fill the Needleman-Wunsch score matrix.

    Parameters:
    -----------
    first, second : sequence
        Indexable sequences of symbols; never modified.
    similarity : callable
        ``similarity(a, b) -> int`` for every pair drawn from first x second.
    gap_penalty : int
        Score added for every gap column (usually negative).

    Returns:
    --------
    np.ndarray
        ``(len(first) + 1, len(second) + 1)`` int64 matrix where cell
        ``(i, j)`` is the best score of ``first[:i]`` against ``second[:j]``.
    """
    gap_penalty = _check_gap_penalty(gap_penalty)
    return _score_matrix(first, second, similarity, gap_penalty)


# =========================
# Traceback
# =========================

def _walk(matrix, first, second, similarity, gap_penalty: int) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(i, j, move)`` from ``(n, m)`` back to the origin; diagonal wins ties, then up."""
    i, j = len(first), len(second)
    while i > 0 or j > 0:
        current = matrix[i, j]
        if i > 0 and j > 0 and \
                current == matrix[i - 1, j - 1] + _score(similarity, first[i - 1], second[j - 1]):
            yield i, j, DIAGONAL
            i -= 1
            j -= 1
        elif i > 0 and current == matrix[i - 1, j] + gap_penalty:
            yield i, j, UP
            i -= 1
        elif j > 0:
            yield i, j, LEFT
            j -= 1
        else:
            raise TracebackError(i, j)


def _traceback(matrix, first, second, similarity, gap_penalty: int) -> Tuple[AlignedRow, AlignedRow]:
    aligned1: AlignedRow = []
    aligned2: AlignedRow = []

    for i, j, move in _walk(matrix, first, second, similarity, gap_penalty):
        if move == DIAGONAL:
            aligned1.append(first[i - 1])
            aligned2.append(second[j - 1])
        elif move == UP:
            aligned1.append(first[i - 1])
            aligned2.append(None)
        else:
            aligned1.append(None)
            aligned2.append(second[j - 1])

    # collected from the end of the alignment backwards
    aligned1.reverse()
    aligned2.reverse()
    return aligned1, aligned2


def _check_matrix(matrix, first, second) -> np.ndarray:
    matrix = np.asarray(matrix)
    expected = (len(first) + 1, len(second) + 1)
    if matrix.shape != expected:
        raise ValueError(f"score matrix has shape {matrix.shape}, expected {expected}")
    return matrix


def traceback(
    matrix: np.ndarray,
    first: Sequence[T],
    second: Sequence[T],
    similarity: SimilarityFunction,
    gap_penalty: int,
) -> Tuple[AlignedRow, AlignedRow]:
    """
    Rebuild one optimal alignment from a filled score matrix.

    Moves are tested in the fixed order diagonal, up (gap in ``second``),
    left (gap in ``first``); the first one that reproduces the cell score
    is taken. Gaps are ``None`` in the returned rows.
    """
    matrix = _check_matrix(matrix, first, second)
    gap_penalty = _check_gap_penalty(gap_penalty, warn=False)
    return _traceback(matrix, first, second, similarity, gap_penalty)


def traceback_path(
    matrix: np.ndarray,
    first: Sequence[T],
    second: Sequence[T],
    similarity: SimilarityFunction,
    gap_penalty: int,
) -> List[Tuple[int, int]]:
    """Cells visited by the traceback, from ``(n, m)`` down to ``(0, 0)``."""
    matrix = _check_matrix(matrix, first, second)
    gap_penalty = _check_gap_penalty(gap_penalty, warn=False)
    path = [(i, j) for i, j, _ in _walk(matrix, first, second, similarity, gap_penalty)]
    path.append((0, 0))
    return path


# =========================
# Public entry points
# =========================

def align(
    first: Sequence[T],
    second: Sequence[T],
    similarity: SimilarityFunction,
    gap_penalty: int,
) -> Tuple[AlignedRow, AlignedRow]:
    """
    Optimal global alignment of ``first`` and ``second``.

    Returns two rows of equal length; each position holds a symbol of the
    corresponding input or ``None`` for a gap.

    >>> align("AC", "A", lambda a, b: 1 if a == b else -1, -1)
    (['A', 'C'], ['A', None])
    """
    gap_penalty = _check_gap_penalty(gap_penalty)
    matrix = _score_matrix(first, second, similarity, gap_penalty)
    return _traceback(matrix, first, second, similarity, gap_penalty)


def alignment_score(
    alignment_a: Sequence[Optional[T]],
    alignment_b: Sequence[Optional[T]],
    similarity: SimilarityFunction,
    gap_penalty: int,
) -> int:
    """Sum of column scores of a finished alignment."""
    if len(alignment_a) != len(alignment_b):
        raise ValueError("alignment rows differ in length")
    gap_penalty = _check_gap_penalty(gap_penalty, warn=False)

    total = 0
    for col, (a, b) in enumerate(zip(alignment_a, alignment_b)):
        if a is None and b is None:
            raise ValueError(f"column {col} is a gap in both rows")
        if a is None or b is None:
            total += gap_penalty
        else:
            total += _score(similarity, a, b)
    return total


@dataclass
class AlignmentResult:
    """Store a global alignment and the inputs it came from"""
    alignment_a: AlignedRow
    alignment_b: AlignedRow
    score: int
    first: Sequence
    second: Sequence

    def __len__(self) -> int:
        return len(self.alignment_a)

    def __str__(self) -> str:
        return (
            f"Alignment Score: {self.score}\n"
            f"Length: {len(self)}\n"
            f"Identity: {self.identity:.2%}\n"
            f"Gaps: {self.gaps}\n"
        )

    @property
    def gaps(self) -> int:
        return self.alignment_a.count(None) + self.alignment_b.count(None)

    @property
    def identity(self) -> float:
        return self.nmatch() / len(self) if len(self) > 0 else 0.0

    def nmatch(self) -> int:
        """Number of columns holding the same symbol in both rows"""
        return sum(1 for a, b in zip(self.alignment_a, self.alignment_b)
                   if a is not None and a == b)

    def to_strings(self, gap_char: str = "-", symbol_to_str=str) -> Tuple[str, str]:
        return (
            format_row(self.alignment_a, gap_char, symbol_to_str),
            format_row(self.alignment_b, gap_char, symbol_to_str),
        )

    def view(self, width: int = 60, gap_char: str = "-") -> None:
        """Print the alignment in blocks with a match line"""
        print(str(self))
        print(format_alignment(self.alignment_a, self.alignment_b, width=width, gap_char=gap_char))


class GlobalAligner:
    """Needleman-Wunsch aligner bound to one similarity and gap penalty"""

    def __init__(
        self,
        similarity: SimilarityFunction,
        gap_penalty: int = DEFAULT_GAP_PENALTY,
        verbose: bool = False,
    ):
        """
        Parameters:
        -----------
        similarity : callable
            ``similarity(a, b) -> int``; a SubstitutionMatrix works here.
        gap_penalty : int
            Linear gap penalty applied to every gap column (default -8)
        verbose : bool
            Print progress for every alignment
        """
        if not callable(similarity):
            raise TypeError("similarity must be callable as similarity(a, b) -> int")
        self.similarity = similarity
        self.gap_penalty = _check_gap_penalty(gap_penalty)
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"GlobalAligner(similarity={self.similarity!r}, gap_penalty={self.gap_penalty})"

    def score(self, first: Sequence[T], second: Sequence[T]) -> int:
        """Optimal score only, two rows of memory"""
        return _final_score(first, second, self.similarity, self.gap_penalty)

    def align(
        self,
        first: Sequence[T],
        second: Sequence[T],
        score_only: bool = False,
    ) -> Union[AlignmentResult, int]:
        """
        Align two sequences.

        Parameters:
        -----------
        first, second : sequence
            Symbols to align
        score_only : bool
            If True, return only the optimal score (computed in linear memory)

        Returns:
        --------
        AlignmentResult or int
        """
        if self.verbose:
            print("\n" + "=" * 70)
            print("GLOBAL ALIGNMENT (Needleman-Wunsch)")
            print("=" * 70)
            print(f"Lengths: {len(first)} x {len(second)}, gap penalty {self.gap_penalty}")

        if score_only:
            score = self.score(first, second)
            if self.verbose:
                print(f"Final score: {score}")
            return score

        matrix = _score_matrix(first, second, self.similarity, self.gap_penalty)
        score = int(matrix[-1, -1])
        if self.verbose:
            print(f"✓ Score matrix filled: {matrix.shape[0]} x {matrix.shape[1]}")

        aligned1, aligned2 = _traceback(matrix, first, second, self.similarity, self.gap_penalty)
        result = AlignmentResult(
            alignment_a=aligned1,
            alignment_b=aligned2,
            score=score,
            first=first,
            second=second,
        )

        if self.verbose:
            print(f"✓ Traceback complete! Alignment length: {len(result)}")
            print(f"Score: {score}, identity {result.identity:.2%}, gaps {result.gaps}")
            print("=" * 70 + "\n")

        return result


# --------- batch / async helpers ---------

def align_many(
    pairs: Iterable[Tuple[Sequence[T], Sequence[T]]],
    similarity: SimilarityFunction,
    gap_penalty: int = DEFAULT_GAP_PENALTY,
    n_jobs: Optional[int] = None,
) -> List[AlignmentResult]:
    """
    Align many independent pairs in a thread pool; results keep input order.

    n_jobs : None/0 = all CPUs, 1 = sequential in the calling thread.
    """
    aligner = GlobalAligner(similarity, gap_penalty)
    pairs = list(pairs)
    if n_jobs is None or n_jobs <= 0:
        n_jobs = os.cpu_count() or 1

    if n_jobs == 1 or len(pairs) < 2:
        return [aligner.align(a, b) for a, b in pairs]

    with ThreadPoolExecutor(max_workers=min(n_jobs, len(pairs))) as ex:
        return list(ex.map(lambda pair: aligner.align(*pair), pairs))


async def align_async(
    first: Sequence[T],
    second: Sequence[T],
    similarity: SimilarityFunction,
    gap_penalty: int = DEFAULT_GAP_PENALTY,
) -> AlignmentResult:
    """
    Async version: runs the alignment in the loop's default executor.
    (Does not speed anything up; keeps the event loop responsive.)
    """
    aligner = GlobalAligner(similarity, gap_penalty)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, aligner.align, first, second)


# MAIN CONVENIENCE FUNCTION
def pairwise(
    seq1: str,
    seq2: str,
    gap_penalty: int = DEFAULT_GAP_PENALTY,
    substitution_matrix: Union[str, SubstitutionMatrix] = "BLOSUM50",
    verbose: bool = False,
) -> AlignmentResult:
    """
    Global alignment of two residue strings.

    Parameters:
    -----------
    seq1, seq2 : str
        Sequences; upper-cased before alignment
    gap_penalty : int
        Linear gap penalty (default -8)
    substitution_matrix : str or SubstitutionMatrix
        Built-in matrix name (default "BLOSUM50") or a matrix object
    verbose : bool
        Show progress (default False)

    Examples:
    ---------
    >>> result = pairwise("PAWHEAE", "HEAGAWGHEE")
    >>> result.to_strings()
    ('--P-AW-HEAE', 'HEAGAWGHE-E')
    >>> result.score
    1
    """
    if isinstance(substitution_matrix, str):
        substitution_matrix = get_substitution_matrix(substitution_matrix)

    aligner = GlobalAligner(substitution_matrix, gap_penalty, verbose=verbose)
    return aligner.align(seq1.upper(), seq2.upper())
