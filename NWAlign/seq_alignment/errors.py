"""Exceptions raised by the global alignment engine.

Every error carries a message plus an optional suggestion and context, so
callers (and the CLI) can print something actionable.
"""

from __future__ import annotations
from typing import Optional


class AlignmentError(Exception):
    """Base exception for all NWAlign errors.

    Args:
        message: What went wrong
        suggestion: What the caller should change
        context: Extra detail about the inputs involved

    Examples:
        >>> raise AlignmentError(
        ...     "Traceback failed",
        ...     suggestion="Recompute the score matrix",
        ...     context="cell (3, 0)"
        ... )
    """

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[str] = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context
        super().__init__(self.formatted())

    def formatted(self) -> str:
        """Full message with context and suggestion lines."""
        msg = f"[ERROR] {self.message}"

        if self.context:
            msg += f"\n  Context: {self.context}"

        if self.suggestion:
            msg += f"\n  Suggestion: {self.suggestion}"

        return msg

    def __str__(self) -> str:
        return self.formatted()


class SimilarityError(AlignmentError, TypeError):
    """The similarity function returned something that is not an integer."""

    def __init__(self, a, b, value):
        super().__init__(
            f"Similarity function returned a non-integer score: {value!r}",
            suggestion="Return an int (or numpy integer) for every symbol pair",
            context=f"similarity({a!r}, {b!r})",
        )
        self.pair = (a, b)
        self.value = value


class ScoreOverflowError(AlignmentError, OverflowError):
    """Scores could exceed the int64 range of the score matrix."""

    def __init__(self, bound: int, n: Optional[int] = None, m: Optional[int] = None):
        super().__init__(
            f"Alignment scores may reach {bound}, beyond the int64 range",
            suggestion="Use a smaller gap penalty, smaller scores or shorter sequences",
            context=f"sequence lengths {n} x {m}" if n is not None else None,
        )
        self.bound = bound


class TracebackError(AlignmentError):
    """The score matrix does not agree with the similarity/gap penalty used
    for traceback (usually an impure similarity function)."""

    def __init__(self, i: int, j: int):
        super().__init__(
            "No predecessor reproduces the score of this cell",
            suggestion="Make sure the similarity function is deterministic and "
                       "the matrix was built with the same gap penalty",
            context=f"cell ({i}, {j})",
        )
        self.cell = (i, j)


class UnknownSymbolError(AlignmentError, KeyError):
    """Symbol missing from a substitution matrix alphabet."""

    def __init__(self, symbol, matrix_name: str = "substitution matrix"):
        super().__init__(
            f"Symbol {symbol!r} is not in the {matrix_name} alphabet",
            suggestion="Check the input sequences or pick another matrix",
        )
        self.symbol = symbol
