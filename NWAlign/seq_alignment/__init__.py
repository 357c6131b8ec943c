"""
Sequence Alignment Module
Global pairwise alignment (Needleman-Wunsch) with pluggable similarity
"""

from .errors import (
    AlignmentError,
    ScoreOverflowError,
    SimilarityError,
    TracebackError,
    UnknownSymbolError,
)
from .formatting import format_alignment, format_row, match_line, plot_score_matrix
from .pairwise import (
    DEFAULT_GAP_PENALTY,
    AlignmentResult,
    GlobalAligner,
    align,
    align_async,
    align_many,
    alignment_score,
    pairwise,
    score_matrix,
    traceback,
    traceback_path,
)
from .substitution import (
    AMINO_ACIDS,
    BLOSUM50,
    SubstitutionMatrix,
    available_matrices,
    get_substitution_matrix,
    make_match_matrix,
)

__all__ = [
    "AMINO_ACIDS",
    "BLOSUM50",
    "DEFAULT_GAP_PENALTY",
    "AlignmentError",
    "AlignmentResult",
    "GlobalAligner",
    "ScoreOverflowError",
    "SimilarityError",
    "SubstitutionMatrix",
    "TracebackError",
    "UnknownSymbolError",
    "align",
    "align_async",
    "align_many",
    "alignment_score",
    "available_matrices",
    "format_alignment",
    "format_row",
    "get_substitution_matrix",
    "make_match_matrix",
    "match_line",
    "pairwise",
    "plot_score_matrix",
    "score_matrix",
    "traceback",
    "traceback_path",
]
