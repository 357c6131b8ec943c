"""
Text and figure rendering of alignments and score matrices
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

GAP_CHAR = "-"


# ---------- text ----------
def format_row(row: Sequence, gap_char: str = GAP_CHAR,
               symbol_to_str: Callable = str) -> str:
    """
    Render one aligned row, ``None`` -> ``gap_char``.

    >>> format_row(["P", None, "W"])
    'P-W'
    """
    return "".join(gap_char if sym is None else symbol_to_str(sym) for sym in row)


def match_line(alignment_a: Sequence, alignment_b: Sequence) -> str:
    """``|`` identical, ``.`` substitution, space where either row has a gap"""
    out = []
    for a, b in zip(alignment_a, alignment_b):
        if a is None or b is None:
            out.append(" ")
        elif a == b:
            out.append("|")
        else:
            out.append(".")
    return "".join(out)


def _cells(row: Sequence, gap_char: str, symbol_to_str: Callable) -> List[str]:
    return [gap_char if sym is None else symbol_to_str(sym) for sym in row]


def format_alignment(
    alignment_a: Sequence,
    alignment_b: Sequence,
    width: int = 60,
    gap_char: str = GAP_CHAR,
    symbol_to_str: Callable = str,
    labels: Tuple[str, str] = ("first", "second"),
) -> str:
    """
    Blocked three-line view of an alignment.

    Symbols rendering wider than one character (tokens, words) are padded
    to a common column width and separated by spaces.
    """
    if len(alignment_a) != len(alignment_b):
        raise ValueError("alignment rows differ in length")
    if width <= 0:
        raise ValueError("width must be positive")

    top = _cells(alignment_a, gap_char, symbol_to_str)
    bottom = _cells(alignment_b, gap_char, symbol_to_str)
    marks = list(match_line(alignment_a, alignment_b))

    col = max((len(c) for c in top + bottom), default=1)
    sep = "" if col == 1 else " "
    pad = max(len(labels[0]), len(labels[1])) + 2

    lines = []
    for start in range(0, len(top), width):
        end = min(start + width, len(top))
        a_block = sep.join(c.ljust(col) for c in top[start:end])
        m_block = sep.join(c.ljust(col) for c in marks[start:end])
        b_block = sep.join(c.ljust(col) for c in bottom[start:end])

        lines.append(f"{labels[0] + ':':<{pad}}{a_block.rstrip()}")
        lines.append(f"{'':<{pad}}{m_block.rstrip()}")
        lines.append(f"{labels[1] + ':':<{pad}}{b_block.rstrip()}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


# ---------- figures ----------
def plot_score_matrix(
    matrix,
    first: Optional[Sequence] = None,
    second: Optional[Sequence] = None,
    path: Optional[Sequence[Tuple[int, int]]] = None,
    figsize: Tuple[int, int] = (8, 6),
    cmap: str = "viridis",
    annotate: Optional[bool] = None,
    font_size: int = 8,
    title: Optional[str] = None,
):
    """
    Heatmap of a score matrix with an optional traceback path on top.

    - Row/column 0 are labelled with the gap glyph, then the input symbols.
    - ``annotate=None`` writes cell values only for matrices up to 400 cells.
    """
    import matplotlib.pyplot as plt

    matrix = np.asarray(matrix)
    rows, cols = matrix.shape
    fig, ax = plt.subplots(figsize=figsize)

    im = ax.imshow(matrix, cmap=cmap, aspect="auto")
    fig.colorbar(im, ax=ax, label="score")

    if first is not None:
        ax.set_yticks(range(rows))
        ax.set_yticklabels([GAP_CHAR] + [str(s) for s in first], fontsize=font_size)
    if second is not None:
        ax.set_xticks(range(cols))
        ax.set_xticklabels([GAP_CHAR] + [str(s) for s in second], fontsize=font_size)
    ax.xaxis.tick_top()

    if annotate is None:
        annotate = matrix.size <= 400
    if annotate:
        for i in range(rows):
            for j in range(cols):
                ax.text(j, i, str(matrix[i, j]), ha="center", va="center",
                        fontsize=font_size - 1, color="w")

    if path:
        ys, xs = zip(*path)
        ax.plot(xs, ys, "r-", lw=2)
        ax.plot(xs, ys, "ro", ms=3)

    if title:
        ax.set_title(title, fontsize=font_size + 2, fontweight="bold")

    plt.tight_layout()
    return fig
