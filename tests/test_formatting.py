import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from NWAlign.seq_alignment import (  # noqa: E402
    format_alignment,
    format_row,
    match_line,
    plot_score_matrix,
    score_matrix,
    traceback_path,
)


def test_format_row() -> None:
    assert format_row(["P", None, "W"]) == "P-W"
    assert format_row([None, "A"], gap_char="~") == "~A"
    assert format_row([]) == ""


def test_format_row_custom_symbols() -> None:
    assert format_row([1, None, 22], symbol_to_str=lambda x: chr(ord("a") + x % 26)) == "b-w"


def test_match_line(golden) -> None:
    row_a = [None if c == "-" else c for c in golden["row_a"]]
    row_b = [None if c == "-" else c for c in golden["row_b"]]

    assert match_line(row_a, row_b) == "  . || || |"


def test_format_alignment_blocks(golden) -> None:
    row_a = [None if c == "-" else c for c in golden["row_a"]]
    row_b = [None if c == "-" else c for c in golden["row_b"]]

    out = format_alignment(row_a, row_b, width=5)
    lines = out.splitlines()

    assert len(out.split("\n\n")) == 3
    assert lines[0] == "first:  --P-A"
    assert lines[1] == "          . |"
    assert lines[2] == "second: HEAGA"


def test_format_alignment_tokens() -> None:
    out = format_alignment(["the", "quick", "fox"], ["the", None, "fox"],
                           labels=("a", "b"))
    lines = out.splitlines()

    assert lines[0] == "a: the   quick fox"
    assert lines[2] == "b: the   -     fox"


def test_format_alignment_rejects_ragged_rows() -> None:
    with pytest.raises(ValueError):
        format_alignment(["A"], ["A", "C"])


def test_plot_score_matrix(golden, blosum50) -> None:
    matrix = score_matrix(golden["first"], golden["second"], blosum50, -8)
    path = traceback_path(matrix, golden["first"], golden["second"], blosum50, -8)

    fig = plot_score_matrix(matrix, golden["first"], golden["second"], path=path, title="PAWHEAE")
    ax = fig.axes[0]

    assert len(ax.lines) == 2
    assert [t.get_text() for t in ax.get_xticklabels()][:3] == ["-", "H", "E"]
    assert ax.get_title() == "PAWHEAE"
    # one annotation per cell
    assert len(ax.texts) == matrix.size
    plt.close(fig)


def test_plot_large_matrix_skips_annotations(dna_matrix) -> None:
    matrix = score_matrix("ACGT" * 6, "TGCA" * 6, dna_matrix, -1)

    fig = plot_score_matrix(matrix)
    assert len(fig.axes[0].texts) == 0
    plt.close(fig)
