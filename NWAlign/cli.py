import argparse
import logging

from .seq_alignment import (
    AlignmentError,
    GlobalAligner,
    available_matrices,
    format_alignment,
    get_substitution_matrix,
    make_match_matrix,
)
from .seq_alignment.pairwise import DEFAULT_GAP_PENALTY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nwalign",
        description="Global pairwise alignment (Needleman-Wunsch, linear gap penalty)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nwalign PAWHEAE HEAGAWGHEE
  nwalign PAWHEAE HEAGAWGHEE --gap -8 --matrix BLOSUM50 --view
  nwalign GATTACA GCATGCU --match 1 --mismatch -1 --gap -1
        """,
    )

    parser.add_argument("first", help="First sequence")
    parser.add_argument("second", help="Second sequence")
    parser.add_argument(
        "--gap",
        type=int,
        default=DEFAULT_GAP_PENALTY,
        help=f"Linear gap penalty added per gap column (default: {DEFAULT_GAP_PENALTY})",
    )
    parser.add_argument(
        "--matrix",
        default="BLOSUM50",
        help=f"Substitution matrix name, one of {', '.join(available_matrices())} (default: BLOSUM50)",
    )
    parser.add_argument(
        "--match",
        type=int,
        default=None,
        help="Score for identical symbols; with --mismatch, replaces --matrix",
    )
    parser.add_argument(
        "--mismatch",
        type=int,
        default=None,
        help="Score for differing symbols (used together with --match)",
    )
    parser.add_argument(
        "--no-upper",
        action="store_true",
        help="Keep sequence case as given (default: upper-case both)",
    )
    parser.add_argument("--gap-char", default="-", help="Glyph printed for gaps (default: -)")
    parser.add_argument(
        "--view",
        action="store_true",
        help="Print a blocked view with a match line instead of the two bare rows",
    )
    parser.add_argument("--width", type=int, default=60, help="Columns per block for --view (default: 60)")
    parser.add_argument("--score-only", action="store_true", help="Print only the optimal score")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output (show debug information)",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    first, second = args.first, args.second
    if not args.no_upper:
        first, second = first.upper(), second.upper()

    if (args.match is None) != (args.mismatch is None):
        logging.error("Error: --match and --mismatch must be given together")
        return 1

    try:
        if args.match is not None:
            alphabet = sorted(set(first) | set(second))
            similarity = make_match_matrix(alphabet, args.match, args.mismatch)
        else:
            similarity = get_substitution_matrix(args.matrix)

        aligner = GlobalAligner(similarity, args.gap)
        logging.debug(f"Aligning {len(first)} x {len(second)} symbols with {aligner!r}")

        if args.score_only:
            print(aligner.score(first, second))
            return 0

        result = aligner.align(first, second)
    except (AlignmentError, ValueError) as e:
        logging.error(f"Error during alignment: {e}")
        return 1

    if args.view:
        print(str(result))
        print(format_alignment(result.alignment_a, result.alignment_b,
                               width=args.width, gap_char=args.gap_char))
    else:
        row_a, row_b = result.to_strings(args.gap_char)
        print(f"Score: {result.score}")
        print(row_a)
        print(row_b)
    return 0


if __name__ == "__main__":
    exit(main())
