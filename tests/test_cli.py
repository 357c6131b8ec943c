import pytest

from NWAlign.cli import main


def test_default_blosum50(capsys) -> None:
    assert main(["PAWHEAE", "HEAGAWGHEE"]) == 0

    out = capsys.readouterr().out
    assert out.splitlines() == ["Score: 1", "--P-AW-HEAE", "HEAGAWGHE-E"]


def test_lowercase_input_is_upper_cased(capsys) -> None:
    assert main(["pawheae", "heagawghee", "--gap", "-8"]) == 0

    assert capsys.readouterr().out.splitlines()[1] == "--P-AW-HEAE"


def test_score_only(capsys) -> None:
    assert main(["PAWHEAE", "HEAGAWGHEE", "--score-only"]) == 0

    assert capsys.readouterr().out.strip() == "1"


def test_match_mismatch(capsys) -> None:
    assert main(["AC", "A", "--match", "1", "--mismatch", "-1", "--gap", "-1"]) == 0

    assert capsys.readouterr().out.splitlines() == ["Score: 0", "AC", "A-"]


def test_gap_char_and_view(capsys) -> None:
    assert main(["PAWHEAE", "HEAGAWGHEE", "--view", "--gap-char", "."]) == 0

    out = capsys.readouterr().out
    assert "Alignment Score: 1" in out
    assert "first:  ..P.AW.HEAE" in out


def test_match_without_mismatch(capsys) -> None:
    assert main(["AC", "A", "--match", "1"]) == 1


def test_unknown_matrix() -> None:
    assert main(["PAW", "PAW", "--matrix", "PAM999"]) == 1


def test_symbol_outside_matrix() -> None:
    assert main(["PAWJ", "PAW"]) == 1


def test_missing_arguments() -> None:
    with pytest.raises(SystemExit):
        main(["PAW"])
