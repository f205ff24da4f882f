from __future__ import annotations

import pytest

from svg_path_transform import SvgPath
from svg_path_transform.path_parser import ParseErrorKind, PathParseError, PathParser


def _error(path: str) -> PathParseError:
    with pytest.raises(PathParseError) as info:
        PathParser.parse(path)
    return info.value


def test_empty() -> None:
    """An empty or blank string is an empty path."""
    assert PathParser.parse("") == []
    assert PathParser.parse("   ") == []
    assert str(SvgPath("")) == ""


def test_move_to() -> None:
    """``m`` command parsing; the first move is reported as absolute."""
    assert PathParser.parse("m 10 20") == [["M", "10", "20"]]
    assert PathParser.parse("M 10 20 m 1 2") == [["M", "10", "20"], ["m", "1", "2"]]


def test_overloaded_move_to() -> None:
    """Implicit lines following a move keep the move's case."""
    assert PathParser.parse("m 12.5,52 39,0 0,-40 z") == [
        ["M", "12.5", "52"],
        ["l", "39", "0"],
        ["l", "0", "-40"],
        ["z"],
    ]
    assert str(SvgPath("M 0 0 100 100")) == "M0 0L100 100"
    assert str(SvgPath("m 0 0 100 100")) == "M0 0l100 100"


def test_repeated_parameters() -> None:
    """Repeated parameter groups split into segments of the same command."""
    a = PathParser.parse("m0 0c 50,0 50,100 100,100 50,0 50,-100 100,-100")
    b = PathParser.parse("m0 0c 50,0 50,100 100,100 c 50,0 50,-100 100,-100")
    assert a == [
        ["M", "0", "0"],
        ["c", "50", "0", "50", "100", "100", "100"],
        ["c", "50", "0", "50", "-100", "100", "-100"],
    ]
    assert a == b


def test_no_whitespace_between_numbers() -> None:
    """Signs and dots terminate the previous number."""
    assert PathParser.parse("M46-86") == [["M", "46", "-86"]]
    assert PathParser.parse("M.5.5") == [["M", ".5", ".5"]]


def test_catmull_rom() -> None:
    """``R``/``r`` keep all their parameters in one segment."""
    assert PathParser.parse("M 0 0 R 1 1 2 2 3 3 4 4") == [
        ["M", "0", "0"],
        ["R", "1", "1", "2", "2", "3", "3", "4", "4"],
    ]
    assert str(SvgPath("M 0 0 R 1 1 2 2")) == "M0 0R1 1 2 2"
    assert str(SvgPath("M 0 0 r 1 1 2 2")) == "M0 0r1 1 2 2"


def test_whitespace() -> None:
    """Line terminators and Unicode spaces separate tokens."""
    assert str(SvgPath("M0\r 0\n\u1680l2-3\nz")) == "M0 0l2-3z"
    assert str(SvgPath("\ufeffM\u30001\u20092")) == "M1 2"


def test_numbers() -> None:
    """Decimal and exponent notation."""
    assert str(SvgPath("M 0.0 0.0")) == "M0 0"
    assert str(SvgPath("M 1e2 1e+2")) == "M100 100"
    assert str(SvgPath("M +1e2 1e-2")) == "M100 0.01"
    assert str(SvgPath("M 0.1e-2 .1e-2")) == "M0.001 0.001"
    assert str(SvgPath("M 1.e3 0")) == "M1000 0"


def test_bad_command() -> None:
    """Unknown command letters and numbers in command position."""
    for path, offset in [("0", 0), ("U", 0), ("M0 0G 1", 4)]:
        error = _error(path)
        assert error.kind is ParseErrorKind.BAD_COMMAND
        assert error.offset == offset
    assert str(_error("M0 0G 1")) == "bad command G (at pos 4)"


def test_missing_initial_move() -> None:
    """A path must start with ``M``/``m``."""
    error = _error("z")
    assert error.kind is ParseErrorKind.MISSING_INITIAL_MOVE
    assert error.offset == 0

    with pytest.raises(ValueError, match="should start with 'M' or 'm'"):
        SvgPath("l 1 1")


def test_param_errors() -> None:
    """Malformed parameters report the exact offset."""
    cases = [
        ("M+", ParseErrorKind.PARAM_MUST_START_WITH_DIGIT_OR_DOT, 2),
        ("M00", ParseErrorKind.ILLEGAL_LEADING_ZERO, 1),
        ("M0e", ParseErrorKind.INVALID_EXPONENT, 3),
        ("M0 .e3", ParseErrorKind.INVALID_EXPONENT, 4),
        ("M. .", ParseErrorKind.PARAM_MUST_START_WITH_DIGIT_OR_DOT, 2),
        ("M-. 1", ParseErrorKind.PARAM_MUST_START_WITH_DIGIT_OR_DOT, 3),
        ("M1 2L. 3", ParseErrorKind.PARAM_MUST_START_WITH_DIGIT_OR_DOT, 6),
        ("M0", ParseErrorKind.MISSING_PARAM, 2),
        ("M0,0,", ParseErrorKind.MISSING_PARAM, 5),
        ("m0 0l 10 10 0", ParseErrorKind.MISSING_PARAM, 13),
    ]
    for path, kind, offset in cases:
        error = _error(path)
        assert error.kind is kind, path
        assert error.offset == offset, path


def test_compact_arc_flags_rejected() -> None:
    """Arc flags need separators, ``01`` is a number with a leading zero."""
    error = _error("M0 0A1 1 0 01 1 1")
    assert error.kind is ParseErrorKind.ILLEGAL_LEADING_ZERO
    assert error.offset == 11
