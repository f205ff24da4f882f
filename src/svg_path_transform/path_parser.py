# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

from enum import Enum
from typing import Final

PARAM_COUNTS: Final[dict[str, int]] = {
    "a": 7,
    "c": 6,
    "h": 1,
    "l": 2,
    "m": 2,
    "r": 4,
    "q": 4,
    "s": 4,
    "t": 2,
    "v": 1,
    "z": 0,
}

_special_spaces: Final = frozenset(
    "\u1680\u180e\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u202f\u205f\u3000\ufeff"
)
_spaces: Final = frozenset("\n\r\u2028\u2029 \t\v\f\xa0") | _special_spaces
_digits: Final = frozenset("0123456789")
_digit_start: Final = _digits | frozenset("+-.")


class ParseErrorKind(Enum):
    """Reason a path string was rejected."""

    BAD_COMMAND = "bad command"
    MISSING_PARAM = "missed param"
    PARAM_MUST_START_WITH_DIGIT_OR_DOT = "param should start with 0..9 or '.'"
    ILLEGAL_LEADING_ZERO = "numbers started with '0' such as '09' are illegal"
    INVALID_EXPONENT = "invalid float exponent"
    MISSING_INITIAL_MOVE = "string should start with 'M' or 'm'"


class PathParseError(ValueError):
    """
    A path string could not be parsed.

    :ivar kind: The kind of error.
    :ivar offset: Character index the error refers to; ``0`` for a path that
                  does not start with a move.
    """

    def __init__(self, kind: ParseErrorKind, offset: int, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.offset = offset

    @staticmethod
    def at(kind: ParseErrorKind, offset: int, detail: str = "") -> PathParseError:
        """Error of ``kind`` located at ``offset``."""
        return PathParseError(kind, offset, f"{kind.value}{detail} (at pos {offset})")


class _State:
    def __init__(self, path: str) -> None:
        self.path = path
        self.index = 0
        self.result: list[list[str]] = []

    def char(self, index: int) -> str:
        return self.path[index] if index < len(self.path) else ""

    def skip_spaces(self) -> None:
        while self.index < len(self.path) and self.path[self.index] in _spaces:
            self.index += 1

    def scan_param(self) -> str:
        start = index = self.index

        if index >= len(self.path):
            raise PathParseError.at(ParseErrorKind.MISSING_PARAM, index)

        ch = self.char(index)
        if ch in ("+", "-"):
            index += 1
            ch = self.char(index)

        if ch not in _digits and ch != ".":
            raise PathParseError.at(
                ParseErrorKind.PARAM_MUST_START_WITH_DIGIT_OR_DOT, index
            )

        has_ceiling = has_decimal = has_dot = False

        if ch != ".":
            zero_first = ch == "0"
            index += 1
            has_ceiling = True
            ch = self.char(index)

            if zero_first and ch in _digits:
                raise PathParseError.at(ParseErrorKind.ILLEGAL_LEADING_ZERO, start)

            while ch in _digits:
                index += 1
                ch = self.char(index)

        if ch == ".":
            has_dot = True
            index += 1
            ch = self.char(index)
            while ch in _digits:
                has_decimal = True
                index += 1
                ch = self.char(index)

        # A lone dot has no digits at all
        if has_dot and not has_ceiling and not has_decimal and ch not in ("e", "E"):
            raise PathParseError.at(
                ParseErrorKind.PARAM_MUST_START_WITH_DIGIT_OR_DOT, index
            )

        if ch in ("e", "E"):
            if has_dot and not has_ceiling and not has_decimal:
                raise PathParseError.at(ParseErrorKind.INVALID_EXPONENT, index)

            index += 1
            if self.char(index) in ("+", "-"):
                index += 1
            if self.char(index) not in _digits:
                raise PathParseError.at(ParseErrorKind.INVALID_EXPONENT, index)
            while self.char(index) in _digits:
                index += 1

        self.index = index
        return self.path[start:index]

    def finalize_segment(self, cmd: str, params: list[str]) -> None:
        cmd_lc = cmd.lower()

        # Extra pairs after a move are implicit lines
        if cmd_lc == "m" and len(params) > 2:
            self.result.append([cmd, *params[:2]])
            params = params[2:]
            cmd_lc = "l"
            cmd = "l" if cmd == "m" else "L"

        if cmd_lc == "r":
            self.result.append([cmd, *params])
            return

        count = PARAM_COUNTS[cmd_lc]
        if count == 0:
            self.result.append([cmd])
            return
        for i in range(0, len(params) - count + 1, count):
            self.result.append([cmd, *params[i : i + count]])

    def scan_segment(self) -> None:
        cmd = self.char(self.index)

        if cmd.lower() not in PARAM_COUNTS:
            raise PathParseError.at(ParseErrorKind.BAD_COMMAND, self.index, f" {cmd}")

        need_params = PARAM_COUNTS[cmd.lower()]

        self.index += 1
        self.skip_spaces()

        params: list[str] = []

        if need_params == 0:
            self.finalize_segment(cmd, params)
            return

        while True:
            comma_found = False
            for _ in range(need_params):
                params.append(self.scan_param())
                self.skip_spaces()
                comma_found = False

                if self.char(self.index) == ",":
                    self.index += 1
                    self.skip_spaces()
                    comma_found = True

            # A parameter is mandatory after a comma
            if comma_found:
                continue

            if self.index >= len(self.path):
                break
            if self.char(self.index) not in _digit_start:
                break

        self.finalize_segment(cmd, params)


class PathParser:
    """Scanner for the SVG path data mini-language."""

    @staticmethod
    def parse(path: str) -> list[list[str]]:
        """
        Split a path string into segments.

        Each segment is a list holding the command letter followed by the
        text of its parameters. Repeated parameter groups become separate
        segments of the same command, with extra pairs after a move becoming
        lines. A Catmull-Rom ``R``/``r`` segment keeps all its parameters.
        The first segment is always reported as an absolute ``M``.

        :raises PathParseError: The string is malformed. ``offset`` is the
            exact character index at which scanning failed.
        """
        state = _State(path)
        state.skip_spaces()

        while state.index < len(path):
            state.scan_segment()

        if state.result:
            if state.result[0][0] not in ("m", "M"):
                kind = ParseErrorKind.MISSING_INITIAL_MOVE
                raise PathParseError(kind, 0, kind.value)
            state.result[0][0] = "M"

        return state.result
