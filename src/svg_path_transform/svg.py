# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Final, final, override

from fontTools.cu2qu.errors import ApproxNotFoundError

from .arc import arc_to_cubics
from .curves import DEFAULT_TOLERANCE, cubic_to_quadratics
from .ellipse import Ellipse
from .math import Precision, to_fixed
from .matrix import Matrix
from .path_parser import PathParser
from .transform_parser import TransformParser

logger = logging.getLogger(__name__)

_number_strip_trailing_zeros: Final = re.compile(r"^(-?[0-9]*\.([0-9]*[1-9])?)0*$")
_number_strip_dot: Final = re.compile(r"\.$")
_minify_cmd_space: Final = re.compile(r" ?([achlmqrstvz]) ?", re.IGNORECASE)
_minify_negative: Final = re.compile(r" -")


def format_number(v: float) -> str:
    """
    Format a float as the shortest decimal text that reads back as ``v``.

    The text never uses exponent notation, has no trailing zeros or dot,
    and ``-0`` is printed as ``0``.
    """
    s = format(Decimal(repr(v)), "f")
    s = _number_strip_trailing_zeros.sub(r"\1", s)
    s = _number_strip_dot.sub("", s)
    return "0" if s == "-0" else s


@dataclass
class Point:
    """Simple 2D point."""

    x: float
    y: float


type Visitor = Callable[[SvgItem, int, float, float], list[SvgItem] | None]
"""
Callback for :meth:`SvgPath.iterate`, called with a segment, its index and the
absolute current point before it. Returning a list replaces the segment by
the list (an empty list deletes it); returning ``None`` keeps it.
"""


class SvgItem:
    """Base class for a single SVG path command and its numeric values."""

    key: str
    arity: int

    def __init__(self, values: list[float], relative: bool) -> None:
        if self.arity >= 0 and len(values) != self.arity:
            raise ValueError(
                f"{self.key} takes {self.arity} values, got {len(values)}"
            )
        self.relative: bool = relative
        self.values: list[float] = values

    @staticmethod
    def make(raw_item: Sequence[str | float]) -> SvgItem:
        """Construct an SvgItem from a command letter and its parameters."""
        if not raw_item:
            raise ValueError("Empty SVG item")

        cmd = str(raw_item[0])
        relative = cmd.islower()
        values = [float(it) for it in raw_item[1:]]

        mapping: dict[str, type[SvgItem]] = {
            MoveTo.key: MoveTo,
            LineTo.key: LineTo,
            HorizontalLineTo.key: HorizontalLineTo,
            VerticalLineTo.key: VerticalLineTo,
            ClosePath.key: ClosePath,
            CurveTo.key: CurveTo,
            SmoothCurveTo.key: SmoothCurveTo,
            QuadraticBezierCurveTo.key: QuadraticBezierCurveTo,
            SmoothQuadraticBezierCurveTo.key: SmoothQuadraticBezierCurveTo,
            EllipticalArcTo.key: EllipticalArcTo,
            CatmullRomTo.key: CatmullRomTo,
        }

        cls = mapping.get(cmd.upper())
        if not cls:
            raise ValueError(f"Invalid SVG item type: {cmd!r}")
        return cls(values, relative)

    def get_type(self) -> str:
        """Return the SVG command letter for this item, respecting relativity."""
        return self.key.lower() if self.relative else self.key

    def clone(self) -> SvgItem:
        """Return a copy of this item (values and relativity)."""
        return self.__class__(self.values.copy(), self.relative)

    def target_location(self, current: Point, start: Point) -> Point:
        """
        Absolute point reached by this item.

        :param current: Absolute current point before this item.
        :param start: Absolute start of the current subpath.
        """
        x, y = self.values[-2], self.values[-1]
        if self.relative:
            return Point(current.x + x, current.y + y)
        return Point(x, y)

    def shift(self, dx: float, dy: float) -> None:
        """Add ``(dx, dy)`` to every coordinate pair of this item."""
        for i in range(0, len(self.values), 2):
            self.values[i] += dx
            self.values[i + 1] += dy

    def to_absolute(self, current: Point) -> None:
        """Rewrite a relative item in absolute coordinates, in place."""
        if not self.relative:
            return
        self.shift(current.x, current.y)
        self.relative = False

    def to_relative(self, current: Point) -> None:
        """Rewrite an absolute item relative to ``current``, in place."""
        if self.relative:
            return
        self.shift(-current.x, -current.y)
        self.relative = True

    def transformed(self, matrix: Matrix, current: Point, index: int) -> SvgItem:
        """
        Image of this item under ``matrix``.

        Coordinates of relative items are transformed without the translation
        part of the matrix.

        :param current: Absolute current point before this item, in the
                        untransformed coordinate system.
        :param index: Position of this item in its path.
        """
        values: list[float] = []
        for i in range(0, len(self.values), 2):
            x, y = self.values[i], self.values[i + 1]
            values.extend(matrix.calc(x, y, self.relative))
        return self.__class__(values, self.relative)

    def quantize(self, precision: Precision, delta: Point) -> Point:
        """
        Round all values to ``precision.baseline`` digits, in place.

        A relative item first absorbs the rounding error ``delta`` left by the
        previous item into its end point, so rounding errors do not accumulate
        along a chain of relative commands.

        :return: The rounding error of this item's end point.
        """
        d = precision.baseline
        if self.relative:
            self.values[-2] += delta.x
            self.values[-1] += delta.y

        x, y = self.values[-2], self.values[-1]
        error = Point(x - to_fixed(x, d), y - to_fixed(y, d))
        self.values = [to_fixed(v, d) for v in self.values]
        return error

    def formatted_values(self) -> list[str]:
        """Values of this item as path data text."""
        return [format_number(v) for v in self.values]


@final
class MoveTo(SvgItem):
    key = "M"
    arity = 2

    @override
    def transformed(self, matrix: Matrix, current: Point, index: int) -> SvgItem:
        # A leading move is absolute even when it is written lowercase
        x, y = matrix.calc(self.values[0], self.values[1], self.relative and index > 0)
        return MoveTo([x, y], self.relative)


@final
class LineTo(SvgItem):
    key = "L"
    arity = 2


@final
class CurveTo(SvgItem):
    key = "C"
    arity = 6


@final
class SmoothCurveTo(SvgItem):
    key = "S"
    arity = 4


@final
class QuadraticBezierCurveTo(SvgItem):
    key = "Q"
    arity = 4


@final
class SmoothQuadraticBezierCurveTo(SvgItem):
    key = "T"
    arity = 2


@final
class CatmullRomTo(SvgItem):
    """Catmull-Rom spline through an arbitrary number of coordinate pairs."""

    key = "R"
    arity = -1


@final
class ClosePath(SvgItem):
    key = "Z"
    arity = 0

    @override
    def target_location(self, current: Point, start: Point) -> Point:
        return Point(start.x, start.y)

    @override
    def transformed(self, matrix: Matrix, current: Point, index: int) -> SvgItem:
        return self.clone()


@final
class HorizontalLineTo(SvgItem):
    key = "H"
    arity = 1

    @override
    def target_location(self, current: Point, start: Point) -> Point:
        x = self.values[0]
        return Point(current.x + x if self.relative else x, current.y)

    @override
    def shift(self, dx: float, dy: float) -> None:
        self.values[0] += dx

    @override
    def transformed(self, matrix: Matrix, current: Point, index: int) -> SvgItem:
        if self.relative:
            x, y = matrix.calc(self.values[0], 0, True)
            if y == 0:
                return HorizontalLineTo([x], True)
            return LineTo([x, y], True)

        x, y = matrix.calc(self.values[0], current.y)
        if y == matrix.calc(current.x, current.y)[1]:
            return HorizontalLineTo([x], False)
        return LineTo([x, y], False)

    @override
    def quantize(self, precision: Precision, delta: Point) -> Point:
        d = precision.baseline
        if self.relative:
            self.values[0] += delta.x
        x = self.values[0]
        self.values[0] = to_fixed(x, d)
        return Point(x - self.values[0], delta.y)


@final
class VerticalLineTo(SvgItem):
    key = "V"
    arity = 1

    @override
    def target_location(self, current: Point, start: Point) -> Point:
        y = self.values[0]
        return Point(current.x, current.y + y if self.relative else y)

    @override
    def shift(self, dx: float, dy: float) -> None:
        self.values[0] += dy

    @override
    def transformed(self, matrix: Matrix, current: Point, index: int) -> SvgItem:
        if self.relative:
            x, y = matrix.calc(0, self.values[0], True)
            if x == 0:
                return VerticalLineTo([y], True)
            return LineTo([x, y], True)

        x, y = matrix.calc(current.x, self.values[0])
        if x == matrix.calc(current.x, current.y)[0]:
            return VerticalLineTo([y], False)
        return LineTo([x, y], False)

    @override
    def quantize(self, precision: Precision, delta: Point) -> Point:
        d = precision.baseline
        if self.relative:
            self.values[0] += delta.y
        y = self.values[0]
        self.values[0] = to_fixed(y, d)
        return Point(delta.x, y - self.values[0])


@final
class EllipticalArcTo(SvgItem):
    """
    Elliptical arc with values ``rx ry x-axis-rotation large-arc sweep x y``.
    """

    key = "A"
    arity = 7

    @override
    def shift(self, dx: float, dy: float) -> None:
        self.values[5] += dx
        self.values[6] += dy

    @override
    def transformed(self, matrix: Matrix, current: Point, index: int) -> SvgItem:
        rx, ry, ax, large_arc, sweep, x, y = self.values
        m = matrix.to_array()
        ellipse = Ellipse(rx, ry, ax).transformed(m)

        # Orientation-reversing maps mirror the direction of travel
        if m[0] * m[3] - m[1] * m[2] < 0:
            sweep = 0.0 if sweep != 0 else 1.0

        px, py = matrix.calc(x, y, self.relative)

        if self.relative:
            empty = x == 0 and y == 0
        else:
            empty = x == current.x and y == current.y

        # Zero-length and flattened arcs are kept as lines so that following
        # shorthand curves still see a segment here.
        if empty or ellipse.is_degenerate:
            return LineTo([px, py], self.relative)

        return EllipticalArcTo(
            [ellipse.rx, ellipse.ry, ellipse.ax, large_arc, sweep, px, py],
            self.relative,
        )

    @override
    def quantize(self, precision: Precision, delta: Point) -> Point:
        d = precision.baseline
        if self.relative:
            self.values[5] += delta.x
            self.values[6] += delta.y

        x, y = self.values[5], self.values[6]
        error = Point(x - to_fixed(x, d), y - to_fixed(y, d))

        self.values[0] = to_fixed(self.values[0], d)
        self.values[1] = to_fixed(self.values[1], d)
        self.values[2] = to_fixed(self.values[2], precision.full)
        self.values[5] = to_fixed(x, d)
        self.values[6] = to_fixed(y, d)
        return error

    @override
    def formatted_values(self) -> list[str]:
        rx, ry, ax, large_arc, sweep, x, y = self.values
        return [
            format_number(rx),
            format_number(ry),
            format_number(ax),
            "1" if large_arc else "0",
            "1" if sweep else "0",
            format_number(x),
            format_number(y),
        ]


def _reflection(
    previous: SvgItem, kind: type[SvgItem], current: Point
) -> tuple[float, float]:
    """
    Offset from ``current`` to the reflection of the last control point of
    ``previous``, or ``(0, 0)`` if ``previous`` is not of type ``kind``.
    """
    if not isinstance(previous, kind):
        return 0.0, 0.0

    # The last control point directly precedes the end point
    cx, cy, x, y = previous.values[-4:]
    if previous.relative:
        return x - cx, y - cy
    return current.x - cx, current.y - cy


class SvgPath:
    """
    SVG path as a list of :class:`SvgItem` with a queue of pending transforms.

    Geometric transforms are only recorded when called and are applied to the
    segments, all at once, before any other operation reads them. Every
    operation mutates the path in place and returns it, so calls can be
    chained::

        SvgPath("M10 10 L20 20").scale(2).translate(5).round(1).as_string()
    """

    def __init__(self, path: str) -> None:
        raw_path = PathParser.parse(path)
        self.path: list[SvgItem] = [SvgItem.make(it) for it in raw_path]
        self._stack: list[Matrix] = []
        logger.debug("Parsed %d segments", len(self.path))

    def clone(self) -> SvgPath:
        """Return a deep clone of this path, including pending transforms."""
        clone = object.__new__(SvgPath)
        clone.path = [it.clone() for it in self.path]
        clone._stack = copy.deepcopy(self._stack)
        return clone

    def _push(self, matrix: Matrix) -> SvgPath:
        self._stack.append(matrix)
        return self

    def translate(self, tx: float, ty: float = 0) -> SvgPath:
        """Translate by ``(tx, ty)``."""
        matrix = Matrix()
        matrix.translate(tx, ty)
        return self._push(matrix)

    def scale(self, sx: float, sy: float | None = None) -> SvgPath:
        """Scale by ``sx`` horizontally and ``sy`` (default: ``sx``) vertically."""
        matrix = Matrix()
        matrix.scale(sx, sx if sy is None else sy)
        return self._push(matrix)

    def rotate(self, angle: float, rx: float = 0, ry: float = 0) -> SvgPath:
        """Rotate by ``angle`` degrees around ``(rx, ry)``."""
        matrix = Matrix()
        matrix.rotate(angle, rx, ry)
        return self._push(matrix)

    def skew_x(self, degrees: float) -> SvgPath:
        """Skew along the x axis by ``degrees``."""
        matrix = Matrix()
        matrix.skew_x(degrees)
        return self._push(matrix)

    def skew_y(self, degrees: float) -> SvgPath:
        """Skew along the y axis by ``degrees``."""
        matrix = Matrix()
        matrix.skew_y(degrees)
        return self._push(matrix)

    def matrix(self, coefficients: Sequence[float]) -> SvgPath:
        """Apply the affine matrix ``(a, b, c, d, e, f)``."""
        matrix = Matrix()
        matrix.matrix(coefficients)
        return self._push(matrix)

    def transform(self, text: str) -> SvgPath:
        """Apply the value of an SVG ``transform`` attribute."""
        if not text.strip():
            return self
        return self._push(TransformParser.parse(text))

    def _evaluate_stack(self) -> None:
        """Apply all pending transforms to the segments."""
        if not self._stack:
            return

        if len(self._stack) == 1:
            matrix = self._stack[0]
        else:
            # Transforms requested first act on the points first
            matrix = Matrix()
            for pending in reversed(self._stack):
                matrix.matrix(pending.to_array())

        logger.debug("Applying %d pending transforms", len(self._stack))
        self._stack = []
        self._apply_matrix(matrix)

    def _apply_matrix(self, matrix: Matrix) -> None:
        if not matrix.queue:
            return

        def visit(item: SvgItem, index: int, x: float, y: float) -> None:
            self.path[index] = item.transformed(matrix, Point(x, y), index)

        self.iterate(visit, keep_lazy_stack=True)

    def iterate(self, visitor: Visitor, keep_lazy_stack: bool = False) -> SvgPath:
        """
        Call ``visitor`` on every segment together with the absolute current
        point before it.

        The current point advances along each original segment after the
        visitor has run, so a visitor may rewrite the segment in place. A
        ``M``/``m`` starts a new subpath and ``Z``/``z`` returns to its start.
        Replacements returned by the visitor are spliced in after the walk.

        :param keep_lazy_stack: Do not apply pending transforms first.
        """
        if not keep_lazy_stack:
            self._evaluate_stack()

        replacements: dict[int, list[SvgItem]] = {}
        current = Point(0, 0)
        start = Point(0, 0)

        for index, item in enumerate(self.path):
            result = visitor(item, index, current.x, current.y)
            if result is not None:
                replacements[index] = result

            current = item.target_location(current, start)
            if isinstance(item, MoveTo):
                start = current

        if replacements:
            self.path = [
                new_item
                for index, item in enumerate(self.path)
                for new_item in replacements.get(index, [item])
            ]
        return self

    def abs(self) -> SvgPath:
        """Convert all segments to absolute coordinates."""

        def visit(item: SvgItem, index: int, x: float, y: float) -> None:
            item.to_absolute(Point(x, y))

        return self.iterate(visit, keep_lazy_stack=True)

    def rel(self) -> SvgPath:
        """Convert all segments except a leading ``M`` to relative coordinates."""

        def visit(item: SvgItem, index: int, x: float, y: float) -> None:
            if index == 0 and isinstance(item, MoveTo):
                return
            item.to_relative(Point(x, y))

        return self.iterate(visit, keep_lazy_stack=True)

    def unarc(self) -> SvgPath:
        """
        Replace every arc by absolute cubic Bézier curves.

        Arcs that are not drawn as arcs, because their endpoints coincide or
        a radius is zero, become lines instead.
        """

        def visit(
            item: SvgItem, index: int, x: float, y: float
        ) -> list[SvgItem] | None:
            if not isinstance(item, EllipticalArcTo):
                return None

            rx, ry, phi, large_arc, sweep, ex, ey = item.values
            if item.relative:
                nx, ny = x + ex, y + ey
            else:
                nx, ny = ex, ey

            curves = arc_to_cubics(
                x, y, nx, ny, bool(large_arc), bool(sweep), rx, ry, phi
            )
            if not curves:
                return [LineTo([ex, ey], item.relative)]
            return [CurveTo(curve[2:], False) for curve in curves]

        return self.iterate(visit)

    def unshort(self) -> SvgPath:
        """
        Replace ``S``/``s`` and ``T``/``t`` by ``C``/``c`` and ``Q``/``q``.

        The implicit control point is the reflection of the previous curve's
        last control point, or the current point if the previous segment is
        not a curve of the same kind.
        """

        def visit(item: SvgItem, index: int, x: float, y: float) -> None:
            if index == 0:
                return

            previous = self.path[index - 1]
            current = Point(x, y)
            match item:
                case SmoothCurveTo():
                    dx, dy = _reflection(previous, CurveTo, current)
                    cls: type[SvgItem] = CurveTo
                case SmoothQuadraticBezierCurveTo():
                    dx, dy = _reflection(previous, QuadraticBezierCurveTo, current)
                    cls = QuadraticBezierCurveTo
                case _:
                    return

            if not item.relative:
                dx += x
                dy += y

            # Replaced right away so a following shorthand reflects this curve
            self.path[index] = cls([dx, dy, *item.values], item.relative)

        return self.iterate(visit)

    def uncubic(self, tolerance: float = DEFAULT_TOLERANCE) -> SvgPath:
        """
        Replace every ``C``/``c`` by quadratic Bézier curves.

        A cubic for which no approximation within ``tolerance`` is found is
        kept unchanged.
        """

        def visit(
            item: SvgItem, index: int, x: float, y: float
        ) -> list[SvgItem] | None:
            if not isinstance(item, CurveTo):
                return None

            ox, oy = (x, y) if item.relative else (0.0, 0.0)
            v = item.values
            try:
                quadratics = cubic_to_quadratics(
                    (x, y),
                    (v[0] + ox, v[1] + oy),
                    (v[2] + ox, v[3] + oy),
                    (v[4] + ox, v[5] + oy),
                    tolerance,
                )
            except ApproxNotFoundError:
                logger.warning(
                    "Keeping cubic segment %d: no quadratic approximation within %g",
                    index,
                    tolerance,
                )
                return None

            if not item.relative:
                return [
                    QuadraticBezierCurveTo([*control, *end], False)
                    for control, end in quadratics
                ]

            result: list[SvgItem] = []
            last_x, last_y = x, y
            for (qx, qy), (ex, ey) in quadratics:
                result.append(
                    QuadraticBezierCurveTo(
                        [qx - last_x, qy - last_y, ex - last_x, ey - last_y], True
                    )
                )
                last_x, last_y = ex, ey
            return result

        return self.iterate(visit)

    def round(self, digits: int = 0) -> SvgPath:
        """
        Round all coordinates to ``digits`` decimal places.

        Arc rotations keep two more digits. The rounding error of each end
        point is carried into the next relative segment, and ``z`` restores
        the error of the subpath's move.
        """
        self._evaluate_stack()
        precision = Precision(digits)

        delta = Point(0, 0)
        contour = Point(0, 0)
        for item in self.path:
            match item:
                case ClosePath():
                    delta = contour
                case MoveTo():
                    delta = item.quantize(precision, delta)
                    contour = delta
                case _:
                    delta = item.quantize(precision, delta)
        return self

    def as_string(self) -> str:
        """
        Serialize the path in compact form.

        A command letter equal to the previous one is omitted, except for
        moves. Spaces next to command letters and before minus signs are
        dropped.
        """
        self._evaluate_stack()

        elements: list[str] = []
        previous: str | None = None
        for item in self.path:
            cmd = item.get_type()
            if cmd != previous or cmd in ("m", "M"):
                elements.append(cmd)
            elements.extend(item.formatted_values())
            previous = cmd

        s = " ".join(elements)
        s = _minify_cmd_space.sub(r"\1", s)
        return _minify_negative.sub("-", s)

    @override
    def __str__(self) -> str:
        return self.as_string()
