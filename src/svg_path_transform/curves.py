# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

from typing import Final

from fontTools.cu2qu import curve_to_quadratic

type Point2 = tuple[float, float]

DEFAULT_TOLERANCE: Final = 1e-4
"""Maximum distance between a cubic and its quadratic approximation."""


def cubic_to_quadratics(
    p0: Point2,
    p1: Point2,
    p2: Point2,
    p3: Point2,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[tuple[Point2, Point2]]:
    """
    Approximate a cubic Bézier curve by a chain of quadratic Bézier curves.

    The quadratic spline returned by :func:`fontTools.cu2qu.curve_to_quadratic`
    leaves the on-curve points between consecutive off-curve points implied;
    they are made explicit here as the midpoints of those off-curve points.

    :param tolerance: Maximum deviation from the cubic.
    :return: One ``(control, end)`` pair per quadratic; the first one starts
             at ``p0`` and the last one ends at ``p3``.
    :raises fontTools.cu2qu.errors.ApproxNotFoundError: No spline within
        ``tolerance`` was found.
    """
    spline = curve_to_quadratic([p0, p1, p2, p3], tolerance)
    controls = spline[1:-1]

    quadratics: list[tuple[Point2, Point2]] = []
    for i, control in enumerate(controls):
        if i + 1 < len(controls):
            following = controls[i + 1]
            end = ((control[0] + following[0]) / 2, (control[1] + following[1]) / 2)
        else:
            end = (float(spline[-1][0]), float(spline[-1][1]))
        quadratics.append(((float(control[0]), float(control[1])), end))
    return quadratics
