# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

TAU: Final = 2 * math.pi


def unit_vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """
    Signed angle from ``u`` to ``v`` for vectors of (almost) unit length.

    The sign is that of the cross product; the dot product is clamped to
    ``[-1, 1]`` so that rounding noise does not leave the domain of ``acos``.
    """
    sign = -1 if ux * vy - uy * vx < 0 else 1
    dot = ux * vx + uy * vy
    dot = min(max(dot, -1.0), 1.0)
    return sign * math.acos(dot)


def approximate_unit_arc(theta1: float, dtheta: float) -> list[float]:
    """
    Cubic Bézier approximation of an arc of the unit circle.

    :param theta1: Start angle in radians.
    :param dtheta: Sweep in radians, at most a quarter turn in magnitude.
    :return: The flat list ``[x0, y0, x1, y1, x2, y2, x3, y3]`` of the four
             control points.
    """
    alpha = 4 / 3 * math.tan(dtheta / 4)

    x1, y1 = math.cos(theta1), math.sin(theta1)
    x2, y2 = math.cos(theta1 + dtheta), math.sin(theta1 + dtheta)

    return [
        x1,
        y1,
        x1 - y1 * alpha,
        y1 + x1 * alpha,
        x2 + y2 * alpha,
        y2 - x2 * alpha,
        x2,
        y2,
    ]


@dataclass(frozen=True)
class ParametricEllipticalArc:
    """
    Elliptical arc in center parametrization.

    :ivar cx: X coordinate of the center.
    :ivar cy: Y coordinate of the center.
    :ivar rx: Radius along the rotated x axis (after out-of-range scaling).
    :ivar ry: Radius along the rotated y axis (after out-of-range scaling).
    :ivar theta1: Start angle in radians.
    :ivar dtheta: Signed sweep in radians.
    :ivar phi: X-axis rotation in radians.
    """

    cx: float
    cy: float
    rx: float
    ry: float
    theta1: float
    dtheta: float
    phi: float

    def to_cubics(self) -> list[list[float]]:
        """
        Approximate the arc by cubic Bézier curves.

        The sweep is split into the smallest number of equal pieces of at most
        a quarter turn each, and every piece is approximated on the unit circle
        before being mapped onto the ellipse.

        :return: One flat list of eight coordinates per piece.
        """
        segments = max(math.ceil(abs(self.dtheta) / (TAU / 4)), 1)
        dtheta = self.dtheta / segments

        sin_phi, cos_phi = math.sin(self.phi), math.cos(self.phi)

        curves: list[list[float]] = []
        theta1 = self.theta1
        for _ in range(segments):
            curve = approximate_unit_arc(theta1, dtheta)
            for i in range(0, len(curve), 2):
                x = curve[i] * self.rx
                y = curve[i + 1] * self.ry
                curve[i] = cos_phi * x - sin_phi * y + self.cx
                curve[i + 1] = sin_phi * x + cos_phi * y + self.cy
            curves.append(curve)
            theta1 += dtheta
        return curves


def endpoint_to_center(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    large_arc: bool,
    sweep: bool,
    rx: float,
    ry: float,
    phi: float,
) -> ParametricEllipticalArc | None:
    """
    Convert an SVG endpoint arc to its center parametrization.

    Radii that are too small to connect the endpoints are scaled up
    uniformly, as SVG requires.

    :param phi: X-axis rotation in degrees.
    :return: The arc, or ``None`` if it is not drawn as an arc: the endpoints
             coincide or a radius is zero.
    """
    rad = math.radians(phi)
    sin_phi, cos_phi = math.sin(rad), math.cos(rad)

    # Half the chord in the rotated frame of the ellipse
    x1p = cos_phi * (x1 - x2) / 2 + sin_phi * (y1 - y2) / 2
    y1p = -sin_phi * (x1 - x2) / 2 + cos_phi * (y1 - y2) / 2

    if x1p == 0 and y1p == 0:
        return None
    if rx == 0 or ry == 0:
        return None

    rx, ry = abs(rx), abs(ry)

    lam = x1p * x1p / (rx * rx) + y1p * y1p / (ry * ry)
    if lam > 1:
        rx *= math.sqrt(lam)
        ry *= math.sqrt(lam)

    rx_sq, ry_sq = rx * rx, ry * ry
    x1p_sq, y1p_sq = x1p * x1p, y1p * y1p

    radicand = max(rx_sq * ry_sq - rx_sq * y1p_sq - ry_sq * x1p_sq, 0.0)
    radicand /= rx_sq * y1p_sq + ry_sq * x1p_sq
    root = math.sqrt(radicand) * (-1 if large_arc == sweep else 1)

    cxp = root * rx / ry * y1p
    cyp = root * -ry / rx * x1p

    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2

    v1x, v1y = (x1p - cxp) / rx, (y1p - cyp) / ry
    v2x, v2y = (-x1p - cxp) / rx, (-y1p - cyp) / ry

    theta1 = unit_vector_angle(1, 0, v1x, v1y)
    dtheta = unit_vector_angle(v1x, v1y, v2x, v2y)

    if not sweep and dtheta > 0:
        dtheta -= TAU
    if sweep and dtheta < 0:
        dtheta += TAU

    return ParametricEllipticalArc(cx, cy, rx, ry, theta1, dtheta, rad)


def arc_to_cubics(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    large_arc: bool,
    sweep: bool,
    rx: float,
    ry: float,
    phi: float,
) -> list[list[float]]:
    """
    Approximate an SVG arc from ``(x1, y1)`` to ``(x2, y2)`` by cubic Béziers.

    :return: One flat list ``[x0, y0, x1, y1, x2, y2, x3, y3]`` per curve,
             empty if the arc is not drawn as an arc.
    """
    arc = endpoint_to_center(x1, y1, x2, y2, large_arc, sweep, rx, ry, phi)
    if arc is None:
        return []
    return arc.to_cubics()
