# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

import math

import pytest
import sympy as sp

from svg_path_transform.ellipse import Ellipse


def _shape_matrix(e: Ellipse, m: tuple[float, ...]) -> sp.Matrix:
    """Exact ``Ma * Ma^T`` for the image of ``e`` under ``m``."""
    phi = sp.rad(sp.nsimplify(e.ax))
    rotation = sp.Matrix([[sp.cos(phi), -sp.sin(phi)], [sp.sin(phi), sp.cos(phi)]])
    linear = sp.Matrix([[m[0], m[2]], [m[1], m[3]]]).applyfunc(sp.nsimplify)
    ma = linear * rotation * sp.diag(sp.nsimplify(e.rx), sp.nsimplify(e.ry))
    return ma * ma.T


@pytest.mark.parametrize(
    ("ellipse", "m"),
    [
        (Ellipse(20, 40, -45), (1.5, 0.5, 0.5, 1.5, 10, 15)),
        (Ellipse(90, 30, 15), (0.5, 0.25, -1, 2, 0, 0)),
        (Ellipse(10, 5, 30), (2, 0, 0, 1.5, 0, 0)),
    ],
)
def test_radii_are_singular_values(ellipse: Ellipse, m: tuple[float, ...]) -> None:
    """The new radii are the square roots of the eigenvalues of ``Ma Ma^T``."""
    shape = _shape_matrix(ellipse, m)
    eigenvalues = sorted(float(v) for v in shape.eigenvals())

    e = ellipse.transformed(m)
    assert sorted([e.rx**2, e.ry**2]) == pytest.approx(eigenvalues)

    # The rotated x axis is the eigenvector belonging to rx^2
    ax = math.radians(e.ax)
    v = sp.Matrix([math.cos(ax), math.sin(ax)])
    residual = (shape.evalf() * v - e.rx**2 * v).norm()
    assert float(residual) == pytest.approx(0, abs=1e-6 * e.rx**2)


def test_known_image() -> None:
    """A rotated ellipse under a symmetric shear."""
    e = Ellipse(20, 40, -45).transformed((1.5, 0.5, 0.5, 1.5, 10, 15))
    assert e.rx == pytest.approx(80)
    assert e.ry == pytest.approx(20)
    assert e.ax == pytest.approx(45)


def test_circle() -> None:
    """Images with equal radii are circles with rotation 0."""
    e = Ellipse(30, 30, -45).transformed((0.5, 0, 0, 0.5, 0, 0))
    assert e.rx == e.ry == pytest.approx(15)
    assert e.ax == 0


def test_vertical_axis() -> None:
    """An axis mapped onto the y axis keeps rotation 90."""
    e = Ellipse(20, 15, 90).transformed((1, 0, 0, -1, 0, 40))
    assert e.rx == pytest.approx(20)
    assert e.ry == pytest.approx(15)
    assert e.ax == 90


def test_negative_rotation_swaps_axes() -> None:
    """Rotations are reported in ``[0, 180)`` by exchanging the radii."""
    e = Ellipse(10, 5, -30).transformed((1, 0, 0, 1, 0, 0))
    assert e.rx == pytest.approx(5)
    assert e.ry == pytest.approx(10)
    assert e.ax == pytest.approx(60)


def test_degenerate() -> None:
    """Ellipses flattened onto a segment are degenerate."""
    assert Ellipse(0, 40, 0).is_degenerate
    assert Ellipse(40, 0, 0).is_degenerate
    assert not Ellipse(40, 1e-3, 0).is_degenerate
    assert Ellipse(20, 40, -45).transformed((0, 0, 0, 1, 0, 0)).is_degenerate
    assert Ellipse(20, 40, -45).transformed((1, 0, 0, 0, 0, 0)).is_degenerate
