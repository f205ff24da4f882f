# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .math import EPSILON


@dataclass(frozen=True)
class Ellipse:
    r"""
    Ellipse centered at the origin.

    The ellipse is the image of the unit circle under
    :math:`R(φ)\,\mathrm{diag}(r_x, r_y)`, where :math:`φ` is the x-axis
    rotation in degrees. The center of an arc is carried separately by its
    endpoints, so it is not part of this shape descriptor.

    :ivar rx: Radius along the rotated x axis.
    :ivar ry: Radius along the rotated y axis.
    :ivar ax: X-axis rotation in degrees.
    """

    rx: float
    ry: float
    ax: float

    def transformed(self, m: Sequence[float]) -> Ellipse:
        r"""
        Image of this ellipse under the linear part of ``m``.

        With :math:`M_a = M\,R(φ)\,\mathrm{diag}(r_x, r_y)`, the new radii are
        the square roots of the eigenvalues of :math:`M_a M_a^T` and the new
        rotation is the direction of the eigenvector of the larger eigenvalue.
        If both eigenvalues agree up to :data:`~svg_path_transform.math.EPSILON`,
        the image is a circle with rotation ``0``.

        :param m: Affine matrix ``(a, b, c, d, e, f)``; ``e`` and ``f`` are ignored.
        """
        rad = math.radians(self.ax)
        c, s = math.cos(rad), math.sin(rad)
        ma = (
            self.rx * (m[0] * c + m[2] * s),
            self.rx * (m[1] * c + m[3] * s),
            self.ry * (-m[0] * s + m[2] * c),
            self.ry * (-m[1] * s + m[3] * c),
        )

        # ma * transpose(ma) = [[j, l], [l, k]]
        j = ma[0] * ma[0] + ma[2] * ma[2]
        k = ma[1] * ma[1] + ma[3] * ma[3]

        # Discriminant of the characteristic polynomial of ma * transpose(ma)
        disc = ((ma[0] - ma[3]) ** 2 + (ma[2] + ma[1]) ** 2) * (
            (ma[0] + ma[3]) ** 2 + (ma[2] - ma[1]) ** 2
        )
        disc = max(disc, 0.0)

        # Mean eigenvalue
        jk = (j + k) / 2

        if disc < EPSILON * jk:
            r = math.sqrt(jk)
            return Ellipse(r, r, 0.0)

        l = ma[0] * ma[1] + ma[2] * ma[3]
        sqrt_disc = math.sqrt(disc)
        l1 = jk + sqrt_disc / 2
        l2 = max(jk - sqrt_disc / 2, 0.0)

        # The rotation is the argument of the eigenvector of l1; pick the
        # better conditioned of the two equivalent formulas.
        if abs(l) < EPSILON and abs(l1 - k) < EPSILON:
            ax = 90.0
        elif abs(l) > abs(l1 - k):
            ax = math.degrees(math.atan((l1 - j) / l))
        else:
            ax = math.degrees(math.atan(l / (l1 - k)))

        if ax >= 0:
            return Ellipse(math.sqrt(l1), math.sqrt(l2), ax)
        # ax in (-90, 0): exchange the axes
        return Ellipse(math.sqrt(l2), math.sqrt(l1), ax + 90)

    @property
    def is_degenerate(self) -> bool:
        """Whether one radius is negligible compared to the other."""
        return self.rx < EPSILON * self.ry or self.ry < EPSILON * self.rx
