# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final, final

type Coefficients = tuple[float, float, float, float, float, float]

IDENTITY: Final[Coefficients] = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def combine(m1: Sequence[float], m2: Sequence[float]) -> Coefficients:
    r"""
    Compose two affine maps given as ``(a, b, c, d, e, f)``.

    The result applies ``m2`` first and ``m1`` second, i.e. it is the product

    .. math::

        \begin{pmatrix} a_1 & c_1 & e_1 \\ b_1 & d_1 & f_1 \\ 0 & 0 & 1 \end{pmatrix}
        \begin{pmatrix} a_2 & c_2 & e_2 \\ b_2 & d_2 & f_2 \\ 0 & 0 & 1 \end{pmatrix}.
    """
    return (
        m1[0] * m2[0] + m1[2] * m2[1],
        m1[1] * m2[0] + m1[3] * m2[1],
        m1[0] * m2[2] + m1[2] * m2[3],
        m1[1] * m2[2] + m1[3] * m2[3],
        m1[0] * m2[4] + m1[2] * m2[5] + m1[4],
        m1[1] * m2[4] + m1[3] * m2[5] + m1[5],
    )


@final
class _Dirty:
    """The queue changed since the last flattening."""


@final
@dataclass(frozen=True)
class _Clean:
    """The queue flattens to ``coefficients``."""

    coefficients: Coefficients


_DIRTY: Final = _Dirty()


class Matrix:
    """
    Queue of affine maps that is flattened lazily into a single matrix.

    Each entry maps :math:`(x, y) ↦ (a x + c y + e, b x + d y + f)`.
    The queue flattens to ``q[0] ∘ q[1] ∘ …``, so the entry queued last acts
    on a point first, matching the order of an SVG ``transform`` list.

    Operations that provably do nothing are not queued, so an empty queue
    always means “untouched”.
    """

    def __init__(self) -> None:
        self.queue: list[Coefficients] = []
        self._state: _Dirty | _Clean = _DIRTY

    def _push(self, m: Coefficients) -> None:
        self.queue.append(m)
        self._state = _DIRTY

    def matrix(self, m: Sequence[float]) -> None:
        """Queue a raw matrix ``(a, b, c, d, e, f)`` unless it is the identity."""
        if len(m) != 6:
            raise ValueError(f"A matrix needs 6 coefficients, got {len(m)}")
        coefficients: Coefficients = (m[0], m[1], m[2], m[3], m[4], m[5])
        if coefficients == IDENTITY:
            return
        self._push(coefficients)

    def translate(self, tx: float, ty: float) -> None:
        """Queue a translation by ``(tx, ty)``."""
        if tx != 0 or ty != 0:
            self._push((1.0, 0.0, 0.0, 1.0, tx, ty))

    def scale(self, sx: float, sy: float) -> None:
        """Queue a scaling by ``sx`` horizontally and ``sy`` vertically."""
        if sx != 1 or sy != 1:
            self._push((sx, 0.0, 0.0, sy, 0.0, 0.0))

    def rotate(self, angle: float, rx: float, ry: float) -> None:
        """
        Queue a rotation by ``angle`` degrees around ``(rx, ry)``.

        This queues up to three entries: a translation to the center, the
        rotation around the origin, and the translation back.
        """
        if angle == 0:
            return
        rad = math.radians(angle)
        cos, sin = math.cos(rad), math.sin(rad)

        self.translate(rx, ry)
        self._push((cos, sin, -sin, cos, 0.0, 0.0))
        self.translate(-rx, -ry)

    def skew_x(self, angle: float) -> None:
        """Queue a skew along the x axis by ``angle`` degrees."""
        if angle != 0:
            self._push((1.0, 0.0, math.tan(math.radians(angle)), 1.0, 0.0, 0.0))

    def skew_y(self, angle: float) -> None:
        """Queue a skew along the y axis by ``angle`` degrees."""
        if angle != 0:
            self._push((1.0, math.tan(math.radians(angle)), 0.0, 1.0, 0.0, 0.0))

    def to_array(self) -> Coefficients:
        """
        Flatten the queue into one matrix.

        The result is cached until the queue changes again.

        :return: The coefficients ``(a, b, c, d, e, f)``; the identity for an
                 empty queue.
        """
        match self._state:
            case _Clean(coefficients):
                return coefficients
            case _Dirty():
                pass

        coefficients = IDENTITY
        if self.queue:
            coefficients = self.queue[0]
            for m in self.queue[1:]:
                coefficients = combine(coefficients, m)
        self._state = _Clean(coefficients)
        return coefficients

    def calc(
        self, x: float, y: float, is_relative: bool = False
    ) -> tuple[float, float]:
        """
        Apply the flattened matrix to the point ``(x, y)``.

        An empty queue returns the point exactly as given.

        :param is_relative: Skip the translation part, as required for
                            the coordinate deltas of relative commands.
        """
        if not self.queue:
            return x, y

        a, b, c, d, e, f = self.to_array()
        if is_relative:
            return x * a + y * c, x * b + y * d
        return x * a + y * c + e, x * b + y * d + f
