# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

EPSILON: Final = 1e-10
"""Relative tolerance below which an ellipse is treated as a circle or a segment."""


@dataclass(frozen=True)
class Precision:
    """
    Number of decimal digits kept when quantizing path coordinates.

    ``baseline`` applies to coordinates and radii, while ``additional``
    extra digits are kept for angles, where small errors have a large
    visual effect.

    :ivar baseline: Decimal digits for coordinates.
    :ivar additional: Extra digits for angles.
    """

    baseline: int
    additional: int = 2

    @property
    def full(self) -> int:
        """
        Number of decimal digits used for angles.

        :return: ``baseline + additional``.
        """
        return self.baseline + self.additional


def to_fixed(value: float, digits: int) -> float:
    """
    Round ``value`` to ``digits`` decimal places, halves away from zero.

    The shortest decimal representation of ``value`` is rounded, so ``2.675``
    becomes ``2.68`` even though the nearest binary float is slightly smaller.
    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = 64
        quantum = Decimal(1).scaleb(-digits)
        return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
