# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import logging
import re
from typing import Final

from .matrix import Matrix

logger = logging.getLogger(__name__)

_operation: Final = re.compile(
    r"\s*(matrix|translate|scale|rotate|skewX|skewY)\s*\(\s*(.+?)\s*\)[\s,]*"
)
_param_separator: Final = re.compile(r"[\s,]+")


def _to_float(param: str) -> float:
    try:
        return float(param)
    except ValueError:
        return 0.0


class TransformParser:
    """Parser for the value of an SVG ``transform`` attribute."""

    @staticmethod
    def parse(transform: str) -> Matrix:
        """
        Translate a transform list such as ``"translate(10 20) scale(2)"``
        into a :class:`~svg_path_transform.matrix.Matrix` queue.

        Functions are queued in textual order. A function called with an
        unsupported number of arguments is skipped, and a parameter that is
        not a number reads as ``0``.

        * ``translate(tx)`` translates by ``(tx, 0)``.
        * ``scale(s)`` scales both axes by ``s``.
        * ``rotate(angle)`` rotates around the origin.
        """
        matrix = Matrix()

        for op in _operation.finditer(transform):
            name, raw_params = op.group(1), op.group(2)
            params = [_to_float(p) for p in _param_separator.split(raw_params)]

            match name, params:
                case "matrix", [_, _, _, _, _, _]:
                    matrix.matrix(params)
                case "scale", [s]:
                    matrix.scale(s, s)
                case "scale", [sx, sy]:
                    matrix.scale(sx, sy)
                case "rotate", [angle]:
                    matrix.rotate(angle, 0, 0)
                case "rotate", [angle, rx, ry]:
                    matrix.rotate(angle, rx, ry)
                case "translate", [tx]:
                    matrix.translate(tx, 0)
                case "translate", [tx, ty]:
                    matrix.translate(tx, ty)
                case "skewX", [angle]:
                    matrix.skew_x(angle)
                case "skewY", [angle]:
                    matrix.skew_y(angle)
                case _:
                    logger.debug(
                        "Ignoring %s() with %d parameters", name, len(params)
                    )

        return matrix
