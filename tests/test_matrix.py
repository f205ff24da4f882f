# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

import pytest
import sympy as sp

from svg_path_transform.matrix import IDENTITY, Matrix, combine


def _apply(m, x, y):
    return m[0] * x + m[2] * y + m[4], m[1] * x + m[3] * y + m[5]


def test_combine_symbolic() -> None:
    """``combine(m1, m2)`` applies ``m2`` first."""
    m1 = sp.symbols("a1 b1 c1 d1 e1 f1")
    m2 = sp.symbols("a2 b2 c2 d2 e2 f2")
    x, y = sp.symbols("x y")

    combined = _apply(combine(m1, m2), x, y)
    chained = _apply(m1, *_apply(m2, x, y))
    assert sp.expand(combined[0] - chained[0]) == 0
    assert sp.expand(combined[1] - chained[1]) == 0


def test_noops_are_not_queued() -> None:
    """Operations that do nothing leave the queue empty."""
    m = Matrix()
    m.translate(0, 0)
    m.scale(1, 1)
    m.rotate(0, 10, 10)
    m.skew_x(0)
    m.skew_y(0)
    m.matrix([1, 0, 0, 1, 0, 0])
    assert m.queue == []


def test_empty_queue() -> None:
    """An empty queue maps points to themselves."""
    m = Matrix()
    assert m.calc(10, 11) == (10, 11)
    assert m.calc(10, 11, is_relative=True) == (10, 11)
    assert m.to_array() == IDENTITY


def test_matrix_arity() -> None:
    """A raw matrix needs six coefficients."""
    with pytest.raises(ValueError):
        Matrix().matrix([1, 2, 3])


def test_rotate_queues_three_entries() -> None:
    """A rotation around a point other than the origin uses translations."""
    m = Matrix()
    m.rotate(90, 10, 10)
    assert len(m.queue) == 3
    assert m.calc(15, 10) == pytest.approx((10, 15))

    m = Matrix()
    m.rotate(90, 0, 0)
    assert len(m.queue) == 1


def test_cancelling_sequence() -> None:
    """Inverse operations flatten to the identity."""
    m = Matrix()
    m.translate(10, 10)
    m.translate(-10, -10)
    m.rotate(180, 10, 10)
    m.rotate(180, 10, 10)
    assert m.to_array() == pytest.approx(IDENTITY, abs=1e-12)


def test_queue_order() -> None:
    """The entry queued last acts on a point first."""
    m = Matrix()
    m.translate(10, 20)
    m.scale(2, 3)
    assert m.to_array() == (2, 0, 0, 3, 10, 20)
    assert m.calc(1, 1) == (12, 23)
    assert m.calc(1, 1, is_relative=True) == (2, 3)


def test_cached_flattening() -> None:
    """The flattened matrix is reused until the queue changes."""
    m = Matrix()
    m.translate(10, 20)
    m.scale(2, 3)
    first = m.to_array()
    assert m.to_array() is first

    m.translate(1, 1)
    assert m.to_array() == (2, 0, 0, 3, 12, 23)


def test_skew() -> None:
    """Skews shear along one axis."""
    m = Matrix()
    m.skew_x(45)
    assert m.calc(0, 10) == pytest.approx((10, 10))

    m = Matrix()
    m.skew_y(45)
    assert m.calc(10, 0) == pytest.approx((10, 10))
