import random

import pytest

from fieldpoly.dense_multilinear import DenseMultilinearExtension
from fieldpoly.field import BLS12_381_FR as Fr


def _point(rng, n):
    return [Fr.rand(rng) for _ in range(n)]


def test_evaluate_at_boolean_points_matches_index():
    rng = random.Random(1)
    poly = DenseMultilinearExtension.rand(Fr, 4, rng)
    for index in range(16):
        point = [Fr((index >> i) & 1) for i in range(4)]
        assert poly.evaluate(point) == poly[index]


def test_single_variable_evaluation():
    rng = random.Random(2)
    e0, e1 = Fr.rand(rng), Fr.rand(rng)
    poly = DenseMultilinearExtension.from_evaluations_vec(1, [e0, e1])
    x = Fr.rand(rng)
    assert poly.evaluate([x]) == x * e1 + (Fr.one() - x) * e0


def test_fix_variables_then_evaluate():
    rng = random.Random(3)
    poly = DenseMultilinearExtension.rand(Fr, 8, rng)
    point = _point(rng, 8)
    partial = poly.fix_variables(point[:3])
    assert partial.num_vars == 5
    assert partial.evaluate(point[3:]) == poly.evaluate(point)


@pytest.mark.parametrize("nv", [1, 5, 10])
def test_add_sub_evaluate(nv):
    rng = random.Random(nv)
    poly1 = DenseMultilinearExtension.rand(Fr, nv, rng)
    poly2 = DenseMultilinearExtension.rand(Fr, nv, rng)
    point = _point(rng, nv)
    v1, v2 = poly1.evaluate(point), poly2.evaluate(point)
    assert (poly1 + poly2).evaluate(point) == v1 + v2
    assert (poly1 - poly2).evaluate(point) == v1 - v2


def test_relabel_polynomial():
    rng = random.Random(4)
    for _ in range(3):
        poly = DenseMultilinearExtension.rand(Fr, 10, rng)
        point = _point(rng, 10)
        expected = poly.evaluate(point)

        poly.relabel_inplace(2, 2, 1)
        assert poly.evaluate(point) == expected

        poly.relabel_inplace(3, 4, 1)
        point[3], point[4] = point[4], point[3]
        assert poly.evaluate(point) == expected

        poly.relabel_inplace(7, 5, 1)
        point[7], point[5] = point[5], point[7]
        assert poly.evaluate(point) == expected

        poly.relabel_inplace(2, 5, 3)
        point[2], point[5] = point[5], point[2]
        point[3], point[6] = point[6], point[3]
        point[4], point[7] = point[7], point[4]
        assert poly.evaluate(point) == expected

        poly.relabel_inplace(7, 0, 2)
        point[0], point[7] = point[7], point[0]
        point[1], point[8] = point[8], point[1]
        assert poly.evaluate(point) == expected


def test_relabel_returns_copy():
    rng = random.Random(5)
    poly = DenseMultilinearExtension.rand(Fr, 4, rng)
    original = poly.to_evaluations()
    relabeled = poly.relabel(0, 1, 1)
    assert poly.evaluations == original
    assert relabeled[0b01] == poly[0b10]
    assert relabeled[0b10] == poly[0b01]


def test_relabel_errors():
    rng = random.Random(6)
    poly = DenseMultilinearExtension.rand(Fr, 10, rng)
    with pytest.raises(ValueError):
        poly.relabel_inplace(2, 3, 2)
    with pytest.raises(ValueError):
        poly.relabel_inplace(0, 9, 1)


def test_arithmetic():
    nv = 10
    rng = random.Random(7)
    for _ in range(3):
        point = _point(rng, nv)
        poly1 = DenseMultilinearExtension.rand(Fr, nv, rng)
        poly2 = DenseMultilinearExtension.rand(Fr, nv, rng)
        v1 = poly1.evaluate(point)
        v2 = poly2.evaluate(point)
        assert (poly1 + poly2).evaluate(point) == v1 + v2
        assert (poly1 - poly2).evaluate(point) == v1 - v2
        assert (-poly1).evaluate(point) == -v1

        acc = DenseMultilinearExtension(list(poly1.evaluations), nv)
        acc += poly2
        assert acc.evaluate(point) == v1 + v2

        acc = DenseMultilinearExtension(list(poly1.evaluations), nv)
        acc -= poly2
        assert acc.evaluate(point) == v1 - v2

        scalar = Fr.rand(rng)
        assert poly1.add_scaled(scalar, poly2).evaluate(point) == v1 + scalar * v2

        zero = DenseMultilinearExtension.zero(Fr)
        assert poly1 + zero == poly1
        assert zero + poly1 == poly1
        scalar = Fr.rand(rng)
        assert zero.add_scaled(scalar, poly1).evaluate(point) == scalar * v1


def test_zero_is_zero():
    zero = DenseMultilinearExtension.zero(Fr)
    assert zero.is_zero()
    assert zero.evaluate([]) == Fr.zero()
    assert not DenseMultilinearExtension.from_evaluations_vec(0, [Fr.one()]).is_zero()


def test_errors():
    rng = random.Random(8)
    with pytest.raises(ValueError):
        DenseMultilinearExtension.from_evaluations_vec(2, [Fr.one()] * 3)
    poly = DenseMultilinearExtension.rand(Fr, 3, rng)
    with pytest.raises(ValueError):
        poly.evaluate(_point(rng, 2))
    with pytest.raises(ValueError):
        poly.fix_variables(_point(rng, 4))
    with pytest.raises(ValueError):
        poly + DenseMultilinearExtension.rand(Fr, 2, rng)


def test_iteration_and_to_evaluations():
    rng = random.Random(9)
    poly = DenseMultilinearExtension.rand(Fr, 3, rng)
    assert list(poly) == poly.evaluations
    copy = poly.to_evaluations()
    copy[0] = Fr.zero() if not poly[0].is_zero() else Fr.one()
    assert poly[0] != copy[0]


def test_repr():
    poly = DenseMultilinearExtension.from_evaluations_vec(1, [Fr(1), Fr(2)])
    assert repr(poly) == "DenseML(nv = 1, evaluations = [bls12_381_fr(1) bls12_381_fr(2) ])"
    big = DenseMultilinearExtension.from_evaluations_vec(2, [Fr(1)] * 4)
    assert repr(big).endswith("...])")