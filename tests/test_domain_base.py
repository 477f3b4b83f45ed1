import random

import pytest

from fieldpoly.domain_base import EvaluationDomain, VanishingPolynomial
from fieldpoly.field import PrimeField

F17 = PrimeField(name="f17", modulus=17, generator=3)


def _evaluate(coeffs, x):
    total = x.field.zero()
    for c in reversed(coeffs):
        total = total * x + c
    return total


class NaiveDomain(EvaluationDomain):
    def __init__(self, field, log_size):
        self.field = field
        self.log_size = log_size
        self.group_gen = field.get_root_of_unity(1 << log_size)

    def size(self):
        return 1 << self.log_size

    def _pad(self, values):
        values.extend([self.field.zero()] * (self.size() - len(values)))

    def fft_in_place(self, coeffs):
        self._pad(coeffs)
        original = list(coeffs)
        coeffs[:] = [_evaluate(original, x) for x in self.elements()]

    def ifft_in_place(self, evals):
        self._pad(evals)
        original = list(evals)
        inv = self.group_gen.inverse()
        n_inv = self.field(self.size()).inverse()
        points = [inv**i for i in range(self.size())]
        evals[:] = [_evaluate(original, p) * n_inv for p in points]

    def evaluate_all_lagrange_coefficients(self, tau):
        xs = list(self.elements())
        result = []
        for i, xi in enumerate(xs):
            value = self.field.one()
            for j, xj in enumerate(xs):
                if i != j:
                    value = value * (tau - xj) / (xi - xj)
            result.append(value)
        return result


def _all_points():
    return [F17(v) for v in range(17)]


def test_vanishing_polynomial_matches_direct_evaluation():
    for log_size in range(4):
        domain = NaiveDomain(F17, log_size)
        z = domain.vanishing_polynomial()
        assert z.degree == domain.size()
        for point in _all_points():
            assert z.evaluate(point) == domain.evaluate_vanishing_polynomial(point)


def test_vanishing_polynomial_vanishes_on_domain():
    for log_size in range(5):
        domain = NaiveDomain(F17, log_size)
        z = domain.vanishing_polynomial()
        assert all(z.evaluate(x).is_zero() for x in domain.elements())


def test_vanishing_polynomial_terms():
    z = VanishingPolynomial.for_size(F17, 4)
    assert z.terms == ((0, F17(-1)), (4, F17(1)))


def test_elements_and_element():
    domain = NaiveDomain(F17, 3)
    elements = list(domain.elements())
    assert len(elements) == domain.size()
    assert len(set(elements)) == domain.size()
    for i, x in enumerate(elements):
        assert x == domain.element(i)
        assert x == domain.group_gen**i


def test_size_as_field_element():
    domain = NaiveDomain(F17, 3)
    assert domain.size_as_field_element() == F17(domain.size())


def test_fft_ifft_round_trip_pads_to_size():
    domain = NaiveDomain(F17, 3)
    coeffs = [F17(v) for v in (5, 1, 9)]
    evals = domain.fft(coeffs)
    assert len(evals) == domain.size()
    assert coeffs == [F17(5), F17(1), F17(9)]
    recovered = domain.ifft(evals)
    assert recovered == coeffs + [F17(0)] * 5


def test_coset_fft_evaluates_on_coset():
    domain = NaiveDomain(F17, 2)
    coeffs = [F17(v) for v in (2, 7, 3, 11)]
    evals = domain.coset_fft(coeffs)
    g = F17.multiplicative_generator()
    for x, value in zip(domain.elements(), evals):
        assert value == _evaluate(coeffs, g * x)
    assert domain.coset_ifft(evals) == coeffs


def test_coset_in_place_mutates_list():
    domain = NaiveDomain(F17, 2)
    values = [F17(v) for v in (4, 0, 13, 1)]
    original = list(values)
    domain.coset_fft_in_place(values)
    assert values != original
    domain.coset_ifft_in_place(values)
    assert values == original


def test_distribute_powers():
    g = F17(5)
    coeffs = [F17(1)] * 6
    EvaluationDomain.distribute_powers(coeffs, g)
    assert coeffs == [g**i for i in range(6)]


def test_distribute_powers_and_mul_by_const():
    g, c = F17(3), F17(2)
    coeffs = [F17(v) for v in (1, 4, 9, 16)]
    original = list(coeffs)
    EvaluationDomain.distribute_powers_and_mul_by_const(coeffs, g, c)
    for i, (before, after) in enumerate(zip(original, coeffs)):
        assert after == before * c * g**i


def test_divide_by_vanishing_poly_on_coset():
    domain = NaiveDomain(F17, 2)
    evals = [F17(v) for v in (3, 8, 0, 15)]
    original = list(evals)
    domain.divide_by_vanishing_poly_on_coset_in_place(evals)
    z = domain.evaluate_vanishing_polynomial(F17.multiplicative_generator())
    assert [e * z for e in evals] == original


def test_reindex_by_subdomain_maps_subdomain_first():
    big = NaiveDomain(F17, 3)
    small = NaiveDomain(F17, 1)
    mapped = [big.reindex_by_subdomain(small, i) for i in range(big.size())]
    assert sorted(mapped) == list(range(big.size()))
    for i in range(small.size()):
        assert big.element(mapped[i]) == small.element(i)


def test_reindex_by_subdomain_same_size():
    domain = NaiveDomain(F17, 2)
    assert [domain.reindex_by_subdomain(domain, i) for i in range(4)] == [0, 1, 2, 3]
    with pytest.raises(IndexError):
        domain.reindex_by_subdomain(domain, 4)


def test_reindex_by_larger_subdomain_fails():
    with pytest.raises(ValueError):
        NaiveDomain(F17, 1).reindex_by_subdomain(NaiveDomain(F17, 3), 0)


def test_mul_polynomials_in_evaluation_domain():
    domain = NaiveDomain(F17, 2)
    a = [F17(1), F17(1)]
    b = [F17(2), F17(3)]
    product = domain.mul_polynomials_in_evaluation_domain(domain.fft(a), domain.fft(b))
    coeffs = domain.ifft(product)
    for x in _all_points():
        assert _evaluate(coeffs, x) == _evaluate(a, x) * _evaluate(b, x)


def test_mul_polynomials_length_mismatch():
    domain = NaiveDomain(F17, 2)
    with pytest.raises(ValueError):
        domain.mul_polynomials_in_evaluation_domain([F17(1)], [F17(1), F17(2)])


def test_sample_element_outside_domain():
    domain = NaiveDomain(F17, 3)
    rng = random.Random(7)
    members = set(domain.elements())
    for _ in range(20):
        t = domain.sample_element_outside_domain(rng)
        assert t not in members
        assert not domain.evaluate_vanishing_polynomial(t).is_zero()