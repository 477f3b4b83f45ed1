"""Evaluation domains that combine a power-of-two subgroup with a small-base subgroup."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, MutableSequence, Optional

from fieldpoly.domain_base import EvaluationDomain
from fieldpoly.domain_utils import (
    batch_inversion,
    best_fft,
    bitreverse,
    compute_powers,
    k_adicity,
)
from fieldpoly.field import FieldElement, PrimeField


def _require_small_subgroup(field: PrimeField) -> tuple[int, int]:
    if field.small_subgroup_base is None or field.small_subgroup_base_adicity is None:
        raise ValueError(f"field {field.name} has no small subgroup for mixed-radix FFTs")
    return field.small_subgroup_base, field.small_subgroup_base_adicity


def mixed_radix_fft_permute(two_adicity: int, q_adicity: int, q: int, n: int, i: int) -> int:
    """Return where index ``i`` goes after splitting into 2 groups ``two_adicity``
    times and then into ``q`` groups ``q_adicity`` times."""
    res = 0
    shift = n
    for _ in range(two_adicity):
        shift //= 2
        res += (i % 2) * shift
        i //= 2
    for _ in range(q_adicity):
        shift //= q
        res += (i % q) * shift
        i //= q
    return res


def best_mixed_domain_size(field: PrimeField, min_size: int) -> int:
    """Return the smallest size ``q**b * 2**a >= min_size`` that the field supports.

    Raises ValueError when the field has no small subgroup or no size fits.
    """
    q, q_max_adicity = _require_small_subgroup(field)
    best: Optional[int] = None
    for b in range(q_max_adicity + 1):
        r = q**b
        two_adicity = 0
        while r < min_size:
            r *= 2
            two_adicity += 1
        if two_adicity <= field.two_adicity and (best is None or r < best):
            best = r
    if best is None:
        raise ValueError(f"no mixed-radix domain of size at least {min_size}")
    return best


def serial_mixed_radix_fft(a: MutableSequence[Any], omega: FieldElement, two_adicity: int, q: int) -> None:
    """Evaluate the coefficients in ``a`` at the powers of ``omega``, in place.

    ``len(a)`` must be ``2**two_adicity * q**k`` for some ``k``.
    """
    n = len(a)
    q_adicity = k_adicity(q, n)
    if n != q**q_adicity * (1 << two_adicity):
        raise ValueError(f"length {n} does not match the radix decomposition")

    one = omega.field.one()
    m = 1

    if q_adicity > 0:
        permuted: list[Any] = [None] * n
        for i, value in enumerate(a):
            permuted[mixed_radix_fft_permute(two_adicity, q_adicity, q, n, i)] = value
        a[:] = permuted

        qth_roots = compute_powers(q, omega ** (n // q))

        for _ in range(q_adicity):
            w_m = omega ** (n // (q * m))
            for k in range(0, n, q * m):
                w_j = one
                for j in range(m):
                    base_term = a[k + j]
                    terms = []
                    w_j_i = w_j
                    for i in range(1, q):
                        terms.append(a[k + j + i * m] * w_j_i)
                        w_j_i = w_j_i * w_j
                    for i in range(q):
                        acc = base_term
                        for l, term in enumerate(terms, start=1):
                            acc = acc + term * qth_roots[(i * l) % q]
                        a[k + j + i * m] = acc
                    w_j = w_j * w_m
            m *= q
    else:
        for k in range(n):
            rk = bitreverse(k, two_adicity)
            if k < rk:
                a[k], a[rk] = a[rk], a[k]

    for _ in range(two_adicity):
        w_m = omega ** (n // (2 * m))
        for k in range(0, n, 2 * m):
            w = one
            for j in range(m):
                t = a[k + m + j] * w
                a[k + m + j] = a[k + j] - t
                a[k + j] = a[k + j] + t
                w = w * w_m
        m *= 2


@dataclass(frozen=True, repr=False)
class MixedRadixEvaluationDomain(EvaluationDomain):
    """A subgroup of order ``2**a * q**b`` of the field's multiplicative group,
    where ``q`` is the field's small subgroup base."""

    field: PrimeField
    order: int
    log_size_of_group: int
    size_inv: FieldElement
    group_gen: FieldElement
    group_gen_inv: FieldElement
    generator_inv: FieldElement

    @classmethod
    def new(cls, field: PrimeField, num_coeffs: int) -> "MixedRadixEvaluationDomain":
        """Build the smallest mixed-radix domain holding ``num_coeffs`` evaluations.

        Raises ValueError when the field cannot supply one.
        """
        _require_small_subgroup(field)
        if num_coeffs < 0:
            raise ValueError("the number of coefficients cannot be negative")
        size = cls.compute_size_of_domain(field, num_coeffs)
        if size is None:
            raise ValueError(f"no mixed-radix domain for {num_coeffs} coefficients")
        group_gen = field.get_root_of_unity(size)
        return cls(
            field=field,
            order=size,
            log_size_of_group=k_adicity(2, size),
            size_inv=field(size).inverse(),
            group_gen=group_gen,
            group_gen_inv=group_gen.inverse(),
            generator_inv=field.multiplicative_generator().inverse(),
        )

    @classmethod
    def compute_size_of_domain(cls, field: PrimeField, num_coeffs: int) -> Optional[int]:
        """Return the size ``new`` would choose, or None if no such domain exists."""
        if field.small_subgroup_base is None:
            return None
        try:
            size = best_mixed_domain_size(field, num_coeffs)
        except ValueError:
            return None
        q = field.small_subgroup_base
        if size != q ** k_adicity(q, size) * (1 << k_adicity(2, size)):
            return None
        return size

    def size(self) -> int:
        return self.order

    def __repr__(self) -> str:
        return f"Mixed-radix multiplicative subgroup of size {self.order}"

    def _resize(self, values: MutableSequence[Any]) -> None:
        size = self.size()
        if len(values) > size:
            del values[size:]
        else:
            values.extend(self.field.zero() for _ in range(size - len(values)))

    def _fft(self, values: MutableSequence[Any], omega: FieldElement) -> None:
        kernel = partial(serial_mixed_radix_fft, q=self.field.small_subgroup_base)
        best_fft(values, omega, self.log_size_of_group, kernel)

    def fft_in_place(self, coeffs: MutableSequence[Any]) -> None:
        self._resize(coeffs)
        self._fft(coeffs, self.group_gen)

    def ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        self._resize(evals)
        self._fft(evals, self.group_gen_inv)
        evals[:] = [value * self.size_inv for value in evals]

    def coset_ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        self.ifft_in_place(evals)
        self.distribute_powers(evals, self.generator_inv)

    def evaluate_all_lagrange_coefficients(self, tau: FieldElement) -> list[FieldElement]:
        size = self.size()
        one = self.field.one()
        zero = self.field.zero()
        t_size = tau**size
        if t_size.is_one():
            coeffs = [zero] * size
            omega_i = one
            for i in range(size):
                if omega_i == tau:
                    coeffs[i] = one
                    break
                omega_i = omega_i * self.group_gen
            return coeffs

        l = (t_size - one) * self.size_inv
        r = one
        denominators = []
        numerators = []
        for _ in range(size):
            denominators.append(tau - r)
            numerators.append(l)
            l = l * self.group_gen
            r = r * self.group_gen
        inverses = batch_inversion(denominators)
        return [num * inv for num, inv in zip(numerators, inverses)]