"""Evaluation domains that are power-of-two multiplicative subgroups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableSequence, Optional

from fieldpoly.domain_base import EvaluationDomain
from fieldpoly.domain_utils import batch_inversion
from fieldpoly.field import FieldElement, PrimeField
from fieldpoly.radix2_fft import (
    in_order_coset_ifft,
    in_order_fft,
    in_order_ifft,
    roots_of_unity as _roots_of_unity,
)


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


@dataclass(frozen=True, repr=False)
class Radix2EvaluationDomain(EvaluationDomain):
    """A subgroup of order ``2 ** log_size_of_group`` of the field's multiplicative group.

    Supports FFTs of size at most ``2 ** field.two_adicity``.
    """

    field: PrimeField
    log_size_of_group: int
    size_inv: FieldElement
    group_gen: FieldElement
    group_gen_inv: FieldElement
    generator_inv: FieldElement

    @classmethod
    def new(cls, field: PrimeField, num_coeffs: int) -> "Radix2EvaluationDomain":
        """Build the smallest domain that holds ``num_coeffs`` evaluations.

        Raises ValueError when the field's two-adic subgroup is too small.
        """
        if num_coeffs < 0:
            raise ValueError("the number of coefficients cannot be negative")
        size = _next_power_of_two(num_coeffs)
        log_size = size.bit_length() - 1
        if log_size > field.two_adicity:
            raise ValueError(
                f"a radix-2 domain of size {size} exceeds the field's two-adicity"
            )
        group_gen = field.get_root_of_unity(size)
        return cls(
            field=field,
            log_size_of_group=log_size,
            size_inv=field(size).inverse(),
            group_gen=group_gen,
            group_gen_inv=group_gen.inverse(),
            generator_inv=field.multiplicative_generator().inverse(),
        )

    @classmethod
    def compute_size_of_domain(cls, field: PrimeField, num_coeffs: int) -> Optional[int]:
        """Return the size ``new`` would choose, or None if no such domain exists."""
        size = _next_power_of_two(num_coeffs)
        if size.bit_length() - 1 > field.two_adicity:
            return None
        return size

    def size(self) -> int:
        return 1 << self.log_size_of_group

    def __repr__(self) -> str:
        return f"Radix-2 multiplicative subgroup of size {self.size()}"

    def _resize(self, values: MutableSequence[Any]) -> None:
        size = self.size()
        if len(values) > size:
            del values[size:]
        else:
            values.extend(self.field.zero() for _ in range(size - len(values)))

    def fft_in_place(self, coeffs: MutableSequence[Any]) -> None:
        self._resize(coeffs)
        in_order_fft(coeffs, self.group_gen, self.size())

    def ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        self._resize(evals)
        in_order_ifft(evals, self.group_gen_inv, self.size(), self.size_inv)

    def coset_ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        self._resize(evals)
        in_order_coset_ifft(
            evals, self.group_gen_inv, self.generator_inv, self.size(), self.size_inv
        )

    def roots_of_unity(self, root: FieldElement) -> list[FieldElement]:
        """Return the first ``size // 2`` powers of ``root``."""
        return _roots_of_unity(self.size(), root)

    def evaluate_all_lagrange_coefficients(self, tau: FieldElement) -> list[FieldElement]:
        size = self.size()
        one = self.field.one()
        zero = self.field.zero()
        z_h_at_tau = tau**size - one
        domain_offset = one
        if z_h_at_tau.is_zero():
            # tau is a domain element: its coefficient is one, all others zero.
            coeffs = [zero] * size
            omega_i = domain_offset
            for i in range(size):
                if omega_i == tau:
                    coeffs[i] = one
                    break
                omega_i = omega_i * self.group_gen
            return coeffs

        # Compute (Z_H(tau) * v_i)^-1 * (tau - h g^i), then invert all at once.
        v_0_inv = self.field(size) * domain_offset ** (size - 1)
        l_i = z_h_at_tau.inverse() * v_0_inv
        negative_cur_elem = -domain_offset
        inverses = []
        for _ in range(size):
            inverses.append(l_i * (tau + negative_cur_elem))
            l_i = l_i * self.group_gen_inv
            negative_cur_elem = negative_cur_elem * self.group_gen
        return batch_inversion(inverses)