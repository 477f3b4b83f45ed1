"""The common interface of evaluation domains and its shared operations."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, MutableSequence, Sequence

from fieldpoly.domain_utils import compute_powers_and_mul_by_const, domain_elements
from fieldpoly.field import FieldElement, PrimeField


@dataclass(frozen=True)
class VanishingPolynomial:
    """A sparse polynomial given as ``(degree, coefficient)`` terms, sorted by degree."""

    terms: tuple[tuple[int, FieldElement], ...]

    @classmethod
    def for_size(cls, field: PrimeField, size: int) -> "VanishingPolynomial":
        """The polynomial ``X**size - 1``."""
        return cls(((0, -field.one()), (size, field.one())))

    @property
    def degree(self) -> int:
        return max((deg for deg, _ in self.terms), default=0)

    def evaluate(self, point: FieldElement) -> FieldElement:
        total = point.field.zero()
        for degree, coeff in self.terms:
            total = total + coeff * point**degree
        return total


class EvaluationDomain(ABC):
    """A multiplicative subgroup of a field over which (I)FFTs are performed.

    Concrete domains provide the attributes ``field`` and ``group_gen`` and
    implement ``size``, ``fft_in_place``, ``ifft_in_place`` and
    ``evaluate_all_lagrange_coefficients``. In-place operations mutate the
    given list, padding it with zeros to the size of the domain.
    """

    field: PrimeField
    group_gen: FieldElement

    @abstractmethod
    def size(self) -> int:
        """Return the number of elements of the domain."""

    @abstractmethod
    def fft_in_place(self, coeffs: MutableSequence[Any]) -> None:
        """Replace coefficients by the evaluations over the domain."""

    @abstractmethod
    def ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        """Replace evaluations over the domain by coefficients."""

    @abstractmethod
    def evaluate_all_lagrange_coefficients(self, tau: FieldElement) -> list[FieldElement]:
        """Evaluate every Lagrange polynomial of the domain at ``tau``."""

    def sample_element_outside_domain(self, rng: random.Random) -> FieldElement:
        """Draw a random field element that is not in the domain."""
        t = self.field.rand(rng)
        while self.evaluate_vanishing_polynomial(t).is_zero():
            t = self.field.rand(rng)
        return t

    def size_as_field_element(self) -> FieldElement:
        return self.field(self.size())

    def fft(self, coeffs: Sequence[Any]) -> list:
        result = list(coeffs)
        self.fft_in_place(result)
        return result

    def ifft(self, evals: Sequence[Any]) -> list:
        result = list(evals)
        self.ifft_in_place(result)
        return result

    def coset_fft(self, coeffs: Sequence[Any]) -> list:
        result = list(coeffs)
        self.coset_fft_in_place(result)
        return result

    def coset_fft_in_place(self, coeffs: MutableSequence[Any]) -> None:
        self.distribute_powers(coeffs, self.field.multiplicative_generator())
        self.fft_in_place(coeffs)

    def coset_ifft(self, evals: Sequence[Any]) -> list:
        result = list(evals)
        self.coset_ifft_in_place(result)
        return result

    def coset_ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        self.ifft_in_place(evals)
        self.distribute_powers(evals, self.field.multiplicative_generator().inverse())

    @staticmethod
    def distribute_powers(coeffs: MutableSequence[Any], g: FieldElement) -> None:
        """Multiply the ``i``-th entry of ``coeffs`` by ``g**i``."""
        EvaluationDomain.distribute_powers_and_mul_by_const(coeffs, g, g.field.one())

    @staticmethod
    def distribute_powers_and_mul_by_const(
        coeffs: MutableSequence[Any], g: FieldElement, c: FieldElement
    ) -> None:
        """Multiply the ``i``-th entry of ``coeffs`` by ``c * g**i``."""
        factors = compute_powers_and_mul_by_const(len(coeffs), g, c)
        coeffs[:] = [coeff * factor for coeff, factor in zip(coeffs, factors)]

    def divide_by_vanishing_poly_on_coset_in_place(self, evals: MutableSequence[Any]) -> None:
        """Divide evaluations over the coset by the vanishing polynomial there."""
        factor = self.evaluate_vanishing_polynomial(
            self.field.multiplicative_generator()
        ).inverse()
        evals[:] = [value * factor for value in evals]

    def reindex_by_subdomain(self, other: "EvaluationDomain", index: int) -> int:
        """Map an index that lists ``other``'s elements first to an index into ``self``."""
        if self.size() < other.size():
            raise ValueError("the subdomain is larger than the domain")
        period = self.size() // other.size()
        if index < other.size():
            return index * period
        i = index - other.size()
        x = period - 1
        if x == 0:
            raise IndexError("index is outside the domain")
        return i + i // x + 1

    def mul_polynomials_in_evaluation_domain(
        self, self_evals: Sequence[FieldElement], other_evals: Sequence[FieldElement]
    ) -> list[FieldElement]:
        """Multiply two polynomials given by their evaluations over the domain."""
        if len(self_evals) != len(other_evals):
            raise ValueError("evaluation vectors differ in length")
        return [a * b for a, b in zip(self_evals, other_evals)]

    def vanishing_polynomial(self) -> VanishingPolynomial:
        return VanishingPolynomial.for_size(self.field, self.size())

    def evaluate_vanishing_polynomial(self, tau: FieldElement) -> FieldElement:
        """Evaluate ``X**size - 1`` at ``tau``."""
        return tau ** self.size() - self.field.one()

    def element(self, i: int) -> FieldElement:
        """Return ``group_gen ** i``."""
        return self.group_gen**i

    def elements(self) -> Iterator[FieldElement]:
        return domain_elements(self.group_gen, self.size())