"""An evaluation domain that picks radix-2 where it can and mixed-radix otherwise."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, MutableSequence, Optional, Union

from fieldpoly.domain_base import EvaluationDomain, VanishingPolynomial
from fieldpoly.field import FieldElement, PrimeField
from fieldpoly.mixed_radix import MixedRadixEvaluationDomain
from fieldpoly.radix2 import Radix2EvaluationDomain

InnerDomain = Union[Radix2EvaluationDomain, MixedRadixEvaluationDomain]


@dataclass(frozen=True, repr=False)
class GeneralEvaluationDomain(EvaluationDomain):
    """A domain over which (I)FFTs can be performed.

    Tries a radix-2 domain first and falls back to a mixed-radix domain when
    the field's power-of-two subgroup is too small and the field has a small
    subgroup to combine it with.
    """

    inner: InnerDomain

    @classmethod
    def new(cls, field: PrimeField, num_coeffs: int) -> "GeneralEvaluationDomain":
        """Build a domain large enough for ``num_coeffs`` evaluations.

        Raises ValueError when neither kind of domain can be built.
        """
        try:
            return cls(Radix2EvaluationDomain.new(field, num_coeffs))
        except ValueError:
            if field.small_subgroup_base is None:
                raise
        return cls(MixedRadixEvaluationDomain.new(field, num_coeffs))

    @classmethod
    def compute_size_of_domain(cls, field: PrimeField, num_coeffs: int) -> Optional[int]:
        """Return the size ``new`` would choose, or None if no domain exists."""
        size = Radix2EvaluationDomain.compute_size_of_domain(field, num_coeffs)
        if size is not None:
            return size
        if field.small_subgroup_base is not None:
            return MixedRadixEvaluationDomain.compute_size_of_domain(field, num_coeffs)
        return None

    @property
    def field(self) -> PrimeField:  # type: ignore[override]
        return self.inner.field

    @property
    def group_gen(self) -> FieldElement:  # type: ignore[override]
        return self.inner.group_gen

    @property
    def is_radix2(self) -> bool:
        return isinstance(self.inner, Radix2EvaluationDomain)

    def __repr__(self) -> str:
        return repr(self.inner)

    def size(self) -> int:
        return self.inner.size()

    def fft_in_place(self, coeffs: MutableSequence[Any]) -> None:
        self.inner.fft_in_place(coeffs)

    def ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        self.inner.ifft_in_place(evals)

    def coset_fft_in_place(self, coeffs: MutableSequence[Any]) -> None:
        self.inner.coset_fft_in_place(coeffs)

    def coset_ifft_in_place(self, evals: MutableSequence[Any]) -> None:
        self.inner.coset_ifft_in_place(evals)

    def evaluate_all_lagrange_coefficients(self, tau: FieldElement) -> list[FieldElement]:
        return self.inner.evaluate_all_lagrange_coefficients(tau)

    def vanishing_polynomial(self) -> VanishingPolynomial:
        return self.inner.vanishing_polynomial()

    def evaluate_vanishing_polynomial(self, tau: FieldElement) -> FieldElement:
        return self.inner.evaluate_vanishing_polynomial(tau)

    def element(self, i: int) -> FieldElement:
        """Return the ``i``-th element of the domain."""
        return self.inner.element(i)

    def elements(self) -> Iterator[FieldElement]:
        """Iterate over the elements of the domain."""
        return self.inner.elements()