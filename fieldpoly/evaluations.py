"""Univariate polynomials held as evaluations over a domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from fieldpoly.domain_base import EvaluationDomain
from fieldpoly.domain_utils import batch_inversion
from fieldpoly.field import FieldElement


@dataclass
class Evaluations:
    """The evaluations of a polynomial over every element of ``domain``."""

    evals: list[FieldElement] = field(default_factory=list)
    domain: EvaluationDomain = None  # type: ignore[assignment]

    @classmethod
    def from_vec_and_domain(cls, evals, domain: EvaluationDomain) -> "Evaluations":
        return cls(list(evals), domain)

    def interpolate(self) -> list[FieldElement]:
        """Return the coefficients, lowest degree first, without trailing zeros."""
        coeffs = self.domain.ifft(self.evals)
        while coeffs and coeffs[-1].is_zero():
            coeffs.pop()
        return coeffs

    def __getitem__(self, index: int) -> FieldElement:
        return self.evals[index]

    def __len__(self) -> int:
        return len(self.evals)

    def __iter__(self) -> Iterator[FieldElement]:
        return iter(self.evals)

    def _combine(self, other: object, op: Callable[[Any, Any], Any]) -> "Evaluations":
        if not isinstance(other, Evaluations):
            return NotImplemented
        if self.domain != other.domain:
            raise ValueError("domains are unequal")
        return Evaluations([op(a, b) for a, b in zip(self.evals, other.evals)], self.domain)

    def __add__(self, other: object) -> "Evaluations":
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other: object) -> "Evaluations":
        return self._combine(other, lambda a, b: a - b)

    def __mul__(self, other: object) -> "Evaluations":
        return self._combine(other, lambda a, b: a * b)

    def __truediv__(self, other: object) -> "Evaluations":
        """Divide pointwise; positions where ``other`` is zero become zero."""
        if not isinstance(other, Evaluations):
            return NotImplemented
        inverted = Evaluations(batch_inversion(other.evals), other.domain)
        return self._combine(inverted, lambda a, b: a * b)