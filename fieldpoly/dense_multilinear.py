"""Multilinear polynomials stored as the full table of their hypercube evaluations."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, Sequence

from fieldpoly.field import FieldElement, PrimeField
from fieldpoly.multilinear import MultilinearExtension, swap_bits


@dataclass
class DenseMultilinearExtension(MultilinearExtension):
    """A multilinear polynomial given by all ``2**num_vars`` evaluations."""

    evaluations: list[FieldElement]
    num_vars: int

    @classmethod
    def from_evaluations_vec(
        cls, num_vars: int, evaluations: Sequence[FieldElement]
    ) -> "DenseMultilinearExtension":
        """Build from evaluations indexed by little-endian hypercube points."""
        evaluations = list(evaluations)
        if len(evaluations) != 1 << num_vars:
            raise ValueError("The size of evaluations should be 2^num_vars.")
        return cls(evaluations, num_vars)

    @classmethod
    def zero(cls, field: PrimeField) -> "DenseMultilinearExtension":
        return cls([field.zero()], 0)

    @classmethod
    def rand(
        cls, field: PrimeField, num_vars: int, rng: random.Random
    ) -> "DenseMultilinearExtension":
        """Sample every evaluation uniformly at random."""
        return cls([field.rand(rng) for _ in range(1 << num_vars)], num_vars)

    def is_zero(self) -> bool:
        return self.num_vars == 0 and self.evaluations[0].is_zero()

    def relabel_inplace(self, a: int, b: int, k: int) -> None:
        """Swap the variables at ``a..a+k`` with those at ``b..b+k`` in place."""
        if a > b:
            a, b = b, a
        if not (a + k < self.num_vars and b + k < self.num_vars):
            raise ValueError("invalid relabel argument")
        if a == b or k == 0:
            return
        if a + k > b:
            raise ValueError("overlapped swap window is not allowed")
        old = self.evaluations
        self.evaluations = [old[swap_bits(i, a, b, k)] for i in range(len(old))]

    def relabel(self, a: int, b: int, k: int) -> "DenseMultilinearExtension":
        copied = DenseMultilinearExtension(list(self.evaluations), self.num_vars)
        copied.relabel_inplace(a, b, k)
        return copied

    def fix_variables(
        self, partial_point: Sequence[FieldElement]
    ) -> "DenseMultilinearExtension":
        if len(partial_point) > self.num_vars:
            raise ValueError("invalid size of partial point")
        poly = list(self.evaluations)
        for r in partial_point:
            poly = [lo + (hi - lo) * r for lo, hi in zip(poly[0::2], poly[1::2])]
        return DenseMultilinearExtension(poly, self.num_vars - len(partial_point))

    def evaluate(self, point: Sequence[FieldElement]) -> FieldElement:
        """Evaluate at ``point``; raises ValueError if its length is not ``num_vars``."""
        if len(point) != self.num_vars:
            raise ValueError(
                f"point has {len(point)} coordinates, expected {self.num_vars}"
            )
        return self.fix_variables(point).evaluations[0]

    def to_evaluations(self) -> list[FieldElement]:
        return list(self.evaluations)

    def add_scaled(
        self, scalar: FieldElement, other: "DenseMultilinearExtension"
    ) -> "DenseMultilinearExtension":
        """Return ``self + scalar * other``."""
        scaled = DenseMultilinearExtension(
            [scalar * x for x in other.evaluations], other.num_vars
        )
        return self + scaled

    def __add__(self, other: object) -> "DenseMultilinearExtension":
        if not isinstance(other, DenseMultilinearExtension):
            return NotImplemented
        if other.is_zero():
            return DenseMultilinearExtension(list(self.evaluations), self.num_vars)
        if self.is_zero():
            return DenseMultilinearExtension(list(other.evaluations), other.num_vars)
        if self.num_vars != other.num_vars:
            raise ValueError("polynomials have different numbers of variables")
        return DenseMultilinearExtension(
            [a + b for a, b in zip(self.evaluations, other.evaluations)], self.num_vars
        )

    def __sub__(self, other: object) -> "DenseMultilinearExtension":
        if not isinstance(other, DenseMultilinearExtension):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> "DenseMultilinearExtension":
        return DenseMultilinearExtension([-x for x in self.evaluations], self.num_vars)

    def __getitem__(self, index: int) -> FieldElement:
        return self.evaluations[index]

    def __iter__(self) -> Iterator[FieldElement]:
        return iter(self.evaluations)

    def __repr__(self) -> str:
        shown = "".join(f"{e!r} " for e in self.evaluations[:4])
        tail = "])" if len(self.evaluations) < 4 else "...])"
        return f"DenseML(nv = {self.num_vars}, evaluations = [{shown}{tail}"