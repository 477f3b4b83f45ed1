"""Multilinear polynomials stored as a sparse map from hypercube points to values."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from fieldpoly.dense_multilinear import DenseMultilinearExtension
from fieldpoly.field import FieldElement, PrimeField
from fieldpoly.multilinear import MultilinearExtension, swap_bits


def _ceil_log2(n: int) -> int:
    return 0 if n <= 1 else (n - 1).bit_length()


def _precompute_eq(g: Sequence[FieldElement]) -> list[FieldElement]:
    """Return ``eq(g, x)`` for every ``x`` in ``{0,1}**len(g)``, little endian."""
    one = g[0].field.one()
    dp = [one - g[0], g[0]]
    for gi in g[1:]:
        dp = [v * (one - gi) for v in dp] + [v * gi for v in dp]
    return dp


def _sorted_map(pairs: Iterable[tuple[int, FieldElement]]) -> dict[int, FieldElement]:
    return dict(sorted(pairs, key=lambda pair: pair[0]))


@dataclass
class SparseMultilinearExtension(MultilinearExtension):
    """A multilinear polynomial given by its nonzero hypercube evaluations.

    Points missing from ``evaluations`` evaluate to zero.
    """

    field: PrimeField
    evaluations: dict[int, FieldElement]
    num_vars: int

    @classmethod
    def from_evaluations(
        cls,
        field: PrimeField,
        num_vars: int,
        evaluations: Iterable[tuple[int, FieldElement]],
    ) -> "SparseMultilinearExtension":
        """Build from ``(index, value)`` pairs; raises ValueError for an index out of range."""
        bound = 1 << num_vars
        pairs = []
        for index, value in evaluations:
            if not 0 <= index < bound:
                raise ValueError("index out of range")
            pairs.append((index, field(value)))
        return cls(field, _sorted_map(pairs), num_vars)

    @classmethod
    def rand_with_config(
        cls,
        field: PrimeField,
        num_vars: int,
        num_nonzero_entries: int,
        rng: random.Random,
    ) -> "SparseMultilinearExtension":
        """Sample ``num_nonzero_entries`` random values at distinct random points.

        Uses rejection sampling, so it slows down as the count nears ``2**num_vars``.
        """
        if num_nonzero_entries > 1 << num_vars:
            raise ValueError("more entries requested than the hypercube has points")
        mask = (1 << num_vars) - 1
        entries: dict[int, FieldElement] = {}
        for _ in range(num_nonzero_entries):
            index = rng.getrandbits(64) & mask
            while index in entries:
                index = rng.getrandbits(64) & mask
            entries[index] = field.rand(rng)
        return cls(field, _sorted_map(entries.items()), num_vars)

    @classmethod
    def rand(
        cls, field: PrimeField, num_vars: int, rng: random.Random
    ) -> "SparseMultilinearExtension":
        """Sample ``2**(num_vars // 2)`` random entries at random points."""
        return cls.rand_with_config(field, num_vars, 1 << (num_vars // 2), rng)

    @classmethod
    def zero(cls, field: PrimeField) -> "SparseMultilinearExtension":
        return cls(field, {}, 0)

    def is_zero(self) -> bool:
        return self.num_vars == 0 and not self.evaluations

    def to_dense_multilinear_extension(self) -> DenseMultilinearExtension:
        return DenseMultilinearExtension.from_evaluations_vec(
            self.num_vars, self.to_evaluations()
        )

    def relabel(self, a: int, b: int, k: int) -> "SparseMultilinearExtension":
        """Swap the variables at ``a..a+k`` with those at ``b..b+k``."""
        if a > b:
            a, b = b, a
        if not (a + k < self.num_vars and b + k < self.num_vars):
            raise ValueError("invalid relabel argument")
        if a == b or k == 0:
            return SparseMultilinearExtension(self.field, dict(self.evaluations), self.num_vars)
        if a + k > b:
            raise ValueError("overlapped swap window is not allowed")
        return SparseMultilinearExtension(
            self.field,
            _sorted_map((swap_bits(i, a, b, k), v) for i, v in self.evaluations.items()),
            self.num_vars,
        )

    def fix_variables(
        self, partial_point: Sequence[FieldElement]
    ) -> "SparseMultilinearExtension":
        dim = len(partial_point)
        if dim > self.num_vars:
            raise ValueError("invalid partial point dimension")
        window = _ceil_log2(len(self.evaluations))
        point = list(partial_point)
        last = dict(self.evaluations)
        zero = self.field.zero()
        while point:
            focus_length = window if 0 < window < len(point) else len(point)
            focus, point = point[:focus_length], point[focus_length:]
            pre = _precompute_eq(focus)
            low_mask = (1 << focus_length) - 1
            result: dict[int, FieldElement] = {}
            for old_idx, value in last.items():
                new_idx = old_idx >> focus_length
                result[new_idx] = result.get(new_idx, zero) + pre[old_idx & low_mask] * value
            last = result
        return SparseMultilinearExtension(self.field, _sorted_map(last.items()), self.num_vars - dim)

    def evaluate(self, point: Sequence[FieldElement]) -> FieldElement:
        """Evaluate at ``point``; raises ValueError if its length is not ``num_vars``."""
        if len(point) != self.num_vars:
            raise ValueError(
                f"point has {len(point)} coordinates, expected {self.num_vars}"
            )
        return self.fix_variables(point)[0]

    def to_evaluations(self) -> list[FieldElement]:
        values = [self.field.zero()] * (1 << self.num_vars)
        for index, value in self.evaluations.items():
            values[index] = value
        return values

    def add_scaled(
        self, scalar: FieldElement, other: "SparseMultilinearExtension"
    ) -> "SparseMultilinearExtension":
        """Return ``self + scalar * other``."""
        if not self.is_zero() and not other.is_zero() and self.num_vars != other.num_vars:
            raise ValueError(
                "trying to add non-zero polynomial with different number of variables"
            )
        scaled = SparseMultilinearExtension(
            other.field,
            {i: scalar * v for i, v in other.evaluations.items()},
            other.num_vars,
        )
        return self + scaled

    def __add__(self, other: object) -> "SparseMultilinearExtension":
        if not isinstance(other, SparseMultilinearExtension):
            return NotImplemented
        if self.is_zero():
            return SparseMultilinearExtension(other.field, dict(other.evaluations), other.num_vars)
        if other.is_zero():
            return SparseMultilinearExtension(self.field, dict(self.evaluations), self.num_vars)
        if self.num_vars != other.num_vars:
            raise ValueError(
                "trying to add non-zero polynomial with different number of variables"
            )
        merged = dict(self.evaluations)
        for index, value in other.evaluations.items():
            merged[index] = merged[index] + value if index in merged else value
        return SparseMultilinearExtension(
            self.field,
            _sorted_map((i, v) for i, v in merged.items() if not v.is_zero()),
            self.num_vars,
        )

    def __sub__(self, other: object) -> "SparseMultilinearExtension":
        if not isinstance(other, SparseMultilinearExtension):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> "SparseMultilinearExtension":
        return SparseMultilinearExtension(
            self.field, {i: -v for i, v in self.evaluations.items()}, self.num_vars
        )

    def __getitem__(self, index: int) -> FieldElement:
        return self.evaluations.get(index, self.field.zero())

    def __repr__(self) -> str:
        shown = "".join(f"({i}, {v!r})" for i, v in list(self.evaluations.items())[:8])
        more = "..." if len(self.evaluations) > 8 else ""
        return (
            f"SparseMultilinearPolynomial(num_vars = {self.num_vars}, "
            f"evaluations = [{shown}{more}])"
        )