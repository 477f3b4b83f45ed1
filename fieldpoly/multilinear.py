"""The common interface of multilinear extensions over the Boolean hypercube."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from fieldpoly.field import FieldElement


def swap_bits(x: int, a: int, b: int, n: int) -> int:
    """Swap the ``n`` bits of ``x`` at ``a..a+n`` with those at ``b..b+n`` (little endian)."""
    mask = (1 << n) - 1
    a_bits = (x >> a) & mask
    b_bits = (x >> b) & mask
    local_xor_mask = a_bits ^ b_bits
    global_xor_mask = (local_xor_mask << a) | (local_xor_mask << b)
    return x ^ global_xor_mask


class MultilinearExtension(ABC):
    """A multilinear polynomial given by its evaluations over ``{0,1}**num_vars``.

    An index names a point of the hypercube in little-endian form: ``0b1011``
    stands for ``P(1, 1, 0, 1)``.
    """

    num_vars: int

    def evaluate(self, point: Sequence[FieldElement]) -> FieldElement:
        """Evaluate at ``point``; raises ValueError if its length is not ``num_vars``."""
        if len(point) != self.num_vars:
            raise ValueError(
                f"point has {len(point)} coordinates, expected {self.num_vars}"
            )
        return self.fix_variables(point)[0]

    @abstractmethod
    def relabel(self, a: int, b: int, k: int) -> "MultilinearExtension":
        """Swap the variables at ``a..a+k`` with those at ``b..b+k``."""

    @abstractmethod
    def fix_variables(self, partial_point: Sequence[FieldElement]) -> "MultilinearExtension":
        """Fix the first ``len(partial_point)`` variables at ``partial_point``."""

    @abstractmethod
    def to_evaluations(self) -> list[FieldElement]:
        """Return the evaluations over the whole hypercube."""

    @abstractmethod
    def __getitem__(self, index: int) -> FieldElement:
        """Return the evaluation at the hypercube point numbered ``index``."""