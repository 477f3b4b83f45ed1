"""In-order radix-2 FFT kernels working on lists in place."""

from __future__ import annotations

from typing import Any, MutableSequence

from fieldpoly.domain_utils import bitreverse, compute_powers, compute_powers_and_mul_by_const
from fieldpoly.field import FieldElement


def _log2(n: int) -> int:
    """Ceiling of the base-2 logarithm, with 0 for ``n <= 1``."""
    return 0 if n <= 1 else (n - 1).bit_length()


def bitrev(a: int, log_len: int) -> int:
    """Reverse the lowest ``log_len`` bits of ``a``."""
    return bitreverse(a, log_len)


def derange(values: MutableSequence[Any], log_len: int) -> None:
    """Apply the bit-reversal permutation to ``values`` in place."""
    for idx in range(1, len(values) - 1):
        ridx = bitrev(idx, log_len)
        if idx < ridx:
            values[idx], values[ridx] = values[ridx], values[idx]


def roots_of_unity(size: int, root: FieldElement) -> list[FieldElement]:
    """Return the first ``size // 2`` powers of ``root``."""
    return compute_powers(size // 2, root)


def io_helper(values: MutableSequence[Any], root: FieldElement, size: int) -> None:
    """Decimation-in-frequency butterflies: in-order input, bit-reversed output."""
    roots = roots_of_unity(size, root)
    n = len(values)
    gap = n // 2
    while gap > 0:
        for start in range(0, n, 2 * gap):
            lo = values[start : start + gap]
            hi = values[start + gap : start + 2 * gap]
            values[start : start + gap] = [a + b for a, b in zip(lo, hi)]
            values[start + gap : start + 2 * gap] = [
                (a - b) * w for a, b, w in zip(lo, hi, roots)
            ]
        # Keep the twiddles the next pass needs contiguous.
        roots = roots[::2]
        gap //= 2


def oi_helper(values: MutableSequence[Any], root: FieldElement, size: int) -> None:
    """Decimation-in-time butterflies: bit-reversed input, in-order output."""
    roots = roots_of_unity(size, root)
    n = len(values)
    gap = 1
    while gap < n:
        nchunks = n // (2 * gap)
        twiddles = roots[::nchunks][:gap]
        for start in range(0, n, 2 * gap):
            lo = values[start : start + gap]
            hi = [b * w for b, w in zip(values[start + gap : start + 2 * gap], twiddles)]
            values[start : start + gap] = [a + b for a, b in zip(lo, hi)]
            values[start + gap : start + 2 * gap] = [a - b for a, b in zip(lo, hi)]
        gap *= 2


def _check_length(values: MutableSequence[Any], size: int) -> None:
    if len(values) != size:
        raise ValueError(f"expected {size} values, got {len(values)}")


def in_order_fft(values: MutableSequence[Any], group_gen: FieldElement, size: int) -> None:
    """Evaluate the coefficients in ``values`` over the domain, in place."""
    _check_length(values, size)
    io_helper(values, group_gen, size)
    derange(values, _log2(len(values)))


def in_order_ifft(
    values: MutableSequence[Any],
    group_gen_inv: FieldElement,
    size: int,
    size_inv: FieldElement,
) -> None:
    """Interpolate the evaluations in ``values`` into coefficients, in place."""
    _check_length(values, size)
    derange(values, _log2(len(values)))
    oi_helper(values, group_gen_inv, size)
    values[:] = [value * size_inv for value in values]


def in_order_coset_ifft(
    values: MutableSequence[Any],
    group_gen_inv: FieldElement,
    generator_inv: FieldElement,
    size: int,
    size_inv: FieldElement,
) -> None:
    """Interpolate evaluations over the coset of the multiplicative generator, in place."""
    _check_length(values, size)
    derange(values, _log2(len(values)))
    oi_helper(values, group_gen_inv, size)
    factors = compute_powers_and_mul_by_const(len(values), generator_inv, size_inv)
    values[:] = [value * factor for value, factor in zip(values, factors)]