"""Helpers shared by the evaluation domains."""

from __future__ import annotations

import itertools
import operator
from typing import Any, Callable, Iterable, Iterator


def bitreverse(n: int, l: int) -> int:
    """Reverse the lowest ``l`` bits of ``n``."""
    r = 0
    for _ in range(l):
        r = (r << 1) | (n & 1)
        n >>= 1
    return r


def k_adicity(k: int, n: int) -> int:
    """Return the largest ``r`` such that ``k ** r`` divides ``n`` (0 for ``n <= 1``)."""
    r = 0
    while n > 1 and n % k == 0:
        r += 1
        n //= k
    return r


def compute_powers_and_mul_by_const(size: int, root: Any, c: Any) -> list:
    """Return ``[c, c*root, c*root**2, ...]`` with ``size`` entries."""
    powers = itertools.accumulate(itertools.repeat(root), operator.mul, initial=c)
    return list(itertools.islice(powers, size))


def compute_powers(size: int, root: Any) -> list:
    """Return ``[1, root, root**2, ...]`` with ``size`` entries."""
    return compute_powers_and_mul_by_const(size, root, root.field.one())


def best_fft(a: list, omega: Any, log_n: int, serial_fft: Callable[[list, Any, int], None]) -> None:
    """Run the FFT ``serial_fft`` on ``a`` in place."""
    serial_fft(a, omega, log_n)


def batch_inversion(values: Iterable[Any]) -> list:
    """Invert every nonzero element with a single field inversion; zeros stay zero."""
    result = list(values)
    nonzero = [(i, v) for i, v in enumerate(result) if not v.is_zero()]
    if not nonzero:
        return result
    one = nonzero[0][1].field.one()
    prefixes = list(itertools.accumulate((v for _, v in nonzero), operator.mul, initial=one))
    inv = prefixes[-1].inverse()
    for (i, v), before in reversed(list(zip(nonzero, prefixes))):
        result[i] = inv * before
        inv = inv * v
    return result


def domain_elements(group_gen: Any, size: int) -> Iterator[Any]:
    """Yield ``1, g, g**2, ..., g**(size - 1)``."""
    cur = group_gen.field.one()
    for _ in range(size):
        yield cur
        cur = cur * group_gen


def _next_power_of_two(n: int) -> int:
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def size_range(log_interval: int, min_degree: int, max_degree: int) -> list[int]:
    """Sizes from the power of two above ``min_degree`` up to ``max_degree``,
    each ``2 ** log_interval`` times the previous, the last capped at ``max_degree``.
    """
    sizes = [_next_power_of_two(min_degree)]
    interval = 1 << log_interval
    while sizes[-1] < max_degree:
        sizes.append(min(max_degree, interval * sizes[-1]))
    return sizes