import random

import pytest

from fieldpoly.field import BLS12_381_FR as FR
from fieldpoly.radix2_fft import (
    bitrev,
    derange,
    in_order_coset_ifft,
    in_order_fft,
    in_order_ifft,
    io_helper,
    oi_helper,
    roots_of_unity,
)


def _evaluate(coeffs, x):
    total = FR.zero()
    for c in reversed(coeffs):
        total = total * x + c
    return total


def _random_coeffs(n, seed):
    rng = random.Random(seed)
    return [FR.rand(rng) for _ in range(n)]


def test_bitrev_is_an_involution():
    for log_len in range(1, 7):
        for a in range(1 << log_len):
            assert bitrev(bitrev(a, log_len), log_len) == a
        assert bitrev(1, log_len) == 1 << (log_len - 1)


def test_derange_applies_bit_reversal():
    for log_len in range(1, 6):
        values = list(range(1 << log_len))
        derange(values, log_len)
        assert values == [bitrev(i, log_len) for i in range(1 << log_len)]
        derange(values, log_len)
        assert values == list(range(1 << log_len))


def test_derange_short_inputs_unchanged():
    single = ["x"]
    derange(single, 0)
    assert single == ["x"]
    empty = []
    derange(empty, 0)
    assert empty == []


@pytest.mark.parametrize("log_size", range(0, 10))
def test_roots_of_unity(log_size):
    size = 1 << log_size
    root = FR.get_root_of_unity(size)
    roots = roots_of_unity(size, root)
    assert len(roots) == size // 2
    for i, value in enumerate(roots):
        assert value == root**i
        assert (value**size).is_one()


@pytest.mark.parametrize("log_size", range(0, 6))
def test_in_order_fft_evaluates_over_domain(log_size):
    size = 1 << log_size
    gen = FR.get_root_of_unity(size)
    coeffs = _random_coeffs(size, log_size)
    values = list(coeffs)
    in_order_fft(values, gen, size)
    for i, value in enumerate(values):
        assert value == _evaluate(coeffs, gen**i)


@pytest.mark.parametrize("log_size", range(0, 7))
def test_fft_ifft_round_trip(log_size):
    size = 1 << log_size
    gen = FR.get_root_of_unity(size)
    coeffs = _random_coeffs(size, 100 + log_size)
    values = list(coeffs)
    in_order_fft(values, gen, size)
    in_order_ifft(values, gen.inverse(), size, FR(size).inverse())
    assert values == coeffs


def test_io_helper_gives_bit_reversed_order():
    size, log_size = 16, 4
    gen = FR.get_root_of_unity(size)
    coeffs = _random_coeffs(size, 3)
    values = list(coeffs)
    io_helper(values, gen, size)
    for i, value in enumerate(values):
        assert value == _evaluate(coeffs, gen ** bitrev(i, log_size))


def test_oi_helper_takes_bit_reversed_input():
    size, log_size = 16, 4
    gen = FR.get_root_of_unity(size)
    coeffs = _random_coeffs(size, 4)
    values = list(coeffs)
    derange(values, log_size)
    oi_helper(values, gen, size)
    for i, value in enumerate(values):
        assert value == _evaluate(coeffs, gen**i)


@pytest.mark.parametrize("log_size", range(0, 6))
def test_coset_ifft_recovers_coefficients(log_size):
    size = 1 << log_size
    gen = FR.get_root_of_unity(size)
    shift = FR.multiplicative_generator()
    coeffs = _random_coeffs(size, 200 + log_size)
    values = [_evaluate(coeffs, shift * gen**i) for i in range(size)]
    in_order_coset_ifft(values, gen.inverse(), shift.inverse(), size, FR(size).inverse())
    assert values == coeffs


def test_length_mismatch_is_rejected():
    gen = FR.get_root_of_unity(8)
    with pytest.raises(ValueError):
        in_order_fft([FR.one()] * 4, gen, 8)
    with pytest.raises(ValueError):
        in_order_ifft([FR.one()] * 4, gen.inverse(), 8, FR(8).inverse())
    with pytest.raises(ValueError):
        in_order_coset_ifft(
            [FR.one()] * 4, gen.inverse(), FR.multiplicative_generator().inverse(), 8,
            FR(8).inverse(),
        )