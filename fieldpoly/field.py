"""Prime fields, their elements, and conversion of values into field elements."""

from __future__ import annotations

import random
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Optional, Sequence, Union

from fieldpoly.domain_utils import k_adicity


@dataclass(frozen=True)
class PrimeField:
    """The field of integers modulo a prime, with its FFT parameters.

    ``two_adicity`` is derived from the modulus. Roots of unity that are not
    given explicitly are derived from ``generator``. A field that also has a
    small subgroup of order ``small_subgroup_base ** small_subgroup_base_adicity``
    supports mixed-radix domains.
    """

    name: str
    modulus: int
    generator: int
    two_adic_root: Optional[int] = None
    small_subgroup_base: Optional[int] = None
    small_subgroup_base_adicity: Optional[int] = None
    large_subgroup_root: Optional[int] = None
    two_adicity: int = dataclass_field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError("modulus must be a prime of at least 2")
        generator = self.generator % self.modulus
        if generator == 0:
            raise ValueError("the multiplicative generator cannot be zero")
        object.__setattr__(self, "generator", generator)

        two_adicity = k_adicity(2, self.modulus - 1)
        object.__setattr__(self, "two_adicity", two_adicity)
        if self.two_adic_root is None:
            root = pow(generator, (self.modulus - 1) >> two_adicity, self.modulus)
        else:
            root = self.two_adic_root % self.modulus
        object.__setattr__(self, "two_adic_root", root)

        base, adicity = self.small_subgroup_base, self.small_subgroup_base_adicity
        if (base is None) != (adicity is None):
            raise ValueError(
                "small_subgroup_base and small_subgroup_base_adicity go together"
            )
        if base is None:
            if self.large_subgroup_root is not None:
                raise ValueError("a large subgroup root needs a small subgroup base")
            return
        if base < 2 or adicity < 0:
            raise ValueError("invalid small subgroup parameters")
        order = (1 << two_adicity) * base**adicity
        if (self.modulus - 1) % order:
            raise ValueError("the large subgroup order does not divide modulus - 1")
        if self.large_subgroup_root is None:
            large_root = pow(generator, (self.modulus - 1) // order, self.modulus)
        else:
            large_root = self.large_subgroup_root % self.modulus
        object.__setattr__(self, "large_subgroup_root", large_root)

    @property
    def modulus_bits(self) -> int:
        return self.modulus.bit_length()

    @property
    def capacity(self) -> int:
        """Number of bits that any value below the modulus can safely carry."""
        return self.modulus_bits - 1

    @property
    def num_limbs(self) -> int:
        return (self.modulus_bits + 63) // 64

    @property
    def byte_size(self) -> int:
        return self.num_limbs * 8

    def __call__(self, value: Union[int, "FieldElement"]) -> "FieldElement":
        if isinstance(value, FieldElement):
            if value.field != self:
                raise ValueError("element belongs to a different field")
            return value
        if isinstance(value, int):
            return FieldElement(self, value)
        raise TypeError(f"cannot make a field element from {type(value).__name__}")

    def zero(self) -> "FieldElement":
        return FieldElement(self, 0)

    def one(self) -> "FieldElement":
        return FieldElement(self, 1)

    def multiplicative_generator(self) -> "FieldElement":
        return FieldElement(self, self.generator)

    def get_root_of_unity(self, n: int) -> "FieldElement":
        """Return a primitive ``n``-th root of unity.

        Raises ValueError when the field has no subgroup of order ``n``.
        """
        if n < 1:
            raise ValueError("the order of a root of unity must be positive")
        if self.small_subgroup_base is not None:
            q = self.small_subgroup_base
            q_adicity = k_adicity(q, n)
            two_adicity = k_adicity(2, n)
            if (
                n != (1 << two_adicity) * q**q_adicity
                or two_adicity > self.two_adicity
                or q_adicity > self.small_subgroup_base_adicity
            ):
                raise ValueError(f"no root of unity of order {n}")
            omega = self.large_subgroup_root
            omega = pow(omega, q ** (self.small_subgroup_base_adicity - q_adicity), self.modulus)
            omega = pow(omega, 1 << (self.two_adicity - two_adicity), self.modulus)
        else:
            if n & (n - 1):
                raise ValueError(f"no root of unity of order {n}")
            log_n = n.bit_length() - 1
            if log_n > self.two_adicity:
                raise ValueError(f"no root of unity of order {n}")
            omega = pow(self.two_adic_root, 1 << (self.two_adicity - log_n), self.modulus)
        return FieldElement(self, omega)

    def rand(self, rng: random.Random) -> "FieldElement":
        return FieldElement(self, rng.randrange(self.modulus))

    def from_bytes_le(self, data: bytes) -> "FieldElement":
        """Read a canonical little-endian encoding; reject values not below the modulus."""
        value = int.from_bytes(bytes(data), "little")
        if value >= self.modulus:
            raise ValueError("encoded value is not below the modulus")
        return FieldElement(self, value)


class FieldElement:
    """An element of a PrimeField."""

    __slots__ = ("field", "value")

    def __init__(self, field: PrimeField, value: int) -> None:
        self.field = field
        self.value = value % field.modulus

    def _coerce(self, other: object) -> Optional[int]:
        if isinstance(other, FieldElement):
            if other.field is not self.field and other.field != self.field:
                raise ValueError("elements of different fields")
            return other.value
        if isinstance(other, int):
            return other
        return None

    def __add__(self, other: object) -> "FieldElement":
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return FieldElement(self.field, self.value + v)

    __radd__ = __add__

    def __sub__(self, other: object) -> "FieldElement":
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return FieldElement(self.field, self.value - v)

    def __rsub__(self, other: object) -> "FieldElement":
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return FieldElement(self.field, v - self.value)

    def __mul__(self, other: object) -> "FieldElement":
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return FieldElement(self.field, self.value * v)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "FieldElement":
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return self * FieldElement(self.field, v).inverse()

    def __rtruediv__(self, other: object) -> "FieldElement":
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return FieldElement(self.field, v) * self.inverse()

    def __neg__(self) -> "FieldElement":
        return FieldElement(self.field, -self.value)

    def __pow__(self, exponent: int) -> "FieldElement":
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            return self.inverse() ** -exponent
        return FieldElement(self.field, pow(self.value, exponent, self.field.modulus))

    def inverse(self) -> "FieldElement":
        if self.value == 0:
            raise ZeroDivisionError("zero has no inverse")
        return FieldElement(self.field, pow(self.value, -1, self.field.modulus))

    def is_zero(self) -> bool:
        return self.value == 0

    def is_one(self) -> bool:
        return self.value == 1

    def double(self) -> "FieldElement":
        return FieldElement(self.field, self.value << 1)

    def square(self) -> "FieldElement":
        return FieldElement(self.field, self.value * self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldElement):
            return self.field == other.field and self.value == other.value
        if isinstance(other, int):
            return self.value == other % self.field.modulus
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.field.modulus, self.value))

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"{self.field.name}({self.value})"


def _from_montgomery(limbs: Sequence[int], modulus: int) -> int:
    mont = sum(limb << (64 * i) for i, limb in enumerate(limbs))
    r = 1 << (64 * len(limbs))
    return mont * pow(r, -1, modulus) % modulus


_FR_MODULUS = 52435875175126190479447740508185965837690552500527637822603658699938581184513
_FQ_MODULUS = int(
    "258664426012969094010652733694893533536393512754914660539884262666720468348340"
    "822774968888139573360124440321458177"
)

BLS12_381_FR = PrimeField(
    name="bls12_381_fr",
    modulus=_FR_MODULUS,
    generator=7,
    two_adic_root=_from_montgomery(
        [0xB9B58D8C5F0E466A, 0x5B1B4C801819D7EC, 0x0AF53AE352A31E64, 0x5BF3ADDA19E9B27B],
        _FR_MODULUS,
    ),
)

BLS12_377_FQ = PrimeField(
    name="bls12_377_fq",
    modulus=_FQ_MODULUS,
    generator=_FQ_MODULUS - 5,
    two_adic_root=_from_montgomery(
        [
            2022196864061697551,
            17419102863309525423,
            8564289679875062096,
            17152078065055548215,
            17966377291017729567,
            68610905582439508,
        ],
        _FQ_MODULUS,
    ),
)


def to_field_elements(value: object, field: PrimeField) -> list[FieldElement]:
    """Represent ``value`` as a list of elements of ``field``.

    Booleans become one or zero, an element becomes itself, a sequence of
    elements is copied, the empty tuple gives nothing, and bytes are cut into
    chunks of ``capacity // 8`` bytes, each read little-endian.
    """
    if isinstance(value, bool):
        return [field.one() if value else field.zero()]
    if isinstance(value, FieldElement):
        return [field(value)]
    if isinstance(value, (bytes, bytearray, memoryview)):
        data = bytes(value)
        chunk = field.capacity // 8
        return [field.from_bytes_le(data[i : i + chunk]) for i in range(0, len(data), chunk)]
    if isinstance(value, (list, tuple)):
        if all(isinstance(item, FieldElement) for item in value):
            return [field(item) for item in value]
    raise TypeError(f"cannot convert {type(value).__name__} to field elements")