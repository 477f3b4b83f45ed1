# fieldpoly

Polynomial arithmetic over prime fields, in pure Python with no dependencies
outside the standard library.

## What is in it

- **Prime fields** (`fieldpoly.field`)
  - `PrimeField(name, modulus, generator, ...)` describes a field and its FFT
    parameters. Its `two_adicity` is derived from the modulus. Passing
    `small_subgroup_base` and `small_subgroup_base_adicity` gives the field a
    second subgroup, which mixed-radix domains need.
  - `field(value)` builds an element; `zero()`, `one()`,
    `multiplicative_generator()`, `get_root_of_unity(n)`, `rand(rng)` and
    `from_bytes_le(data)` are also available.
  - `FieldElement` supports `+ - * / ** -x` (with plain integers too),
    `inverse()`, `is_zero()`, `is_one()`, `double()` and `square()`.
  - Two ready-made fields: `BLS12_381_FR` and `BLS12_377_FQ`.
  - `to_field_elements(value, field)` turns a boolean, an element, a list or
    tuple of elements, or a byte string into a list of field elements. Bytes
    are cut into chunks of `capacity // 8` bytes, each read little-endian.
- **Helpers** (`fieldpoly.domain_utils`): `bitreverse`, `k_adicity`,
  `compute_powers`, `compute_powers_and_mul_by_const`, `batch_inversion`
  (zeros stay zero), `domain_elements` and `size_range`.
- **Evaluation domains** for FFTs over multiplicative subgroups, all sharing
  the `EvaluationDomain` interface of `fieldpoly.domain_base`:
  - `Radix2EvaluationDomain` (`fieldpoly.radix2`) for power-of-two sizes; the
  in-order kernels it uses live in `fieldpoly.radix2_fft`.
  - `MixedRadixEvaluationDomain` (`fieldpoly.mixed_radix`) for sizes
    `2**a * q**b`, where `q` is the field's small subgroup base.
  - `GeneralEvaluationDomain` (`fieldpoly.general`) tries radix-2 first and
    falls back to mixed radix when the field has a small subgroup.

  Each domain offers `fft`, `ifft`, `coset_fft`, `coset_ifft` (and their
  `_in_place` forms, which pad or cut the list to the domain size),
  `evaluate_all_lagrange_coefficients`, `vanishing_polynomial` (a
  `VanishingPolynomial` for `X**size - 1`), `evaluate_vanishing_polynomial`,
  `element`, `elements`, `reindex_by_subdomain`,
  `mul_polynomials_in_evaluation_domain`,
  `divide_by_vanishing_poly_on_coset_in_place` and
  `sample_element_outside_domain`.
- **Evaluation form** (`fieldpoly.evaluations`): `Evaluations` holds values
  over a domain, supports point-wise `+ - * /` (division by zero entries gives
  zero), and `interpolate()` returns the coefficient list, lowest degree
  first, with trailing zeros removed.
- **Multilinear extensions** over the Boolean hypercube, sharing the
  `MultilinearExtension` interface of `fieldpoly.multilinear`:
  `DenseMultilinearExtension` (`fieldpoly.dense_multilinear`) and
  `SparseMultilinearExtension` (`fieldpoly.sparse_multilinear`), with
  `evaluate`, `fix_variables`, `relabel`, `to_evaluations`, indexing,
  `+ - -x`, `add_scaled(scalar, other)`, `zero(field)` and `rand(...)`.
  The dense form also has `relabel_inplace`; the sparse form has
  `rand_with_config` and `to_dense_multilinear_extension`.

Index `i` of a multilinear extension's evaluations is a point of
`{0,1}^num_vars` in little-endian bit order: `0b1011` stands for
`P(1, 1, 0, 1)`.

## Example

```python
import random

from fieldpoly.dense_multilinear import DenseMultilinearExtension
from fieldpoly.evaluations import Evaluations
from fieldpoly.field import BLS12_381_FR as field
from fieldpoly.general import GeneralEvaluationDomain

domain = GeneralEvaluationDomain.new(field, 8)
coeffs = [field(c) for c in (1, 2, 3)]

evals = domain.fft(coeffs)              # values at 1, g, g^2, ...
assert domain.ifft(evals)[:3] == coeffs

e = Evaluations.from_vec_and_domain(evals, domain)
squared = (e * e).interpolate()         # coefficients of the product

rng = random.Random(0)
poly = DenseMultilinearExtension.rand(field, 3, rng)
point = [field.rand(rng) for _ in range(3)]
value = poly.evaluate(point)
```

## Errors

- `new` on a domain class raises `ValueError` when no domain of the requested
  size exists; `compute_size_of_domain` returns `None` in that case.
- Mismatched domains, mismatched variable counts, points of the wrong length,
  out-of-range relabel windows, oversized partial points and byte chunks not
  below the modulus raise `ValueError`.
- Inverting zero raises `ZeroDivisionError`.

## What it does not do

There is no dense or sparse univariate polynomial type beyond the coefficient
lists that `ifft` and `interpolate` return and the `VanishingPolynomial`;
there is no binary serialization of domains or polynomials; and every
computation runs in a single thread.

## Running the tests

```
pip install -e ".[test]"
python -m pytest
```