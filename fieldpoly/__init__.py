"""Prime-field arithmetic, FFT evaluation domains and multilinear polynomials."""

__version__ = "0.1.0"

__all__ = [
    "field",
    "domain_utils",
    "domain_base",
    "radix2_fft",
    "radix2",
    "mixed_radix",
    "general",
    "evaluations",
    "multilinear",
    "dense_multilinear",
    "sparse_multilinear",
]