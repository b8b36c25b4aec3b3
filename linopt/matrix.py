"""Matrix helpers: permanents, unitary parametrizations and unitarity tests."""

from __future__ import annotations

import cmath
import math
from collections.abc import Iterable

import numpy as np
from scipy.linalg import expm

from .errors import WrongSize

VERSION = "0.4.0"
VERSION_INFO = (0, 4, 0)

DEFAULT_EPSILON = 1e-15
"""Default precision for numeric comparisons."""

_MAX_PERMANENT_SIZE = 64


def _as_matrix(m) -> np.ndarray:
    arr = np.asarray(m, dtype=complex)
    if arr.ndim != 2:
        raise WrongSize(
            f"Matrix should be two-dimensional, got {arr.ndim} dimension(s)."
        )
    return arr


def _square_side(values: list[float]) -> int:
    side = int(math.sqrt(len(values)) + 0.5)
    if side * side != len(values):
        raise WrongSize(
            f"Size of point (which is {len(values)}) should be a square of an integer."
        )
    return side


def _glynn(a: np.ndarray) -> complex:
    """Glynn formula with Gray code summation, O(n * 2^n)."""
    size = a.shape[0]
    sums = a.sum(axis=1)
    total = 0j
    count = 1 << (size - 1)
    for step in range(count):
        term = np.prod(sums)
        total += -term if step & 1 else term
        flip = (step ^ (step + 1)) + 1
        sign = 2 if (step + 1) & flip else -2
        sums += sign * a[:, flip.bit_length() - 2]
    return complex(total / count)


def permanent(m) -> complex:
    """Return the permanent of a square matrix."""
    a = _as_matrix(m)
    rows, cols = a.shape
    if rows != cols:
        raise WrongSize(f"Matrix should be square. Current size is ({rows}x{cols}).")
    if cols == 0:
        raise WrongSize("Empty matrix is not allowed.")
    if cols == 2:
        return complex(a[0, 0] * a[1, 1] + a[0, 1] * a[1, 0])
    if cols == 3:
        return complex(
            a[0, 0] * (a[1, 1] * a[2, 2] + a[1, 2] * a[2, 1])
            + a[0, 1] * (a[1, 0] * a[2, 2] + a[1, 2] * a[2, 0])
            + a[0, 2] * (a[1, 0] * a[2, 1] + a[1, 1] * a[2, 0])
        )
    if cols > _MAX_PERMANENT_SIZE:
        raise WrongSize(
            f"Matrix size (which is {rows}) is too large "
            f"(maximum is {_MAX_PERMANENT_SIZE})."
        )
    return _glynn(a)


def _pyramid(x: float, period: float = 1.0) -> float:
    """Fold x back into [0, period) with a continuous triangular wave."""
    x = abs(x)
    if int(x / period) & 1:
        x = -x
    x = math.fmod(x, period)
    return x + period if x < 0 else x


def _rotate(m: np.ndarray, i: int, j: int, eii: complex, eij: complex) -> None:
    col_i = m[:, i].copy()
    m[:, i] = m[:, i] * eii - m[:, j] * eij.conjugate()
    m[:, j] = col_i * eij + m[:, j] * eii.conjugate()


def hurwitz(x: Iterable[float]) -> np.ndarray:
    """Return the N x N unitary given by the Hurwitz parametrization of N^2 values."""
    values = [float(v) for v in x]
    side = _square_side(values)
    if side == 0:
        raise WrongSize("Point must not be empty.")
    params = iter(values)
    two_pi = 2.0 * math.pi
    m = np.zeros((side, side), dtype=complex)
    np.fill_diagonal(m, cmath.rect(1.0, two_pi * next(params)))
    for j in range(1, side):
        for i in range(j - 1, 0, -1):
            xi = _pyramid(next(params)) ** (1.0 / (2.0 * (i + 1)))
            eii = cmath.rect(math.sqrt(1.0 - xi * xi), two_pi * next(params))
            _rotate(m, i, j, eii, complex(xi))
        xi = math.sqrt(_pyramid(next(params)))
        eii = cmath.rect(math.sqrt(1.0 - xi * xi), two_pi * next(params))
        eij = cmath.rect(xi, two_pi * next(params))
        _rotate(m, 0, j, eii, eij)
    return m


def exp_hermite(x: Iterable[float]) -> np.ndarray:
    """Return exp(i H(x)) where H is the Hermitian matrix built from N^2 values.

    The first N values form the diagonal of H; the rest are (real, imaginary)
    pairs of the upper triangle in row-major order.
    """
    values = [float(v) for v in x]
    side = _square_side(values)
    if side == 0:
        return np.zeros((0, 0), dtype=complex)
    h = np.zeros((side, side), dtype=complex)
    h[np.diag_indices(side)] = values[:side]
    rows, cols = np.triu_indices(side, 1)
    pairs = np.asarray(values[side:], dtype=float).reshape(-1, 2)
    upper = pairs[:, 0] + 1j * pairs[:, 1]
    h[rows, cols] = upper
    h[cols, rows] = upper.conjugate()
    return expm(1j * h)


def matrix_fidelity(a, b) -> float:
    """Return |Tr(A^+ B)|^2 / (Tr(A^+ A) Tr(B^+ B))."""
    ma = _as_matrix(a)
    mb = _as_matrix(b)
    if ma.shape != mb.shape:
        raise WrongSize(
            f"Matrix A size (which is {ma.shape[0]}x{ma.shape[1]}) should be equal "
            f"to B size (which is {mb.shape[0]}x{mb.shape[1]})."
        )
    overlap = np.sum(ma.conjugate() * mb)
    norms = np.sum(np.abs(ma) ** 2) * np.sum(np.abs(mb) ** 2)
    return float(abs(overlap) ** 2 / norms)


def _is_identity(p: np.ndarray, eps: float) -> bool:
    prec2 = eps * eps
    diag = np.diagonal(p)
    off = p - np.diag(diag)
    diag_ok = np.all(
        np.abs(diag - 1.0) ** 2 <= np.minimum(np.abs(diag) ** 2, 1.0) * prec2
    )
    off_ok = np.all(np.abs(off) ** 2 <= prec2)
    return bool(diag_ok and off_ok)


def is_column_unitary(m, eps: float = DEFAULT_EPSILON) -> bool:
    """Return whether M^+ M is the identity within eps."""
    a = _as_matrix(m)
    return _is_identity(a.conjugate().T @ a, eps)


def is_row_unitary(m, eps: float = DEFAULT_EPSILON) -> bool:
    """Return whether M M^+ is the identity within eps."""
    a = _as_matrix(m)
    return _is_identity(a @ a.conjugate().T, eps)


def is_unitary(m, eps: float = DEFAULT_EPSILON) -> bool:
    """Return whether a square matrix is both column and row unitary within eps."""
    a = _as_matrix(m)
    if a.shape[0] != a.shape[1]:
        return False
    return is_column_unitary(a, eps) and is_row_unitary(a, eps)