"""Clements design of universal multiport interferometers and its decomposition."""

from __future__ import annotations

import cmath
import math
from collections.abc import Iterable

import numpy as np

from .errors import NotUnitary, WrongSize
from .matrix import DEFAULT_EPSILON, is_unitary


def _checkmate(size: int) -> list[int]:
    """Return the mode pattern of the N(N-1)/2 beam splitters."""
    pattern: list[int] = []
    k = 1
    for _ in range(size * (size - 1) // 2):
        pattern.append(k)
        k += 2
        if k > size - 1:
            k = pattern[-1] % 2 + 1
    return pattern


def clements_design(
    x: Iterable[float],
    y: Iterable[float] | None = None,
    initial=None,
) -> np.ndarray:
    """Return the unitary matrix of a Clements interferometer.

    ``x`` holds N(N-1) phase shifts: even elements are phases before the beam
    splitters, odd ones halves of phases between them, in reverse column-wise
    order. ``y`` optionally holds beam-splitter angle defects in the same
    layout. ``initial`` is a diagonal unitary N x N matrix the design starts
    from; if it is missing, of the wrong size or not unitary, the identity is
    used.
    """
    xs = [float(v) for v in x]
    if y is None:
        ys = [0.0] * len(xs)
    else:
        ys = [float(v) for v in y]
        if len(xs) != len(ys):
            raise WrongSize(
                f"Size of x (which is {len(xs)}) should be equal to size of y "
                f"(which is {len(ys)})."
            )
    pairs = int(len(xs) / 2.0)
    size = int(math.sqrt(2.0 * pairs + 0.25) + 0.5)
    if size * (size - 1) // 2 != pairs:
        raise WrongSize(f"Wrong size of points (current is {len(xs)}).")

    m = None
    if initial is not None:
        candidate = np.array(initial, dtype=complex)
        if candidate.shape == (size, size) and is_unitary(candidate):
            m = candidate
    if m is None:
        m = np.eye(size, dtype=complex)

    pattern = _checkmate(size)
    for i in range(pairs):
        col = pattern[pairs - 1 - i] - 1
        y0, y1 = ys[2 * i], ys[2 * i + 1]
        cosp, cosm = math.cos(y0 + y1), math.cos(y0 - y1)
        sinp, sinm = math.sin(y0 + y1), math.sin(y0 - y1)
        expphi = cmath.rect(1.0, xs[2 * i])
        exp2theta = cmath.rect(1.0, 2.0 * xs[2 * i + 1])
        left = m[:, col].copy()
        right = m[:, col + 1].copy()
        m[:, col] = left * ((exp2theta * (cosm - sinp) - (cosm + sinp)) * expphi * 0.5) + right * (
            (exp2theta * (cosp - sinm) + (cosp + sinm)) * 1j * expphi * 0.5
        )
        m[:, col + 1] = left * ((exp2theta * (cosp + sinm) + (cosp - sinm)) * 1j * 0.5) - right * (
            (exp2theta * (cosm + sinp) - (cosm - sinp)) * 0.5
        )
    return m


def _swap_pairs(x: list[float], a: int, b: int) -> None:
    x[2 * a], x[2 * b] = x[2 * b], x[2 * a]
    x[2 * a + 1], x[2 * b + 1] = x[2 * b + 1], x[2 * a + 1]


def get_clements_design(m, eps: float = DEFAULT_EPSILON) -> tuple[list[float], np.ndarray]:
    """Decompose a unitary matrix according to the Clements design.

    Return ``(x, d)``: the N(N-1) phase-shift parameters in the layout used by
    :func:`clements_design`, and the remaining diagonal unitary matrix. The
    unitarity of ``m`` is checked within ``eps`` unless ``eps`` is not positive.
    """
    a = np.array(m, dtype=complex)
    size = a.shape[1] if a.ndim == 2 else 0
    if eps > 0 and not is_unitary(a, eps):
        raise NotUnitary("Given matrix is not unitary")
    pairs = size * (size - 1) // 2
    x = [0.0] * (2 * pairs)
    modes = [0] * pairs
    pattern = _checkmate(size)
    first, second = pairs - 1, 0

    with np.errstate(divide="ignore", invalid="ignore"):
        for k in range(size - 1):
            if k % 2 == 0:
                for col in range(k, -1, -1):
                    row = size - 1 - k + col
                    modes[first] = col + 1
                    ratio = a[row, col + 1] / a[row, col]
                    phi = -float(np.angle(-ratio))
                    theta = float(np.arctan(np.abs(ratio)))
                    expphi = cmath.rect(1.0, -phi)
                    exp2theta = cmath.rect(1.0, -2.0 * theta)
                    left = a[:, col].copy()
                    right = a[:, col + 1].copy()
                    a[:, col] = left * ((exp2theta - 1.0) * expphi * 0.5) - right * (
                        (exp2theta + 1.0) * 1j * 0.5
                    )
                    a[:, col + 1] = left * ((exp2theta + 1.0) * 1j * expphi * -0.5) - right * (
                        (exp2theta - 1.0) * 0.5
                    )
                    x[2 * first] = phi
                    x[2 * first + 1] = theta
                    first -= 1
            else:
                for j in range(k + 1):
                    n = size - 1 - k + j
                    modes[second] = n
                    ratio = a[n - 1, j] / a[n, j]
                    phi = -float(np.angle(ratio))
                    theta = float(np.arctan(np.abs(ratio)))
                    expphi = cmath.rect(1.0, phi)
                    exp2theta = cmath.rect(1.0, 2.0 * theta)
                    upper = a[n - 1, :].copy()
                    lower = a[n, :].copy()
                    a[n - 1, :] = upper * ((exp2theta - 1.0) * expphi * 0.5) + lower * (
                        (exp2theta + 1.0) * 1j * 0.5
                    )
                    a[n, :] = upper * ((exp2theta + 1.0) * expphi * 1j * 0.5) - lower * (
                        (exp2theta - 1.0) * 0.5
                    )
                    x[2 * second] = phi
                    x[2 * second + 1] = theta
                    second += 1

    # Move the left-hand (row) blocks through the diagonal to the right.
    for i in range(second - 1, -1, -1):
        col = modes[i] - 1
        phim = cmath.phase(a[col, col])
        phin = cmath.phase(a[col + 1, col + 1])
        a[col, col] = -cmath.rect(1.0, phin - x[2 * i])
        diff = phim - phin
        x[2 * i] = diff - math.pi if diff >= 0 else diff + math.pi
        x[2 * i + 1] = -x[2 * i + 1]

    # Reorder into reverse column-wise enumeration.
    for i in range(pairs - 1, -1, -1):
        wanted = pattern[pairs - 1 - i]
        if modes[i] == wanted:
            continue
        for n in range(i - 1, -1, -1):
            if modes[n] == wanted:
                _swap_pairs(x, i, n)
                modes[i], modes[n] = modes[n], modes[i]
                break
            if modes[n] == modes[i]:
                _swap_pairs(x, i, n)
    return x, a