"""Singular value decomposition (Golub-Reinsch) and the Kronecker product."""

from __future__ import annotations

from dataclasses import dataclass
from math import sqrt

import numpy as np

from exptran.errors import ExpTranError

MAX_ITERATIONS = 30


class SVDConvergenceError(ExpTranError):
    """The QR iteration failed to converge on a singular value."""

    def __init__(self, index: int) -> None:
        super().__init__(f"no convergence at singular value {index}")
        self.index = index


@dataclass(frozen=True)
class SVDResult:
    """Outcome of :func:`svd`: ``a == u[:, :n] @ diag(singular_values) @ v.T``.

    The singular values are non-negative and not sorted. ``u`` is ``m x m``
    and ``v`` is ``n x n``; either is ``None`` when it was not requested.
    """

    singular_values: np.ndarray
    u: np.ndarray | None
    v: np.ndarray | None


def _rotate(matrix: np.ndarray, first: int, second: int, c: float, s: float) -> None:
    a = matrix[:, first].copy()
    b = matrix[:, second].copy()
    matrix[:, first] = a * c + b * s
    matrix[:, second] = -a * s + b * c


def _signed_root(f: float, s: float) -> float:
    return sqrt(s) if f < 0 else -sqrt(s)


def svd(a, eps=1e-6, tol=1e-6, with_u=True, with_v=True) -> SVDResult:
    """Decompose the ``m x n`` matrix ``a`` (``m >= n``).

    ``eps`` is the relative convergence tolerance and ``tol`` the smallest
    squared norm a Householder vector may have before it is treated as zero.
    Raises :class:`SVDConvergenceError` when a singular value needs more than
    thirty QR iterations.
    """
    matrix = np.array(a, dtype=float)
    if matrix.ndim != 2:
        raise ValueError("svd expects a two-dimensional matrix")
    m, n = matrix.shape
    if m < n:
        raise ValueError("svd needs at least as many rows as columns")
    if eps < 0 or tol < 0:
        raise ValueError("eps and tol must be non-negative")

    u = np.zeros((m, m))
    u[:, :n] = matrix
    q = [0.0] * n
    e = [0.0] * n

    # Householder reduction to bidiagonal form.
    g = x = 0.0
    l = 0
    for i in range(n):
        e[i] = g
        l = i + 1
        column = u[i:, i]
        s = float(column @ column)
        if s < tol:
            g = 0.0
        else:
            f = float(u[i, i])
            g = _signed_root(f, s)
            h = f * g - s
            u[i, i] = f - g
            column = u[i:, i]
            sums = column @ u[i:, l:n]
            u[i:, l:n] += np.outer(column, sums / h)
        q[i] = g
        row = u[i, l:n]
        s = float(row @ row)
        if l >= n or s < tol:
            g = 0.0
        else:
            f = float(u[i, l])
            g = _signed_root(f, s)
            h = f * g - s
            u[i, l] = f - g
            scale = u[i, l:n] / h
            e[l:n] = scale.tolist()
            sums = u[l:m, l:n] @ u[i, l:n]
            u[l:m, l:n] += np.outer(sums, scale)
        x = max(x, abs(q[i]) + abs(e[i]))

    # Accumulation of right-hand transformations.
    v = None
    if with_v:
        v = np.zeros((n, n))
        for i in reversed(range(n)):
            if g != 0.0:
                h = float(u[i, i + 1]) * g
                v[l:, i] = u[i, l:n] / h
                sums = u[i, l:n] @ v[l:, l:]
                v[l:, l:] += np.outer(v[l:, i], sums)
            v[i, l:] = 0.0
            v[l:, i] = 0.0
            v[i, i] = 1.0
            g = e[i]
            l = i

    # Accumulation of left-hand transformations.
    if with_u:
        for i in range(n, m):
            u[i, n:] = 0.0
            u[i, i] = 1.0
        for i in reversed(range(n)):
            l = i + 1
            g = q[i]
            u[i, l:] = 0.0
            if g != 0.0:
                h = float(u[i, i]) * g
                sums = u[l:, i] @ u[l:, l:]
                u[i:, l:] += np.outer(u[i:, i], sums / h)
                u[i:, i] /= g
            else:
                u[i:, i] = 0.0
            u[i, i] += 1.0

    # Diagonalization of the bidiagonal form.
    eps *= x
    for k in reversed(range(n)):
        iteration = 0
        while True:
            cancel = False
            for l in range(k, -1, -1):
                if abs(e[l]) <= eps:
                    break
                if abs(q[l - 1]) <= eps:
                    cancel = True
                    break
            if cancel:
                c, s = 0.0, 1.0
                l1 = l - 1
                for i in range(l, k + 1):
                    f = s * e[i]
                    e[i] *= c
                    if abs(f) <= eps:
                        break
                    g = q[i]
                    h = sqrt(f * f + g * g)
                    q[i] = h
                    c = g / h
                    s = -f / h
                    if with_u:
                        _rotate(u, l1, i, c, s)
            z = q[k]
            if l == k:
                break

            iteration += 1
            if iteration > MAX_ITERATIONS:
                raise SVDConvergenceError(k)

            # Shift from the bottom 2x2 minor.
            x = q[l]
            y = q[k - 1]
            g = e[k - 1]
            h = e[k]
            f = ((y - z) * (y + z) + (g - h) * (g + h)) / (2 * h * y)
            g = sqrt(f * f + 1.0)
            f = ((x - z) * (x + z) + h * (y / (f - g if f < 0 else f + g) - h)) / x

            # Next QR transformation.
            c = s = 1.0
            for i in range(l + 1, k + 1):
                g = e[i]
                y = q[i]
                h = s * g
                g *= c
                z = sqrt(f * f + h * h)
                e[i - 1] = z
                c = f / z
                s = h / z
                f = x * c + g * s
                g = -x * s + g * c
                h = y * s
                y *= c
                if v is not None:
                    _rotate(v, i - 1, i, c, s)
                z = sqrt(f * f + h * h)
                q[i - 1] = z
                c = f / z
                s = h / z
                f = c * g + s * y
                x = -s * g + c * y
                if with_u:
                    _rotate(u, i - 1, i, c, s)
            e[l] = 0.0
            e[k] = f
            q[k] = x

        if z < 0.0:
            q[k] = -z
            if v is not None:
                v[:, k] = -v[:, k]

    return SVDResult(
        singular_values=np.array(q, dtype=float),
        u=u if with_u else None,
        v=v,
    )


def kron(a, b) -> np.ndarray:
    """Kronecker product of an ``m x n`` and a ``p x q`` matrix."""
    left = np.asarray(a, dtype=float)
    right = np.asarray(b, dtype=float)
    if left.ndim != 2 or right.ndim != 2:
        raise ValueError("kron expects two-dimensional matrices")
    m, n = left.shape
    p, q = right.shape
    return (left[:, None, :, None] * right[None, :, None, :]).reshape(m * p, n * q)