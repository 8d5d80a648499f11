"""LU factorisation, linear solves, inverses, determinants and condition numbers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.linalg
from scipy.linalg.lapack import get_lapack_funcs


class LinalgError(Exception):
    """A linear-algebra operation could not be carried out."""


class NotSquareError(LinalgError):
    """The operation needs a square matrix."""

    def __init__(self, rows: int, cols: int) -> None:
        super().__init__(f"matrix must be square, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols


class _SingularMatrixError(LinalgError):
    """The factorisation met an exactly zero pivot."""


def _as_matrix(a) -> np.ndarray:
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D array, got {arr.ndim}-D")
    if not np.issubdtype(arr.dtype, np.inexact):
        return arr.astype(np.float64)
    if arr.dtype == np.float16:
        return arr.astype(np.float32)
    return arr


def _ensure_square(a: np.ndarray) -> int:
    rows, cols = a.shape
    if rows != cols:
        raise NotSquareError(rows, cols)
    return rows


@dataclass(frozen=True, eq=False)
class LUFactorized:
    """LU factorisation ``A = P L U``.

    ``lu`` holds ``L`` below the diagonal (unit diagonal not stored) and ``U``
    on and above it; ``piv`` holds the zero-based row interchanges.
    """

    lu: np.ndarray
    piv: np.ndarray
    anorm: float

    def _size(self) -> int:
        return _ensure_square(self.lu)

    def _solve(self, b, trans: int) -> np.ndarray:
        n = self._size()
        b = np.asarray(b)
        if b.ndim not in (1, 2):
            raise ValueError(f"right-hand side must be 1-D or 2-D, got {b.ndim}-D")
        if b.shape[0] != n:
            raise ValueError(
                f"right-hand side has length {b.shape[0]}, factored matrix has size {n}"
            )
        if n == 0:
            return np.zeros(b.shape, dtype=np.result_type(self.lu, b))
        return scipy.linalg.lu_solve((self.lu, self.piv), b, trans=trans, check_finite=False)

    def solve(self, b) -> np.ndarray:
        """Solve ``A x = b``."""
        return self._solve(b, 0)

    def solve_t(self, b) -> np.ndarray:
        """Solve ``A^T x = b``."""
        return self._solve(b, 1)

    def solve_h(self, b) -> np.ndarray:
        """Solve ``A^H x = b``."""
        return self._solve(b, 2)

    def inv(self) -> np.ndarray:
        """Inverse of the factored matrix."""
        n = self._size()
        identity = np.eye(n, dtype=self.lu.dtype)
        if n == 0:
            return identity
        return scipy.linalg.lu_solve((self.lu, self.piv), identity, check_finite=False)

    def sln_det(self):
        """``(sign, ln|det|)`` of the factored matrix."""
        self._size()
        diag = np.diag(self.lu)
        swaps = int(np.count_nonzero(self.piv != np.arange(len(self.piv))))
        pivot_sign = -1 if swaps % 2 else 1
        magnitudes = np.abs(diag)
        upper_sign = np.prod(diag / magnitudes) if diag.size else 1
        real_type = self.lu.real.dtype.type
        sign = self.lu.dtype.type(pivot_sign * upper_sign)
        ln_det = real_type(np.sum(np.log(magnitudes)) if diag.size else 0.0)
        return sign, ln_det

    def det(self):
        """Determinant of the factored matrix."""
        sign, ln_det = self.sln_det()
        return sign * np.exp(ln_det)

    def rcond(self) -> float:
        """Estimate of the reciprocal condition number in the 1-norm."""
        n = self._size()
        if n == 0:
            return 1.0
        (gecon,) = get_lapack_funcs(("gecon",), (self.lu,))
        value, info = gecon(self.lu, self.anorm, norm="1")
        if info < 0:
            raise LinalgError(f"illegal argument {-info} to condition estimate")
        return float(value)


def factorize(a) -> LUFactorized:
    """LU factorisation of ``a`` with partial pivoting."""
    a = _as_matrix(a)
    rows, cols = a.shape
    anorm = float(np.abs(a).sum(axis=0).max()) if a.size else 0.0
    if a.size == 0:
        return LUFactorized(a.copy(), np.zeros(min(rows, cols), dtype=np.int32), anorm)
    (getrf,) = get_lapack_funcs(("getrf",), (a,))
    lu, piv, info = getrf(a)
    if info < 0:
        raise LinalgError(f"illegal argument {-info} to LU factorisation")
    if info > 0:
        raise _SingularMatrixError(f"matrix is singular: U[{info - 1}, {info - 1}] is zero")
    return LUFactorized(lu, piv, anorm)


def solve(a, b) -> np.ndarray:
    """Solve ``A x = b``."""
    return factorize(a).solve(b)


def solve_t(a, b) -> np.ndarray:
    """Solve ``A^T x = b``."""
    return factorize(a).solve_t(b)


def solve_h(a, b) -> np.ndarray:
    """Solve ``A^H x = b``."""
    return factorize(a).solve_h(b)


def inv(a) -> np.ndarray:
    """Inverse of ``a``."""
    return factorize(a).inv()


def sln_det(a):
    """``(sign, ln|det|)`` of ``a``; a singular matrix gives ``(0, -inf)``."""
    a = _as_matrix(a)
    _ensure_square(a)
    try:
        fac = factorize(a)
    except _SingularMatrixError:
        return a.dtype.type(0), a.real.dtype.type(-np.inf)
    return fac.sln_det()


def det(a):
    """Determinant of ``a``."""
    sign, ln_det = sln_det(a)
    return sign * np.exp(ln_det)


def rcond(a) -> float:
    """Estimate of the reciprocal condition number of ``a`` in the 1-norm."""
    a = _as_matrix(a)
    _ensure_square(a)
    return factorize(a).rcond()