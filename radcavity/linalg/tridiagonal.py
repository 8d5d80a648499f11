"""Tridiagonal matrices: extraction, LU factorisation, solves, determinants."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.linalg.lapack import get_lapack_funcs

from radcavity.linalg.solve import LinalgError, NotSquareError

_TRANS = {"solve": "N", "solve_t": "T", "solve_h": "C"}


def _common_dtype(*arrays: np.ndarray) -> np.dtype:
    dtype = np.result_type(*arrays)
    if not np.issubdtype(dtype, np.inexact):
        return np.dtype(np.float64)
    if dtype == np.float16:
        return np.dtype(np.float32)
    return dtype


def _check_rhs(b, n: int) -> np.ndarray:
    b = np.asarray(b)
    if b.ndim not in (1, 2):
        raise ValueError(f"right-hand side must be 1-D or 2-D, got {b.ndim}-D")
    if b.shape[0] != n:
        raise ValueError(f"right-hand side has length {b.shape[0]}, matrix has size {n}")
    return b


@dataclass(frozen=True, eq=False)
class LUFactorizedTridiagonal:
    """LU factorisation ``A = P L U`` of a tridiagonal matrix.

    The arrays are those produced by the LAPACK ``gttrf`` routine; ``anorm``
    is the 1-norm of the original matrix.
    """

    dl: np.ndarray
    d: np.ndarray
    du: np.ndarray
    du2: np.ndarray
    ipiv: np.ndarray
    anorm: float

    @property
    def size(self) -> int:
        return self.d.shape[0]

    def _solve(self, b, trans: str) -> np.ndarray:
        n = self.size
        b = _check_rhs(b, n)
        if np.iscomplexobj(b) and not np.iscomplexobj(self.d):
            return self._solve(b.real, trans) + 1j * self._solve(b.imag, trans)
        rhs = np.asfortranarray(b.reshape(n, -1).astype(self.d.dtype))
        if rhs.shape[1] == 0:
            return rhs.reshape(b.shape)
        if n == 1:
            pivot = np.conj(self.d[0]) if trans == "C" else self.d[0]
            x = rhs / pivot
        else:
            (gttrs,) = get_lapack_funcs(("gttrs",), (self.d,))
            x, info = gttrs(self.dl, self.d, self.du, self.du2, self.ipiv, rhs, trans=trans)
            if info != 0:
                raise LinalgError(f"tridiagonal solve failed with info {info}")
        return np.asarray(x).reshape(b.shape)

    def solve(self, b) -> np.ndarray:
        """Solve ``A x = b``."""
        return self._solve(b, _TRANS["solve"])

    def solve_t(self, b) -> np.ndarray:
        """Solve ``A^T x = b``."""
        return self._solve(b, _TRANS["solve_t"])

    def solve_h(self, b) -> np.ndarray:
        """Solve ``A^H x = b``."""
        return self._solve(b, _TRANS["solve_h"])

    def rcond(self) -> float:
        """Reciprocal condition number in the 1-norm."""
        inverse = self.solve(np.eye(self.size, dtype=self.d.dtype))
        inv_norm = float(np.abs(inverse).sum(axis=0).max())
        if self.anorm == 0.0 or inv_norm == 0.0:
            return 0.0
        return 1.0 / (self.anorm * inv_norm)


@dataclass(frozen=True, eq=False)
class Tridiagonal:
    """A tridiagonal matrix stored as sub-, main and super-diagonal."""

    dl: np.ndarray
    d: np.ndarray
    du: np.ndarray

    def __post_init__(self) -> None:
        dl, d, du = (np.atleast_1d(np.asarray(x)) for x in (self.dl, self.d, self.du))
        dtype = _common_dtype(dl, d, du)
        n = d.shape[0]
        if d.ndim != 1 or n < 1:
            raise ValueError("main diagonal must be a non-empty 1-D array")
        if dl.shape != (n - 1,) or du.shape != (n - 1,):
            raise ValueError(
                f"off-diagonals must have length {n - 1}, got {dl.shape} and {du.shape}"
            )
        object.__setattr__(self, "dl", dl.astype(dtype))
        object.__setattr__(self, "d", d.astype(dtype))
        object.__setattr__(self, "du", du.astype(dtype))

    @property
    def size(self) -> int:
        return self.d.shape[0]

    def _one_norm(self) -> float:
        columns = np.abs(self.d).astype(float)
        columns[1:] += np.abs(self.du)
        columns[:-1] += np.abs(self.dl)
        return float(columns.max())

    def factorize(self) -> LUFactorizedTridiagonal:
        """LU factorisation with partial pivoting."""
        anorm = self._one_norm()
        if self.size == 1:
            if self.d[0] == 0:
                raise LinalgError("matrix is singular: U[0, 0] is zero")
            empty = self.dl.copy()
            return LUFactorizedTridiagonal(
                empty, self.d.copy(), empty, empty, np.ones(1, dtype=np.int32), anorm
            )
        (gttrf,) = get_lapack_funcs(("gttrf",), (self.d,))
        dl, d, du, du2, ipiv, info = gttrf(self.dl, self.d, self.du)
        if info < 0:
            raise LinalgError(f"illegal argument {-info} to tridiagonal factorisation")
        if info > 0:
            raise LinalgError(f"matrix is singular: U[{info - 1}, {info - 1}] is zero")
        return LUFactorizedTridiagonal(dl, d, du, du2, ipiv, anorm)

    def solve(self, b) -> np.ndarray:
        """Solve ``A x = b``."""
        return self.factorize().solve(b)

    def solve_t(self, b) -> np.ndarray:
        """Solve ``A^T x = b``."""
        return self.factorize().solve_t(b)

    def solve_h(self, b) -> np.ndarray:
        """Solve ``A^H x = b``."""
        return self.factorize().solve_h(b)

    def det(self):
        """Determinant by the three-term recurrence over the diagonals."""
        prev, current = self.d.dtype.type(1), self.d[0]
        for d_i, dl_i, du_i in zip(self.d[1:], self.dl, self.du):
            prev, current = current, d_i * current - dl_i * du_i * prev
        return current

    def rcond(self) -> float:
        """Reciprocal condition number in the 1-norm."""
        return self.factorize().rcond()


def extract_tridiagonal(a) -> Tridiagonal:
    """Tridiagonal part of the square matrix ``a``; other entries are ignored."""
    a = np.asarray(a)
    if a.ndim != 2:
        raise ValueError(f"expected a 2-D array, got {a.ndim}-D")
    rows, cols = a.shape
    if rows != cols:
        raise NotSquareError(rows, cols)
    if rows < 2:
        raise LinalgError(f"a tridiagonal matrix must be at least 2x2, got {rows}x{cols}")
    return Tridiagonal(np.diag(a, -1).copy(), np.diag(a).copy(), np.diag(a, 1).copy())


def _as_tridiagonal(a) -> Tridiagonal:
    return a if isinstance(a, Tridiagonal) else extract_tridiagonal(a)


def factorize_tridiagonal(a) -> LUFactorizedTridiagonal:
    """LU factorisation of a tridiagonal matrix, given dense or as ``Tridiagonal``."""
    return _as_tridiagonal(a).factorize()


def solve_tridiagonal(a, b) -> np.ndarray:
    """Solve ``A x = b`` for tridiagonal ``A``."""
    return factorize_tridiagonal(a).solve(b)


def det_tridiagonal(a):
    """Determinant of a tridiagonal matrix."""
    return _as_tridiagonal(a).det()


def rcond_tridiagonal(a) -> float:
    """Reciprocal condition number in the 1-norm of a tridiagonal matrix."""
    return factorize_tridiagonal(a).rcond()