"""Singular-value decomposition, plain and divide-and-conquer."""

from __future__ import annotations

from enum import Enum

import numpy as np
import scipy.linalg


class JobSvd(Enum):
    """How much of ``U`` and ``V^H`` a divide-and-conquer SVD computes."""

    ALL = "A"
    SOME = "S"
    NONE = "N"


def _as_matrix(a) -> np.ndarray:
    arr = np.asarray(a)
    if arr.ndim != 2:
        raise ValueError(f"expected a 2-D array, got {arr.ndim}-D")
    if not np.issubdtype(arr.dtype, np.inexact):
        return arr.astype(np.float64)
    if arr.dtype == np.float16:
        return arr.astype(np.float32)
    return arr


def _no_values(a: np.ndarray) -> np.ndarray:
    return np.zeros(0, dtype=a.real.dtype)


def svd(a, calc_u: bool, calc_vt: bool):
    """``(U, s, V^H)`` of ``a`` with square ``U`` and ``V^H``.

    ``U`` or ``V^H`` is ``None`` when it is not asked for.
    """
    a = _as_matrix(a)
    n, m = a.shape
    if not (calc_u or calc_vt):
        if a.size == 0:
            return None, _no_values(a), None
        s = scipy.linalg.svd(a, compute_uv=False, lapack_driver="gesvd")
        return None, s, None
    if a.size == 0:
        u, s, vt = np.eye(n, dtype=a.dtype), _no_values(a), np.eye(m, dtype=a.dtype)
    else:
        u, s, vt = scipy.linalg.svd(a, full_matrices=True, lapack_driver="gesvd")
    return (u if calc_u else None), s, (vt if calc_vt else None)


def svddc(a, job: JobSvd):
    """``(U, s, V^H)`` of ``a`` by divide and conquer.

    ``ALL`` gives square factors, ``SOME`` gives ``U`` of shape ``(n, k)`` and
    ``V^H`` of shape ``(k, m)`` with ``k = min(n, m)``, ``NONE`` gives no factors.
    """
    a = _as_matrix(a)
    n, m = a.shape
    k = min(n, m)
    if job is JobSvd.NONE:
        if a.size == 0:
            return None, _no_values(a), None
        s = scipy.linalg.svd(a, compute_uv=False, lapack_driver="gesdd")
        return None, s, None
    full = job is JobSvd.ALL
    if a.size == 0:
        if full:
            return np.eye(n, dtype=a.dtype), _no_values(a), np.eye(m, dtype=a.dtype)
        return (
            np.zeros((n, k), dtype=a.dtype),
            _no_values(a),
            np.zeros((k, m), dtype=a.dtype),
        )
    u, s, vt = scipy.linalg.svd(a, full_matrices=full, lapack_driver="gesdd")
    return u, s, vt