"""Building and diagonalising the Hamiltonian over a set of k-points."""

from __future__ import annotations

import math
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial

import numpy as np
import scipy.linalg
from tqdm import tqdm

from radcavity.pa_hamiltonian import construct_pa_h, get_a_pa
from radcavity.parameters import Parameters, get_parameters, identity
from radcavity.rad_hamiltonian import construct_rad_h, get_a_rad, get_couplings

_BUILDERS = {
    "RAD": construct_rad_h,
    "pA": construct_pa_h,
}


def _invalid_hamiltonian(name: str) -> ValueError:
    return ValueError(f"invalid Hamiltonian type {name!r}; expected one of {sorted(_BUILDERS)}")


def construct_h_total(prm: Parameters) -> np.ndarray:
    """Total Hamiltonian of the type named by ``prm.hamiltonian`` ("RAD" or "pA")."""
    try:
        builder = _BUILDERS[prm.hamiltonian]
    except KeyError:
        raise _invalid_hamiltonian(prm.hamiltonian) from None
    return builder(prm)


def _photon_operator(prm: Parameters) -> np.ndarray:
    if prm.hamiltonian == "RAD":
        return get_a_rad(prm.nf, prm)
    if prm.hamiltonian == "pA":
        return get_a_pa(prm.nf)
    raise _invalid_hamiltonian(prm.hamiltonian)


def _photon_numbers(prm: Parameters, eig_v: np.ndarray) -> np.ndarray:
    """Coulomb-gauge ``<a^+ a>`` for every eigenvector column of ``eig_v``."""
    a = _photon_operator(prm)
    n_pa = np.kron(identity(prm.n_kappa), a.T @ a)
    # Diagonal of eig_v.T @ n_pa @ eig_v, without forming the full product.
    return np.abs(np.einsum("ij,ij->j", eig_v, n_pa @ eig_v))


def solve_h(prm: Parameters) -> tuple[np.ndarray, np.ndarray]:
    """Eigen-energies (ascending) and photon numbers for one set of parameters."""
    h = construct_h_total(prm)
    eig_e, eig_v = scipy.linalg.eigh(h, lower=False)
    return eig_e, _photon_numbers(prm, eig_v)


def _check_k_points(k_points: np.ndarray, nk: int) -> None:
    if k_points.ndim != 1 or k_points.shape[0] != nk:
        raise ValueError(f"expected {nk} k-points, got array of shape {k_points.shape}")


def _solve_point(
    args: Sequence[str],
    k: float,
    *,
    g_wc: float,
    absorb_wc: float | None,
    k_shift: float,
) -> tuple[np.ndarray, np.ndarray]:
    prm_k = get_parameters(args)
    prm_k.k = float(k)
    prm_k.g_wc = g_wc
    if absorb_wc is None:
        prm_k.wc = math.hypot(prm_k.wc_norm, k - k_shift)
    else:
        prm_k.wc = absorb_wc
    prm_k.omega, prm_k.xi_g = get_couplings(prm_k)
    return solve_h(prm_k)


def _assemble(
    k_points: np.ndarray, results: list[tuple[np.ndarray, np.ndarray]], n_states: int
) -> tuple[np.ndarray, np.ndarray]:
    nk = k_points.shape[0]
    data = np.zeros((nk, n_states + 1))
    data[:, 0] = k_points
    data[:, 1:] = np.reshape([energies for energies, _ in results], (nk, n_states))
    data_color = np.reshape([photons for _, photons in results], (nk, n_states)).astype(float)
    return data, data_color


def parallel_dispatch(
    args: Sequence[str],
    k_points,
    g_wc: float,
    absorb_wc: float | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Solve every k-point concurrently.

    Returns ``(data, data_color)``: ``data`` holds the k-point in column 0 and
    the eigen-energies after it; ``data_color`` holds the photon numbers.
    When ``absorb_wc`` is given it is used as the cavity frequency for every
    k-point, otherwise the frequency follows the dispersion of each k-point.
    """
    prm = get_parameters(args)
    k_points = np.asarray(k_points, dtype=float)
    _check_k_points(k_points, prm.nk)

    worker = partial(
        _solve_point, args, g_wc=g_wc, absorb_wc=absorb_wc, k_shift=prm.k_shift
    )
    max_workers = max(1, min(prm.n_cpus, os.cpu_count() or 1))
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = list(tqdm(pool.map(worker, k_points), total=len(k_points)))
    return _assemble(k_points, results, prm.nf * prm.n_kappa)


def serial_dispatch(
    args: Sequence[str], k_points, g_wc: float
) -> tuple[np.ndarray, np.ndarray]:
    """Solve the k-points one after another, reusing a single parameter set."""
    prm = get_parameters(args)
    prm.g_wc = g_wc
    k_points = np.asarray(k_points, dtype=float)
    _check_k_points(k_points, prm.nk)

    results = []
    for k in tqdm(k_points):
        prm.k = float(k)
        prm.wc = math.hypot(prm.wc_norm, k - prm.k_shift)
        prm.omega, prm.xi_g = get_couplings(prm)
        results.append(solve_h(prm))
    return _assemble(k_points, results, prm.nf * prm.n_kappa)