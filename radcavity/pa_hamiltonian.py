"""Hamiltonian in the minimal-coupling (p.A) form."""

from __future__ import annotations

import math

import numpy as np
from scipy.special import gammaincc

from radcavity.parameters import Parameters, identity

_GAMMA_ORDER = 1e-10


def get_a_pa(nf: int) -> np.ndarray:
    """Photon annihilation operator truncated to ``nf`` Fock states."""
    return np.diag(np.sqrt(np.arange(1, nf, dtype=float)), k=1).astype(complex)


def _shifted_index(m: int, l: int, shift: int, size: int) -> int:
    j = m + l - shift
    if not 0 <= j < size:
        raise IndexError(f"coupled kappa index {j} outside grid of size {size}")
    return j


def _kinetic(prm: Parameters) -> np.ndarray:
    i_m = identity(prm.n_kappa)
    i_ph = identity(prm.nf)
    a = get_a_pa(prm.nf)
    a_k = prm.g_wc * math.sqrt(prm.hbar * prm.m * prm.wc)
    vec_pot = a_k * (a + a.T)
    p = np.diag(prm.kappa_grid + prm.k).astype(complex)

    p_new = prm.hbar * np.kron(p, i_ph)
    p_new = p_new - np.kron(i_m, a.T @ a) * (prm.hbar * (prm.k - prm.k_shift))
    p_new = p_new - np.kron(i_m, vec_pot)
    return p_new @ p_new / (2.0 * prm.m)


def _potential(prm: Parameters) -> np.ndarray:
    v = np.zeros((prm.n_kappa, prm.n_kappa), dtype=complex)
    kappa = prm.kappa_grid
    kappa_max = float(np.max(np.abs(kappa))) if kappa.size else 0.0
    shift = (prm.n_kappa2 - 1) // 2
    eps = np.finfo(float).eps

    for l, k2 in enumerate(prm.kappa_grid2):
        if abs(k2) <= eps:
            continue
        value = -prm.z / 2.0 / math.pi * gammaincc(_GAMMA_ORDER, (k2 / 2.0 / prm.r_0) ** 2)
        for m, k1 in enumerate(kappa):
            if abs(k1 + k2) <= kappa_max:
                v[m, _shifted_index(m, l, shift, prm.n_kappa)] = value
    return v


def construct_pa_h(prm: Parameters) -> np.ndarray:
    """Total p.A Hamiltonian ``H_ph + T + V``."""
    i_m = identity(prm.n_kappa)
    i_ph = identity(prm.nf)
    h_ph = np.diag(np.arange(prm.nf, dtype=float)).astype(complex) * prm.wc
    return np.kron(i_m, h_ph) + _kinetic(prm) + np.kron(_potential(prm), i_ph)