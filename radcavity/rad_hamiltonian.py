"""Hamiltonian in the RAD representation beyond the long-wavelength limit."""

from __future__ import annotations

import math

import numpy as np
from scipy.linalg import expm
from scipy.special import gammaincc

from radcavity.parameters import Parameters, identity

_GAMMA_ORDER = 1e-10
_ZERO_KAPPA = 1e-7


def _annihilation(nf: int) -> np.ndarray:
    return np.diag(np.sqrt(np.arange(1, nf, dtype=float)), k=1).astype(complex)


def _photon_energy(nf: int, frequency: float) -> np.ndarray:
    return np.diag(np.arange(nf, dtype=float)).astype(complex) * frequency


def _shifted_index(m: int, l: int, shift: int, size: int) -> int:
    j = m + l - shift
    if not 0 <= j < size:
        raise IndexError(f"coupled kappa index {j} outside grid of size {size}")
    return j


def _coulomb_element(k2: float, prm: Parameters) -> float:
    return -prm.z / 2.0 / math.pi * gammaincc(_GAMMA_ORDER, (k2 / 2.0 / prm.r_0) ** 2)


def get_couplings(prm: Parameters) -> tuple[float, float]:
    """Bogoliubov frequency and effective coupling ``(omega, xi_g)``."""
    omega = math.sqrt(prm.wc**2 + 2.0 * prm.g_wc**2)
    x_omega = math.sqrt(prm.hbar / (prm.m * prm.omega))
    xi_g = prm.g_wc * x_omega / omega
    return omega, xi_g


def get_a_rad(nf: int, prm: Parameters) -> np.ndarray:
    """Coulomb-gauge ``a`` operator in the Bogoliubov ``b`` Fock basis."""
    s_wc = math.sqrt(prm.omega / prm.wc)
    u = 0.5 * (s_wc - 1.0 / s_wc)
    v = 0.5 * (s_wc + 1.0 / s_wc)
    b = _annihilation(nf)
    return -u * b.T + v * b


def _kinetic(prm: Parameters) -> np.ndarray:
    i_m = identity(prm.n_kappa)
    i_ph = identity(prm.nf)
    m_eff = prm.m * (1.0 + 2.0 * prm.g_wc**2)
    a = get_a_rad(prm.nf, prm)
    p = np.diag(prm.kappa_grid + prm.k).astype(complex)

    p_new = prm.hbar * np.kron(p, i_ph)
    p_new = p_new - np.kron(i_m, a.T @ a) * (prm.hbar * (prm.k - prm.k_shift))
    return p_new @ p_new / (2.0 * m_eff)


def _potential(prm: Parameters) -> np.ndarray:
    b = _annihilation(prm.nf)
    chi = b.T + b
    n = prm.nf * prm.n_kappa
    kappa = prm.kappa_grid
    kappa_max = float(np.max(np.abs(kappa))) if kappa.size else 0.0
    shift = (prm.n_kappa2 - 1) // 2

    v_shifted = np.zeros((n, n), dtype=complex)
    for l, k2 in enumerate(prm.kappa_grid2):
        if abs(k2) <= _ZERO_KAPPA:
            continue
        phase = chi * prm.xi_g * k2 * 1j
        if np.abs(phase).sum(axis=0).max() > np.finfo(float).eps * 2.0:
            exponent = expm(phase)
        else:
            exponent = identity(prm.nf)

        value = _coulomb_element(k2, prm)
        block = np.zeros((prm.n_kappa, prm.n_kappa), dtype=complex)
        for m, k1 in enumerate(kappa):
            if abs(k1 + k2) <= kappa_max:
                block[m, _shifted_index(m, l, shift, prm.n_kappa)] = value
        v_shifted += np.kron(block, exponent)
    return v_shifted


def construct_rad_h(prm: Parameters) -> np.ndarray:
    """Total RAD Hamiltonian ``H_ph + T_RAD + V_RAD``."""
    i_m = identity(prm.n_kappa)
    h_ph = _photon_energy(prm.nf, prm.omega)
    return np.kron(i_m, h_ph) + _kinetic(prm) + _potential(prm)