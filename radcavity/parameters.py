"""Simulation parameters and their construction from command-line arguments."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

_COUNT_PATTERN = re.compile(r"\+?\d+")
_N_ARGS = 8


def _empty() -> np.ndarray:
    return np.zeros(0)


@dataclass
class Parameters:
    """Everything needed to build and solve one dispersion calculation."""

    wc_norm: float = 0.1
    wc: float = 0.0
    g_wc: float = 0.0
    ng: int = 128
    g_wc_grid: np.ndarray = field(default_factory=_empty)
    nf: int = 5
    n_cpus: int = 48
    nk: int = 240
    n_kappa: int = 64
    n_kappa2: int = 11
    k: float = 0.0
    k_ph: float = 0.0
    a_0: float = 4.0
    z: float = 0.1278
    r_0: float = 10.0
    k_shift: float = 0.0
    k_points: np.ndarray = field(default_factory=_empty)
    kappa_grid: np.ndarray = field(default_factory=_empty)
    kappa_grid2: np.ndarray = field(default_factory=_empty)
    omega: float = 1.0
    xi_g: float = 0.0
    m: float = 1.0
    hbar: float = 1.0
    load_existing: bool = True
    max_energy: float = 1.5
    k_ph_factor: int = 1
    near_edge: bool = False
    hamiltonian: str = "RAD"


def _parse_float(text: str, name: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {text!r}") from None


def _parse_count(text: str, name: str) -> int:
    if not _COUNT_PATTERN.fullmatch(text):
        raise ValueError(f"{name} must be a non-negative integer, got {text!r}")
    return int(text)


def _symmetric_grid(n: int, a_0: float) -> np.ndarray:
    return math.pi / a_0 * np.linspace(n - 1.0, -(n - 1.0), n)


def get_parameters(args: Sequence[str]) -> Parameters:
    """Build parameters from ``[routine, wc_norm, log_g_min, log_g_max, ng, nk, n_kappa, nf]``."""
    if len(args) < _N_ARGS:
        raise ValueError(
            f"expected {_N_ARGS} arguments "
            "(routine wc_norm log_g_min log_g_max ng nk n_kappa nf), "
            f"got {len(args)}"
        )

    prm = Parameters()
    prm.wc_norm = _parse_float(args[1], "wc_norm")

    log_g_min = _parse_float(args[2], "log_g_min")
    log_g_max = _parse_float(args[3], "log_g_max")
    prm.ng = _parse_count(args[4], "ng")
    prm.g_wc_grid = (10.0 ** np.linspace(log_g_min, log_g_max, prm.ng + 1))[:-1]

    prm.nk = _parse_count(args[5], "nk")
    prm.n_kappa = _parse_count(args[6], "n_kappa")
    prm.nf = _parse_count(args[7], "nf")

    edge = math.pi / prm.a_0
    if prm.near_edge:
        prm.k_points = np.linspace(edge - 0.03, edge + 0.03, prm.nk)
    else:
        prm.k_points = np.linspace(-edge + prm.k_shift, edge + prm.k_shift, prm.nk)

    prm.kappa_grid = _symmetric_grid(prm.n_kappa, prm.a_0)
    prm.kappa_grid2 = _symmetric_grid(prm.n_kappa2, prm.a_0)
    return prm


def identity(n: int) -> np.ndarray:
    """Complex identity matrix of size ``n``."""
    return np.eye(n, dtype=complex)