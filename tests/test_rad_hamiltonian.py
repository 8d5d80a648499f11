import numpy as np
import pytest

from radcavity.parameters import get_parameters
from radcavity.rad_hamiltonian import construct_rad_h, get_a_rad, get_couplings


def _params(g_wc, wc=0.5):
    prm = get_parameters(["disp", "0.1", "-1", "0", "2", "4", "3", "3"])
    prm.wc = wc
    prm.g_wc = g_wc
    prm.omega, prm.xi_g = get_couplings(prm)
    return prm


def test_couplings_without_coupling():
    prm = _params(0.0)
    prm.omega = 1.0
    omega, xi_g = get_couplings(prm)
    assert omega == pytest.approx(0.5)
    assert xi_g == 0.0


def test_couplings_omega_invariant():
    prm = _params(0.3, wc=0.4)
    omega, _ = get_couplings(prm)
    assert omega**2 == pytest.approx(prm.wc**2 + 2 * prm.g_wc**2)


def test_xi_scales_with_stored_frequency():
    prm = _params(0.3)
    prm.omega = 1.0
    _, xi_one = get_couplings(prm)
    prm.omega = 4.0
    _, xi_four = get_couplings(prm)
    assert xi_four == pytest.approx(xi_one / 2)


def test_a_rad_reduces_to_annihilation_without_coupling():
    prm = _params(0.0)
    a = get_a_rad(3, prm)
    expected = np.diag(np.sqrt([1.0, 2.0]), k=1)
    np.testing.assert_allclose(a, expected)


def test_a_rad_preserves_commutator():
    plain = get_a_rad(4, _params(0.0))
    squeezed = get_a_rad(4, _params(0.7))
    np.testing.assert_allclose(
        squeezed @ squeezed.T - squeezed.T @ squeezed,
        plain @ plain.T - plain.T @ plain,
        atol=1e-12,
    )


@pytest.mark.parametrize("g_wc", [0.0, 0.2, 1.5])
def test_hamiltonian_is_hermitian(g_wc):
    prm = _params(g_wc)
    prm.k = 0.3
    h = construct_rad_h(prm)
    assert h.shape == (prm.nf * prm.n_kappa,) * 2
    np.testing.assert_allclose(h, h.conj().T, atol=1e-12)


def test_uncoupled_diagonal_is_kinetic_plus_photons():
    prm = _params(0.0)
    h = construct_rad_h(prm)
    expected = np.add.outer(
        prm.kappa_grid**2 / 2, np.arange(prm.nf) * prm.omega
    ).ravel()
    np.testing.assert_allclose(np.diag(h).real, expected, atol=1e-12)
    np.testing.assert_allclose(h.imag, 0.0, atol=1e-12)