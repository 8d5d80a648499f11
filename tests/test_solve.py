import math

import numpy as np
import pytest

from radcavity.linalg.solve import (
    LinalgError,
    LUFactorized,
    NotSquareError,
    det,
    factorize,
    inv,
    rcond,
    sln_det,
    solve,
    solve_h,
    solve_t,
)

EXAMPLE_A = np.array([[3.0, 2.0, -1.0], [2.0, -2.0, 4.0], [-2.0, 1.0, -2.0]])
EXAMPLE_B = np.array([1.0, -2.0, 0.0])


def _assert_close_l2(actual, expected, rtol):
    actual = np.asarray(actual)
    expected = np.asarray(expected)
    assert actual.shape == expected.shape
    scale = np.linalg.norm(expected)
    diff = np.linalg.norm(actual - expected)
    if scale == 0:
        assert diff <= rtol
    else:
        assert diff / scale <= rtol


def _random(n, dtype, fortran):
    rng = np.random.default_rng(0xCAFEF00D)
    a = rng.uniform(-1.0, 1.0, (n, n)) + n * np.eye(n)
    if np.issubdtype(dtype, np.complexfloating):
        a = a + 1j * rng.uniform(-1.0, 1.0, (n, n))
    a = a.astype(dtype)
    return np.asfortranarray(a) if fortran else np.ascontiguousarray(a)


def test_solve_example():
    x = solve(EXAMPLE_A, EXAMPLE_B)
    np.testing.assert_allclose(x, [1.0, -2.0, -2.0], atol=1e-9)


def test_factorize_reused_for_several_right_hand_sides():
    fac = factorize(EXAMPLE_A)
    assert isinstance(fac, LUFactorized)
    for b in (EXAMPLE_B, np.array([0.0, 1.0, 2.0]), np.array([5.0, -3.0, 1.0])):
        np.testing.assert_allclose(EXAMPLE_A @ fac.solve(b), b, atol=1e-9)


def test_solve_t():
    x = solve_t(EXAMPLE_A, EXAMPLE_B)
    np.testing.assert_allclose(EXAMPLE_A.T @ x, EXAMPLE_B, atol=1e-9)


def test_solve_h_complex():
    a = np.array([[2.0 + 1j, 1.0], [0.5j, 3.0 - 1j]])
    b = np.array([1.0 + 0j, 2.0 - 1j])
    x = solve_h(a, b)
    np.testing.assert_allclose(a.conj().T @ x, b, atol=1e-12)
    x_t = solve_t(a, b)
    np.testing.assert_allclose(a.T @ x_t, b, atol=1e-12)


def test_solve_wrong_length_raises():
    with pytest.raises(ValueError):
        solve(EXAMPLE_A, np.zeros(4))


def test_solve_nonsquare_raises():
    with pytest.raises(NotSquareError):
        solve(np.ones((2, 3)), np.ones(2))


@pytest.mark.parametrize("dtype", [np.float32, np.float64, np.complex64, np.complex128])
def test_inv_empty(dtype):
    a = np.zeros((0, 0), dtype=dtype)
    assert inv(a).shape == (0, 0)
    assert factorize(a).inv().shape == (0, 0)


@pytest.mark.parametrize("n", range(1, 9))
@pytest.mark.parametrize("fortran", [False, True])
@pytest.mark.parametrize(
    "dtype,rtol",
    [(np.float32, 1e-3), (np.float64, 1e-9), (np.complex64, 1e-3), (np.complex128, 1e-9)],
)
def test_inv_random(n, fortran, dtype, rtol):
    a = _random(n, dtype, fortran)
    identity = np.eye(n)
    _assert_close_l2(inv(a) @ a, identity, rtol)
    _assert_close_l2(factorize(a).inv() @ a, identity, rtol)
    _assert_close_l2(factorize(a.copy()).inv() @ a, identity, rtol)


def test_inv_error():
    with pytest.raises(LinalgError):
        inv(np.zeros((3, 3)))


def test_inv_2x2():
    a = np.array([[1.0, 2.0], [3.0, 4.0]])
    _assert_close_l2(inv(a), np.array([[-2.0, 1.0], [1.5, -0.5]]), 1e-7)


def test_det_2x2():
    a = np.array([[1.0, 2.0], [3.0, 4.0]])
    assert det(a) == pytest.approx(-2.0)
    sign, ln_det = sln_det(a)
    assert sign == pytest.approx(-1.0)
    assert ln_det == pytest.approx(math.log(2.0))


def test_det_triangular_with_pivoting():
    a = np.array([[2.0, 0.0, 0.0], [1.0, 3.0, 0.0], [4.0, 5.0, 6.0]])
    assert det(a) == pytest.approx(36.0)
    assert factorize(a).det() == pytest.approx(36.0)


def test_det_complex_sign():
    a = np.diag([1j, 2.0])
    sign, ln_det = sln_det(a)
    assert sign == pytest.approx(1j)
    assert ln_det == pytest.approx(math.log(2.0))
    assert det(a) == pytest.approx(2j)


def test_det_empty():
    a = np.zeros((0, 0))
    assert det(a) == 1.0
    assert sln_det(a) == (1.0, 0.0)


def test_det_singular():
    a = np.zeros((1, 1))
    assert det(a) == 0.0
    sign, ln_det = sln_det(a)
    assert sign == 0.0
    assert ln_det == -math.inf


@pytest.mark.parametrize("shape", [(1, 2), (2, 1), (2, 3)])
def test_det_nonsquare_raises(shape):
    with pytest.raises(NotSquareError):
        det(np.zeros(shape))
    with pytest.raises(LinalgError):
        sln_det(np.zeros(shape))


def test_rcond_identity():
    assert rcond(np.eye(4)) == pytest.approx(1.0)


def test_rcond_diagonal():
    assert rcond(np.diag([1.0, 2.0, 4.0])) == pytest.approx(0.25)
    assert factorize(np.diag([1.0, 2.0, 4.0])).rcond() == pytest.approx(0.25)


def test_rcond_nonsquare_raises():
    with pytest.raises(NotSquareError):
        rcond(np.ones((2, 3)))