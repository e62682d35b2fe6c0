# Copyright (c) 2024 Yilin Zou
import numpy as np
import pytest
import sympy as sp

from semkit.base.lagrange import *
from semkit.base.quadrature import legendre_quadrature, uniform_points
from semkit.base.constants import GAUSS, GAUSS_LOBATTO
from semkit.base.errors import ConfigurationError, DimensionMismatchError

RULES = [(GAUSS, 0), (GAUSS_LOBATTO, 1)]


def _basis(N, rule, n_plot=8):
    x, _ = legendre_quadrature(N, rule)
    return LagrangeBasis(x, uniform_points(-1.0, 1.0, n_plot + 1))


def _random_polynomial(N, seed, x):
    """Values of a random polynomial of degree N and of its derivative at x."""
    t = sp.symbols("t")
    rng = np.random.default_rng(seed)
    p = sp.Poly([float(c) for c in rng.uniform(-1, 1, N + 1)], t).as_expr()
    dp = sp.diff(p, t)
    p_x = np.array([float(p.subs(t, float(x_i))) for x_i in x])
    dp_x = np.array([float(dp.subs(t, float(x_i))) for x_i in x])
    return p_x, dp_x


def test_barycentric_weights():
    x = np.array([-1.0, 0.0, 1.0])
    assert np.allclose(barycentric_weights(x), [0.5, -1.0, 0.5])
    assert np.allclose(barycentric_weights([0.3]), [1.0])

    with pytest.raises(ConfigurationError):
        barycentric_weights([0.0, 0.5, 0.5])
    with pytest.raises(ConfigurationError):
        barycentric_weights([])


@pytest.mark.parametrize("rule, N_min", RULES)
def test_kronecker_delta(rule, N_min):
    for N in range(N_min, 21):
        basis = _basis(N, rule)
        for i, x_i in enumerate(basis.nodes):
            L = basis.evaluate_basis(x_i)
            assert L.shape == (N + 1,)
            assert np.array_equal(L, np.eye(N + 1)[i])
        assert np.array_equal(basis.evaluate_basis(basis.nodes), np.eye(N + 1))


@pytest.mark.parametrize("rule, N_min", RULES)
def test_derivative_matrix_is_exact(rule, N_min):
    for N in range(N_min, 21):
        basis = _basis(N, rule)
        x = np.array(basis.nodes)
        for seed in range(3):
            p_x, dp_x = _random_polynomial(N, seed, x)
            assert np.allclose(basis.D @ p_x, dp_x, rtol=1e-9, atol=1e-9)


def test_derivative_matrix_monomials():
    basis = _basis(6, GAUSS_LOBATTO)
    x = np.array(basis.nodes)
    assert np.allclose(basis.D @ np.ones_like(x), 0.0, atol=1e-12)
    for k in range(1, 7):
        assert np.allclose(basis.D @ x**k, k * x ** (k - 1), atol=1e-11)
    assert np.array_equal(basis.DTr, basis.D.T)


def test_partition_of_unity():
    basis = _basis(7, GAUSS)
    points = np.linspace(-1.5, 1.5, 31)
    L = basis.evaluate_basis(points)
    assert L.shape == (31, 8)
    assert np.allclose(L.sum(axis=1), 1.0)


def test_evaluate_outside_interval():
    basis = _basis(4, GAUSS_LOBATTO)
    x = np.array(basis.nodes)
    y = x**4 - 2 * x + 1
    for t in [-2.0, -1.25, 1.5, 3.0]:
        assert np.isclose(basis.evaluate_basis(t) @ y, t**4 - 2 * t + 1)


def test_single_node():
    basis = LagrangeBasis([0.0], [-1.0, 0.0, 1.0])
    assert basis.N == 0
    assert np.allclose(basis.D, [[0.0]])
    assert np.allclose(basis.evaluate_basis(0.7), [1.0])
    assert np.allclose(basis.interpolation_matrix, [[1.0], [1.0], [1.0]])


def test_interpolation_matrix():
    basis = _basis(5, GAUSS, n_plot=10)
    x = np.array(basis.nodes)
    t = np.array(basis.target_nodes)
    assert basis.M == 10
    assert basis.interpolation_matrix.shape == (11, 6)
    assert np.allclose(basis.interpolation_matrix @ (x**5 - x**2), t**5 - t**2)


def test_interpolate_tensor_fields():
    basis = _basis(3, GAUSS_LOBATTO, n_plot=4)
    x = np.array(basis.nodes)
    t = np.array(basis.target_nodes)

    X, Y = np.meshgrid(x, x, indexing="ij")
    TX, TY = np.meshgrid(t, t, indexing="ij")
    assert np.allclose(basis.interpolate(X**2 * Y), TX**2 * TY)

    X, Y, Z = np.meshgrid(x, x, x, indexing="ij")
    TX, TY, TZ = np.meshgrid(t, t, t, indexing="ij")
    assert np.allclose(basis.interpolate(X * Y**3 + Z), TX * TY**3 + TZ)


def test_differentiate_tensor_fields():
    basis = _basis(4, GAUSS)
    x = np.array(basis.nodes)
    X, Y, Z = np.meshgrid(x, x, x, indexing="ij")
    f = X**2 * Y + Z**4
    assert np.allclose(basis.differentiate(f, 0), 2 * X * Y)
    assert np.allclose(basis.differentiate(f, 1), X**2)
    assert np.allclose(basis.differentiate(f, 2), 4 * Z**3)
    assert np.allclose(basis.differentiate(f, -1), 4 * Z**3)


def test_field_shape_errors():
    basis = _basis(3, GAUSS)
    with pytest.raises(DimensionMismatchError):
        basis.interpolate(np.zeros(5))
    with pytest.raises(DimensionMismatchError):
        basis.interpolate(np.zeros((4, 3)))
    with pytest.raises(DimensionMismatchError):
        basis.interpolate(np.zeros((4, 4, 4, 4)))
    with pytest.raises(DimensionMismatchError):
        basis.differentiate(np.zeros((4, 4)), 2)


def test_arrays_are_read_only():
    basis = _basis(3, GAUSS)
    with pytest.raises(ValueError):
        basis.D[0, 0] = 1.0
    with pytest.raises(ValueError):
        basis.nodes[0] = 1.0
