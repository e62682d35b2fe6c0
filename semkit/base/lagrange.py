# Copyright (c) 2024 Yilin Zou
from typing import Optional, Union

import numba as nb
import numpy as np

from .vectypes import *
from .errors import ConfigurationError, DimensionMismatchError


@nb.njit
def _barycentric_weights(nodes: VecFloat) -> VecFloat:
    n = len(nodes)
    weights = np.ones(n, dtype=np.float64)
    for j in range(n):
        for k in range(n):
            if k != j:
                weights[j] /= nodes[j] - nodes[k]
    return weights


@nb.njit
def _evaluate_all_L_j_at_xk(
    eval_points: VecFloat, nodes_interp: VecFloat, weights_bary: VecFloat
) -> VecFloat:
    """Calculate all barycentric interpolation basis functions L_j values at
    given evaluation points.

    Args:
        eval_points: A one-dimensional array where L_j values need to be calculated.
        nodes_interp: Interpolation nodes x_i.
        weights_bary: Barycentric weights w_i corresponding to nodes_interp.

    Returns:
        A matrix with shape (len(eval_points), len(nodes_interp)),
        where L_values[k, j] = L_j(eval_points[k]).
    """
    num_eval = len(eval_points)
    num_nodes = len(nodes_interp)
    L_values = np.zeros((num_eval, num_nodes), dtype=np.float64)

    for k in range(num_eval):
        xk = eval_points[k]

        # an evaluation point on a node gets the exact Kronecker delta
        hit = -1
        for s in range(num_nodes):
            if xk == nodes_interp[s]:
                hit = s
                break
        if hit >= 0:
            L_values[k, hit] = 1.0
            continue

        # L_j(x) = (w_j / (x - x_j)) / sum_s (w_s / (x - x_s))
        denominator_sum = 0.0
        for s in range(num_nodes):
            term = weights_bary[s] / (xk - nodes_interp[s])
            L_values[k, s] = term
            denominator_sum += term
        for s in range(num_nodes):
            L_values[k, s] /= denominator_sum
    return L_values


@nb.njit
def _derivative_matrix(nodes: VecFloat, weights_bary: VecFloat) -> VecFloat:
    n = len(nodes)
    D = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        row_sum = 0.0
        for j in range(n):
            if j != i:
                D[i, j] = weights_bary[j] / weights_bary[i] / (nodes[i] - nodes[j])
                row_sum += D[i, j]
        # the derivative of a constant vanishes
        D[i, i] = -row_sum
    return D


def barycentric_weights(nodes: VecFloat) -> VecFloat:
    """Compute the barycentric weights ``1 / prod_{k != j} (x_j - x_k)``.

    Args:
        nodes: Interpolation nodes.

    Returns:
        Barycentric weights of the nodes.

    Raises:
        ConfigurationError: If the nodes are empty or not distinct.
    """
    nodes = np.ascontiguousarray(nodes, dtype=np.float64)
    if nodes.ndim != 1 or len(nodes) == 0:
        raise ConfigurationError("interpolation nodes must be a non-empty 1-D array")
    if np.any(np.diff(np.sort(nodes)) == 0.0):
        raise ConfigurationError("interpolation nodes must be distinct")
    return _barycentric_weights(nodes)


def evaluate_basis(
    x: Union[float, VecFloat], nodes: VecFloat, weights_bary: VecFloat
) -> VecFloat:
    """Evaluate all Lagrange basis polynomials of ``nodes`` at ``x``.

    Args:
        x: A point or a one-dimensional array of points. Points outside
            ``[-1, 1]`` are allowed.
        nodes: Interpolation nodes.
        weights_bary: Barycentric weights of ``nodes``.

    Returns:
        A vector ``L[j] = L_j(x)`` for a scalar ``x``, otherwise a matrix
        ``L[k, j] = L_j(x[k])``.
    """
    points = np.atleast_1d(np.asarray(x, dtype=np.float64)).ravel()
    L = _evaluate_all_L_j_at_xk(
        np.ascontiguousarray(points),
        np.ascontiguousarray(nodes, dtype=np.float64),
        np.ascontiguousarray(weights_bary, dtype=np.float64),
    )
    if np.ndim(x) == 0:
        return L[0]
    return L


def derivative_matrix(nodes: VecFloat, weights_bary: VecFloat) -> VecFloat:
    """Compute the collocation derivative matrix ``D[i, j] = L_j'(x_i)``.

    The diagonal is the negative sum of the off-diagonal entries of its row.
    """
    return _derivative_matrix(
        np.ascontiguousarray(nodes, dtype=np.float64),
        np.ascontiguousarray(weights_bary, dtype=np.float64),
    )


def check_field(f, num_point: int, ndim: Optional[int] = None) -> VecFloat:
    """Check that ``f`` is a nodal field with ``num_point`` values along each
    axis.

    Args:
        f: Nodal field.
        num_point: Number of nodes in each direction.
        ndim: Required number of dimensions, or ``None`` to accept 1 to 3.

    Returns:
        ``f`` as a float array.

    Raises:
        DimensionMismatchError: If the shape of ``f`` does not match.
    """
    f = np.asarray(f, dtype=np.float64)
    if ndim is None:
        if not 1 <= f.ndim <= 3:
            raise DimensionMismatchError(
                "expected a 1-D, 2-D or 3-D nodal field, got {} dimensions".format(
                    f.ndim
                )
            )
        ndim = f.ndim
    expected = (num_point,) * ndim
    if f.shape != expected:
        raise DimensionMismatchError(
            "expected a nodal field of shape {}, got {}".format(expected, f.shape)
        )
    return f


def apply_along_axis(matrix: VecFloat, f: VecFloat, axis: int) -> VecFloat:
    """Multiply ``matrix`` onto axis ``axis`` of ``f``, leaving the other axes
    in place."""
    return np.moveaxis(np.tensordot(matrix, f, axes=(1, axis)), 0, axis)


class LagrangeBasis:
    """Lagrange interpolating polynomials through a set of source nodes.

    The basis holds the collocation derivative matrix at the source nodes and
    an interpolation matrix onto a second set of target nodes, typically
    uniform plotting points. All arrays are read-only.
    """

    def __init__(self, nodes: VecFloat, target_nodes: VecFloat) -> None:
        """
        Args:
            nodes: Distinct source nodes the basis is built from.
            target_nodes: Points the interpolation matrix maps onto.

        Raises:
            ConfigurationError: If the source nodes are empty or not distinct.
        """
        nodes = np.array(nodes, dtype=np.float64)
        target_nodes = np.array(target_nodes, dtype=np.float64)
        if target_nodes.ndim != 1:
            raise ConfigurationError("target nodes must be a 1-D array")
        weights_bary = barycentric_weights(nodes)
        D = derivative_matrix(nodes, weights_bary)
        T = evaluate_basis(target_nodes, nodes, weights_bary).reshape(
            len(target_nodes), len(nodes)
        )
        DTr = D.T.copy()

        for a in (nodes, target_nodes, weights_bary, D, DTr, T):
            a.setflags(write=False)
        self._nodes = nodes
        self._target_nodes = target_nodes
        self._weights_bary = weights_bary
        self._D = D
        self._DTr = DTr
        self._T = T

    @property
    def N(self) -> int:
        """Polynomial degree of the basis."""
        return len(self._nodes) - 1

    @property
    def M(self) -> int:
        """Index of the last target node."""
        return len(self._target_nodes) - 1

    @property
    def nodes(self) -> VecFloat:
        """Source nodes."""
        return self._nodes

    @property
    def target_nodes(self) -> VecFloat:
        """Target nodes of the interpolation matrix."""
        return self._target_nodes

    @property
    def weights_bary(self) -> VecFloat:
        """Barycentric weights of the source nodes."""
        return self._weights_bary

    @property
    def D(self) -> VecFloat:
        """Derivative matrix, ``D[i, j]`` is the derivative of basis ``j`` at
        node ``i``."""
        return self._D

    @property
    def DTr(self) -> VecFloat:
        """Transpose of the derivative matrix."""
        return self._DTr

    @property
    def interpolation_matrix(self) -> VecFloat:
        """Matrix mapping values at the source nodes to the target nodes."""
        return self._T

    def evaluate_basis(self, x: Union[float, VecFloat]) -> VecFloat:
        """Evaluate all basis polynomials at ``x``. See :func:`evaluate_basis`."""
        return evaluate_basis(x, self._nodes, self._weights_bary)

    def interpolate(self, f: VecFloat) -> VecFloat:
        """Interpolate a 1-D, 2-D or 3-D nodal field onto the tensor product
        of the target nodes.

        Raises:
            DimensionMismatchError: If ``f`` is not of shape ``(N + 1,) * d``.
        """
        f = check_field(f, self.N + 1)
        for axis in range(f.ndim):
            f = apply_along_axis(self._T, f, axis)
        return f

    def differentiate(self, f: VecFloat, axis: int = 0) -> VecFloat:
        """Differentiate a 1-D, 2-D or 3-D nodal field along ``axis``.

        Raises:
            DimensionMismatchError: If ``f`` is not of shape ``(N + 1,) * d``
                or ``axis`` is not one of its axes.
        """
        f = check_field(f, self.N + 1)
        if not -f.ndim <= axis < f.ndim:
            raise DimensionMismatchError(
                "axis {} is out of range for a {}-D field".format(axis, f.ndim)
            )
        return apply_along_axis(self._D, f, axis)
