# Copyright (c) 2024 Yilin Zou
import functools
import math
import numbers
from typing import Union

import numpy as np
import scipy.special

from .vectypes import *
from .constants import QuadratureRule, as_quadrature_rule
from .errors import ConfigurationError


def _symmetrize(x: VecFloat, w: VecFloat) -> tuple[VecFloat, VecFloat]:
    """Sort the nodes, make nodes and weights exactly symmetric about the
    origin and scale the weights to sum to the length of ``[-1, 1]``.

    The returned arrays are read-only since they are shared through the
    cache.
    """
    order = np.argsort(x)
    x = np.asarray(x, dtype=np.float64)[order]
    w = np.asarray(w, dtype=np.float64)[order]
    x = (x - x[::-1]) / 2
    w = (w + w[::-1]) / 2
    w = w * (2.0 / math.fsum(w))
    x.setflags(write=False)
    w.setflags(write=False)
    return x, w


@functools.lru_cache
def xw_lg(num_point: int) -> tuple[VecFloat, VecFloat]:
    """Compute the Legendre-Gauss nodes and quadrature weights.

    The nodes are the roots of the Legendre polynomial of degree
    ``num_point``; the rule integrates polynomials up to degree
    ``2 * num_point - 1`` exactly. The interval is assumed to be ``[-1, 1]``.

    Args:
        num_point: Number of interpolation points.

    Returns:
        Interpolation nodes and integration weights of the Legendre-Gauss scheme.
    """
    if num_point <= 0:
        raise ConfigurationError(
            "Legendre-Gauss quadrature needs at least 1 point, got {}".format(
                num_point
            )
        )
    x, w = scipy.special.roots_legendre(num_point)
    return _symmetrize(x, w)


@functools.lru_cache
def xw_lgl(num_point: int) -> tuple[VecFloat, VecFloat]:
    """Compute the Legendre-Gauss-Lobatto nodes and quadrature weights.

    With ``N = num_point - 1``, the nodes are ``-1``, ``1`` and the roots of
    the derivative of the Legendre polynomial ``P_N``, which are the roots of
    the Jacobi polynomial ``P_{N-1}^{(1, 1)}``. The weights are
    ``2 / (N (N + 1) P_N(x)^2)``; the rule integrates polynomials up to
    degree ``2N - 1`` exactly. The interval is assumed to be ``[-1, 1]``.

    Args:
        num_point: Number of interpolation points.

    Returns:
        Interpolation nodes and integration weights of the Legendre-Gauss-Lobatto scheme.
    """
    if num_point <= 1:
        raise ConfigurationError(
            "Legendre-Gauss-Lobatto quadrature needs at least 2 points to hold "
            "both endpoints, got {}".format(num_point)
        )
    N = num_point - 1
    if N > 1:
        interior, _ = scipy.special.roots_jacobi(N - 1, 1.0, 1.0)
    else:
        interior = np.empty(0, dtype=np.float64)
    x = np.concatenate(([-1.0], np.sort(interior), [1.0]))
    w = 2.0 / (N * (N + 1) * scipy.special.eval_legendre(N, x) ** 2)
    return _symmetrize(x, w)


def legendre_quadrature(
    N: int, quadrature: Union[QuadratureRule, int, str]
) -> tuple[VecFloat, VecFloat]:
    """Compute the ``N + 1`` nodes and weights of a degree ``N`` quadrature
    rule on ``[-1, 1]``.

    Args:
        N: Polynomial degree. At least 0 for Gauss and 1 for Gauss-Lobatto.
        quadrature: The quadrature rule, see :func:`as_quadrature_rule` for
            the accepted spellings.

    Returns:
        Ascending nodes and positive weights summing to 2. Both arrays are
        read-only.

    Raises:
        ConfigurationError: If the rule is unsupported or ``N`` is invalid
            for it.
    """
    rule = as_quadrature_rule(quadrature)
    if not isinstance(N, numbers.Integral) or isinstance(N, bool) or N < 0:
        raise ConfigurationError(
            "polynomial degree must be a non-negative integer, got {!r}".format(N)
        )
    if rule == QuadratureRule.GAUSS:
        return xw_lg(int(N) + 1)
    return xw_lgl(int(N) + 1)


def uniform_points(a: float, b: float, num_point: int) -> VecFloat:
    """Evenly spaced points from ``a`` to ``b``, both included.

    A single point is placed at ``a``.
    """
    if num_point <= 0:
        raise ConfigurationError(
            "number of uniform points must be at least 1, got {}".format(num_point)
        )
    return np.linspace(a, b, num_point, dtype=np.float64)
