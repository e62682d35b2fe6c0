# Copyright (c) 2024 Yilin Zou
import logging
import numbers
from typing import Union

import numpy as np

from semkit.base.vectypes import *
from semkit.base.constants import *
from semkit.base.errors import ConfigurationError, StorageReleasedError
from semkit.base.lagrange import LagrangeBasis, check_field
from semkit.base.quadrature import legendre_quadrature, uniform_points

logger = logging.getLogger(__name__)


def galerkin_derivative_matrices(
    D: VecFloat, weights: VecFloat, form: Union[ApproximationForm, int, str]
) -> tuple[VecFloat, VecFloat]:
    """Turn a collocation derivative matrix into the derivative matrix pair
    ``dMatS, dMatP`` of an approximation form.

    For CG the pair is ``D`` and its transpose. For DG,
    ``dMatS[i, j] = -D[j, i] * w[j] / w[i]`` and ``dMatP[j, i] = dMatS[i, j]``,
    so that ``w[i] * dMatS[i, j] = -w[j] * D[j, i]`` is the summation-by-parts
    adjoint of the collocation derivative.

    Args:
        D: Collocation derivative matrix.
        weights: Quadrature weights at the collocation nodes.
        form: The approximation form, see :func:`as_approximation_form`.

    Returns:
        The derivative matrices ``dMatS`` and ``dMatP``.

    Raises:
        ConfigurationError: If the form is unsupported.
    """
    form = as_approximation_form(form)
    if form == ApproximationForm.CG:
        return D.copy(), D.T.copy()
    dMatS = -D.T * weights[np.newaxis, :] / weights[:, np.newaxis]
    # dMatP is kept in the opposite orientation of dMatS
    dMatP = dMatS.T.copy()
    return dMatS, dMatP


class NodalStorage:
    """Operators shared by every element of a given polynomial degree.

    An interpolant maps between the quadrature nodes and a uniform plotting
    mesh. Quadrature weights are stored for Galerkin integrals, derivative
    matrices for the chosen approximation form, and the boundary matrix
    ``bMat`` whose rows are the basis polynomials evaluated at ``-1`` and
    ``1``. Nodal data on the quadrature mesh is interpolated to the element
    boundaries by multiplying with ``bMat``.

    The instance is immutable after construction and may be shared across
    elements and threads. :meth:`release` drops the arrays; the instance is
    also a context manager that releases on exit.
    """

    def __init__(
        self,
        N: int,
        nPlot: int,
        quadrature: Union[QuadratureRule, int, str] = GAUSS_LOBATTO,
        form: Union[ApproximationForm, int, str] = DG,
    ) -> None:
        """
        Args:
            N: Polynomial degree of the spectral element method.
            nPlot: Number of uniform plotting intervals in each computational
                direction; ``nPlot + 1`` plotting points are used.
            quadrature: ``GAUSS`` or ``GAUSS_LOBATTO``.
            form: ``CG`` or ``DG``.

        Raises:
            ConfigurationError: If any argument is unsupported. No instance is
                created in that case.
        """
        quadrature = as_quadrature_rule(quadrature)
        form = as_approximation_form(form)
        if (
            not isinstance(nPlot, numbers.Integral)
            or isinstance(nPlot, bool)
            or nPlot < 0
        ):
            raise ConfigurationError(
                "number of plotting points must be a non-negative integer, "
                "got {!r}".format(nPlot)
            )

        nodes, weights = legendre_quadrature(N, quadrature)
        interp = LagrangeBasis(nodes, uniform_points(-1.0, 1.0, int(nPlot) + 1))

        bMat = np.vstack([interp.evaluate_basis(-1.0), interp.evaluate_basis(1.0)])
        dMatS, dMatP = galerkin_derivative_matrices(interp.D, weights, form)

        qWeight = weights.copy()
        for a in (qWeight, bMat, dMatS, dMatP):
            a.setflags(write=False)

        self._N = int(N)
        self._nPlot = int(nPlot)
        self._quadrature = quadrature
        self._form = form
        self._interp = interp
        self._qWeight = qWeight
        self._dMatS = dMatS
        self._dMatP = dMatP
        self._bMat = bMat
        self._released = False
        logger.debug(
            "Built nodal storage N=%d nPlot=%d quadrature=%s form=%s",
            self._N,
            self._nPlot,
            quadrature.name,
            form.name,
        )

    def __repr__(self) -> str:
        state = ", released" if self._released else ""
        return "NodalStorage(N={}, nPlot={}, quadrature={}, form={}{})".format(
            self._N, self._nPlot, self._quadrature.name, self._form.name, state
        )

    def __enter__(self) -> "NodalStorage":
        self._check_alive()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def _check_alive(self) -> None:
        if self._released:
            raise StorageReleasedError("{!r} was used after release".format(self))

    def release(self) -> None:
        """Drop all owned arrays. Any later use raises
        :class:`StorageReleasedError`. Releasing twice is a no-op."""
        if self._released:
            return
        self._released = True
        self._interp = None
        self._qWeight = None
        self._dMatS = None
        self._dMatP = None
        self._bMat = None
        logger.debug("Released nodal storage N=%d", self._N)

    @property
    def released(self) -> bool:
        """Whether :meth:`release` has been called."""
        return self._released

    @property
    def N(self) -> int:
        """Polynomial degree."""
        return self._N

    @property
    def nPlot(self) -> int:
        """Number of uniform plotting intervals."""
        return self._nPlot

    @property
    def quadrature(self) -> QuadratureRule:
        return self._quadrature

    @property
    def form(self) -> ApproximationForm:
        return self._form

    @property
    def interp(self) -> LagrangeBasis:
        """Lagrange interpolant through the quadrature nodes."""
        self._check_alive()
        return self._interp

    @property
    def nodes(self) -> VecFloat:
        """Quadrature nodes."""
        return self.interp.nodes

    @property
    def qWeight(self) -> VecFloat:
        """Quadrature weights."""
        self._check_alive()
        return self._qWeight

    @property
    def w(self) -> VecFloat:
        """Quadrature weights. Same as :attr:`qWeight`."""
        return self.qWeight

    @property
    def dMatS(self) -> VecFloat:
        """Derivative matrix of the approximation form."""
        self._check_alive()
        return self._dMatS

    @property
    def dMatP(self) -> VecFloat:
        """Derivative matrix in the opposite orientation of :attr:`dMatS`."""
        self._check_alive()
        return self._dMatP

    @property
    def bMat(self) -> VecFloat:
        """Basis polynomials at ``-1`` (row 0) and ``1`` (row 1)."""
        self._check_alive()
        return self._bMat

    def calculate_at_boundaries_1d(self, f: VecFloat) -> VecFloat:
        """Interpolate 1-D nodal values to the two element ends.

        Args:
            f: Nodal values of shape ``(N + 1,)``.

        Returns:
            Boundary values indexed by ``LEFT`` and ``RIGHT``.
        """
        bMat = self.bMat
        f = check_field(f, self._N + 1, 1)
        return bMat @ f

    def calculate_at_boundaries_2d(self, f: VecFloat) -> VecFloat:
        """Interpolate 2-D nodal values to the four element edges.

        Args:
            f: Nodal values of shape ``(N + 1, N + 1)``.

        Returns:
            Array of shape ``(N + 1, 4)`` whose last index is ``SOUTH``,
            ``EAST``, ``NORTH`` or ``WEST``.
        """
        bMat = self.bMat
        f = check_field(f, self._N + 1, 2)
        f_we = bMat @ f
        f_sn = bMat @ f.T

        f_bound = np.empty((self._N + 1, N_QUAD_EDGES), dtype=np.float64)
        f_bound[:, WEST] = f_we[0]
        f_bound[:, EAST] = f_we[1]
        f_bound[:, SOUTH] = f_sn[0]
        f_bound[:, NORTH] = f_sn[1]
        return f_bound

    def calculate_at_boundaries_3d(self, f: VecFloat) -> VecFloat:
        """Interpolate 3-D nodal values to the six element faces.

        Each computational direction is handled by collapsing the two free
        indices into a single column index ``j + (N + 1) * k`` and
        multiplying the resulting ``(N + 1) x (N + 1)^2`` matrix by ``bMat``.

        Args:
            f: Nodal values of shape ``(N + 1, N + 1, N + 1)``.

        Returns:
            Array of shape ``(N + 1, N + 1, 6)`` whose last index is
            ``SOUTH``, ``EAST``, ``NORTH``, ``WEST``, ``BOTTOM`` or ``TOP``.
        """
        bMat = self.bMat
        n = self._N + 1
        f = check_field(f, n, 3)

        # column-major reshape gives col = j + n * k
        f_loc1 = f.reshape(n, n * n, order="F")
        f_loc2 = f.transpose(1, 0, 2).reshape(n, n * n, order="F")
        f_loc3 = f.transpose(2, 0, 1).reshape(n, n * n, order="F")

        f_we = (bMat @ f_loc1).reshape(2, n, n, order="F")
        f_sn = (bMat @ f_loc2).reshape(2, n, n, order="F")
        f_bt = (bMat @ f_loc3).reshape(2, n, n, order="F")

        f_bound = np.empty((n, n, N_HEX_FACES), dtype=np.float64)
        f_bound[:, :, WEST] = f_we[0]
        f_bound[:, :, EAST] = f_we[1]
        f_bound[:, :, SOUTH] = f_sn[0]
        f_bound[:, :, NORTH] = f_sn[1]
        f_bound[:, :, BOTTOM] = f_bt[0]
        f_bound[:, :, TOP] = f_bt[1]
        return f_bound

    def interpolate(self, f: VecFloat) -> VecFloat:
        """Interpolate a 1-D, 2-D or 3-D nodal field onto the uniform
        plotting mesh."""
        return self.interp.interpolate(f)

    def differentiate(self, f: VecFloat, axis: int = 0) -> VecFloat:
        """Collocation derivative of a nodal field along ``axis``."""
        return self.interp.differentiate(f, axis)


def build_nodal_storage(
    N: int,
    nPlot: int,
    quadrature: Union[QuadratureRule, int, str] = GAUSS_LOBATTO,
    form: Union[ApproximationForm, int, str] = DG,
) -> NodalStorage:
    """Build the operators of a polynomial degree. Same as
    :class:`NodalStorage`."""
    return NodalStorage(N, nPlot, quadrature, form)
