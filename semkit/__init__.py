# Copyright (c) 2024 Yilin Zou
"""# semkit: Spectral Element Method KIT

**semkit** builds the per-degree operators shared by every element of a
spectral-element or discontinuous-Galerkin mesh.

- **Quadrature:** Legendre-Gauss and Legendre-Gauss-Lobatto nodes and weights.
- **Lagrange basis:** barycentric evaluation, collocation derivative matrices,
  and interpolation onto uniform plotting points.
- **Nodal storage:** quadrature weights, CG/DG derivative matrices, and the
  boundary matrix, with interpolation of 1-D, 2-D and 3-D nodal fields to the
  element faces.

Geometry, mesh topology and time integration are left to the caller; every
operator is a dense ``numpy`` array.
"""

from .base.constants import (
    ApproximationForm,
    QuadratureRule,
    GAUSS,
    GAUSS_LOBATTO,
    CG,
    DG,
    LEFT,
    RIGHT,
    SOUTH,
    EAST,
    NORTH,
    WEST,
    BOTTOM,
    TOP,
)
from .base.errors import (
    SemkitError,
    ConfigurationError,
    DimensionMismatchError,
    StorageReleasedError,
)
from .base.quadrature import legendre_quadrature, uniform_points
from .base.lagrange import LagrangeBasis
from .nodal import NodalStorage, build_nodal_storage

__author__ = "Yilin Zou"
__copyright__ = "Copyright (c) 2024 Yilin Zou"

__all__ = [
    "ApproximationForm",
    "QuadratureRule",
    "GAUSS",
    "GAUSS_LOBATTO",
    "CG",
    "DG",
    "LEFT",
    "RIGHT",
    "SOUTH",
    "EAST",
    "NORTH",
    "WEST",
    "BOTTOM",
    "TOP",
    "SemkitError",
    "ConfigurationError",
    "DimensionMismatchError",
    "StorageReleasedError",
    "legendre_quadrature",
    "uniform_points",
    "LagrangeBasis",
    "NodalStorage",
    "build_nodal_storage",
]
