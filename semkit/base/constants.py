# Copyright (c) 2024 Yilin Zou
"""Selector and face constants shared with the surrounding solver.

The integer codes of the selectors are the ones written in control files, so
they are kept stable. Face indices are 0-based positions along the last axis
of the arrays returned by the boundary interpolation routines.
"""
import numbers
from enum import IntEnum
from typing import Union

from .errors import ConfigurationError


class QuadratureRule(IntEnum):
    """Quadrature family used to place the interpolation nodes."""

    GAUSS = 1
    GAUSS_LOBATTO = -1


class ApproximationForm(IntEnum):
    """Galerkin form the derivative matrices are assembled for."""

    DG = 2000
    CG = 2001


GAUSS = QuadratureRule.GAUSS
GAUSS_LOBATTO = QuadratureRule.GAUSS_LOBATTO
DG = ApproximationForm.DG
CG = ApproximationForm.CG

# 1-D element sides
LEFT = 0
RIGHT = 1

# quadrilateral edges and hexahedral faces
SOUTH = 0
EAST = 1
NORTH = 2
WEST = 3
BOTTOM = 4
TOP = 5

N_QUAD_EDGES = 4
N_HEX_FACES = 6

# Physical boundary tags. An element neighbour id below zero is one of these.
NO_NORMAL_FLOW = -100
RADIATION = -101
PRESCRIBED = -102
INFLOW_ONE = -103
INFLOW_TWO = -104
SEA_FLOOR = -105
SHARED = -106

DIRICHLET = -200
HOMOGENEOUS_NEUMANN = -201
ROBIN = -202
INHOMOGENEOUS_NEUMANN = -203
ROBIN_FORCED = -204
NEUMANN = NO_NORMAL_FLOW
NEUMANN_WALL = -206
DIRICHLET_INFLOW = -207
DIRICHLET_OUTFLOW = -208


def is_physical_boundary(tag: int) -> bool:
    """Whether a neighbour id is a physical boundary tag rather than an
    element id."""
    return tag < 0


def _coerce(value, enum_type, what: str):
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        try:
            return enum_type[value.strip().upper().replace("-", "_")]
        except KeyError:
            pass
    elif isinstance(value, numbers.Integral) and not isinstance(value, bool):
        try:
            return enum_type(int(value))
        except ValueError:
            pass
    choices = ", ".join(f"{m.name} ({m.value})" for m in enum_type)
    raise ConfigurationError(f"invalid {what} {value!r}, expected one of {choices}")


def as_quadrature_rule(value: Union[QuadratureRule, int, str]) -> QuadratureRule:
    """Convert an enum member, integer code or name to a
    :class:`QuadratureRule`.

    Raises:
        ConfigurationError: If ``value`` does not name a supported rule.
    """
    return _coerce(value, QuadratureRule, "quadrature rule")


def as_approximation_form(
    value: Union[ApproximationForm, int, str],
) -> ApproximationForm:
    """Convert an enum member, integer code or name to an
    :class:`ApproximationForm`.

    Raises:
        ConfigurationError: If ``value`` does not name a supported form.
    """
    return _coerce(value, ApproximationForm, "approximation form")
