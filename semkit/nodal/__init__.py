# Copyright (c) 2024 Yilin Zou
"""Submodule for the per-degree nodal operators of spectral element methods.

A :class:`NodalStorage` is built once for each polynomial degree, quadrature
rule and approximation form, and shared read-only by all elements of that
degree.
"""

from .storage import NodalStorage, build_nodal_storage, galerkin_derivative_matrices

__all__ = [
    "NodalStorage",
    "build_nodal_storage",
    "galerkin_derivative_matrices",
]
