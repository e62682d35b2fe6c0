# Copyright (c) 2024 Yilin Zou
"""Exceptions raised by semkit."""


class SemkitError(Exception):
    """Base class of all semkit errors."""


class ConfigurationError(SemkitError, ValueError):
    """An operator set was requested with an unsupported degree, point count,
    quadrature rule or approximation form."""


class DimensionMismatchError(SemkitError, ValueError):
    """A nodal field does not have the shape implied by the polynomial
    degree."""


class StorageReleasedError(SemkitError, RuntimeError):
    """An operator set was used after it had been released."""
