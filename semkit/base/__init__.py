# Copyright (c) 2024 Yilin Zou
"""This submodule contains the building blocks shared by every scheme:
selector constants, errors, quadrature rules and the Lagrange basis, which
are composed into per-degree operators by ``semkit.nodal``."""
