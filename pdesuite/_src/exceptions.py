"""Exceptions raised by the operator builders."""


class PDESuiteError(Exception):
    """Base exception for all pdesuite errors."""

    pass


class InvalidSizeError(PDESuiteError, ValueError):
    """A grid size, derivative order or vector length is too small."""

    pass


class DimensionMismatchError(PDESuiteError, ValueError):
    """An input's length does not match the size an operator was built for."""

    pass


class InsufficientNodesError(PDESuiteError, ValueError):
    """A finite-difference stencil has too few nodes for the requested order."""

    pass
