"""Exceptions raised by corr_flow."""


class DimensionMismatchError(ValueError):
    """Input images are not 2D or do not share the same shape."""
