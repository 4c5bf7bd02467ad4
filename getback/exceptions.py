"""
Exceptions raised by the navigation core.
"""


class InvalidArgumentError(ValueError):
    """A value passed by the caller violates a documented precondition."""
