"""Exceptions raised when a robot description cannot be loaded."""


class LoadError(ValueError):
    """A URDF could not be turned into a body.

    Raised for unreadable or malformed input, unsupported joint types,
    unsupported collision geometry and dangling link references. Once raised,
    no body has been registered with the host environment.
    """
