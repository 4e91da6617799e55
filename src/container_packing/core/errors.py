"""
Exceptions raised by the packing library.

An item that does not fit is not an error: the engine reports it in
PackingResult.unpacked. Exceptions cover malformed input, unknown
container presets, bad configuration and broken result invariants.
"""


class PackingError(Exception):
    """Base class for all container-packing errors."""


class InputValidationError(PackingError):
    """Item or container descriptor violates a precondition."""


class UnknownContainerError(PackingError):
    """Container preset name is not registered."""


class ConfigError(PackingError):
    """Packing configuration is malformed or out of range."""


class ResultInvariantError(PackingError):
    """A packing result breaks the overlap, bounds or support invariants."""

    def __init__(self, violations):
        self.violations = list(violations)
        super().__init__(
            f"{len(self.violations)} invariant violation(s): "
            + "; ".join(self.violations)
        )
