"""Exceptions raised by aepmeta."""
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from aepmeta.validator.diagnostics import Diagnostic


class AepError(Exception):
    """Base class for all aepmeta errors."""


class RegistrationError(AepError):
    """Resource metadata was registered twice for the same model."""


class GraphLoadError(AepError):
    """A service graph document could not be loaded or understood."""


class PreconditionError(AepError):
    """The object graph violates a precondition of the validation pass."""

    def __init__(self, diagnostics: List["Diagnostic"]):
        self.diagnostics = list(diagnostics)
        lines = [str(d) for d in self.diagnostics]
        super().__init__("; ".join(lines) if lines else "Precondition violated")


class ResourceCycleError(PreconditionError):
    """A parent chain loops back on itself or exceeds the depth limit."""


class ConfigError(AepError):
    """An environment variable holds a value of the wrong type."""
