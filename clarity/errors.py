"""Error taxonomy shared by the flows, the orchestrator and the API."""

from typing import List, Optional, Tuple


class ClarityError(Exception):
    """Base class for every error raised by the analysis core."""


class InvalidInputError(ClarityError):
    """A required request field is missing or malformed. Raised before any model call."""


class ModelInvocationError(ClarityError):
    """The generative model call itself failed (network, quota, auth, ...)."""


class SchemaValidationError(ClarityError):
    """The model returned nothing, or output that does not match the declared schema."""


class AnalysisFailedError(ClarityError):
    """Raised by the orchestrator when no attempted branch produced a result.

    `failures` holds the `(stage, exception)` pairs in stage order.
    """

    def __init__(self, message: str, failures: Optional[List[Tuple[str, BaseException]]] = None):
        super().__init__(message)
        self.failures = list(failures or [])

    @property
    def invalid_input_only(self) -> bool:
        return bool(self.failures) and all(isinstance(e, InvalidInputError) for _, e in self.failures)
