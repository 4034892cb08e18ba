"""Error taxonomy for the zone pipeline.

Every domain exception inherits from ``FlightMapError``.  Its category
tells the caller what to do about a failed layer, upload or command:

- ``ValidationError``: the user's input is wrong (configuration, CSV
  header, upload type).  Retrying the same input cannot help.
- ``TransientError``: a layer source or the cache backend could not be
  reached.  The layer renders empty and a later load may succeed.
- ``ContractError``: data arrived but is not GeoJSON of the expected
  shape.

Geometry and filter code never raises; these errors come from the
adapters, sources and configuration only.
"""

from __future__ import annotations

from typing import ClassVar


class FlightMapError(Exception):
    """Base exception for all pipeline-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"fetch"``, ``"tabular"``).
        code: Machine-readable error code (e.g. ``"SOURCE_UNREACHABLE"``).
        source: The input the error is about: a URL, path, file name or
            configuration key.  Empty when there is none.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: ClassVar[str] = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: ClassVar[str] = ""
    category: ClassVar[str] = "pipeline"
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        source: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.source = source
        super().__init__(message)

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "source": self.source,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(FlightMapError):
    """User input or configuration is invalid."""

    category = "validation"


class TransientError(FlightMapError):
    """A source or backend was unreachable; a later attempt may succeed."""

    category = "transient"
    retryable = True


class ContractError(FlightMapError):
    """Data does not have the GeoJSON shape the pipeline expects."""

    category = "contract"
