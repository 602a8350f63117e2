# File: src/models/errors.py
"""
Exception types raised by the scheduling engine.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class ValidationError:
    """Represents a single validation failure in a request."""
    field: str
    message: str
    entry_index: Optional[int] = None

    def __str__(self) -> str:
        """String representation of error."""
        if self.entry_index is not None:
            return f"Entry {self.entry_index} - {self.field}: {self.message}"
        return f"{self.field}: {self.message}"


class SchedulingError(Exception):
    """Base class for all engine errors."""


class InvalidIntervalError(SchedulingError, ValueError):
    """Start is not strictly before end, or a duration is not positive."""


class RequestValidationError(InvalidIntervalError):
    """A request failed validation before any fetch was issued."""

    def __init__(self, errors: List[ValidationError]):
        self.errors = list(errors)
        summary = "; ".join(str(e) for e in self.errors) or "invalid request"
        super().__init__(summary)


class StoreError(SchedulingError):
    """A single read against the hosted store failed."""


class UpstreamFetchError(SchedulingError):
    """Availability could not be determined for one or more participants."""

    def __init__(self, failures: Dict[str, str]):
        self.failures = dict(failures)
        names = ", ".join(sorted(self.failures))
        super().__init__(f"Could not resolve availability for: {names}")

    @property
    def participant_ids(self) -> List[str]:
        return sorted(self.failures)
