"""
Error taxonomy for EmotionalChain core.

Every error is raised synchronously to the immediate caller. Nothing here is
transient, so nothing is retried: the same input always produces the same error.
"""

from dataclasses import dataclass
from typing import List, Optional


class EmotionalChainError(Exception):
    """Base class for all errors raised by this package."""


@dataclass(frozen=True)
class ValidationIssue:
    """One violated constraint inside a payload."""
    field: str      # dotted path, e.g. "metadata.deviceType"
    message: str
    code: str = "invalid"

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "code": self.code}


class ValidationError(EmotionalChainError):
    """A payload violated its message schema. Lists every violation, not just the first."""

    def __init__(self, kind: str, issues: List[ValidationIssue]):
        self.kind = kind
        self.issues = list(issues)
        detail = "; ".join(str(i) for i in self.issues)
        super().__init__(f"Invalid {kind} payload ({len(self.issues)} issue(s)): {detail}")

    @property
    def fields(self) -> List[str]:
        return [i.field for i in self.issues]


class NotFoundError(EmotionalChainError, KeyError):
    """A stateful operation addressed a validator with no consent record."""

    def __init__(self, address: str, message: Optional[str] = None):
        self.address = address
        self.message = message or f"No consent record found for {address}"
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return self.message


class ConsentRequiredError(EmotionalChainError):
    """Biometric processing was requested for a validator without active consent."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Validator {address} has no active biometric consent")


class InvalidStateError(EmotionalChainError, ValueError):
    """A consent state snapshot does not match the persisted layout."""


class TierRequirementError(EmotionalChainError, ValueError):
    """Validator metrics do not satisfy the requirements of any tier."""
