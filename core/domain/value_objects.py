"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class RejectionReason(Enum):
    """Why a validation attempt was refused."""

    MISSING_INPUT = "MISSING_INPUT"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    TERMINATED = "TERMINATED"
    EXPIRED = "EXPIRED"
    DEVICE_MISMATCH = "DEVICE_MISMATCH"

    def __str__(self) -> str:
        """Return reason code as string."""
        return self.value


REJECTION_MESSAGES = {
    RejectionReason.MISSING_INPUT: "License key and Device ID are required.",
    RejectionReason.INVALID_INPUT: "Device ID is too long.",
    RejectionReason.NOT_FOUND: "Invalid license key.",
    RejectionReason.TERMINATED: "This license has been terminated.",
    RejectionReason.EXPIRED: "Your license has expired.",
    RejectionReason.DEVICE_MISMATCH: "This key is already registered to another device.",
}


@dataclass(frozen=True)
class Verdict(ValueObject):
    """
    Outcome of a validation attempt.

    Accepted verdicts carry the owner label, rejected ones carry the reason.
    """

    accepted: bool
    owner: Optional[str] = None
    reason: Optional[RejectionReason] = None
    bound: bool = False

    @classmethod
    def accept(cls, owner: str, bound: bool = False) -> "Verdict":
        """Build an accepting verdict; bound marks a first-use binding."""
        return cls(accepted=True, owner=owner, bound=bound)

    @classmethod
    def reject(cls, reason: RejectionReason) -> "Verdict":
        """Build a rejecting verdict with the given reason."""
        return cls(accepted=False, reason=reason)

    @property
    def message(self) -> str:
        """Human-readable message for the verdict."""
        if self.accepted:
            return "License validated successfully."
        return REJECTION_MESSAGES[self.reason]
