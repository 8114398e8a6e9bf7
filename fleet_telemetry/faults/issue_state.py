"""Fault status of a vehicle: Healthy or Faulted with a countdown."""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Healthy:
    """No active fault."""

    has_issue = False
    error_message = ""
    issue_timer = 0


@dataclass(frozen=True)
class Faulted:
    """Active fault lasting ticks_remaining more selected ticks.

    A Faulted state always carries at least one reason and a positive timer,
    so there is no "faulted without a message" state to patch over.
    """

    ticks_remaining: int
    reasons: Tuple[str, ...]

    has_issue = True

    def __post_init__(self):
        if self.ticks_remaining <= 0:
            raise ValueError(f"ticks_remaining must be positive, got {self.ticks_remaining}")
        if not self.reasons:
            raise ValueError("Faulted state requires at least one reason")

    @property
    def error_message(self) -> str:
        return ", ".join(self.reasons)

    @property
    def issue_timer(self) -> int:
        return self.ticks_remaining

    def countdown(self) -> "IssueState":
        """One selected tick later: fewer ticks remaining, or Healthy at zero."""
        remaining = self.ticks_remaining - 1
        if remaining == 0:
            return HEALTHY
        return Faulted(ticks_remaining=remaining, reasons=self.reasons)


HEALTHY = Healthy()

IssueState = Union[Healthy, Faulted]
