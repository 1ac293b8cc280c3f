"""Error taxonomy for ticket generation."""

from __future__ import annotations

from typing import List, Optional


class GenerationError(RuntimeError):
    """Fatal failure while generating a card or a batch."""


class GenerationExhausted(GenerationError):
    """The shared number pool cannot satisfy a required draw."""


class GenerationRetryLimitExceeded(GenerationError):
    def __init__(self, attempts: int, message: Optional[str] = None):
        self.attempts = attempts
        super().__init__(message or f"Too many attempts to create ticket ({attempts}). Giving up.")


class InvalidCardConstraint(ValueError):
    """A fully filled card breaks a ticket invariant.

    Raised and handled inside the generators (scrap-and-retry); callers only
    see it indirectly through GenerationRetryLimitExceeded.
    """

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations) or "invalid card")
