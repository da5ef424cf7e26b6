"""
zakatkit exception hierarchy.

All zakatkit exceptions inherit from ZakatKitError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.

Errors are raised synchronously at the point of violation and never retried
inside the engine.
"""


class ZakatKitError(Exception):
    """Base exception class for all zakatkit errors."""


class ConfigurationError(ZakatKitError):
    """Raised for configuration errors (missing keys, invalid values)."""


class ValidationError(ZakatKitError, ValueError):
    """Raised when a value object or entity is constructed from malformed input.

    Examples: unknown asset type, unsupported currency, out-of-range Hijri
    date, negative money amount.
    """


class InvariantViolation(ZakatKitError):
    """Raised when an operation would break a domain invariant."""


class CurrencyMismatchError(InvariantViolation):
    """Raised when Money arithmetic or comparison mixes currencies."""

    def __init__(self, left: str, right: str):
        self.left = left
        self.right = right
        super().__init__(f"Currency mismatch: {left} vs {right}")


class NegativeBalanceError(InvariantViolation):
    """Raised when a subtraction would produce a negative amount."""


class DuplicateEntryError(InvariantViolation):
    """Raised for duplicate ids, duplicate emails, or re-paying a zakat year."""


class OwnershipError(InvariantViolation):
    """Raised when an entity belongs to a different user than the portfolio."""


class InvalidTransitionError(InvariantViolation):
    """Raised for a reminder state change the state machine does not allow."""


class NotFoundError(ZakatKitError):
    """Raised when a referenced user, asset, liability or reminder is missing."""
