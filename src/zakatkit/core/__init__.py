"""Core infrastructure: exceptions, configuration, logging."""

from .config import Config, get_config, reset_config
from .exceptions import (
    ConfigurationError,
    CurrencyMismatchError,
    DuplicateEntryError,
    InvalidTransitionError,
    InvariantViolation,
    NegativeBalanceError,
    NotFoundError,
    OwnershipError,
    ValidationError,
    ZakatKitError,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "CurrencyMismatchError",
    "DuplicateEntryError",
    "InvalidTransitionError",
    "InvariantViolation",
    "NegativeBalanceError",
    "NotFoundError",
    "OwnershipError",
    "ValidationError",
    "ZakatKitError",
    "get_config",
    "reset_config",
]
