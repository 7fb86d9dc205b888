"""Exceptions and warnings raised by purse."""


class PurseError(Exception):
    """Base class for purse errors."""


class ValidationError(PurseError, ValueError):
    """Raised when a new transaction is missing or has an unparseable field."""


class PersistenceError(PurseError):
    """Raised by persistence backends when state cannot be read or written."""


class ConfigError(PurseError):
    """Raised when the configuration file is unreadable or invalid."""


class PersistenceWarning(UserWarning):
    """Emitted when ledger state could not be loaded or saved.

    The ledger keeps working from memory; this is never raised as an error.
    """
