"""Domain-level exceptions.

Every failure the storefront can report is a subclass of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all storefront errors."""


class ValidationError(DomainException):
    """A business rule or required-field check was violated."""


class EntityNotFoundError(DomainException):
    """A requested product, cart line or order does not exist."""


class StorageUnavailableError(DomainException):
    """The local cart store cannot be read or written."""


class NetworkFailureError(DomainException):
    """The remote document store could not be reached or rejected a call."""


class ConfigurationError(DomainException):
    """A required setting is missing."""
