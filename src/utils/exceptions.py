"""Custom exception classes."""


class RegistrationError(Exception):
    """Base class for errors raised by the registration workflows."""
    pass


class ValidationError(RegistrationError):
    """Raised when name or phone is empty."""
    pass


class DuplicateNameError(RegistrationError):
    """Raised when the name is already registered."""
    pass


class StorePersistenceError(RegistrationError):
    """Raised when the record store cannot list, insert or delete."""
    pass


class AuthGateError(RegistrationError):
    """Raised when the admin passphrase is wrong."""
    pass


class RecordNotFoundError(RegistrationError):
    """Raised when a receipt ID doesn't match any loaded record."""
    pass


class OperationPendingError(RegistrationError):
    """Raised when a store call is already in flight for this session."""
    pass
