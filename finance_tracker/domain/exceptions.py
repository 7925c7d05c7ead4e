"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInstallmentCountError(DomainException):
    """Purchase split into fewer than one installment"""

    pass


class InvalidProjectionError(DomainException):
    """Projection requested over fewer than one month"""

    pass


class DuplicateRecordError(DomainException):
    """Record collides with an existing unique value (email, category name)"""

    pass


class AuthenticationError(DomainException):
    """Credentials or user identity could not be verified"""

    pass
