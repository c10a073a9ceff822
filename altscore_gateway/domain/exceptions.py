"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Scoring input violates the caller contract (types, values, ordering container)"""

    pass


class InsufficientDataError(DomainException):
    """Not enough transaction history to produce a meaningful score"""

    pass


class AccountNotFoundError(DomainException):
    """No business account exists for the given identifier"""

    pass
