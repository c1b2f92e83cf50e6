"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidProfileError(DomainException):
    """Profile income/expenses are non-positive or non-finite"""

    pass


class InvalidInputError(DomainException):
    """Scoring argument outside its accepted range"""

    pass


class PredictionServiceError(DomainException):
    """External prediction API returned an error or is unavailable"""

    pass


class EmptyInputWarning(UserWarning):
    """Profile has no transactions; neutral defaults were used"""

    pass
