"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class EmptyDebtListError(DomainException):
    """Payoff strategy requested without any debts"""

    pass


class InvalidInputError(DomainException):
    """Calculator input is outside the range the engine supports"""

    pass
