"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MalformedRowError(DomainException):
    """Scraped row cannot be turned into a rate period"""

    pass


class InvalidRangeError(DomainException):
    """Requested date range ends before it starts"""

    pass


class AcquisitionError(DomainException):
    """No rate source produced a usable rate table"""

    pass
