"""Domain-specific exceptions"""

from finbridge.domain.results import ErrorKind


class DomainException(Exception):
    """Base exception for domain layer"""

    kind: ErrorKind = ErrorKind.UPSTREAM_DATA


class UpstreamDataError(DomainException):
    """Storage failed while reading or writing user records"""

    kind = ErrorKind.UPSTREAM_DATA


class InvalidInputError(DomainException):
    """Assessment answers or progress values are malformed"""

    kind = ErrorKind.VALIDATION


class AuthorizationError(DomainException):
    """Mutation targets a resource owned by another user"""

    kind = ErrorKind.AUTHORIZATION


class NotFoundError(DomainException):
    """Requested profile, challenge or alert does not exist"""

    kind = ErrorKind.NOT_FOUND
