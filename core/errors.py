# core/errors.py
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    # Request validation
    PARAMETER = "parameter_error"

    # Lookups
    USER_NOT_FOUND = "user_not_found"
    NOT_IN_COLLECTION = "not_in_collection"
    DYNAMIC_NOT_FOUND = "dynamic_not_found"
    BOOK_NOT_FOUND = "book_not_found"

    # Accounts
    USER_ALREADY_EXISTS = "user_already_exists"
    INVALID_CREDENTIALS = "invalid_credentials"

    # Upstream and storage
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    UPSTREAM_RESOLUTION_FAILED = "upstream_resolution_failed"
    STORE_ERROR = "store_error"
    PERSISTENCE_ERROR = "persistence_error"


class BookFriendsError(Exception):
    """Base class for errors raised by the services.

    Every error carries a ``kind`` for callers to branch on, a human readable
    ``detail`` and, when it wraps a lower level failure, the original ``cause``.
    """
    kind: ErrorKind = ErrorKind.PERSISTENCE_ERROR

    def __init__(self, detail: str = "", cause: Optional[BaseException] = None):
        super().__init__(detail)
        self.detail = detail
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.detail} (caused by {self.cause.__class__.__name__}: {self.cause})"
        return self.detail

    def to_dict(self) -> dict:
        return {"error": self.kind.value, "detail": self.detail}


class ParameterError(BookFriendsError):
    kind = ErrorKind.PARAMETER


class UserNotFound(BookFriendsError):
    kind = ErrorKind.USER_NOT_FOUND


class NotInCollection(BookFriendsError):
    kind = ErrorKind.NOT_IN_COLLECTION


class DynamicNotFound(BookFriendsError):
    kind = ErrorKind.DYNAMIC_NOT_FOUND


class UserAlreadyExists(BookFriendsError):
    kind = ErrorKind.USER_ALREADY_EXISTS


class InvalidCredentials(BookFriendsError):
    kind = ErrorKind.INVALID_CREDENTIALS


class UpstreamResolutionFailed(BookFriendsError):
    kind = ErrorKind.UPSTREAM_RESOLUTION_FAILED


class PersistenceError(BookFriendsError):
    kind = ErrorKind.PERSISTENCE_ERROR


# Raised by the book resolver and the metadata client

class ProviderUnavailable(BookFriendsError):
    """Transport failure, timeout or unreadable response from the metadata provider"""
    kind = ErrorKind.PROVIDER_UNAVAILABLE


class BookNotFound(BookFriendsError):
    """The metadata provider answered but has no book for the ISBN"""
    kind = ErrorKind.BOOK_NOT_FOUND


class StoreError(BookFriendsError):
    """The book cache could not be read"""
    kind = ErrorKind.STORE_ERROR
