# core/services/collection_service.py

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import (
    BookNotFound, NotInCollection, ParameterError, PersistenceError,
    ProviderUnavailable, StoreError, UpstreamResolutionFailed, UserNotFound
)
from core.models.book import BookInfo
from core.resolvers.book_resolver import BookResolver
from core.sa.repositories.user import UserRepository
from core.sa.repositories.user_book import UserBookRepository
from core.utils.data_transformer import tags_for_relation

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


class CollectionManager:
    """Adds, removes and lists the books in a user's collection.

    Adding is idempotent: storing a book that is already in the collection
    succeeds without a second entry. Removing is not: removing a book that is
    not in the collection raises NotInCollection.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        user_book_repository: UserBookRepository,
        resolver: BookResolver
    ):
        self.user_repository = user_repository
        self.user_book_repository = user_book_repository
        self.resolver = resolver

    @classmethod
    def from_session(cls, session: Session, **resolver_kwargs) -> 'CollectionManager':
        """Build a manager whose stores all share one session"""
        return cls(
            UserRepository(session),
            UserBookRepository(session),
            BookResolver(session, **resolver_kwargs)
        )

    def add_to_collection(self, user_id: str, isbn: str) -> None:
        """
        Stores a book in the user's collection.

        Raises:
            ParameterError: If user_id or isbn is empty.
            UserNotFound: If the user does not exist. The book is not resolved.
            UpstreamResolutionFailed: If the book could not be fetched.
            PersistenceError: If a store fails. A book already written to the
                cache stays there.
        """
        user_id, isbn = _clean(user_id), _clean(isbn)
        if not user_id or not isbn:
            logger.debug(f"Rejected store request: user_id={user_id!r}, isbn={isbn!r}")
            raise ParameterError("user_id and isbn are required")

        self._ensure_user_exists(user_id)

        try:
            book = self.resolver.resolve(isbn)
        except (ProviderUnavailable, BookNotFound) as e:
            raise UpstreamResolutionFailed(f"Could not resolve book {isbn}", cause=e) from e
        except StoreError as e:
            raise PersistenceError(f"Could not read book {isbn}", cause=e) from e

        tags = tags_for_relation(book)
        try:
            self.user_book_repository.upsert_active(user_id, isbn, tags)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store book {isbn} for user {user_id}: {e}")
            raise PersistenceError(f"Failed to store book {isbn} for user {user_id}", cause=e) from e

        logger.info(f"User {user_id} stored book {isbn}")

    def remove_from_collection(self, user_id: str, isbn: str) -> None:
        """
        Removes a book from the user's collection, keeping the entry as inactive.

        Raises:
            ParameterError: If user_id or isbn is empty.
            UserNotFound: If the user does not exist.
            NotInCollection: If the user has no active entry for the book.
            PersistenceError: If a store fails.
        """
        user_id, isbn = _clean(user_id), _clean(isbn)
        if not user_id or not isbn:
            logger.debug(f"Rejected unstore request: user_id={user_id!r}, isbn={isbn!r}")
            raise ParameterError("user_id and isbn are required")

        self._ensure_user_exists(user_id)

        try:
            entry = self.user_book_repository.get_active(user_id, isbn)
            if entry is None:
                logger.debug(f"User {user_id} has not stored book {isbn}")
                raise NotInCollection(f"User {user_id} has not stored book {isbn}")
            removed = self.user_book_repository.soft_delete(user_id, isbn)
        except SQLAlchemyError as e:
            logger.error(f"Failed to remove book {isbn} for user {user_id}: {e}")
            raise PersistenceError(f"Failed to remove book {isbn} for user {user_id}", cause=e) from e

        if not removed:
            # Another request removed it between the check and the update
            raise NotInCollection(f"User {user_id} has not stored book {isbn}")

        logger.info(f"User {user_id} removed book {isbn}")

    def list_collection(self, user_id: str) -> List[BookInfo]:
        """
        Lists the books in the user's collection, in the store's order
        (most recently stored first).

        Books missing from the cache are skipped rather than failing the listing.

        Raises:
            ParameterError: If user_id is empty.
            PersistenceError: If the collection or the cache cannot be read.
        """
        user_id = _clean(user_id)
        if not user_id:
            raise ParameterError("user_id is required")

        try:
            entries = self.user_book_repository.list_active_by_user(user_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load collection of user {user_id}: {e}")
            raise PersistenceError(f"Failed to load collection of user {user_id}", cause=e) from e

        isbns: List[str] = []
        for entry in entries:
            if entry.isbn not in isbns:
                isbns.append(entry.isbn)

        books: List[BookInfo] = []
        for isbn in isbns:
            try:
                book = self.resolver.lookup_cached(isbn)
            except StoreError as e:
                raise PersistenceError(f"Failed to load book {isbn}", cause=e) from e
            if book is None:
                logger.debug(f"Book {isbn} in collection of user {user_id} is not cached, skipping")
                continue
            books.append(book)

        return books

    def _ensure_user_exists(self, user_id: str) -> None:
        try:
            found = self.user_repository.exists(user_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up user {user_id}: {e}")
            raise PersistenceError(f"Failed to look up user {user_id}", cause=e) from e
        if not found:
            logger.debug(f"User {user_id} does not exist")
            raise UserNotFound(f"User does not exist, user_id: {user_id}")
