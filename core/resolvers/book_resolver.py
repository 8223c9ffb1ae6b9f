# core/resolvers/book_resolver.py
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import get_settings
from core.errors import ParameterError, ProviderUnavailable, StoreError
from core.models.book import BookInfo
from core.sa.repositories.book import BookRepository
from core.utils.data_transformer import map_provider_payload
from core.utils.http import BookMetadataClient

logger = logging.getLogger(__name__)

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_write_back_executor() -> ThreadPoolExecutor:
    """Shared pool that writes resolved books back to the cache"""
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=get_settings().write_back_workers,
                thread_name_prefix='book-write-back'
            )
        return _executor


class MetadataProvider(Protocol):
    def fetch_by_isbn(self, isbn: str) -> Dict[str, Any]: ...


class BookResolver:
    def __init__(
        self,
        session: Session,
        provider: Optional[MetadataProvider] = None,
        session_factory: Optional[Callable[[], Session]] = None,
        executor: Optional[Executor] = None
    ):
        """
        Args:
            session: Session used for cache reads on the caller's thread
            provider: Metadata provider consulted on a cache miss
            session_factory: Creates the sessions used by background cache writes
            executor: Runs the background cache writes
        """
        self.book_repository = BookRepository(session)
        self.provider = provider or BookMetadataClient()
        if session_factory is None:
            from core.sa.database import db
            session_factory = db.get_session
        self.session_factory = session_factory
        self.executor = executor or get_write_back_executor()

    def lookup_cached(self, isbn: str) -> Optional[BookInfo]:
        """
        Looks the ISBN up in the book cache only.

        Returns:
            The cached book, or None on a miss.

        Raises:
            StoreError: If the cache cannot be read. A failed read is never
                reported as a miss.
        """
        try:
            book = self.book_repository.get_by_isbn(isbn)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read book {isbn} from cache: {e}")
            raise StoreError(f"Failed to read book {isbn} from cache", cause=e) from e
        if book is None:
            return None
        return BookInfo.model_validate(book)

    def resolve(self, isbn: str) -> BookInfo:
        """
        Resolves the canonical book data for an ISBN by:
          1. Returning the cached book if there is one, without any freshness check.
          2. Otherwise fetching the book from the metadata provider.
          3. Mapping the provider payload to the canonical shape.
          4. Handing the cache write to the background executor and returning
             without waiting for it.

        Returns:
            The resolved book.

        Raises:
            ParameterError: If the ISBN is empty.
            StoreError: If the cache read fails.
            ProviderUnavailable: On transport failures or malformed payloads.
            BookNotFound: If the provider has no book for the ISBN.
        """
        isbn = isbn.strip() if isinstance(isbn, str) else ""
        if not isbn:
            raise ParameterError("isbn is required")

        cached = self.lookup_cached(isbn)
        if cached is not None:
            logger.debug(f"Book cache hit for {isbn}")
            return cached

        logger.debug(f"Book cache miss for {isbn}, asking the metadata provider")
        payload = self.provider.fetch_by_isbn(isbn)
        try:
            book_info = map_provider_payload(isbn, payload)
        except ValueError as e:
            logger.error(f"Unusable provider payload for {isbn}: {e}")
            raise ProviderUnavailable(f"Unusable provider payload for {isbn}", cause=e) from e

        self.schedule_write_back(book_info)
        return book_info

    def schedule_write_back(self, book_info: BookInfo) -> Future:
        return self.executor.submit(self._write_back, book_info)

    def _write_back(self, book_info: BookInfo) -> None:
        # Runs on a pool thread, so it needs its own session
        session = self.session_factory()
        try:
            BookRepository(session).upsert(book_info)
            logger.debug(f"Cached book {book_info.isbn}")
        except Exception as e:
            logger.error(f"Failed to cache book {book_info.isbn}: {e}")
        finally:
            session.close()
