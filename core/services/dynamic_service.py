# core/services/dynamic_service.py

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.config import get_settings
from core.errors import DynamicNotFound, ParameterError, PersistenceError, UserNotFound
from core.sa.models import UserDynamic
from core.sa.repositories.dynamic import DynamicRepository
from core.sa.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class DynamicService:
    def __init__(
        self,
        dynamic_repository: DynamicRepository,
        user_repository: UserRepository,
        page_size: Optional[int] = None
    ):
        self.dynamic_repository = dynamic_repository
        self.user_repository = user_repository
        self.page_size = page_size or get_settings().dynamic_page_size

    def publish(self, user_id: str, content: str, isbn: Optional[str] = None) -> UserDynamic:
        if not user_id or not content or not content.strip():
            raise ParameterError("user_id and content are required")

        try:
            if not self.user_repository.exists(user_id):
                raise UserNotFound(f"User does not exist, user_id: {user_id}")
            dynamic = self.dynamic_repository.add(user_id, content.strip(), isbn or None)
        except SQLAlchemyError as e:
            logger.error(f"Failed to publish dynamic for user {user_id}: {e}")
            raise PersistenceError(f"Failed to publish dynamic for user {user_id}", cause=e) from e

        logger.info(f"User {user_id} published dynamic {dynamic.id}")
        return dynamic

    def like(self, dynamic_id: str) -> int:
        """Add a like to a dynamic and return the new like count"""
        if not dynamic_id:
            raise ParameterError("dynamic_id is required")

        try:
            count = self.dynamic_repository.increment_like_count(dynamic_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to like dynamic {dynamic_id}: {e}")
            raise PersistenceError(f"Failed to like dynamic {dynamic_id}", cause=e) from e

        if count is None:
            raise DynamicNotFound(f"Dynamic does not exist, dynamic_id: {dynamic_id}")
        return count

    def get(self, dynamic_id: str) -> UserDynamic:
        if not dynamic_id:
            raise ParameterError("dynamic_id is required")
        dynamic = self._query(lambda: self.dynamic_repository.get_active(dynamic_id))
        if dynamic is None:
            raise DynamicNotFound(f"Dynamic does not exist, dynamic_id: {dynamic_id}")
        return dynamic

    def user_feed(self, user_id: str, page_index: int = 1) -> List[UserDynamic]:
        """One page of a user's dynamics, newest first. Pages start at 1."""
        if not user_id:
            raise ParameterError("user_id is required")
        self._check_page(page_index)
        return self._query(lambda: self.dynamic_repository.page_by_user(user_id, page_index, self.page_size))

    def feed(self, page_index: int = 1) -> List[UserDynamic]:
        """One page of everybody's dynamics, newest first. Pages start at 1."""
        self._check_page(page_index)
        return self._query(lambda: self.dynamic_repository.page_all(page_index, self.page_size))

    @staticmethod
    def _check_page(page_index: int) -> None:
        if not isinstance(page_index, int) or page_index < 1:
            raise ParameterError(f"page_index must be a positive integer, got {page_index!r}")

    @staticmethod
    def _query(load):
        try:
            return load()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load dynamics: {e}")
            raise PersistenceError("Failed to load dynamics", cause=e) from e
