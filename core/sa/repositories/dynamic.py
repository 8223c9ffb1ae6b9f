from typing import List, Optional
from sqlalchemy import desc, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from core.sa.models import UserDynamic

class DynamicRepository:
    """Repository for managing UserDynamic entities."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, user_id: str, content: str, isbn: Optional[str] = None) -> UserDynamic:
        """Publish a new dynamic for a user.

        Args:
            user_id: The ID of the publishing user
            content: Text of the dynamic
            isbn: Optional ISBN of the book the dynamic is about

        Returns:
            The created UserDynamic object
        """
        dynamic = UserDynamic(user_id=user_id, content=content, isbn=isbn)
        self.session.add(dynamic)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return dynamic

    def get_active(self, dynamic_id: str) -> Optional[UserDynamic]:
        return (
            self.session.query(UserDynamic)
            .filter(UserDynamic.id == dynamic_id, UserDynamic.is_active.is_(True))
            .first()
        )

    def increment_like_count(self, dynamic_id: str) -> Optional[int]:
        """Add one like to an active dynamic.

        The increment runs as a single UPDATE so concurrent likes are not lost.

        Returns:
            The new like count, or None if no active dynamic has that ID
        """
        try:
            result = self.session.execute(
                update(UserDynamic)
                .where(UserDynamic.id == dynamic_id, UserDynamic.is_active.is_(True))
                .values(like_count=UserDynamic.like_count + 1)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        if result.rowcount == 0:
            return None
        dynamic = self.get_active(dynamic_id)
        return dynamic.like_count if dynamic else None

    def page_by_user(self, user_id: str, page_index: int, page_size: int) -> List[UserDynamic]:
        """Get one page of a user's active dynamics, newest first.

        Args:
            user_id: The ID of the user
            page_index: 1-based page number
            page_size: Number of dynamics per page
        """
        return (
            self.session.query(UserDynamic)
            .filter(UserDynamic.user_id == user_id, UserDynamic.is_active.is_(True))
            .order_by(desc(UserDynamic.created_at), desc(UserDynamic.id))
            .offset((page_index - 1) * page_size)
            .limit(page_size)
            .all()
        )

    def page_all(self, page_index: int, page_size: int) -> List[UserDynamic]:
        """Get one page of all active dynamics, newest first."""
        return (
            self.session.query(UserDynamic)
            .filter(UserDynamic.is_active.is_(True))
            .order_by(desc(UserDynamic.created_at), desc(UserDynamic.id))
            .offset((page_index - 1) * page_size)
            .limit(page_size)
            .all()
        )
