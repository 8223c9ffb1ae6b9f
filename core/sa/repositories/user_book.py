from datetime import datetime, UTC
from typing import List, Optional
from sqlalchemy import desc, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from core.sa.models import UserBook

class UserBookRepository:
    """Repository for the books users have stored up in their collections."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_entry(self, user_id: str, isbn: str) -> Optional[UserBook]:
        """Get the collection row for a user and ISBN, active or not."""
        return (
            self.session.query(UserBook)
            .filter(UserBook.user_id == user_id, UserBook.isbn == isbn)
            .first()
        )

    def get_active(self, user_id: str, isbn: str) -> Optional[UserBook]:
        """Get the active collection row for a user and ISBN.

        Returns:
            The UserBook object if the user currently has the book stored, None otherwise
        """
        return (
            self.session.query(UserBook)
            .filter(
                UserBook.user_id == user_id,
                UserBook.isbn == isbn,
                UserBook.is_active.is_(True)
            )
            .first()
        )

    def upsert_active(self, user_id: str, isbn: str, tags: List[str]) -> UserBook:
        """Make sure the user has an active entry for the ISBN.

        An entry that is already active is returned untouched. A soft-deleted
        entry is re-activated with the new tags. Otherwise a new entry is
        created; losing the insert race to another request falls back to the
        row that request created.

        Args:
            user_id: The ID of the user
            isbn: The ISBN of the book
            tags: Tags to copy onto the entry

        Returns:
            The active UserBook object
        """
        try:
            return self._upsert_active(user_id, isbn, tags)
        except IntegrityError:
            return self._upsert_active(user_id, isbn, tags)

    def _upsert_active(self, user_id: str, isbn: str, tags: List[str]) -> UserBook:
        entry = self.get_entry(user_id, isbn)
        if entry is not None and entry.is_active:
            return entry

        if entry is None:
            entry = UserBook(user_id=user_id, isbn=isbn, tags=list(tags), is_active=True)
            self.session.add(entry)
        else:
            entry.is_active = True
            entry.tags = list(tags)
            entry.stored_at = datetime.now(UTC)

        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return entry

    def soft_delete(self, user_id: str, isbn: str) -> bool:
        """Mark the user's entry for the ISBN as removed.

        Returns:
            True if an active entry was deactivated, False if there was none
        """
        try:
            result = self.session.execute(
                update(UserBook)
                .where(
                    UserBook.user_id == user_id,
                    UserBook.isbn == isbn,
                    UserBook.is_active.is_(True)
                )
                .values(is_active=False, updated_at=datetime.now(UTC))
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return result.rowcount > 0

    def list_active_by_user(self, user_id: str) -> List[UserBook]:
        """Get the user's active entries, most recently stored first."""
        return (
            self.session.query(UserBook)
            .filter(UserBook.user_id == user_id, UserBook.is_active.is_(True))
            .order_by(desc(UserBook.stored_at), desc(UserBook.id))
            .all()
        )

