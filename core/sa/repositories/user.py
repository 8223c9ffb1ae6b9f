from typing import Optional
from sqlalchemy import select, exists
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from core.sa.models import User

# Profile columns a user may change after registering
PROFILE_FIELDS = ('nick_name', 'avatar_url', 'signature', 'gender')

class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def exists(self, user_id: str) -> bool:
        """Check whether a user with the given ID exists.

        Args:
            user_id: The ID of the user

        Returns:
            True if the user exists, False otherwise
        """
        return bool(self.session.scalar(select(exists().where(User.id == user_id))))

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by their ID.

        Args:
            user_id: The ID of the user to retrieve

        Returns:
            The User object if found, None otherwise
        """
        return self.session.query(User).filter(User.id == user_id).one_or_none()

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        """Get a user by the phone number they registered with."""
        return self.session.query(User).filter(User.phone_number == phone_number).one_or_none()

    def create_user(self, phone_number: str, password_hash: str, nick_name: str) -> User:
        """Create a new user.

        Args:
            phone_number: The phone number used to log in
            password_hash: Hash of the user's password
            nick_name: The display name of the user

        Returns:
            The created User object

        Raises:
            ValueError: If a user with the given phone number already exists
        """
        existing = self.get_by_phone_number(phone_number)
        if existing:
            raise ValueError(f"User with phone number '{phone_number}' already exists")

        user = User(phone_number=phone_number, password_hash=password_hash, nick_name=nick_name)
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"User with phone number '{phone_number}' already exists")

    def update_profile(self, user_id: str, **fields) -> Optional[User]:
        """Update a user's profile fields.

        Only the columns in PROFILE_FIELDS are written; ``None`` values are
        ignored so callers can pass partial updates.

        Returns:
            The updated User object if found, None otherwise
        """
        user = self.get_by_id(user_id)
        if not user:
            return None

        for name in PROFILE_FIELDS:
            value = fields.get(name)
            if value is not None:
                setattr(user, name, value)

        self.session.commit()
        return user
