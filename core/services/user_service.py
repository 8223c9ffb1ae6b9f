# core/services/user_service.py

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from core.errors import (
    InvalidCredentials, ParameterError, PersistenceError, UserAlreadyExists, UserNotFound
)
from core.sa.models import User
from core.sa.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    def register(self, phone_number: str, password: str, nick_name: str) -> User:
        """Register a new account.

        Raises:
            ParameterError: If any field is empty
            UserAlreadyExists: If the phone number is taken
            PersistenceError: If the user could not be saved
        """
        if not phone_number or not password or not nick_name:
            raise ParameterError("phone_number, password and nick_name are required")

        try:
            user = self.user_repository.create_user(
                phone_number=phone_number,
                password_hash=generate_password_hash(password),
                nick_name=nick_name
            )
        except ValueError as e:
            raise UserAlreadyExists(str(e)) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to register {phone_number}: {e}")
            raise PersistenceError(f"Failed to register {phone_number}", cause=e) from e

        logger.info(f"Registered user {user.id}")
        return user

    def login(self, phone_number: str, password: str) -> User:
        """Check a phone number and password.

        Raises:
            ParameterError: If either field is empty
            InvalidCredentials: If the account is unknown or the password is wrong
        """
        if not phone_number or not password:
            raise ParameterError("phone_number and password are required")

        try:
            user = self.user_repository.get_by_phone_number(phone_number)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load user {phone_number}", cause=e) from e

        if user is None or not check_password_hash(user.password_hash, password):
            logger.debug(f"Failed login for {phone_number}")
            raise InvalidCredentials("Wrong phone number or password")
        return user

    def update_info(
        self,
        user_id: str,
        nick_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
        signature: Optional[str] = None,
        gender: Optional[str] = None
    ) -> User:
        """Update the user's profile.

        Raises:
            ParameterError: If user_id is empty
            UserNotFound: If the user does not exist
        """
        if not user_id:
            raise ParameterError("user_id is required")

        try:
            user = self.user_repository.update_profile(
                user_id,
                nick_name=nick_name,
                avatar_url=avatar_url,
                signature=signature,
                gender=gender
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            raise PersistenceError(f"Failed to update user {user_id}", cause=e) from e

        if user is None:
            raise UserNotFound(f"User does not exist, user_id: {user_id}")
        return user
