"""
UserService handles staff accounts: registration, lookup, deletion and
credential checks for login.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from review_dashboard.models.user import User
from review_dashboard.schemas import load_or_raise
from review_dashboard.schemas.auth_schema import AuthLoginSchema
from review_dashboard.schemas.user_schema import UserCreateSchema
from review_dashboard.utils.errors import AuthError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid email or password'


class UserService:
    """Service for user account operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_user(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError('User not found')
        return user

    def get_by_email(self, email: Optional[str]) -> Optional[User]:
        return self.session.scalar(select(User).where(User.email == User.normalize_email(email)))

    def create_user(self, data: Optional[Dict[str, Any]]) -> User:
        """
        Validate and create a user with a bcrypt-hashed password.

        Raises:
            ValidationError: Bad email, names or password.
            ConflictError: If the email is already registered.
        """
        payload = load_or_raise(UserCreateSchema(), data)
        if self.get_by_email(payload['email']) is not None:
            raise ConflictError('Email already exists')

        user = User(
            email=payload['email'],
            first_name=payload['first_name'],
            last_name=payload['last_name'],
        )
        user.set_password(payload['password'])
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError('Email already exists')
        logger.info(f"User created: id={user.id} email='{user.email}'")
        return user

    def delete_user(self, user_id: int) -> Dict[str, Any]:
        """Remove the account and return the {id, email} it had."""
        user = self.get_user(user_id)
        deleted = {'id': user.id, 'email': user.email}
        self.session.delete(user)
        self.session.commit()
        logger.info(f"User deleted: id={user_id}")
        return deleted

    def authenticate(self, data: Optional[Dict[str, Any]]) -> User:
        """
        Check login credentials.

        Unknown email and wrong password produce the same error so that the
        response does not reveal which accounts exist.

        Raises:
            ValidationError: If email or password is missing.
            AuthError: On bad credentials or a deactivated account.
        """
        payload = load_or_raise(AuthLoginSchema(), data)
        user = self.get_by_email(payload['email'])
        if user is None or not user.check_password(payload['password']):
            raise AuthError(INVALID_CREDENTIALS)
        if not user.is_active:
            raise AuthError('Account is deactivated')
        return user
