"""
User repository - data access for user accounts.

Every lookup only sees active users; soft-deleted accounts are invisible.
"""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import User, UserRole

# Set up logging
logger = logging.getLogger(__name__)


class UserRepository:
    """Persists and looks up users through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(User).filter(User.is_active.is_(True))

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._active().filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self._active().filter(User.username == username).first()

    def get_by_username_or_email(self, identifier: str) -> Optional[User]:
        """Find an active user by username, falling back to email."""
        user = self.get_by_username(identifier)
        if user is None:
            user = self._active().filter(User.email == identifier).first()
        return user

    def identity_taken(self, username: str, email: str) -> bool:
        """
        True if any active user already holds this username or this email.

        Usernames and emails share one login namespace, so each value is
        checked against both columns.
        """
        identifiers = (username, email)
        query = self._active().filter(
            or_(User.username.in_(identifiers), User.email.in_(identifiers))
        )
        return self.db.query(query.exists()).scalar()

    def list_active(self, role: Optional[UserRole] = None) -> List[User]:
        query = self._active()
        if role is not None:
            query = query.filter(User.role == role)
        return query.order_by(User.id).all()

    def add(self, user: User) -> User:
        """
        Insert a user.

        Raises:
            IntegrityError: If the username or email violates a unique constraint
        """
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def deactivate(self, user: User) -> User:
        """Soft-delete a user."""
        user.is_active = False
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.id} deactivated")
        return user
