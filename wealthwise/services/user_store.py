"""Credential store: persistence of user records."""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from wealthwise.core.errors import DuplicateKeyError, StorageError
from wealthwise.models import User

logger = logging.getLogger(__name__)


class UserStore:
    """Look up and create users on an explicitly supplied session.

    Records are never updated or deleted through this class.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Insert a new user and commit.

        Raises:
            DuplicateKeyError: the unique index on email rejected the insert.
            StorageError: any other database failure.
        """
        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Only the email index makes a violation a duplicate
            if self.find_by_email(email) is None:
                raise StorageError(str(e)) from e
            logger.info("Duplicate signup rejected by the unique index for %s", email)
            raise DuplicateKeyError(email) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(str(e)) from e

        self.db.refresh(user)
        return user

    def count(self) -> int:
        try:
            return self.db.query(func.count(User.id)).scalar()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
