"""
User model: the directory of known users, read for existence checks.
"""

from typing import ClassVar

from sqlalchemy import Column, String

from .base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    User model. Rows are provisioned by the account system (see
    scripts/import_users.py); this service never writes them from the API.

    Attributes:
        id: Identifier issued by the account system
        username: Display name
        email: Contact address
        role: Account role
    """

    __tablename__ = "users"

    id: ClassVar[Column] = Column(String(64), primary_key=True)
    username: ClassVar[Column] = Column(String(100), nullable=False)
    email: ClassVar[Column] = Column(String(255), nullable=True, unique=True)
    role: ClassVar[Column] = Column(String(32), nullable=False, default="user")

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', username='{self.username}')>"

    def to_summary_dict(self) -> dict:
        """Public fields shown alongside a user's joined events."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
        }
