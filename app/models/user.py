"""
User model for authentication and role checks.

Users are keyed by username; is_admin gates company/job writes and user
management.
"""

from sqlalchemy import Column, String, Boolean, Text, false
from app.core.database import Base


class User(Base):
    """
    Registered account. `password` holds the bcrypt hash, never plain text.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
