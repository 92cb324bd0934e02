"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.enums import Role
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and feedback ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value, index=True)
