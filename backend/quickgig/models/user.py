from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

USER_ROLES = ("employer", "worker", "admin")


class User(Base):
    __tablename__ = "users"
    # AUTOINCREMENT keeps ids monotonic; a deleted id is never handed out again.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(Text, nullable=False)  # plaintext, compared as-is on login
    name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False)  # employer / worker / admin
    created_at = Column(DateTime, server_default=func.current_timestamp())

    # Relationships
    jobs = relationship("Job", back_populates="employer")
    applications = relationship("Application", back_populates="worker")
