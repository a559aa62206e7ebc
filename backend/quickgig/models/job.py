from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

JOB_STATUSES = ("open", "completed")


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    date = Column(String(50), nullable=True)  # free-form, matched exactly by the listing filter
    duration = Column(String(100), nullable=True)  # e.g. "4 hours", "2 days"
    payment = Column(Float, nullable=True)
    status = Column(String(20), nullable=False, default="open", server_default="open")
    created_at = Column(DateTime, server_default=func.current_timestamp())

    employer = relationship("User", back_populates="jobs")
    # No ORM cascade: deleting a job leaves its applications in place.
    applications = relationship("Application", back_populates="job")
