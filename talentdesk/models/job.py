from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(100), nullable=True)
    experience_level = Column(String(20), nullable=True, default="mid")
    skills = Column(Text, nullable=True)  # JSON string list
    requirements = Column(Text, nullable=True)  # JSON string list
    status = Column(String(20), nullable=False, default="active")  # active / paused / closed
    is_public = Column(Boolean, nullable=False, default=True)
    deadline = Column(DateTime(timezone=True), nullable=True)
    application_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="jobs")
    submissions = relationship("Submission", back_populates="job", cascade="all, delete-orphan")
