from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Submission(Base):
    __tablename__ = "submissions"
    __table_args__ = (
        Index("ix_submissions_job_ranking", "job_id", "ats_score", "submitted_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False)
    applicant_id = Column(Integer, ForeignKey("applicants.id"), nullable=True)  # null for anonymous
    applicant_name = Column(String(100), nullable=False)
    applicant_email = Column(String(255), nullable=False, index=True)
    applicant_phone = Column(String(50), nullable=True)
    uploaded_file_url = Column(String(500), nullable=True)
    file_name = Column(String(255), nullable=True)
    file_type = Column(String(120), nullable=True)
    raw_resume_text = Column(Text, nullable=True)
    parsed_resume_data = Column(Text, nullable=True)  # JSON string, filled by the resume parser
    analysis = Column(Text, nullable=True)  # JSON string: skillsMatched, skillsMissing, ...
    ats_score = Column(Float, nullable=True)
    status = Column(String(20), nullable=False, default="new")  # new / reviewed / shortlisted / rejected
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    job = relationship("Job", back_populates="submissions")
    applicant = relationship("Applicant", back_populates="submissions")
