from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubmissionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_slug: str | None = Field(default=None, alias="jobSlug")
    applicant_name: str | None = Field(default=None, alias="applicantName")
    applicant_email: str | None = Field(default=None, alias="applicantEmail")
    applicant_phone: str | None = Field(default=None, alias="applicantPhone")
    resume_text: str | None = Field(default=None, alias="resumeText")
    file_url: str | None = Field(default=None, alias="fileUrl")
    file_name: str | None = Field(default=None, alias="fileName")
    file_type: str | None = Field(default=None, alias="fileType")
    create_profile: bool = Field(default=False, alias="createProfile")
    # Produced by the upstream resume analyzer, stored as-is.
    ats_score: float | None = Field(default=None, alias="atsScore")
    parsed_resume_data: dict[str, Any] | None = Field(default=None, alias="parsedResumeData")
    analysis: dict[str, Any] | None = None
