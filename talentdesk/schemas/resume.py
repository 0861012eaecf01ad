from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResumeSaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # parsedText, rawFileURL, fileName, fileType; anything else is kept in parsedText
    resume_data: dict[str, Any] | None = Field(default=None, alias="resumeData")
    ats_score: float | None = Field(default=None, alias="atsScore")
    job_id: int | None = Field(default=None, alias="jobId")
