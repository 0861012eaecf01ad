from pydantic import BaseModel, ConfigDict, Field


class JobCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    location: str | None = Field(default=None, max_length=100)
    experience_level: str | None = Field(default=None, alias="experienceLevel")
    skills: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)
    deadline: str | None = None  # ISO datetime string
    is_public: bool = Field(default=True, alias="isPublic")
    status: str | None = None  # active / paused / closed


class ApplicationStatusUpdate(BaseModel):
    status: str | None = None  # pending / reviewed / shortlisted / rejected
