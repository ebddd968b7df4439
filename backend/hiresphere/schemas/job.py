"""Job Schemas — postings and their create/update inputs.

Invariants:
    - owner_id, created_at and is_active are stamped by RecordStore, never taken from create input
    - JobUpdate cannot move ownership or creation time: those keys are ignored
    - requirements keep the order the employer entered them
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hiresphere.core.domain_types import AccountId, JobId, JobType


class JobCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    location: str = Field(min_length=1, max_length=200)
    description: str = Field(max_length=20_000)
    requirements: list[str] = Field(default_factory=list)
    salary: str | None = Field(None, max_length=200)
    type: JobType


class Job(JobCreate):
    id: JobId
    owner_id: AccountId
    created_at: datetime
    is_active: bool = True


class JobUpdate(BaseModel):
    """Partial job merge. Only fields explicitly set are applied."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str | None = Field(None, min_length=1, max_length=200)
    company: str | None = Field(None, min_length=1, max_length=200)
    location: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=20_000)
    requirements: list[str] | None = None
    salary: str | None = Field(None, max_length=200)
    type: JobType | None = None
    is_active: bool | None = None
