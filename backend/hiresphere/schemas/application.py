"""Application Schemas — one jobseeker's submission against one job.

Invariants:
    - applicant_name is a snapshot taken at submission; later profile edits do not touch it
    - status always one of ApplicationStatus; new applications start at pending
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hiresphere.core.domain_types import (
    AccountId, ApplicationId, ApplicationStatus, JobId,
)


class ApplicationSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    cover_letter: str | None = Field(None, max_length=10_000)
    resume: str | None = Field(None, max_length=2_000)


class Application(BaseModel):
    id: ApplicationId
    job_id: JobId
    applicant_id: AccountId
    applicant_name: str
    cover_letter: str | None = None
    resume: str | None = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    applied_at: datetime


class StatusUpdate(BaseModel):
    """API body for an employer's status change."""
    status: ApplicationStatus
