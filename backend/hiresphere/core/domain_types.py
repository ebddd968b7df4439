"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId, JobId, ApplicationId wrap str — never pass a bare str id in domain logic
    - All valid states encoded as Enums — no raw string matching
    - StorageSlot names the four durable slots; keys are built with a prefix

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Prefixed string ids ("user_", "job_", "app_"): readable in stored blobs,
      compatible with ids written by earlier versions of the board
"""

from enum import Enum
from typing import NewType
from uuid import uuid4


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", str)
JobId = NewType("JobId", str)
ApplicationId = NewType("ApplicationId", str)


def new_account_id() -> AccountId:
    return AccountId(f"user_{uuid4().hex}")


def new_job_id() -> JobId:
    return JobId(f"job_{uuid4().hex}")


def new_application_id() -> ApplicationId:
    return ApplicationId(f"app_{uuid4().hex}")


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Account role — fixed at registration."""
    JOBSEEKER = "jobseeker"
    EMPLOYER = "employer"


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class ApplicationStatus(str, Enum):
    """Application review states. Order matches the employer review tabs."""
    PENDING = "pending"
    REVIEWED = "reviewed"
    INTERVIEW = "interview"
    HIRED = "hired"
    REJECTED = "rejected"


class StorageSlot(str, Enum):
    """Durable slots — value is the key suffix after the configured prefix."""
    ACCOUNTS = "users"
    SESSION = "user"
    JOBS = "jobs"
    APPLICATIONS = "applications"

    def key(self, prefix: str) -> str:
        return f"{prefix}{self.value}"
