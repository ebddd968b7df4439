"""Account Schemas — identity records, session snapshots, and profile inputs.

Invariants:
    - AccountProfile never carries a credential; it is the only shape exposed to callers
    - AccountRecord = AccountProfile + password_hash; lives only inside IdentityStore and its slot
    - company is employer-only; title and skills are jobseeker-only
    - email compared exactly as stored (case-sensitive), surrounding whitespace stripped

Design Decisions:
    - Role-specific fields checked by one model_validator shared through _ProfileFields,
      so registration and profile merges enforce the same rule
    - ProfileUpdate ignores unknown keys: email and role simply have no field to land in
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hiresphere.core.domain_types import AccountId, Role

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class _ProfileFields(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320, pattern=EMAIL_PATTERN)
    role: Role
    company: str | None = Field(None, max_length=200)
    title: str | None = Field(None, max_length=200)
    skills: list[str] | None = None
    bio: str | None = Field(None, max_length=5000)

    @model_validator(mode="after")
    def check_role_fields(self):
        if self.role == Role.JOBSEEKER and self.company:
            raise ValueError("company is only available to employer accounts")
        if self.role == Role.EMPLOYER and (self.title or self.skills):
            raise ValueError("title and skills are only available to jobseeker accounts")
        return self


class AccountCreate(_ProfileFields):
    """Registration input — everything but id and credential."""


class AccountProfile(_ProfileFields):
    """Credential-free account snapshot — what current_session() returns."""
    id: AccountId


class AccountRecord(AccountProfile):
    """Ledger entry — the profile plus its password hash."""
    password_hash: str = Field(min_length=1)

    def to_profile(self) -> AccountProfile:
        return AccountProfile.model_validate(
            self.model_dump(exclude={"password_hash"}),
        )


class ProfileUpdate(BaseModel):
    """Partial profile merge. Only fields explicitly set are applied."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=200)
    company: str | None = Field(None, max_length=200)
    title: str | None = Field(None, max_length=200)
    skills: list[str] | None = None
    bio: str | None = Field(None, max_length=5000)


class RegisterRequest(AccountCreate):
    """API body for registration."""
    password: str = Field(min_length=1, max_length=1024)


class LoginRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str
    password: str
