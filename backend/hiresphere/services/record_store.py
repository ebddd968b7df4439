"""Record Store — jobs and applications with ownership, role, and integrity rules.

Invariants:
    - Every write resolves the session first; RecordStore never mutates the session
    - Only employers create jobs; only a job's owner updates, deactivates, or deletes it
    - Only jobseekers apply; at most one application per (job_id, applicant_id)
    - Only the owner of an application's parent job changes its status
    - Deleting a job deletes every application referencing it, in one write_many
    - All checks run before any mutation; collections are swapped in only after the
      write succeeded, so a failing operation leaves everything unchanged
    - Returned entities are copies; callers cannot reach the stored collections

Design Decisions:
    - Session provider injected (IdentityStore in production): the store only needs
      id, name, role — see SessionLike
    - Status policy injected as a callable defaulting to check_status_transition,
      so a stricter workflow replaces one argument, not call sites
    - No version counters: concurrent writers in separate processes are
      last-write-wins per slot
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from hiresphere.core.domain_types import (
    ApplicationId, ApplicationStatus, JobId, JobType, Role, StorageSlot,
    new_application_id, new_job_id,
)
from hiresphere.core.enforce_status import check_status_transition
from hiresphere.core.errors import (
    DuplicateApplicationError, ErrorContext, ForbiddenError,
    NotAuthenticatedError, ResourceNotFoundError,
)
from hiresphere.core.repository_protocols import (
    KeyValueStorage, SessionLike, SessionProvider,
)
from hiresphere.schemas.application import Application, ApplicationSubmission
from hiresphere.schemas.job import Job, JobCreate, JobUpdate
from hiresphere.schemas.snapshot import dump_items, load_applications, load_jobs
from hiresphere.schemas.validation import (
    parse_enum, parse_input, validation_failure,
)
from hiresphere.services.identity_store import DEFAULT_KEY_PREFIX
from hiresphere.services.sample_jobs import build_sample_jobs

logger = logging.getLogger(__name__)

TransitionPolicy = Callable[[ApplicationStatus, ApplicationStatus], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """Owns the Job and Application collections."""

    def __init__(
        self,
        storage: KeyValueStorage,
        sessions: SessionProvider,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        seed_sample_jobs: bool = True,
        clock: Callable[[], datetime] = _utcnow,
        transition_policy: TransitionPolicy = check_status_transition,
        job_id_factory: Callable[[], JobId] = new_job_id,
        application_id_factory: Callable[[], ApplicationId] = new_application_id,
    ):
        self._storage = storage
        self._sessions = sessions
        self._jobs_key = StorageSlot.JOBS.key(key_prefix)
        self._applications_key = StorageSlot.APPLICATIONS.key(key_prefix)
        self._seed = seed_sample_jobs
        self._clock = clock
        self._check_transition = transition_policy
        self._new_job_id = job_id_factory
        self._new_application_id = application_id_factory
        self._jobs: list[Job] = []
        self._applications: list[Application] = []
        self._is_open = False

    # ─── Lifecycle ───────────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        """Hydrate both collections; seed sample jobs if the job slot is absent."""
        jobs = self._hydrate_jobs()
        applications: list[Application] = []
        raw = self._storage.read(self._applications_key)
        if raw is not None:
            applications, migrated = load_applications(self._applications_key, raw)
            if migrated:
                self._storage.write(self._applications_key, dump_items(applications))
                logger.info(
                    "Migrated legacy applications",
                    extra={"slot": self._applications_key},
                )
        self._jobs = jobs
        self._applications = applications
        self._is_open = True
        logger.info(
            f"RecordStore opened: {len(jobs)} job(s), "
            f"{len(applications)} application(s)",
        )

    def close(self) -> None:
        self._is_open = False
        self._jobs = []
        self._applications = []

    def __enter__(self) -> "RecordStore":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ─── Job reads ───────────────────────────────────────────────

    def get_job(self, job_id: str) -> Job:
        self._ensure_open()
        return self._require_job(job_id, "get_job").model_copy(deep=True)

    def list_jobs(
        self,
        query: str | None = None,
        job_type: JobType | str | None = None,
        include_inactive: bool = False,
    ) -> list[Job]:
        """Board listing: text search over title/company/description/location."""
        self._ensure_open()
        needle = query.strip().lower() if query else ""
        wanted_type = parse_enum(JobType, job_type, "job_type") if job_type else None
        return [
            job.model_copy(deep=True)
            for job in self._jobs
            if (include_inactive or job.is_active)
            and (wanted_type is None or job.type == wanted_type)
            and (not needle or _matches(job, needle))
        ]

    def jobs_for_current_user(self) -> list[Job]:
        """Employer dashboard: jobs owned by the session account."""
        self._ensure_open()
        session = self._sessions.current_session()
        if session is None:
            return []
        return [j.model_copy(deep=True) for j in self._jobs if j.owner_id == session.id]

    # ─── Application reads ───────────────────────────────────────

    def get_application(self, application_id: str) -> Application:
        self._ensure_open()
        return self._require_application(
            application_id, "get_application",
        )[1].model_copy(deep=True)

    def applications_for_job(
        self, job_id: str, status: ApplicationStatus | str | None = None,
    ) -> list[Application]:
        self._ensure_open()
        wanted = parse_enum(ApplicationStatus, status, "status") if status else None
        return [
            a.model_copy(deep=True)
            for a in self._applications
            if a.job_id == job_id and (wanted is None or a.status == wanted)
        ]

    def applications_for_current_user(self) -> list[Application]:
        self._ensure_open()
        session = self._sessions.current_session()
        if session is None:
            return []
        return [
            a.model_copy(deep=True)
            for a in self._applications if a.applicant_id == session.id
        ]

    def status_counts_for_job(self, job_id: str) -> dict[ApplicationStatus, int]:
        """Per-status tally for the review tabs; every status present, zeros included."""
        self._ensure_open()
        counts = Counter(a.status for a in self._applications if a.job_id == job_id)
        return {status: counts.get(status, 0) for status in ApplicationStatus}

    # ─── Job writes ──────────────────────────────────────────────

    def create_job(self, fields: JobCreate | Mapping[str, Any]) -> Job:
        self._ensure_open()
        session = self._require_session("create_job")
        if session.role != Role.EMPLOYER:
            raise self._forbidden(
                "Only employers can post jobs", session, "create_job",
            )
        data = parse_input(JobCreate, fields)

        job = Job(
            **data.model_dump(), id=self._new_job_id(), owner_id=session.id,
            created_at=self._clock(), is_active=True,
        )
        self._commit(jobs=[*self._jobs, job])
        logger.info(
            "Job created",
            extra={"account_id": session.id, "job_id": job.id, "operation": "create_job"},
        )
        return job.model_copy(deep=True)

    def update_job(self, job_id: str, changes: JobUpdate | Mapping[str, Any]) -> Job:
        self._ensure_open()
        session = self._require_session("update_job")
        index, job = self._owned_job(
            job_id, session, "update_job", "You can only edit your own job listings",
        )
        update = parse_input(JobUpdate, changes)

        try:
            merged = Job.model_validate({
                **job.model_dump(), **update.model_dump(exclude_unset=True),
            })
        except ValidationError as e:
            raise validation_failure("JobUpdate", e) from e

        jobs = list(self._jobs)
        jobs[index] = merged
        self._commit(jobs=jobs)
        logger.info(
            "Job updated",
            extra={"account_id": session.id, "job_id": job_id, "operation": "update_job"},
        )
        return merged.model_copy(deep=True)

    def set_job_active(self, job_id: str, active: bool) -> Job:
        """Owner shortcut for deactivating/reactivating a listing."""
        return self.update_job(job_id, JobUpdate(is_active=active))

    def delete_job(self, job_id: str) -> None:
        """Remove the job and cascade-delete its applications."""
        self._ensure_open()
        session = self._require_session("delete_job")
        self._owned_job(
            job_id, session, "delete_job", "You can only delete your own job listings",
        )

        jobs = [j for j in self._jobs if j.id != job_id]
        applications = [a for a in self._applications if a.job_id != job_id]
        removed = len(self._applications) - len(applications)
        self._commit(jobs=jobs, applications=applications)
        logger.info(
            f"Job deleted with {removed} application(s)",
            extra={"account_id": session.id, "job_id": job_id, "operation": "delete_job"},
        )

    # ─── Application writes ──────────────────────────────────────

    def apply_for_job(
        self,
        job_id: str,
        submission: ApplicationSubmission | Mapping[str, Any] | None = None,
    ) -> Application:
        self._ensure_open()
        session = self._require_session("apply_for_job")
        if session.role != Role.JOBSEEKER:
            raise self._forbidden(
                "Only job seekers can apply for jobs", session, "apply_for_job",
            )
        job = self._require_job(job_id, "apply_for_job", session.id)
        if any(
            a.job_id == job.id and a.applicant_id == session.id
            for a in self._applications
        ):
            logger.warning(
                "Duplicate application rejected",
                extra={
                    "account_id": session.id, "job_id": job_id,
                    "error_code": "DUPLICATE_APPLICATION",
                },
            )
            raise DuplicateApplicationError(
                job_id, ErrorContext(account_id=session.id, operation="apply_for_job"),
            )
        data = parse_input(ApplicationSubmission, submission)

        application = Application(
            id=self._new_application_id(),
            job_id=job.id,
            applicant_id=session.id,
            applicant_name=session.name,
            cover_letter=data.cover_letter,
            resume=data.resume,
            status=ApplicationStatus.PENDING,
            applied_at=self._clock(),
        )
        self._commit(applications=[*self._applications, application])
        logger.info(
            "Application submitted",
            extra={
                "account_id": session.id, "job_id": job_id,
                "application_id": application.id, "operation": "apply_for_job",
            },
        )
        return application.model_copy(deep=True)

    def update_application_status(
        self, application_id: str, status: ApplicationStatus | str,
    ) -> Application:
        self._ensure_open()
        session = self._require_session("update_application_status")
        index, application = self._require_application(
            application_id, "update_application_status", session.id,
        )
        job = self._find_job(application.job_id)
        if job is None or job.owner_id != session.id:
            raise self._forbidden(
                "You can only update applications for your own job listings",
                session, "update_application_status",
            )
        new_status = parse_enum(ApplicationStatus, status, "status")
        self._check_transition(application.status, new_status)

        updated = application.model_copy(update={"status": new_status})
        applications = list(self._applications)
        applications[index] = updated
        self._commit(applications=applications)
        logger.info(
            f"Application status {application.status.value} -> {new_status.value}",
            extra={
                "account_id": session.id, "application_id": application_id,
                "operation": "update_application_status",
            },
        )
        return updated.model_copy(deep=True)

    # ─── Internals ───────────────────────────────────────────────

    def _hydrate_jobs(self) -> list[Job]:
        raw = self._storage.read(self._jobs_key)
        if raw is None:
            if not self._seed:
                return []
            jobs = build_sample_jobs(self._clock())
            self._storage.write(self._jobs_key, dump_items(jobs))
            logger.info(
                f"Seeded {len(jobs)} sample job(s)", extra={"slot": self._jobs_key},
            )
            return jobs
        jobs, migrated = load_jobs(self._jobs_key, raw)
        if migrated:
            self._storage.write(self._jobs_key, dump_items(jobs))
            logger.info("Migrated legacy jobs", extra={"slot": self._jobs_key})
        return jobs

    def _commit(
        self,
        jobs: list[Job] | None = None,
        applications: list[Application] | None = None,
    ) -> None:
        """Persist the given collections atomically, then swap them in."""
        values: dict[str, str] = {}
        if jobs is not None:
            values[self._jobs_key] = dump_items(jobs)
        if applications is not None:
            values[self._applications_key] = dump_items(applications)
        self._storage.write_many(values)
        if jobs is not None:
            self._jobs = jobs
        if applications is not None:
            self._applications = applications

    def _require_session(self, operation: str) -> SessionLike:
        session = self._sessions.current_session()
        if session is None:
            logger.warning(
                f"{operation} rejected: no session",
                extra={"error_code": "NOT_AUTHENTICATED", "operation": operation},
            )
            raise NotAuthenticatedError(operation)
        return session

    def _owned_job(
        self, job_id: str, session: SessionLike, operation: str, message: str,
    ) -> tuple[int, Job]:
        for index, job in enumerate(self._jobs):
            if job.id == job_id:
                if job.owner_id != session.id:
                    raise self._forbidden(message, session, operation, job_id)
                return index, job
        raise _not_found("Job", job_id, operation, session.id)

    def _forbidden(
        self,
        message: str,
        session: SessionLike,
        operation: str,
        resource_id: str | None = None,
    ) -> ForbiddenError:
        logger.warning(
            f"{operation} forbidden",
            extra={
                "account_id": session.id, "error_code": "FORBIDDEN",
                "operation": operation,
            },
        )
        return ForbiddenError(
            message,
            ErrorContext(
                account_id=session.id, resource_id=resource_id, operation=operation,
            ),
        )

    def _find_job(self, job_id: str) -> Job | None:
        return next((j for j in self._jobs if j.id == job_id), None)

    def _require_job(
        self, job_id: str, operation: str, account_id: str | None = None,
    ) -> Job:
        job = self._find_job(job_id)
        if job is None:
            raise _not_found("Job", job_id, operation, account_id)
        return job

    def _require_application(
        self, application_id: str, operation: str, account_id: str | None = None,
    ) -> tuple[int, Application]:
        for index, application in enumerate(self._applications):
            if application.id == application_id:
                return index, application
        raise _not_found("Application", application_id, operation, account_id)

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise RuntimeError("RecordStore is not open")


def _not_found(
    resource_type: str, resource_id: str, operation: str, account_id: str | None,
) -> ResourceNotFoundError:
    logger.warning(
        f"{operation} rejected: {resource_type} not found",
        extra={
            "account_id": account_id, "error_code": "RESOURCE_NOT_FOUND",
            "operation": operation,
        },
    )
    return ResourceNotFoundError(
        resource_type, resource_id,
        ErrorContext(account_id=account_id, operation=operation),
    )


def _matches(job: Job, needle: str) -> bool:
    return any(
        needle in field.lower()
        for field in (job.title, job.company, job.description, job.location)
    )
