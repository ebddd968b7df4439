"""Job Routes — board listing, employer job management, and applying.

Invariants:
    - /mine declared before /{job_id} so it is not captured as an id
    - Every write delegates authorization to RecordStore; routes check nothing
    - Handlers are async def so store calls run one at a time on the event loop thread
      (blocking it briefly); a plain def handler would run in the threadpool and could
      interleave with another request inside a store operation
"""

from fastapi import APIRouter, Depends, Query, status

from hiresphere.api.dependencies import get_record_store
from hiresphere.core.domain_types import ApplicationStatus, JobType
from hiresphere.schemas.application import Application, ApplicationSubmission
from hiresphere.schemas.job import Job, JobCreate, JobUpdate
from hiresphere.services.record_store import RecordStore

router = APIRouter(prefix="/api/v1/jobs", tags=["jobs"])


@router.get("", response_model=list[Job])
async def list_jobs(
    q: str | None = Query(None, max_length=200),
    job_type: JobType | None = Query(None, alias="type"),
    include_inactive: bool = Query(False),
    records: RecordStore = Depends(get_record_store),
):
    """Search the board. Inactive listings hidden unless include_inactive."""
    return records.list_jobs(q, job_type, include_inactive)


@router.get("/mine", response_model=list[Job])
async def my_jobs(records: RecordStore = Depends(get_record_store)):
    return records.jobs_for_current_user()


@router.post("", response_model=Job, status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreate, records: RecordStore = Depends(get_record_store),
):
    return records.create_job(body)


@router.get("/{job_id}", response_model=Job)
async def get_job(job_id: str, records: RecordStore = Depends(get_record_store)):
    return records.get_job(job_id)


@router.patch("/{job_id}", response_model=Job)
async def update_job(
    job_id: str, body: JobUpdate, records: RecordStore = Depends(get_record_store),
):
    return records.update_job(job_id, body)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(job_id: str, records: RecordStore = Depends(get_record_store)):
    """Delete the listing and every application submitted to it."""
    records.delete_job(job_id)


@router.get("/{job_id}/applications", response_model=list[Application])
async def job_applications(
    job_id: str,
    status_filter: ApplicationStatus | None = Query(None, alias="status"),
    records: RecordStore = Depends(get_record_store),
):
    return records.applications_for_job(job_id, status_filter)


@router.get("/{job_id}/applications/summary")
async def job_application_summary(
    job_id: str, records: RecordStore = Depends(get_record_store),
):
    counts = records.status_counts_for_job(job_id)
    return {
        "job_id": job_id,
        "total": sum(counts.values()),
        "by_status": {s.value: n for s, n in counts.items()},
    }


@router.post(
    "/{job_id}/applications", response_model=Application,
    status_code=status.HTTP_201_CREATED,
)
async def apply_for_job(
    job_id: str,
    body: ApplicationSubmission,
    records: RecordStore = Depends(get_record_store),
):
    return records.apply_for_job(job_id, body)
