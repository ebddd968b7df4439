"""Application Routes — a jobseeker's own applications and employer status changes.

async def handlers keep RecordStore calls serialized on the event loop thread.
"""

from fastapi import APIRouter, Depends

from hiresphere.api.dependencies import get_record_store
from hiresphere.schemas.application import Application, StatusUpdate
from hiresphere.services.record_store import RecordStore

router = APIRouter(prefix="/api/v1/applications", tags=["applications"])


@router.get("/mine", response_model=list[Application])
async def my_applications(records: RecordStore = Depends(get_record_store)):
    return records.applications_for_current_user()


@router.get("/{application_id}", response_model=Application)
async def get_application(
    application_id: str, records: RecordStore = Depends(get_record_store),
):
    return records.get_application(application_id)


@router.patch("/{application_id}/status", response_model=Application)
async def update_status(
    application_id: str,
    body: StatusUpdate,
    records: RecordStore = Depends(get_record_store),
):
    """Employer-only: the owner of the application's job."""
    return records.update_application_status(application_id, body.status)
