"""Account Routes — public profile lookup (employers viewing applicants)."""

from fastapi import APIRouter, Depends

from hiresphere.api.dependencies import get_identity_store
from hiresphere.schemas.account import AccountProfile
from hiresphere.services.identity_store import IdentityStore

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.get("/{account_id}", response_model=AccountProfile)
async def get_account(
    account_id: str, identity: IdentityStore = Depends(get_identity_store),
):
    return identity.get_account(account_id)
