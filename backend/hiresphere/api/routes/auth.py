"""Auth Routes — registration, login/logout, session, and profile updates.

Invariants:
    - Responses carry AccountProfile only; password hashes never serialized
    - Session is process-wide: this shell serves one browser profile
    - async def handlers only: IdentityStore is not thread-safe, see api/routes/__init__.py
"""

from fastapi import APIRouter, Depends, status

from hiresphere.api.dependencies import get_identity_store
from hiresphere.schemas.account import (
    AccountProfile, LoginRequest, ProfileUpdate, RegisterRequest,
)
from hiresphere.services.identity_store import IdentityStore

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=AccountProfile,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, identity: IdentityStore = Depends(get_identity_store),
):
    """Create an account and start its session."""
    return identity.register(body.model_dump(exclude={"password"}), body.password)


@router.post("/login", response_model=AccountProfile)
async def login(
    body: LoginRequest, identity: IdentityStore = Depends(get_identity_store),
):
    return identity.login(body.email, body.password)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(identity: IdentityStore = Depends(get_identity_store)):
    identity.logout()


@router.get("/session")
async def current_session(identity: IdentityStore = Depends(get_identity_store)):
    """Current account or null — the UI decides redirects from this."""
    session = identity.current_session()
    return {"account": session.model_dump(mode="json") if session else None}


@router.patch("/profile", response_model=AccountProfile)
async def update_profile(
    body: ProfileUpdate, identity: IdentityStore = Depends(get_identity_store),
):
    return identity.update_profile(body)
