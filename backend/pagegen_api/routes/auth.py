"""Authentication endpoints: thin layer over the session's AuthService.

Form validation (required fields, password confirmation, minimum length)
happens before the auth backend is contacted.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from pagegen.auth import AuthResult
from pagegen.logging_config import get_auth_logger

from ..schemas import AuthResultResponse, MeResponse, SigninRequest, SignupRequest
from ..sessions import (
    SessionHandle,
    drop_session,
    get_existing_session_handle,
    get_session_handle,
)

logger = get_auth_logger()

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _to_response(result: AuthResult, rejected_status: int) -> AuthResultResponse:
    if not result.success:
        status = {"validation": 400, "network": 502}.get(result.error_kind, rejected_status)
        raise HTTPException(status_code=status, detail=result.message)
    return AuthResultResponse(success=True, message=result.message, token=result.token)


@router.post("/signin", response_model=AuthResultResponse)
async def signin(
    payload: SigninRequest,
    handle: SessionHandle = Depends(get_session_handle),
):
    result = await handle.session.auth.signin(payload.email, payload.password)
    logger.info(f"Session {handle.session_id}: signin success={result.success}")
    return _to_response(result, rejected_status=401)


@router.post("/signup", response_model=AuthResultResponse)
async def signup(
    payload: SignupRequest,
    handle: SessionHandle = Depends(get_session_handle),
):
    result = await handle.session.auth.signup(
        payload.email, payload.password, payload.confirm_password
    )
    logger.info(f"Session {handle.session_id}: signup success={result.success}")
    return _to_response(result, rejected_status=400)


@router.post("/logout", response_model=MeResponse)
async def logout(handle: SessionHandle = Depends(get_existing_session_handle)):
    """Clear the token and drop the session with its result and clients."""
    handle.session.auth.logout()
    if await drop_session(handle.session_id):
        logger.info(f"Session {handle.session_id}: logged out, session closed")
    return MeResponse(authenticated=False)


@router.get("/me", response_model=MeResponse)
async def me(handle: SessionHandle = Depends(get_existing_session_handle)):
    """Dashboard identity: who is signed in on this session."""
    auth = handle.session.auth
    return MeResponse(authenticated=auth.is_authenticated, email=auth.user_email)
