"""In-memory registry of generation sessions keyed by the X-Session-Id header.

A session is registered by the first request that changes state (generate,
sign in/up, edit). Read-only endpoints never register one; an unknown id
reads as an empty session. A session is removed on logout, when it is the
least recently used one and the registry exceeds settings.MAX_SESSIONS, or
when the process exits. There is no persistence.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, Response

from pagegen import settings
from pagegen.session import GenerationSession

logger = logging.getLogger("pagegen.api.sessions")

SESSION_HEADER = "X-Session-Id"

_sessions: "OrderedDict[str, GenerationSession]" = OrderedDict()


@dataclass
class SessionHandle:
    # None for an unregistered, throwaway session
    session_id: Optional[str]
    session: GenerationSession

    @property
    def registered(self) -> bool:
        return self.session_id is not None


async def get_or_create_session(session_id: Optional[str]) -> SessionHandle:
    if session_id and session_id in _sessions:
        _sessions.move_to_end(session_id)
        return SessionHandle(session_id=session_id, session=_sessions[session_id])

    session_id = session_id or uuid.uuid4().hex
    session = GenerationSession()
    _sessions[session_id] = session
    await _evict_overflow()
    return SessionHandle(session_id=session_id, session=session)


def find_session(session_id: Optional[str]) -> SessionHandle:
    """Look up a session without registering one."""
    if session_id and session_id in _sessions:
        _sessions.move_to_end(session_id)
        return SessionHandle(session_id=session_id, session=_sessions[session_id])
    return SessionHandle(session_id=None, session=GenerationSession())


async def drop_session(session_id: Optional[str]) -> bool:
    """Unregister and close a session. Returns False if it was not registered."""
    session = _sessions.pop(session_id, None) if session_id else None
    if session is None:
        return False
    await session.close()
    return True


async def _evict_overflow() -> None:
    while len(_sessions) > settings.MAX_SESSIONS:
        session_id, session = _sessions.popitem(last=False)
        logger.info(f"Evicting session {session_id} (limit {settings.MAX_SESSIONS})")
        await session.close()


async def get_session_handle(
    response: Response,
    x_session_id: Optional[str] = Header(default=None),
) -> SessionHandle:
    """FastAPI dependency: resolve (or open) the caller's session."""
    handle = await get_or_create_session(x_session_id)
    response.headers[SESSION_HEADER] = handle.session_id
    return handle


async def get_existing_session_handle(
    response: Response,
    x_session_id: Optional[str] = Header(default=None),
) -> SessionHandle:
    """FastAPI dependency for read-only endpoints: never registers a session."""
    handle = find_session(x_session_id)
    if handle.registered:
        response.headers[SESSION_HEADER] = handle.session_id
    return handle


async def close_all_sessions() -> None:
    for session in list(_sessions.values()):
        await session.close()
    _sessions.clear()
