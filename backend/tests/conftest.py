"""Root conftest for API tests.

Provides:
- FastAPI AsyncClient over ASGITransport (lifespan not run)
- Fresh session registry per test
- Helpers for faking Gemini / auth backend HTTP responses
"""

from __future__ import annotations

from typing import AsyncGenerator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import pagegen_api.sessions as sessions_module


def make_http_response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    """Build a stand-in for an httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data if json_data is not None else {}
    return resp


def gemini_text_response(text: str) -> dict:
    """Sample generateContent response carrying one text part."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def http_response():
    return make_http_response


@pytest.fixture
def gemini_payload():
    return gemini_text_response


@pytest.fixture(autouse=True)
def _reset_sessions():
    """Each test starts with an empty session registry."""
    sessions_module._sessions.clear()
    yield
    sessions_module._sessions.clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI routes."""
    from pagegen_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
