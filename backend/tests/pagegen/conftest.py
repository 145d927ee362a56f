"""Conftest for pipeline tests.

Fake Gemini client recording every call, so pipeline code runs without HTTP.
"""

from __future__ import annotations

from typing import List, Optional
from unittest.mock import AsyncMock

import pytest

from pagegen.integrations.gemini_client import GeminiClient


class FakeGeminiClient(GeminiClient):
    """GeminiClient whose generate_text/generate_image return canned replies."""

    def __init__(self, replies: Optional[List[str]] = None, model: str = "test-model"):
        super().__init__(api_key="test-key", model=model)
        self.generate_text = AsyncMock(side_effect=list(replies or []))
        self.generate_image = AsyncMock(return_value="data:image/png;base64,AAAA")


@pytest.fixture
def fake_gemini():
    return FakeGeminiClient
