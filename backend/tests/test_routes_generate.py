"""Tests for HTML generator API routes (pagegen_api/routes/generate.py).

Covers:
- POST /api/v1/generate/html (figma + text input)
- POST /api/v1/generate/html/image (multipart upload)
- GET /api/v1/generate/progress
- GET/PUT/DELETE /api/v1/generate/current, GET .../download
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

import pagegen_api.sessions as sessions_module
from pagegen import settings
from pagegen.integrations.gemini_client import GeminiClient, GeminiClientError

TEXT_PAYLOAD = {
    "input_type": "text",
    "description": "A pricing card",
    "requirements": ["two tiers"],
    "name": "Pricing Card",
    "framework": "vanilla",
    "responsive": True,
}

GENERATED = "```html\n<html><body><nav>Menu</nav></body></html>\n```"


def _patch_gemini(*replies):
    """Patch GeminiClient.generate_text and provide an API key."""
    mock = AsyncMock(side_effect=list(replies))
    return (
        patch("pagegen.config.GOOGLE_API_KEY", "fake-key"),
        patch.object(GeminiClient, "generate_text", mock),
        mock,
    )


async def _generate(client: AsyncClient, payload=None, session_id="s1"):
    key_patch, gen_patch, mock = _patch_gemini(GENERATED)
    with key_patch, gen_patch:
        resp = await client.post(
            "/api/v1/generate/html",
            json=payload or TEXT_PAYLOAD,
            headers={"X-Session-Id": session_id},
        )
    return resp, mock


class TestGenerateHtml:

    @pytest.mark.asyncio
    async def test_text_generation(self, client: AsyncClient):
        resp, mock = await _generate(client)
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["html"] == "<!DOCTYPE html>\n<html><body><nav>Menu</nav></body></html>"
        assert data["name"] == "Pricing Card"
        assert data["features"] == ["Navigation", "Mobile Responsive"]
        assert data["metadata"]["input_type"] == "text"
        assert data["metadata"]["original_input"]["requirements"] == ["two tiers"]
        assert resp.headers["X-Session-Id"] == "s1"

        prompt = mock.call_args.args[0]
        assert "Responsive design: true" in prompt
        assert "- two tiers" in prompt

    @pytest.mark.asyncio
    async def test_figma_generation_defaults_description(self, client: AsyncClient):
        resp, mock = await _generate(client, {
            "input_type": "figma",
            "url": "https://www.figma.com/file/AbC123/Site",
            "name": "Site",
        })
        assert resp.status_code == 200, resp.text
        assert resp.json()["description"] == (
            "Figma design: https://www.figma.com/file/AbC123/Site"
        )
        assert "Figma design with ID: AbC123." in mock.call_args.args[0]

    @pytest.mark.asyncio
    async def test_model_overrides_forwarded(self, client: AsyncClient):
        resp, mock = await _generate(client, {
            **TEXT_PAYLOAD, "model": "gemini-alt", "temperature": 0.1, "max_tokens": 512,
        })
        assert resp.status_code == 200
        assert resp.json()["metadata"]["ai_model"] == "gemini-alt"
        assert mock.call_args.kwargs == {
            "temperature": 0.1, "max_output_tokens": 512, "model": "gemini-alt",
        }

    @pytest.mark.asyncio
    async def test_framework_defaults_to_setting(self, client: AsyncClient):
        payload = {k: v for k, v in TEXT_PAYLOAD.items() if k != "framework"}
        resp, mock = await _generate(client, payload)
        assert resp.status_code == 200
        assert f"- Framework: {settings.GENERATION_FRAMEWORK}" in mock.call_args.args[0]

    @pytest.mark.asyncio
    async def test_session_header_issued_when_missing(self, client: AsyncClient):
        key_patch, gen_patch, _ = _patch_gemini(GENERATED)
        with key_patch, gen_patch:
            resp = await client.post("/api/v1/generate/html", json=TEXT_PAYLOAD)
        assert resp.status_code == 200
        assert len(resp.headers["X-Session-Id"]) == 32

    @pytest.mark.asyncio
    async def test_validation_error_400(self, client: AsyncClient):
        resp = await client.post("/api/v1/generate/html", json={
            "input_type": "figma", "url": "  ", "name": "X",
        })
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Please enter a Figma URL"

    @pytest.mark.asyncio
    async def test_unknown_input_type_422(self, client: AsyncClient):
        resp = await client.post("/api/v1/generate/html", json={
            "input_type": "video", "description": "x",
        })
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_not_configured_503(self, client: AsyncClient):
        with patch("pagegen.config.GOOGLE_API_KEY", ""):
            resp = await client.post("/api/v1/generate/html", json=TEXT_PAYLOAD)
        assert resp.status_code == 503
        assert "not configured" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_provider_error_502(self, client: AsyncClient):
        with patch("pagegen.config.GOOGLE_API_KEY", "fake-key"):
            with patch.object(
                GeminiClient, "generate_text",
                AsyncMock(side_effect=GeminiClientError("API error: 500 boom")),
            ):
                resp = await client.post("/api/v1/generate/html", json=TEXT_PAYLOAD)
        assert resp.status_code == 502
        assert resp.json()["detail"] == "API error: 500 boom"

    @pytest.mark.asyncio
    async def test_malformed_provider_body_502(self, client: AsyncClient, http_response):
        http = AsyncMock()
        http.post = AsyncMock(return_value=http_response(200, ["not", "an", "object"]))
        headers = {"X-Session-Id": "s1"}
        with patch("pagegen.config.GOOGLE_API_KEY", "fake-key"):
            with patch.object(GeminiClient, "_get_client", AsyncMock(return_value=http)):
                resp = await client.post(
                    "/api/v1/generate/html", json=TEXT_PAYLOAD, headers=headers,
                )
        assert resp.status_code == 502
        assert "unexpected JSON" in resp.json()["detail"]

        progress = (await client.get("/api/v1/generate/progress", headers=headers)).json()
        assert progress["stage"] == "error"
        assert progress["is_generating"] is False


class TestGenerateFromImage:

    @pytest.mark.asyncio
    async def test_multipart_upload(self, client: AsyncClient):
        key_patch, gen_patch, mock = _patch_gemini("A hero banner", "<html></html>")
        with key_patch, gen_patch:
            resp = await client.post(
                "/api/v1/generate/html/image",
                files={"file": ("shot.png", b"\x89PNG", "image/png")},
                data={"name": "Hero", "framework": "tailwind", "animations": "true"},
            )
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["metadata"]["input_type"] == "image"
        assert data["metadata"]["original_input"]["filename"] == "shot.png"
        assert data["metadata"]["original_input"]["size"] == 4
        assert "CSS Animations" in data["features"]
        assert mock.await_count == 2
        assert "- Framework: tailwind" in mock.call_args_list[1].args[0]

    @pytest.mark.asyncio
    async def test_rejects_non_image(self, client: AsyncClient):
        resp = await client.post(
            "/api/v1/generate/html/image",
            files={"file": ("doc.pdf", b"%PDF", "application/pdf")},
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Please select a valid image file"


class TestCurrentResult:

    @pytest.mark.asyncio
    async def test_current_404_before_generation(self, client: AsyncClient):
        resp = await client.get("/api/v1/generate/current", headers={"X-Session-Id": "empty"})
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_get_edit_download_reset(self, client: AsyncClient):
        headers = {"X-Session-Id": "s1"}
        await _generate(client)

        resp = await client.get("/api/v1/generate/current", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["name"] == "Pricing Card"

        resp = await client.put(
            "/api/v1/generate/current/html", json={"html": "<p>edited</p>"}, headers=headers,
        )
        assert resp.json()["html"] == "<p>edited</p>"

        resp = await client.get("/api/v1/generate/current/download", headers=headers)
        assert resp.status_code == 200
        assert resp.text == "<p>edited</p>"
        assert resp.headers["content-type"].startswith("text/html")
        assert 'filename="pricing-card.html"' in resp.headers["content-disposition"]

        resp = await client.delete("/api/v1/generate/current", headers=headers)
        assert resp.status_code == 204
        resp = await client.get("/api/v1/generate/current", headers=headers)
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self, client: AsyncClient):
        await _generate(client, session_id="alice")
        resp = await client.get("/api/v1/generate/current", headers={"X-Session-Id": "bob"})
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_download_non_ascii_name(self, client: AsyncClient):
        headers = {"X-Session-Id": "s1"}
        resp, _ = await _generate(client, {**TEXT_PAYLOAD, "name": "页面 \"Home\""})
        assert resp.status_code == 200

        resp = await client.get("/api/v1/generate/current/download", headers=headers)
        assert resp.status_code == 200
        disposition = resp.headers["content-disposition"]
        assert 'filename="-home.html"' in disposition
        assert "filename*=UTF-8''%E9%A1%B5%E9%9D%A2-%22home%22.html" in disposition

    @pytest.mark.asyncio
    async def test_download_name_without_ascii_letters(self, client: AsyncClient):
        await _generate(client, {**TEXT_PAYLOAD, "name": "页面"})
        resp = await client.get(
            "/api/v1/generate/current/download", headers={"X-Session-Id": "s1"},
        )
        assert resp.status_code == 200
        assert 'filename="download.html"' in resp.headers["content-disposition"]
        assert "filename*=UTF-8''%E9%A1%B5%E9%9D%A2.html" in resp.headers["content-disposition"]

    @pytest.mark.asyncio
    async def test_reads_do_not_register_sessions(self, client: AsyncClient):
        for _ in range(5):
            await client.get("/api/v1/generate/progress")
        await client.get("/api/v1/generate/current", headers={"X-Session-Id": "ghost"})
        resp = await client.delete("/api/v1/generate/current", headers={"X-Session-Id": "ghost"})

        assert resp.status_code == 204
        assert "x-session-id" not in resp.headers
        assert len(sessions_module._sessions) == 0


class TestProgress:

    @pytest.mark.asyncio
    async def test_idle_progress(self, client: AsyncClient):
        resp = await client.get("/api/v1/generate/progress")
        assert resp.json() == {
            "stage": None, "message": "", "progress": 0,
            "is_generating": False, "error": None,
        }

    @pytest.mark.asyncio
    async def test_progress_after_failure(self, client: AsyncClient):
        headers = {"X-Session-Id": "s1"}
        with patch("pagegen.config.GOOGLE_API_KEY", "fake-key"):
            with patch.object(
                GeminiClient, "generate_text",
                AsyncMock(side_effect=GeminiClientError("API error: 500")),
            ):
                await client.post("/api/v1/generate/html", json=TEXT_PAYLOAD, headers=headers)

        data = (await client.get("/api/v1/generate/progress", headers=headers)).json()
        assert data["stage"] == "error"
        assert data["message"] == "Error: API error: 500"
        assert data["error"] == "API error: 500"
        assert data["is_generating"] is False

    @pytest.mark.asyncio
    async def test_progress_after_success(self, client: AsyncClient):
        await _generate(client)
        data = (await client.get(
            "/api/v1/generate/progress", headers={"X-Session-Id": "s1"},
        )).json()
        assert data["stage"] == "complete"
        assert data["progress"] == 100


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}
