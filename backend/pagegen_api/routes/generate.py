"""HTML generator API endpoints.

Runs the generation pipeline (input analysis → prompt → Gemini → cleanup)
synchronously within the request and keeps the result on the caller's
session for preview, editing and download.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from pagegen import settings
from pagegen.logging_config import get_generation_logger
from pagegen.models import (
    FigmaInput,
    Framework,
    GenerationInput,
    GenerationRequirements,
    ImageInput,
    TextInput,
)
from pagegen.pipeline.generator import GeneratorConfig
from pagegen.session import (
    ERROR_NOT_CONFIGURED,
    ERROR_PROVIDER,
    GenerationOutcome,
    GenerationSession,
)

from ..schemas import (
    GenerateHTMLRequest,
    GenerationResultResponse,
    ProgressResponse,
    UpdateHTMLRequest,
)
from ..sessions import (
    SESSION_HEADER,
    SessionHandle,
    get_existing_session_handle,
    get_session_handle,
)

logger = get_generation_logger()

router = APIRouter(prefix="/api/v1/generate", tags=["generate"])

_ERROR_STATUS = {
    ERROR_NOT_CONFIGURED: 503,
    ERROR_PROVIDER: 502,
}


def _build_config(
    model: Optional[str],
    temperature: Optional[float],
    max_tokens: Optional[int],
) -> GeneratorConfig:
    config = GeneratorConfig()
    if model:
        config = replace(config, model=model)
    if temperature is not None:
        config = replace(config, temperature=temperature)
    if max_tokens is not None:
        config = replace(config, max_tokens=max_tokens)
    return config


def _raise_for_outcome(outcome: GenerationOutcome) -> None:
    if not outcome.ok:
        status = _ERROR_STATUS.get(outcome.error_kind or "", 400)
        raise HTTPException(status_code=status, detail=outcome.error)


def _session_headers(handle: SessionHandle) -> Dict[str, str]:
    return {SESSION_HEADER: handle.session_id} if handle.registered else {}


def content_disposition(filename: str, fallback: str = "download.html") -> str:
    """Attachment header safe for any page name.

    Header values must be latin-1, so the plain ``filename`` carries a
    printable-ASCII copy and ``filename*`` (RFC 5987) carries the real name.
    """
    ascii_name = "".join(
        c for c in filename if " " <= c <= "~" and c not in '"\\'
    )
    if not ascii_name.rsplit(".", 1)[0].strip("-. "):
        ascii_name = fallback
    return (
        f'attachment; filename="{ascii_name}"; '
        f"filename*=UTF-8''{quote(filename, safe='')}"
    )


def _require_result(session: GenerationSession):
    if session.current_result is None:
        raise HTTPException(status_code=404, detail="No generated HTML in this session")
    return session.current_result


def _input_from_request(payload: GenerateHTMLRequest) -> GenerationInput:
    if payload.input_type == "figma":
        return FigmaInput(
            url=payload.url,
            description=payload.description or f"Figma design: {payload.url}",
        )
    return TextInput(description=payload.description, requirements=payload.requirements)


async def _run(
    session: GenerationSession,
    item: GenerationInput,
    requirements: GenerationRequirements,
    config: GeneratorConfig,
) -> GenerationResultResponse:
    outcome = await session.generate_html(item, requirements, config)
    _raise_for_outcome(outcome)
    return GenerationResultResponse(**outcome.result.to_dict())


# --- Endpoints ---


@router.post("/html", response_model=GenerationResultResponse)
async def generate_html(
    payload: GenerateHTMLRequest,
    handle: SessionHandle = Depends(get_session_handle),
):
    """Generate a standalone HTML page from a Figma URL or a text description.

    Usage:
        POST /api/v1/generate/html
        {
            "input_type": "text",
            "description": "A pricing card",
            "requirements": ["two tiers"],
            "name": "Pricing",
            "framework": "tailwind"
        }
    """
    requirements = GenerationRequirements(
        name=payload.name,
        framework=payload.framework,
        responsive=payload.responsive,
        animations=payload.animations,
        interactive=payload.interactive,
    )
    config = _build_config(payload.model, payload.temperature, payload.max_tokens)
    logger.info(
        f"Session {handle.session_id}: generate {payload.input_type} '{payload.name}'"
    )
    return await _run(handle.session, _input_from_request(payload), requirements, config)


@router.post("/html/image", response_model=GenerationResultResponse)
async def generate_html_from_image(
    file: UploadFile = File(...),
    description: str = Form(""),
    name: str = Form("MyComponent"),
    framework: Framework = Form(Framework(settings.GENERATION_FRAMEWORK)),
    responsive: bool = Form(True),
    animations: bool = Form(False),
    interactive: bool = Form(False),
    model: Optional[str] = Form(None),
    temperature: Optional[float] = Form(None),
    max_tokens: Optional[int] = Form(None),
    handle: SessionHandle = Depends(get_session_handle),
):
    """Generate HTML from an uploaded design screenshot (multipart form)."""
    data = await file.read()
    item = ImageInput(
        data=data,
        mime_type=file.content_type or "",
        filename=file.filename or "",
        description=description,
    )
    requirements = GenerationRequirements(
        name=name,
        framework=framework,
        responsive=responsive,
        animations=animations,
        interactive=interactive,
    )
    config = _build_config(model, temperature, max_tokens)
    logger.info(
        f"Session {handle.session_id}: generate image '{name}' "
        f"({item.mime_type}, {len(data)} bytes)"
    )
    return await _run(handle.session, item, requirements, config)


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(handle: SessionHandle = Depends(get_existing_session_handle)):
    """Poll the coarse progress of the session's latest generation."""
    session = handle.session
    progress = session.progress
    return ProgressResponse(
        stage=progress.stage if progress else None,
        message=progress.message if progress else "",
        progress=progress.progress if progress else 0,
        is_generating=session.is_generating,
        error=session.error,
    )


@router.get("/current", response_model=GenerationResultResponse)
async def get_current_result(handle: SessionHandle = Depends(get_existing_session_handle)):
    result = _require_result(handle.session)
    return GenerationResultResponse(**result.to_dict())


@router.put("/current/html", response_model=GenerationResultResponse)
async def update_current_html(
    payload: UpdateHTMLRequest,
    handle: SessionHandle = Depends(get_existing_session_handle),
):
    """Save editor changes into the current result."""
    _require_result(handle.session)
    result = handle.session.update_html(payload.html)
    return GenerationResultResponse(**result.to_dict())


@router.get("/current/download")
async def download_current_html(handle: SessionHandle = Depends(get_existing_session_handle)):
    """Download the current (possibly edited) HTML as a file."""
    result = _require_result(handle.session)
    filename = handle.session.download_filename()
    return Response(
        content=result.html,
        media_type="text/html",
        headers={
            "Content-Disposition": content_disposition(filename),
            **_session_headers(handle),
        },
    )


@router.delete("/current", status_code=204)
async def reset_generator(handle: SessionHandle = Depends(get_existing_session_handle)):
    """Clear the current result, progress and error."""
    handle.session.reset()
    return Response(status_code=204, headers=_session_headers(handle))
