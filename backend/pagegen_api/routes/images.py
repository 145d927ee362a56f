"""Image editor endpoints: prompt (+ optional reference image) → generated image."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from pagegen.session import ERROR_NOT_CONFIGURED, ERROR_PROVIDER, decode_data_uri

from ..schemas import ImageGenerationResponse
from ..sessions import (
    SESSION_HEADER,
    SessionHandle,
    get_existing_session_handle,
    get_session_handle,
)

logger = logging.getLogger("pagegen.api.images")

router = APIRouter(prefix="/api/v1/images", tags=["images"])

DOWNLOAD_FILENAME = "generated-image.png"


@router.post("/generate", response_model=ImageGenerationResponse)
async def generate_image(
    prompt: str = Form(""),
    reference: Optional[UploadFile] = File(None),
    handle: SessionHandle = Depends(get_session_handle),
):
    """Generate (or edit, with a reference upload) an image from a prompt.

    The provider may answer with text only; that text is returned as-is with
    is_image=false.
    """
    ref = None
    if reference is not None:
        ref = (await reference.read(), reference.content_type or "image/png")

    logger.info(
        f"Session {handle.session_id}: image prompt ({len(prompt)} chars), "
        f"reference={'yes' if ref else 'no'}"
    )
    outcome = await handle.session.generate_image(prompt, reference=ref)
    if not outcome.ok:
        status = {ERROR_NOT_CONFIGURED: 503, ERROR_PROVIDER: 502}.get(
            outcome.error_kind or "", 400
        )
        raise HTTPException(status_code=status, detail=outcome.error)

    result = handle.session.generated_image or ""
    return ImageGenerationResponse(result=result, is_image=result.startswith("data:"))


@router.get("/current")
async def download_current_image(
    handle: SessionHandle = Depends(get_existing_session_handle),
):
    """Download the session's generated image as a binary attachment."""
    image = handle.session.generated_image
    if not image or not image.startswith("data:"):
        raise HTTPException(status_code=404, detail="No generated image in this session")

    try:
        mime_type, data = decode_data_uri(image)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        content=data,
        media_type=mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"',
            SESSION_HEADER: handle.session_id,
        },
    )
