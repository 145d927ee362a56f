"""Request/response models for the generation and auth endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from pagegen import settings
from pagegen.models import Framework


# --- Generation ---


class RequirementsFields(BaseModel):
    name: str = Field("MyComponent", description="Page/component name")
    framework: Framework = Framework(settings.GENERATION_FRAMEWORK)
    responsive: bool = True
    animations: bool = False
    interactive: bool = False


class ModelOverrides(BaseModel):
    model: Optional[str] = Field(None, description="Model id; settings default when omitted")
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, gt=0)


class GenerateHTMLRequest(RequirementsFields, ModelOverrides):
    """Request for POST /api/v1/generate/html (Figma or text input).

    Image input goes through the multipart endpoint /api/v1/generate/html/image.
    """

    input_type: Literal["figma", "text"]
    url: str = Field("", description="Figma file URL (figma input)")
    description: str = ""
    requirements: List[str] = Field(
        default_factory=list, description="Extra bullet requirements (text input)"
    )


class GenerationMetadataResponse(BaseModel):
    input_type: str
    original_input: Dict[str, Any]
    ai_model: str
    generation_time_ms: int


class GenerationResultResponse(BaseModel):
    id: str
    name: str
    html: str
    description: str
    features: List[str]
    created_at: str
    metadata: Optional[GenerationMetadataResponse] = None


class UpdateHTMLRequest(BaseModel):
    html: str


class ProgressResponse(BaseModel):
    stage: Optional[str] = None
    message: str = ""
    progress: int = 0
    is_generating: bool = False
    error: Optional[str] = None


class ImageGenerationResponse(BaseModel):
    result: str = Field(..., description="data: URI of the image, or the model's text reply")
    is_image: bool


# --- Auth ---


class SigninRequest(BaseModel):
    email: str = ""
    password: str = ""


class SignupRequest(SigninRequest):
    confirm_password: str = ""


class AuthResultResponse(BaseModel):
    success: bool
    message: str
    token: Optional[str] = None


class MeResponse(BaseModel):
    authenticated: bool
    email: Optional[str] = None
