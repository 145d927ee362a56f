"""Per-user generation session.

Holds the state a single-page UI would keep per user: the current
result, the last progress snapshot, the last error, the generated image and
the auth token. Every pipeline failure is caught here once and turned into a
display message; the previous result survives a failed run.

Overlapping generate calls are not serialized. Whichever finishes last
overwrites current_result.
"""

from __future__ import annotations

import base64
import logging
import re
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from . import settings
from .auth import AuthService
from .integrations.gemini_client import (
    GeminiClient,
    GeminiClientError,
    GeminiNotConfiguredError,
)
from .models import (
    FigmaInput,
    GenerationInput,
    GenerationProgress,
    GenerationRequirements,
    GenerationResult,
    ImageInput,
    TextInput,
)
from .pipeline.generator import GeneratorConfig, HTMLGenerator
from .pipeline.input_normalizer import UnsupportedInputError, encode_image

logger = logging.getLogger("pagegen.generation.session")

# Error kinds surfaced to callers alongside the display message
ERROR_VALIDATION = "validation"
ERROR_NOT_CONFIGURED = "not_configured"
ERROR_PROVIDER = "provider"

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[^;]+);base64,(?P<data>.*)$", re.DOTALL)


@dataclass
class GenerationOutcome:
    result: Optional[GenerationResult] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_generation_input(
    item: GenerationInput,
    requirements: GenerationRequirements,
) -> Optional[str]:
    """Inline checks the form performed before starting a generation."""
    if not requirements.name or not requirements.name.strip():
        return "Please enter a component name"
    if isinstance(item, FigmaInput) and not item.url.strip():
        return "Please enter a Figma URL"
    if isinstance(item, ImageInput):
        if not item.data:
            return "Please select an image"
        if not item.mime_type.startswith("image/"):
            return "Please select a valid image file"
    if isinstance(item, TextInput) and not item.description.strip():
        return "Please enter a description"
    return None


def download_filename(name: str) -> str:
    """'My Landing Page' -> 'my-landing-page.html'."""
    return re.sub(r"\s+", "-", name).lower() + ".html"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Split a base64 data URI into (mime_type, bytes)."""
    match = _DATA_URI_RE.match(uri)
    if not match:
        raise ValueError("Not a base64 data URI")
    return match.group("mime"), base64.b64decode(match.group("data"))


class GenerationSession:
    """State and actions for one user of the generator.

    Args:
        auth: Auth service; a fresh one is created when omitted.
        client: GeminiClient shared by generations in this session. When
            omitted each run builds its own, so a missing key surfaces per run.
    """

    def __init__(
        self,
        auth: Optional[AuthService] = None,
        client: Optional[GeminiClient] = None,
    ):
        self.auth = auth or AuthService()
        self._client = client
        self.current_result: Optional[GenerationResult] = None
        self.progress: Optional[GenerationProgress] = None
        self.error: Optional[str] = None
        self.is_generating = False
        self.has_changes = False
        self._generated_html: Optional[str] = None
        self.generated_image: Optional[str] = None

    def _on_progress(self, progress: GenerationProgress) -> None:
        self.progress = progress

    async def generate_html(
        self,
        item: GenerationInput,
        requirements: GenerationRequirements,
        config: Optional[GeneratorConfig] = None,
    ) -> GenerationOutcome:
        error = validate_generation_input(item, requirements)
        if error:
            self.error = error
            return GenerationOutcome(error=error, error_kind=ERROR_VALIDATION)

        config = replace(config or GeneratorConfig(), on_progress=self._on_progress)
        generator = HTMLGenerator(config, client=self._client)

        self.is_generating = True
        self.error = None
        self.progress = GenerationProgress("starting", "Starting HTML generation...", 0)
        try:
            result = await generator.generate_html(item, requirements)
        except GeminiNotConfiguredError as e:
            return self._fail(str(e), ERROR_NOT_CONFIGURED)
        except UnsupportedInputError as e:
            return self._fail(str(e), ERROR_VALIDATION)
        except GeminiClientError as e:
            return self._fail(str(e), ERROR_PROVIDER)
        finally:
            self.is_generating = False

        self.current_result = result
        self._generated_html = result.html
        self.has_changes = False
        return GenerationOutcome(result=result)

    def _fail(self, message: str, kind: str) -> GenerationOutcome:
        self.error = message
        logger.warning(f"Generation aborted ({kind}): {message}")
        return GenerationOutcome(error=message, error_kind=kind)

    def update_html(self, html: str) -> GenerationResult:
        """Save edited markup into the current result.

        Raises:
            LookupError: nothing has been generated yet.
        """
        if self.current_result is None:
            raise LookupError("No generated HTML to update")
        self.has_changes = html != self._generated_html
        self.current_result.html = html
        return self.current_result

    def download_filename(self) -> str:
        if self.current_result is None:
            raise LookupError("No generated HTML to download")
        return download_filename(self.current_result.name)

    async def generate_image(
        self,
        prompt: str,
        reference: Optional[Tuple[bytes, str]] = None,
    ) -> GenerationOutcome:
        """Image editor: prompt (+ optional reference image) → data URI or text."""
        if not prompt or not prompt.strip():
            return GenerationOutcome(error="Please enter a prompt", error_kind=ERROR_VALIDATION)

        try:
            client = self._client or GeminiClient(model=settings.IMAGE_MODEL)
        except GeminiNotConfiguredError as e:
            return self._fail(str(e), ERROR_NOT_CONFIGURED)

        reference_image = None
        if reference is not None:
            data, mime_type = reference
            reference_image = (encode_image(data), mime_type)

        self.is_generating = True
        try:
            image = await client.generate_image(
                prompt, reference_image=reference_image, model=settings.IMAGE_MODEL
            )
        except GeminiClientError as e:
            return self._fail(f"Error generating image: {e}", ERROR_PROVIDER)
        finally:
            self.is_generating = False
            if self._client is None:
                await client.close()

        self.generated_image = image
        return GenerationOutcome()

    def reset(self) -> None:
        self.current_result = None
        self._generated_html = None
        self.progress = None
        self.error = None
        self.has_changes = False

    async def close(self) -> None:
        await self.auth.close()
        if self._client is not None:
            await self._client.close()
