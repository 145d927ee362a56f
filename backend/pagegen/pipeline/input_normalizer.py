"""Turn a GenerationInput into the context string fed to the prompt composer."""

from __future__ import annotations

import base64
import logging
import re
from typing import Optional

from ..integrations.gemini_client import GeminiClient, GeminiResponseError
from ..models import FigmaInput, GenerationInput, ImageInput, TextInput

logger = logging.getLogger("pagegen.generation.input")

_FIGMA_FILE_RE = re.compile(r"figma\.com/(?:file|design)/([a-zA-Z0-9]+)")

IMAGE_ANALYSIS_PROMPT = """\
Analyze this UI/design image and describe the layout, components, and visual \
elements in detail for HTML/CSS recreation. Focus on:
1. Overall layout structure and sections
2. Visual styling (colors, typography, spacing, shadows)
3. Interactive elements (buttons, forms, navigation)
4. Images and media elements
5. Any animations or hover effects visible

Additional context: {description}"""


class UnsupportedInputError(TypeError):
    """Raised for an input that is not one of the three known variants."""


def extract_figma_id(url: str) -> str:
    """Return the file key from a Figma /file/ or /design/ URL, else 'unknown'."""
    match = _FIGMA_FILE_RE.search(url or "")
    return match.group(1) if match else "unknown"


def encode_image(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def analyze_figma_input(item: FigmaInput) -> str:
    figma_id = extract_figma_id(item.url)
    return (
        f"Figma design with ID: {figma_id}. "
        f"Create an HTML page based on this Figma design. {item.description}"
    )


async def analyze_image_input(
    item: ImageInput,
    client: GeminiClient,
    model: Optional[str] = None,
) -> str:
    prompt = IMAGE_ANALYSIS_PROMPT.format(
        description=item.description or "No additional description provided",
    )
    logger.info(
        f"Analyzing image input: {item.filename or '<unnamed>'} "
        f"({item.mime_type}, {len(item.data)} bytes)"
    )
    context = await client.generate_text(
        prompt, image=(encode_image(item.data), item.mime_type), model=model
    )
    if not context.strip():
        raise GeminiResponseError("Image analysis returned no description")
    return context


def analyze_text_input(item: TextInput) -> str:
    requirements = [r for r in item.requirements if r.strip()]
    bullets = "\n- ".join(requirements)
    return f"{item.description}\n\nAdditional requirements:\n- {bullets}"


async def normalize_input(
    item: GenerationInput,
    client: GeminiClient,
    model: Optional[str] = None,
) -> str:
    """Produce the context string for one input.

    Only the image variant touches the network (one analysis call, on
    ``model`` when given, else the client's model).

    Raises:
        UnsupportedInputError: item is not a FigmaInput, ImageInput or TextInput.
        GeminiClientError: the image analysis call failed.
    """
    if isinstance(item, FigmaInput):
        return analyze_figma_input(item)
    if isinstance(item, ImageInput):
        return await analyze_image_input(item, client, model=model)
    if isinstance(item, TextInput):
        return analyze_text_input(item)
    raise UnsupportedInputError(f"Unsupported input type: {type(item).__name__}")
