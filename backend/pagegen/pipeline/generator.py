"""HTMLGenerator: runs one generation end to end.

Flow: credential check → normalize input (10%) → compose prompt and call the
model (40%) → clean output, tag features, build envelope (100%).

Progress milestones are fixed; they are not derived from the provider.
One call at a time is expected per caller. Nothing here guards against
overlapping invocations and there is no cancellation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .. import settings
from ..integrations.gemini_client import GeminiClient
from ..models import (
    GenerationInput,
    GenerationProgress,
    GenerationRequirements,
    GenerationResult,
)
from .envelope import build_result
from .input_normalizer import normalize_input
from .postprocess import clean_generated_html, extract_features
from .prompts import build_generation_prompt

logger = logging.getLogger("pagegen.generation.generator")

ProgressCallback = Callable[[GenerationProgress], None]


@dataclass
class GeneratorConfig:
    model: str = settings.GENERATION_MODEL
    temperature: float = settings.GENERATION_TEMPERATURE
    max_tokens: int = settings.GENERATION_MAX_TOKENS
    on_progress: Optional[ProgressCallback] = None


class HTMLGenerator:
    """Generate a standalone HTML page from a Figma URL, an image or a text brief.

    Args:
        config: Model, sampling parameters and progress observer.
        client: Pre-built GeminiClient. When omitted one is created per call,
            which raises GeminiNotConfiguredError if no API key is set.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        client: Optional[GeminiClient] = None,
    ):
        self.config = config or GeneratorConfig()
        self._client = client

    def _update_progress(self, stage: str, message: str, progress: int) -> None:
        if self.config.on_progress is not None:
            self.config.on_progress(GenerationProgress(stage, message, progress))

    async def generate_html(
        self,
        item: GenerationInput,
        requirements: GenerationRequirements,
    ) -> GenerationResult:
        """Run the pipeline for one input.

        Raises:
            GeminiNotConfiguredError: no API key (before any network call).
            GeminiClientError: analysis or generation call failed.
            UnsupportedInputError: unknown input variant.
        """
        owns_client = self._client is None
        client = self._client or GeminiClient(model=self.config.model)

        start = time.monotonic()
        try:
            self._update_progress("analyzing", "Analyzing input...", 10)
            context = await normalize_input(item, client, model=self.config.model)

            self._update_progress("generating", "Generating HTML code...", 40)
            html = await self._generate_code(client, context, requirements)

            self._update_progress("complete", "HTML generated successfully!", 100)
        except Exception as e:
            self._update_progress("error", f"Error: {e}", 0)
            logger.error(f"Generation failed for '{requirements.name}': {e}")
            raise
        finally:
            if owns_client:
                await client.close()

        generation_time_ms = int((time.monotonic() - start) * 1000)
        result = build_result(
            item=item,
            requirements=requirements,
            html=html,
            features=extract_features(html, requirements),
            model=self.config.model,
            generation_time_ms=generation_time_ms,
        )
        logger.info(
            f"Generated '{result.name}' ({result.id}) from {item.type.value} input "
            f"in {generation_time_ms}ms, {len(html)} chars, features={result.features}"
        )
        return result

    async def _generate_code(
        self,
        client: GeminiClient,
        context: str,
        requirements: GenerationRequirements,
    ) -> str:
        prompt = build_generation_prompt(context, requirements)
        raw = await client.generate_text(
            prompt,
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens,
            model=self.config.model,
        )
        return clean_generated_html(raw)
