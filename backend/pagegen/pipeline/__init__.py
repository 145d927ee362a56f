"""HTML generation pipeline.

input_normalizer → prompts → GeminiClient → postprocess → envelope,
orchestrated by HTMLGenerator.
"""

from .generator import GeneratorConfig, HTMLGenerator
from .input_normalizer import UnsupportedInputError, normalize_input

__all__ = [
    "GeneratorConfig",
    "HTMLGenerator",
    "UnsupportedInputError",
    "normalize_input",
]
