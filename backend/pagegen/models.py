"""Data model for the HTML generator.

GenerationInput is a closed union of three input variants (Figma reference,
uploaded image, free text). Requirements are immutable per call; results
live only in session state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class Framework(str, Enum):
    """Styling framework for the generated page."""

    VANILLA = "vanilla"      # plain HTML/CSS/JS
    TAILWIND = "tailwind"    # utility-css
    BOOTSTRAP = "bootstrap"  # component-css


class InputType(str, Enum):
    FIGMA = "figma"
    IMAGE = "image"
    TEXT = "text"


@dataclass(frozen=True)
class FigmaInput:
    url: str
    description: str = ""

    type = InputType.FIGMA

    def echo(self) -> Dict[str, Any]:
        return {"type": self.type.value, "url": self.url, "description": self.description}


@dataclass(frozen=True)
class ImageInput:
    data: bytes
    mime_type: str
    filename: str = ""
    description: str = ""

    type = InputType.IMAGE

    def echo(self) -> Dict[str, Any]:
        # Raw bytes are never echoed back into result metadata
        return {
            "type": self.type.value,
            "filename": self.filename,
            "mime_type": self.mime_type,
            "size": len(self.data),
            "description": self.description,
        }


@dataclass(frozen=True)
class TextInput:
    description: str
    requirements: List[str] = field(default_factory=list)

    type = InputType.TEXT

    def echo(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "requirements": list(self.requirements),
        }


GenerationInput = Union[FigmaInput, ImageInput, TextInput]


@dataclass(frozen=True)
class GenerationRequirements:
    name: str
    framework: Framework = Framework.VANILLA
    responsive: bool = True
    animations: bool = False
    interactive: bool = False


@dataclass
class GenerationMetadata:
    input_type: InputType
    original_input: Dict[str, Any]
    ai_model: str
    generation_time_ms: int


@dataclass
class GenerationResult:
    """Envelope returned by the generator and held by the session."""

    id: str
    name: str
    html: str
    description: str
    features: List[str]
    created_at: datetime
    metadata: Optional[GenerationMetadata] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "html": self.html,
            "description": self.description,
            "features": list(self.features),
            "created_at": self.created_at.isoformat(),
            "metadata": None,
        }
        if self.metadata is not None:
            data["metadata"] = {
                "input_type": self.metadata.input_type.value,
                "original_input": self.metadata.original_input,
                "ai_model": self.metadata.ai_model,
                "generation_time_ms": self.metadata.generation_time_ms,
            }
        return data


@dataclass(frozen=True)
class GenerationProgress:
    """Coarse progress snapshot: stage is starting|analyzing|generating|complete|error."""

    stage: str
    message: str
    progress: int
