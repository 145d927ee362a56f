"""Result envelope assembly."""

from __future__ import annotations

import random
import string
import time
from datetime import datetime, timezone
from typing import List

from ..models import (
    GenerationInput,
    GenerationMetadata,
    GenerationResult,
    GenerationRequirements,
)

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_result_id() -> str:
    """Millisecond timestamp plus a random suffix, both base36.

    Not collision-proof: two ids minted in the same millisecond only differ
    by the random part.
    """
    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36, k=11))
    return timestamp + suffix


def build_result(
    *,
    item: GenerationInput,
    requirements: GenerationRequirements,
    html: str,
    features: List[str],
    model: str,
    generation_time_ms: int,
) -> GenerationResult:
    return GenerationResult(
        id=generate_result_id(),
        name=requirements.name,
        html=html,
        description=item.description,
        features=features,
        created_at=datetime.now(timezone.utc),
        metadata=GenerationMetadata(
            input_type=item.type,
            original_input=item.echo(),
            ai_model=model,
            generation_time_ms=generation_time_ms,
        ),
    )
