"""Post-processing for raw model output: fence stripping, doctype repair, feature tags.

Pure functions, no I/O.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from ..models import GenerationRequirements

DOCTYPE = "<!DOCTYPE html>"

_HTML_FENCE_RE = re.compile(r"```html\n?")

# (tag, substrings): a tag applies when any substring occurs in the document.
# Checked in this order; order of the returned list follows it.
FEATURE_CHECKS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Navigation", ("<nav", "navigation")),
    ("Forms", ("<form", "input")),
    ("Interactive Elements", ("<button", "onclick")),
    ("Responsive Design", ("@media", "responsive")),
    ("Animations", ("animation", "transition")),
    ("Images", ("<img", "background-image")),
    ("Modern Layout", ("grid", "flexbox", "flex")),
    ("JavaScript Functionality", ("addEventListener", "function")),
)


def clean_generated_html(raw: str) -> str:
    """Strip markdown fences and make sure an <html> document has a doctype.

    Output that neither starts with a doctype nor with ``<html`` is returned
    as-is after fence stripping and trimming.
    """
    text = _HTML_FENCE_RE.sub("", raw or "").replace("```", "").strip()

    lowered = text.lower()
    if not lowered.startswith(DOCTYPE.lower()) and lowered.startswith("<html"):
        text = f"{DOCTYPE}\n{text}"
    return text


def extract_features(html: str, requirements: GenerationRequirements) -> List[str]:
    """Keyword-based feature tags, deduplicated in first-seen order."""
    features: List[str] = []
    for tag, needles in FEATURE_CHECKS:
        if any(needle in html for needle in needles):
            features.append(tag)

    if requirements.responsive:
        features.append("Mobile Responsive")
    if requirements.animations:
        features.append("CSS Animations")
    if requirements.interactive:
        features.append("User Interactions")

    return list(dict.fromkeys(features))
