"""Generation runtime settings: tunable parameters for the HTML pipeline.

All values read from environment variables with defaults matching the
generator's built-in configuration. Import from here instead of hardcoding.

Infrastructure config (API base URLs, credentials, server binding) stays
in pagegen/config.py.
"""

from __future__ import annotations

import os


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _str(key: str, default: str) -> str:
    return os.getenv(key, default)


# =====================================================================
# HTML Generator
# =====================================================================

# Model used for both image analysis and code generation
GENERATION_MODEL = _str("GENERATION_MODEL", "gemini-2.0-flash-exp")

# Sampling parameters for the code generation call
GENERATION_TEMPERATURE = _float("GENERATION_TEMPERATURE", 0.7)
GENERATION_MAX_TOKENS = _int("GENERATION_MAX_TOKENS", 4000)

# Framework used when a request does not pick one: "vanilla" | "bootstrap" | "tailwind"
GENERATION_FRAMEWORK = _str("GENERATION_FRAMEWORK", "vanilla")


# =====================================================================
# Image Editor
# =====================================================================

IMAGE_MODEL = _str("IMAGE_MODEL", "gemini-2.0-flash-exp")


# =====================================================================
# Authentication
# =====================================================================

PASSWORD_MIN_LENGTH = _int("PASSWORD_MIN_LENGTH", 6)

# Auth backend HTTP timeout (seconds); 0 disables the timeout
AUTH_HTTP_TIMEOUT = _float("AUTH_HTTP_TIMEOUT", 0.0)


# =====================================================================
# Sessions
# =====================================================================

# Upper bound on in-memory sessions; least recently used are evicted first
MAX_SESSIONS = _int("MAX_SESSIONS", 1000)
