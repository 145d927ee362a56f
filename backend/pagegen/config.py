"""Service configuration constants: single source of truth for all env vars."""

import os

from dotenv import load_dotenv

load_dotenv()

# Server binding: used by entrypoint / uvicorn
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Authentication backend (external REST service exposing /api/signin, /api/signup)
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")

# Storage key the auth token is kept under in a session's token store
AUTH_TOKEN_KEY = os.getenv("AUTH_TOKEN_KEY", "token")

# Google Generative Language API: key for Gemini generateContent calls
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
GEMINI_API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com"
)
