"""External service clients: Gemini API and the authentication backend."""
