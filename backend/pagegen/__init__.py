"""HTML page generation package.

Subpackages:
- pipeline: Input normalization, prompt composition, post-processing and
  result envelopes for the HTML generator
- integrations: External HTTP clients (Gemini API, auth backend)

Modules:
- auth: Credential validation and the session-scoped auth service
- session: Per-user generation session (current result, progress, auth)
"""
