"""
fruitlink.insights — collaborator client and AI-generated insight text.

Modules:
  client   — httpx client for the backend proxy (text model + certifications).
  prompts  — Prompt templates for explanations, compliance and BI insight.
  services — Fallback-safe wrappers: never raise, always return display text.
  tracker  — Generation tokens so a stale reply never overwrites a newer one.

Endpoint placement (config/default.toml [api]):
  base_url          — backend proxy host (default http://localhost:3001)
  timeout_seconds   — per-request timeout
"""
