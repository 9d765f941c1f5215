"""
fruitlink.server — FastAPI proxy in front of the hosted text model and the
certification API, so clients never hold API keys.

Modules:
  generative — ``GeminiGenerator`` (google-generativeai).
  givvable   — ``GivvableClient`` (httpx).
  app        — ``create_app()``: routes, CORS, error envelopes.
"""
