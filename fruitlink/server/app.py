"""
FastAPI proxy app.

Routes:
  POST /api/vertexChat     {"message": str} → 200 {"content": str}
                           400 {"error"} when message is missing or empty
                           500 {"error", "details"} when the model call fails
  POST /api/givvableCerts  {"name": str}    → upstream JSON, or
                           200 {"error"} when the upstream is unavailable

CORS allows the configured frontend origin only.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fruitlink.config import AppConfig
from fruitlink.errors import CollaboratorError
from fruitlink.server.generative import GeminiGenerator, TextGenerator
from fruitlink.server.givvable import GivvableClient

logger = logging.getLogger(__name__)

CERTS_UNAVAILABLE = "GivvableCert API is not available for /api/givvableCerts"


class ChatRequest(BaseModel):
    message: Optional[str] = None


class CertsRequest(BaseModel):
    name: str = ""


def create_app(
    config: Optional[AppConfig] = None,
    generator: Optional[TextGenerator] = None,
    cert_client: Optional[GivvableClient] = None,
) -> FastAPI:
    """Build the proxy app.

    Args:
        config: Server settings; defaults to ``AppConfig()``.
        generator: Text model; defaults to a ``GeminiGenerator`` for
            ``server.model_name``.
        cert_client: Certification client; defaults to a ``GivvableClient``
            for ``server.givvable_url``.
    """
    config = config or AppConfig()
    generator = generator or GeminiGenerator(config.server.model_name)
    cert_client = cert_client or GivvableClient(
        config.server.givvable_url, timeout=config.api.timeout_seconds
    )

    app = FastAPI(title="FruitLink proxy", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.server.frontend_base_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.post("/api/vertexChat")
    def vertex_chat(body: ChatRequest):
        if not body.message:
            return JSONResponse(status_code=400, content={"error": "Message is required"})
        try:
            text = generator.generate(body.message)
        except Exception as exc:
            # Any SDK failure maps onto the 500 envelope.
            logger.exception("Text model request failed")
            return JSONResponse(
                status_code=500,
                content={"error": "Text model error", "details": str(exc) or type(exc).__name__},
            )
        return {"content": text}

    @app.post("/api/givvableCerts")
    def givvable_certs(body: CertsRequest):
        try:
            return cert_client.search(body.name)
        except CollaboratorError as exc:
            logger.warning("Certification lookup for %r failed: %s", body.name, exc)
            return {"error": CERTS_UNAVAILABLE}

    return app
