"""
FastAPI Application

Main application setup and configuration for the dropvault sandbox.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, chain, tokens, vaults
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    vault_error_handler,
)
from core.config.runtime import load_runtime_config
from core.schemas.errors import VaultException


def _resolve_log_level() -> int:
    """Resolve log level from DROPVAULT_LOG_LEVEL or dropvault.json, defaulting to INFO."""
    try:
        raw = load_runtime_config().log_level
    except (OSError, ValueError):
        raw = "INFO"
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="dropvault sandbox API",
        description="""
HTTP API over an in-memory ledger running merkle-proof reward vaults.

## Endpoints

- **/chain** - Clock, blocks and the native-currency faucet
- **/tokens** - Deploy, mint and approve fungible tokens
- **/vaults** - Create vaults, set window and root, claim, withdraw
- **GET /health** - Health check

## Errors

Failed calls revert and return `{"ok": false, "error": {"code", "message", "details"}}`
with the stable error code of the failure.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(VaultException, vault_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(chain.router)
    app.include_router(tokens.router)
    app.include_router(vaults.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = load_runtime_config()
    uvicorn.run(app, host=config.api.host, port=config.api.port)
