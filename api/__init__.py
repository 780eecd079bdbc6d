"""
Sandbox API (FastAPI)

HTTP API over an in-memory ledger running merkle vaults:
- /chain - Clock, blocks and native faucet
- /tokens - Deploy, mint and approve fungible tokens
- /vaults - Create vaults, set window and root, claim, withdraw
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
