"""API route handlers."""

from api.routes import health, chain, tokens, vaults

__all__ = ["health", "chain", "tokens", "vaults"]
