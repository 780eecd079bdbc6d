"""
CLI command modules.
"""

from dropvault_cli.commands import leaf, verify, serve

__all__ = ["leaf", "verify", "serve"]
