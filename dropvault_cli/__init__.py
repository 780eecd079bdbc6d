"""
dropvault CLI

Command-line interface for merkle-proof reward vaults.

Usage:
    python -m dropvault_cli leaf <account> <amount>
    python -m dropvault_cli verify distribution.json [--account A] [--json]
    python -m dropvault_cli serve [--host H] [--port P]
    python -m dropvault_cli config --init
"""

__version__ = "0.1.0"
