"""
CLI Serve Command

Run the sandbox HTTP API with uvicorn.

Usage:
    dropvault serve [--host H] [--port P]
"""

from __future__ import annotations

import logging
from argparse import Namespace


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def serve_cmd(args: Namespace) -> int:
    """Start uvicorn on the configured host and port."""
    import uvicorn

    from core.config.runtime import set_default_config

    config = args.runtime_config
    host = args.host or config.api.host
    port = args.port or config.api.port

    set_default_config(config)
    logger.info(f"Serving dropvault sandbox on http://{host}:{port}")
    uvicorn.run(
        "api.app:app",
        host=host,
        port=port,
        log_level=config.log_level.lower(),
    )
    return EXIT_SUCCESS
