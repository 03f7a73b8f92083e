"""Server entry point for ``python -m ebay_price_sim`` and ``ebay-price-sim``."""

from __future__ import annotations

import logging
import socket

import uvicorn

from .config import settings

logger = logging.getLogger("ebay_price_sim")

APP_PATH = "ebay_price_sim.main:app"


def port_available(host: str, port: int) -> bool:
    """True when nothing is listening on ``host:port`` yet."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def main(host: str | None = None, port: int | None = None) -> int:
    host = host or settings.host
    port = port or settings.port
    if not port_available(host, port):
        logger.error("%s:%d is already bound; stop the running simulator first", host, port)
        return 1
    uvicorn.run(APP_PATH, host=host, port=port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
