"""Loguru wiring for the Starfighter client

Output from the ``starfighter`` package is disabled on import; applications
opt in with ``logger.enable("starfighter")``. httpx's own stdlib logging is
only routed into loguru once ``install_logging_bridge()`` is called.
"""

import inspect
import logging

import httpx
from loguru import logger

from .config import AUTH_HEADER

_bridge_installed = False


class _LoguruHandler(logging.Handler):
    """Route httpx's stdlib log records into loguru

    The loguru record points at the httpx frame that called ``logging``,
    not at this handler.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def install_logging_bridge() -> None:
    """Bridge stdlib logging used by httpx into loguru once."""
    global _bridge_installed
    if _bridge_installed:
        return

    std_logger = logging.getLogger("httpx")
    std_logger.setLevel(logging.DEBUG)
    std_logger.addHandler(_LoguruHandler())
    std_logger.propagate = False

    _bridge_installed = True


def log_request(request: httpx.Request) -> None:
    """Log outbound requests with headers (auth masked)."""
    headers = {
        k: ("***" if k.lower() == AUTH_HEADER.lower() else v)
        for k, v in request.headers.items()
    }
    logger.debug(f"HTTPX request: {request.method} {request.url} {headers}")


def log_response(response: httpx.Response) -> None:
    """Log responses including status and body."""
    try:
        response.read()
        body = response.text
    except httpx.HTTPError:
        body = "<unreadable body>"
    logger.debug(
        f"HTTPX response: status={response.status_code} url={response.url} body={body}"
    )
