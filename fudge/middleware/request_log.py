import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("fudge.requests")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """METHOD path status time - подключается только в ENV=development"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response
