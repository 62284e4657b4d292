"""
HTTP Middleware
"""

import time
import uuid

from fastapi import Request

from moviepin.core.logging import LogContext, get_logger, log_api_request

logger = get_logger("moviepin.requests")


async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request"""

    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    start = time.perf_counter()

    with LogContext(request_id):
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error",
                method=request.method,
                path=request.url.path,
            )
            raise

        log_api_request(
            logger,
            request.method,
            request.url.path,
            response.status_code,
            time.perf_counter() - start,
        )

    response.headers["X-Request-ID"] = request_id
    return response
