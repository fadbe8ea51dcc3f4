# app/core/request_logger.py
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.device import client_ip

logger = logging.getLogger("app.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One INFO record per request, emitted once the response is produced.

    Record extras: method, path, status_code, duration ("<n>ms"), ip.
    If the handler raises, the record is still written with status 500
    and the exception is re-raised.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = f"{round((time.perf_counter() - start) * 1000)}ms"
            fields = {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration": duration,
                "ip": client_ip(request),
            }
            logger.info(
                "%s %s %s %s %s",
                fields["method"],
                fields["path"],
                fields["status_code"],
                fields["duration"],
                fields["ip"],
                extra=fields,
            )
