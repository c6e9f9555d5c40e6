"""Request logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable


API_PREFIX = "/api/"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request, classified by which matcher answered it.
    
    Outcomes:
        api: anything under ``/api/``
        redirect: a short code resolved (302); the code and target are logged
        static: everything else, logged at DEBUG unless it failed
    """
    
    def __init__(self, app, logger: logging.Logger = None):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = logger or logging.getLogger("che_shortener.web")
    
    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        
        outcome = classify(request, response)
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": duration_ms,
            "outcome": outcome,
            "client": request.client.host if request.client else "unknown",
        }
        
        if outcome == "redirect":
            extra["short_code"] = request.url.path.lstrip("/")
            extra["location"] = response.headers.get("location")
            message = f"Redirect {extra['short_code']} -> {extra['location']} ({duration_ms:.2f}ms)"
        else:
            message = (
                f"{request.method} {request.url.path} - "
                f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms"
            )
        
        self.logger.log(log_level(outcome, response.status_code), message, extra=extra)
        return response


def classify(request: Request, response: Response) -> str:
    """Name the matcher that produced ``response``."""
    if request.url.path.startswith(API_PREFIX):
        return "api"
    if response.status_code == 302:
        return "redirect"
    return "static"


def log_level(outcome: str, status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if outcome == "static" and status_code < 400:
        return logging.DEBUG
    return logging.INFO
