"""
Shared-secret authentication middleware for the storyboard worker.

All /storyboard/* endpoints require a valid X-Worker-Secret header matching
the WORKER_SHARED_SECRET environment variable. The web app's API routes
attach this header when forwarding storyboard work to the worker.
"""

import os
import secrets

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

PROTECTED_PREFIX = "/storyboard"


class WorkerAuthMiddleware(BaseHTTPMiddleware):
    """Reject unauthenticated requests to /storyboard/* endpoints."""

    PUBLIC_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if path in self.PUBLIC_PATHS or not path.startswith(PROTECTED_PREFIX):
            return await call_next(request)

        # Read per request, not at import time
        worker_secret = os.environ.get("WORKER_SHARED_SECRET", "")
        if not worker_secret:
            # In development without the secret set, allow all traffic
            if os.environ.get("ENVIRONMENT", "development") == "development":
                return await call_next(request)
            return JSONResponse(
                status_code=500, content={"detail": "WORKER_SHARED_SECRET not configured"}
            )

        # Constant-time compare avoids timing attacks
        provided = request.headers.get("X-Worker-Secret", "")
        if not secrets.compare_digest(provided, worker_secret):
            return JSONResponse(
                status_code=401, content={"detail": "Invalid or missing worker secret"}
            )

        return await call_next(request)
