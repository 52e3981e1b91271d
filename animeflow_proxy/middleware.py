from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from animeflow_proxy.configs import settings


class DocsAccessControlMiddleware(BaseHTTPMiddleware):
    """Middleware that hides the API documentation when disabled in settings."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if settings.disable_docs and (path == "/docs" or path == "/redoc" or path.startswith("/openapi")):
            return JSONResponse(status_code=404, content={"detail": "Not Found"})

        return await call_next(request)
