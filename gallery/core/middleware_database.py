from collections.abc import Awaitable
from typing import Callable
from typing_extensions import override
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from gallery.core.config import get_settings
from gallery.core.logging import get_logger


class DatabaseConfigMiddleware(BaseHTTPMiddleware):
    """
    Guards the API path.
    - 500 plain text if DATABASE_URL is missing, before any store access
    - everything else (root, docs) passes through
    """

    def __init__(self, app: ASGIApp, path_prefix: str | None = None):
        super().__init__(app)
        self.path_prefix: str = path_prefix or get_settings().API_PATH

    @override
    async def dispatch(
          self,
          request: Request,
          call_next: Callable[[Request], Awaitable[Response]],
      ) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        # get_settings() is cached per process: checked per request, not at import
        if not get_settings().DATABASE_URL:
            get_logger(__name__, request).error("DATABASE_URL is not configured")
            return PlainTextResponse(
                "DATABASE_URL missing", status_code=HTTP_500_INTERNAL_SERVER_ERROR
            )

        return await call_next(request)
