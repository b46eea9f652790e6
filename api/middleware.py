"""Shop isolation middleware using ContextVar.

Extracts the current shop from the X-Shop-Domain request header. The
shop is stored in a ContextVar so that routers and services can call
get_current_shop() without explicit parameter passing, and is bound into
the structured log context for the duration of the request.
"""

from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging import bind_shop, clear_context

SHOP_HEADER = "X-Shop-Domain"

# ---------------------------------------------------------------------------
# Context variable: task-safe shop state
# ---------------------------------------------------------------------------

_current_shop: ContextVar[str] = ContextVar("current_shop", default="default")


def get_current_shop() -> str:
    """Return the shop for the current request::

        shop = get_current_shop()
        rules = await repo.list(shop)
    """
    return _current_shop.get()


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class ShopMiddleware(BaseHTTPMiddleware):
    """Resolve the shop from the X-Shop-Domain header, else "default"."""

    async def dispatch(self, request: Request, call_next) -> Response:
        shop = (request.headers.get(SHOP_HEADER) or "").strip().lower()

        token = _current_shop.set(shop or "default")
        bind_shop(shop or "default")
        try:
            response = await call_next(request)
            return response
        finally:
            _current_shop.reset(token)
            clear_context()
