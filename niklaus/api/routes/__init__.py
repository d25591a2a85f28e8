"""API routes."""

from niklaus.api.routes.auth import router as auth_router
from niklaus.api.routes.backoffice import router as backoffice_router
from niklaus.api.routes.cart import router as cart_router
from niklaus.api.routes.catalog import router as catalog_router
from niklaus.api.routes.entities import router as entities_router
from niklaus.api.routes.health import router as health_router
from niklaus.api.routes.orders import router as orders_router
from niklaus.api.routes.session import router as session_router
from niklaus.api.routes.support import router as support_router

__all__ = [
    "auth_router",
    "backoffice_router",
    "cart_router",
    "catalog_router",
    "entities_router",
    "health_router",
    "orders_router",
    "session_router",
    "support_router",
]
