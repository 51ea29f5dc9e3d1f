"""orderpay FastAPI application.

Serves the Catalogue, Ordering and Payments routers from one process. Each
request is wrapped in the domain context that owns its URL prefix. The
ordering context reaches payments over HTTP when
ORDERPAY_PAYMENT_SERVICE_URL is set, and in process otherwise.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the persistence overlay from src/domain.toml:
#   - unset    → in-memory stores
#   - "sqlite" → one SQLite file shared by the three domains
from catalogue.domain import catalogue
from ordering.domain import ordering
from payments.domain import payments
from shared.api import register_exception_handlers
from shared.config import get_settings
from shared.utils.logging import configure_logging, get_logger

catalogue.init()
payments.init()
ordering.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/products": catalogue,
    "/orders": ordering,
    "/payments": payments,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings)
    logger.info("app.started", env=settings.env, remote_payments=bool(settings.payment_service_url))
    yield


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="orderpay API",
    description="Order fulfillment with remote payment processing",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs
    return await call_next(request)


register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import product_router  # noqa: E402
from ordering.api.routes import order_router  # noqa: E402
from payments.api.routes import payment_router  # noqa: E402

app.include_router(product_router)
app.include_router(order_router)
app.include_router(payment_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    settings = get_settings()
    return JSONResponse(
        content={
            "status": "ok",
            "env": settings.env,
            "domains": {
                domain.name: {"provider": domain.config["databases"]["default"]["provider"]}
                for domain in (catalogue, ordering, payments)
            },
            "payments": "remote" if settings.payment_service_url else "local",
        }
    )
