"""Market Chain dispatch FastAPI application.

Serves the dispatch domain over HTTP; commands and packing run synchronously
inside each request.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the domain.toml overlay ("production" switches event
# processing to async).
from dispatch.domain import dispatch  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

dispatch.init()

_DOMAIN_PREFIXES = ("/orders", "/profiles", "/deliveries", "/notifications")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Market Chain Dispatch API",
    description="Order packing and delivery dispatch for wholesalers, retailers and vehicle owners",
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
    """Push the dispatch domain context for API requests."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        with dispatch.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from dispatch.api import delivery_router, notification_router, order_router, profile_router  # noqa: E402

app.include_router(order_router)
app.include_router(profile_router)
app.include_router(delivery_router)
app.include_router(notification_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": dispatch.name})
