"""ReviewDesk FastAPI application.

Processes commands synchronously over HTTP. Every guild-scoped request runs
inside the reviewdesk domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay from reviewdesk/domain.toml:
#   - "production" → PostgreSQL database from DATABASE_URL
#   - anything else → in-memory database
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from reviewdesk.domain import reviewdesk
from reviewdesk.utils.logging import configure_logging

configure_logging()
reviewdesk.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="ReviewDesk API",
    description="Moderated product reviews for chat communities",
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
    """Push the reviewdesk domain context for guild-scoped requests."""
    if request.url.path.startswith("/guilds"):
        with reviewdesk.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from reviewdesk.api import register_error_handlers, router  # noqa: E402
from reviewdesk.request.tokens import get_signing_key  # noqa: E402

# Raises in production when REVIEWDESK_APPROVAL_KEY is missing
get_signing_key()

app.include_router(router)
register_exception_handlers(app)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": reviewdesk.name})
