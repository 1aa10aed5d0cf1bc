"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.routes.admin import router as admin_router
from backend.app.api.routes.activities import router as activities_router
from backend.app.api.routes.external import router as external_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.public import router as public_router
from backend.app.api.routes.search import router as search_router
from backend.app.api.routes.sections import router as sections_router
from backend.app.api.routes.trips import router as trips_router
from backend.app.cache import build_external_cache
from backend.app.config import get_settings

settings = get_settings()

app = FastAPI(title="GlobeTrotter API", version="0.1.0")
app.state.external_cache = build_external_cache(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ui_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(trips_router)
app.include_router(sections_router)
app.include_router(activities_router)
app.include_router(search_router)
app.include_router(public_router)
app.include_router(external_router)
app.include_router(admin_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "GlobeTrotter API", "version": "0.1.0"}
