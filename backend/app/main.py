"""Main FastAPI application for the daily planner backend."""
from fastapi import FastAPI

from app.api.routes.meta import router as meta_router
from app.api.routes.planning import router as planning_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import CORSHeadersMiddleware, RequestIDMiddleware
from app.observability.client import init_opik

configure_logging(log_level=settings.log_level)

app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)
app.add_middleware(CORSHeadersMiddleware, allow_origin=settings.cors_origin)
app.add_middleware(RequestIDMiddleware)
register_exception_handlers(app)
app.include_router(meta_router)
app.include_router(planning_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
