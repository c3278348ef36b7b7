"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import applications, health, leases, managers, properties, tenants
from app.core.config import settings
from app.core.database import Database
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging

# Import models for Base.metadata.create_all - order matters for foreign keys
from app.models import (
    associations,  # noqa: F401
    location,  # noqa: F401
    manager,  # noqa: F401
    property,  # noqa: F401
    tenant,  # noqa: F401
    lease,  # noqa: F401
    application,  # noqa: F401
    payment,  # noqa: F401
)

logger = configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database at startup and dispose it at shutdown."""
    database = Database(settings.DATABASE_URL)
    database.create_all()
    app.state.database = database
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    database.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Rental marketplace API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
def root() -> dict[str, str]:
    """Service banner."""
    return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION}


app.include_router(health.router, tags=["health"])
app.include_router(properties.router)
app.include_router(tenants.router)
app.include_router(managers.router)
app.include_router(applications.router)
app.include_router(leases.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
