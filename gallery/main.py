from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from gallery.core.config import settings
from gallery.core.middleware_database import DatabaseConfigMiddleware
from gallery.core.middleware_correlation import CorrelationIdMiddleware
from gallery.core.logging import get_logger, setup_logging
from gallery.core.errors import register_exception_handlers


# Routers
from gallery.api.routes.authors import router as authors_router


setup_logging(settings.LOG_LEVEL)

if not settings.IDENTITY_JWT_SECRET:
    get_logger(__name__).warning(
        "IDENTITY_JWT_SECRET is not set: write methods are not session-checked"
    )

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Authors Gallery API - list, create, edit and delete author records.",
    version="1.0.0",
)

# CORS middleware - the gallery front end is served from another origin in dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Middlewares (last added runs first)
app.add_middleware(DatabaseConfigMiddleware, path_prefix=settings.API_PATH)
app.add_middleware(CorrelationIdMiddleware)

# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    return {
        "message": "Welcome to the Authors Gallery API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "endpoints": {
            "authors": settings.API_PATH,
        },
        "authentication": {
            "reads": "open",
            "writes": "Bearer session token" if settings.IDENTITY_JWT_SECRET else "open",
        },
    }

register_exception_handlers(app)

# Mount routers
app.include_router(authors_router, prefix=settings.API_PATH)
