"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .auth.router import router as auth_router
from .users.router import router as users_router
from .dashboards.router import router as dashboards_router
from .database import Base, SessionLocal, engine
from .config import settings
from .exceptions import register_exception_handlers
from .core.bootstrap import bootstrap_admin_if_needed
from .core.concurrency import shutdown_hashing_executor
from .core.middleware import setup_middlewares

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables and the bootstrap admin on startup; stop the hashing pool on shutdown.
    """
    logger.info("Starting Clinic Staff Portal API...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        bootstrap_admin_if_needed(db)
    finally:
        db.close()
    yield
    shutdown_hashing_executor()


# Create FastAPI application
app = FastAPI(
    title="Clinic Staff Portal API",
    description="Staff authentication, user administration and role dashboards",
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])
app.include_router(dashboards_router, prefix="/api/v1/dashboards", tags=["Dashboards"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": "Welcome to Clinic Staff Portal API", "version": app.version}

# Health check endpoint
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "healthy"}
