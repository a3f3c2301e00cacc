"""
Internship & Job Portal - Main Application

FastAPI backend with:
- MongoDB for every portal entity
- JWT authentication
- Points/badges gamification on applications

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pymongo.errors import PyMongoError

from app.api.error_handlers import register_error_handlers
from app.api.routes import api_router
from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.db.mongodb import init_mongo_indexes, close_mongo_client

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Internship & Job Portal API",
    description="""
    API documentation for the Internship & Job Portal.

    ## Features
    - **Authentication**: JWT-based auth for students and companies
    - **Students / Companies**: account management
    - **Jobs / Internships**: postings managed by companies
    - **Applications**: students apply and earn points (10 per application)
      and the "Job Hunter" badge at 50 points
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

# CORS middleware so the SPA can call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        # API still starts; requests will fail individually until Mongo is up
        logger.warning("MongoDB index initialization failed: %s", e)


@app.on_event("shutdown")
async def shutdown_event():
    close_mongo_client()


@app.get("/", response_class=HTMLResponse, tags=["Health"])
def root():
    """Check the backend is running."""
    return "<h1>Internship & Job Portal API Running</h1>"


@app.get("/health", tags=["Health"])
def health_check():
    """Detailed health check."""
    from app.db.mongodb import test_mongo_connection

    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
