"""
Event Invitation Core - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from invite_core.core.config import settings
from invite_core.core.db import engine, Base
from invite_core.core.errors import AppError
from invite_core.api import routes_invitations, routes_invite, routes_guests, routes_gifts, routes_public
from invite_core.utils.log_filters import InviteTokenFilter
from invite_core.utils.responses import error_response
import invite_core.models  # noqa: F401  registers tables on Base.metadata

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)
logging.getLogger("uvicorn.access").addFilter(InviteTokenFilter())

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Invitation requests, guest invites, RSVP and gift recording",
    version=settings.PROJECT_VERSION,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render domain errors with the standard error envelope"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} request failed: {exc.message}")
    return error_response(
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        status_code=exc.status_code
    )

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_invitations.router, prefix="/invitations", tags=["invitations"])
app.include_router(routes_invite.router, prefix="/invite", tags=["invite"])
app.include_router(routes_guests.router, prefix="/guests", tags=["guests"])
app.include_router(routes_gifts.router, prefix="/gifts", tags=["gifts"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
