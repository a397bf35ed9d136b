"""
User Record Store API Server
Core functionality: list, create, update and delete user records
"""

import logging
from typing import List
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from record_store.config.settings import ALLOWED_ORIGINS
from record_store.database.connection import init_database, close_database
from record_store.api.routes import health, users
from record_store.utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    await init_database()
    yield
    await close_database()

def setup_cors(app: FastAPI, allowed_origins: List[str]) -> None:
    """Allow browser calls from the configured origins; credentials only with explicit origins"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials="*" not in allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS enabled for origins: {allowed_origins}")

# FastAPI app initialization
app = FastAPI(
    title="User Record Store",
    description="Backend API for managing user records (name, email)",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
setup_cors(app, ALLOWED_ORIGINS)

# Setup centralized error handling
setup_error_handling(app)

# Include API routes
app.include_router(health.router, tags=["Health"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
