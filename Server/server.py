"""
SalesDesk Server - Main FastAPI Application

This module contains the main FastAPI application for the SalesDesk admin
server: admin login and the users manager screen.
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
import uvicorn

from managers.database_manager import DatabaseManager, DEFAULT_ADMIN_EMAIL

# Configure logging to write to both console and file
logs_dir = Path("logs")
logs_dir.mkdir(exist_ok=True)

log_filename = logs_dir / f"salesdesk-server-{datetime.now().strftime('%Y-%m-%d')}.log"

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        # Console handler
        logging.StreamHandler(),
        # File handler with rotation (max 10MB per file, keep 10 backup files)
        RotatingFileHandler(
            log_filename,
            maxBytes=10 * 1024 * 1024,
            backupCount=10,
            encoding='utf-8'
        )
    ]
)
logger = logging.getLogger(__name__)

# Import database module for shared db_manager instance
import database


# ==================== Lifespan Events ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler for startup and shutdown
    Manages database initialization
    """
    logger.info("SalesDesk Server starting up...")

    if database.db_manager is None:
        database.db_manager = DatabaseManager()

    # Creates tables and default roles, and the admin user on first run only
    admin_password = database.db_manager.InitializeDatabase()
    if admin_password:
        logger.warning("=" * 60)
        logger.warning("NEW ADMIN USER CREATED")
        logger.warning(f"Email: {DEFAULT_ADMIN_EMAIL}")
        logger.warning(f"Password: {admin_password}")
        logger.warning("SAVE THIS PASSWORD - IT WILL NOT BE SHOWN AGAIN!")
        logger.warning("=" * 60)

    logger.info("Server startup complete")

    yield

    logger.info("SalesDesk Server shutting down...")


# ==================== FastAPI Application ====================

app = FastAPI(
    title="SalesDesk Server",
    description="Admin server for the daily car and motor sales reports",
    version="1.0.0",
    lifespan=lifespan
)


# ==================== Import Routers ====================

from routes.admin import auth as admin_auth, users as admin_users

app.include_router(admin_auth.router)
app.include_router(admin_users.router)


# ==================== Main Entry Point ====================

if __name__ == "__main__":
    logger.info("Starting SalesDesk Server...")

    uvicorn.run(
        "server:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info"
    )
