"""
Configuration settings for the User Service
"""

import os
import logging

logger = logging.getLogger(__name__)

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 2))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 10))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 60))
DB_ACQUIRE_TIMEOUT = float(os.getenv("DB_ACQUIRE_TIMEOUT", 30))
AUTO_MIGRATE = os.getenv("AUTO_MIGRATE", "false").lower() in ("1", "true", "yes")

# Server configuration
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", 8080))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# What mutating endpoints return after they run:
#   latest   - the most recently inserted row overall (legacy clients rely on this)
#   affected - the row that was inserted, updated or deleted
REREAD_LATEST = "latest"
REREAD_AFFECTED = "affected"
REREAD_MODE = os.getenv("REREAD_MODE", REREAD_LATEST).lower()

if REREAD_MODE not in (REREAD_LATEST, REREAD_AFFECTED):
    raise ValueError(f"REREAD_MODE must be '{REREAD_LATEST}' or '{REREAD_AFFECTED}', got '{REREAD_MODE}'")

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]
