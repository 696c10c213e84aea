# /app/core/config.py

"""
Runtime configuration for the classroom backend.

Every setting is read once from the environment (and a local `.env` file) when
this module is imported.
Defaults are suitable for local development against the SQLite database.
"""

import os

from dotenv import load_dotenv

# Values in a local .env file fill in anything the environment does not set.
load_dotenv()

# --- Database ---
# SQLite for local development; set DATABASE_URL for PostgreSQL.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./classroom.db")

# --- Security ---
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# --- HTTP ---
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# --- Dashboards ---
# Fixed list length for "recent" and "upcoming" dashboard sections.
DASHBOARD_LIST_LIMIT = 5
